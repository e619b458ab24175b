"""
Classifiers and prediction for m6A modification sites.
"""

from .classifiers import (
    Classifier,
    ClassifierFactory,
    SklearnClassifier,
    as_classifier,
    check_probabilities,
)
from .predictor import (
    M6APredictor,
    predict_batch,
    predict_single,
    prediction_multiple,
    prediction_single,
)

__all__ = [
    "Classifier",
    "ClassifierFactory",
    "SklearnClassifier",
    "as_classifier",
    "check_probabilities",
    "M6APredictor",
    "predict_batch",
    "predict_single",
    "prediction_multiple",
    "prediction_single",
]
