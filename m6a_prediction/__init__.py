"""
m6A Site Prediction

Encode short DNA sequences and site features, score them with a
pre-trained classifier and call RNA N6-methyladenosine (m6A) sites.
"""

from .encoding import DNAEncoder, dna_encoding
from .exceptions import (
    ClassifierOutputError,
    LengthMismatchError,
    M6APredictionError,
    MissingColumnError,
    UnrecognizedCategoryError,
)
from .models import (
    Classifier,
    ClassifierFactory,
    M6APredictor,
    SklearnClassifier,
    predict_batch,
    predict_single,
    prediction_multiple,
    prediction_single,
)
from .preprocessing import FeatureAssembler, assemble_features
from .schema import FeatureSchema

__version__ = "1.0.0"

__all__ = [
    "DNAEncoder",
    "dna_encoding",
    "FeatureAssembler",
    "assemble_features",
    "FeatureSchema",
    "Classifier",
    "ClassifierFactory",
    "SklearnClassifier",
    "M6APredictor",
    "predict_batch",
    "predict_single",
    "prediction_multiple",
    "prediction_single",
    "M6APredictionError",
    "MissingColumnError",
    "LengthMismatchError",
    "UnrecognizedCategoryError",
    "ClassifierOutputError",
]
