"""
Classifier interface and interchangeable model backends.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import GradientBoostingClassifier, RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder

from ..exceptions import ClassifierOutputError
from ..schema import FeatureSchema

logger = logging.getLogger(__name__)


class Classifier(ABC):
    """
    Anything that can score an assembled feature table.

    Implementations return one probability column per class label, one
    row per input row, in input order.
    """

    @abstractmethod
    def classify(self, X: pd.DataFrame) -> pd.DataFrame:
        """Return per-row class probabilities keyed by class label."""
        pass


class SklearnClassifier(Classifier):
    """
    Adapter for fitted estimators exposing predict_proba and classes_.

    Works with bare scikit-learn estimators as well as Pipelines.
    """

    def __init__(self, estimator: Any):
        """
        Args:
            estimator: Fitted estimator
        """
        if not hasattr(estimator, "predict_proba"):
            raise TypeError(
                f"{type(estimator).__name__} does not provide predict_proba"
            )
        self.estimator = estimator

    @property
    def classes(self):
        return [str(c) for c in self.estimator.classes_]

    def classify(self, X: pd.DataFrame) -> pd.DataFrame:
        proba = self.estimator.predict_proba(X)
        return pd.DataFrame(np.asarray(proba), columns=self.classes, index=X.index)

    def __repr__(self) -> str:
        return f"SklearnClassifier({type(self.estimator).__name__})"


def as_classifier(model: Any) -> Classifier:
    """
    Coerce a model object to the Classifier interface.

    Args:
        model: A Classifier, an object with a classify() method, or a
               fitted estimator with predict_proba

    Returns:
        Object usable as a Classifier
    """
    if isinstance(model, Classifier) or callable(getattr(model, "classify", None)):
        return model
    if hasattr(model, "predict_proba"):
        return SklearnClassifier(model)
    raise TypeError(
        f"Cannot use {type(model).__name__} as a classifier: "
        f"expected classify() or predict_proba()"
    )


def check_probabilities(
    proba: pd.DataFrame,
    n_rows: int,
    positive_label: str = "Positive"
) -> np.ndarray:
    """
    Validate classifier output and extract the positive-class column.

    Args:
        proba: Classifier output
        n_rows: Number of rows that were scored
        positive_label: Name of the positive class column

    Returns:
        Positive-class probabilities as a float array
    """
    if not isinstance(proba, pd.DataFrame):
        proba = pd.DataFrame(proba)

    if positive_label not in proba.columns:
        raise ClassifierOutputError(
            f"Classifier output has no '{positive_label}' column; "
            f"got {list(proba.columns)}"
        )
    if len(proba) != n_rows:
        raise ClassifierOutputError(
            f"Classifier returned {len(proba)} rows for {n_rows} inputs"
        )

    positive = proba[positive_label].to_numpy(dtype=float)
    if np.isnan(positive).any() or (positive < 0).any() or (positive > 1).any():
        raise ClassifierOutputError(
            f"'{positive_label}' probabilities must lie in [0, 1]"
        )
    return positive


class ClassifierFactory:
    """
    Factory for creating classification backends.

    Every backend is a scikit-learn Pipeline that one-hot encodes the
    schema's categorical columns, passes numeric columns through and ends
    in the chosen estimator, so backends are interchangeable behind
    SklearnClassifier.
    """

    AVAILABLE_MODELS = ["random_forest", "gradient_boosting", "logistic_regression"]

    def __init__(self, config: Optional[Any] = None, schema: Optional[FeatureSchema] = None):
        """
        Initialize factory with configuration.

        Args:
            config: Configuration object with model parameters
            schema: Feature schema describing the model matrix
        """
        self.config = config
        self.schema = schema or FeatureSchema()
        self._default_params = {
            "random_state": 42,
            "random_forest": {
                "n_estimators": 500
            },
            "gradient_boosting": {
                "n_estimators": 200,
                "learning_rate": 0.1
            },
            "logistic_regression": {
                "max_iter": 1000,
                "solver": "lbfgs"
            }
        }

        if config is not None and hasattr(config, "model_params"):
            self._default_params.update(config.model_params)

    def preprocessor(self, sequence_length: Optional[int] = None) -> ColumnTransformer:
        """
        Build the column transformer for the schema's model matrix.

        Args:
            sequence_length: Encoded sequence length; defaults to the
                             schema's fixed length, or 5

        Returns:
            Unfitted ColumnTransformer
        """
        length = sequence_length or self.schema.sequence_length or 5
        categorical = self.schema.categorical_columns(length)
        categories = list(self.schema.categorical_levels.values())
        categories += [self.schema.nucleotide_levels] * length

        return ColumnTransformer([
            ("numeric", "passthrough", self.schema.numeric_columns),
            ("categorical",
             OneHotEncoder(categories=categories, handle_unknown="ignore"),
             categorical),
        ])

    def create(self, model_type: str, sequence_length: Optional[int] = None, **kwargs) -> Pipeline:
        """
        Create an unfitted classifier pipeline.

        Args:
            model_type: Type of model to create
            sequence_length: Encoded sequence length
            **kwargs: Additional parameters to override defaults

        Returns:
            Pipeline of preprocessing and estimator
        """
        random_state = kwargs.pop("random_state", self._default_params["random_state"])

        if model_type == "random_forest":
            params = self._default_params.get("random_forest", {}).copy()
            params.update(kwargs)
            estimator = RandomForestClassifier(random_state=random_state, **params)

        elif model_type == "gradient_boosting":
            params = self._default_params.get("gradient_boosting", {}).copy()
            params.update(kwargs)
            estimator = GradientBoostingClassifier(random_state=random_state, **params)

        elif model_type == "logistic_regression":
            params = self._default_params.get("logistic_regression", {}).copy()
            params.update(kwargs)
            estimator = LogisticRegression(random_state=random_state, **params)

        else:
            raise ValueError(
                f"Unknown model type: {model_type}. "
                f"Available: {self.AVAILABLE_MODELS}"
            )

        logger.debug(f"Created {model_type} backend")
        return Pipeline([
            ("preprocess", self.preprocessor(sequence_length)),
            ("model", estimator),
        ])

    def create_all(self, sequence_length: Optional[int] = None) -> Dict[str, Pipeline]:
        """
        Create all available classifiers.

        Returns:
            Dictionary mapping model names to classifier pipelines
        """
        return {
            "Random Forest": self.create("random_forest", sequence_length),
            "Gradient Boosting": self.create("gradient_boosting", sequence_length),
            "Logistic Regression": self.create("logistic_regression", sequence_length),
        }
