"""
m6A site prediction from assembled features.

Scores a feature table with a pre-trained classifier and thresholds the
positive-class probability into a Positive / Negative call.
"""

import logging
from typing import Any, Dict, Optional, Union

import pandas as pd

from ..preprocessing import FeatureAssembler
from ..schema import PROB_COLUMN, STATUS_COLUMN, FeatureSchema
from .classifiers import as_classifier, check_probabilities

logger = logging.getLogger(__name__)


def _check_threshold(positive_threshold: float) -> float:
    threshold = float(positive_threshold)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(
            f"positive_threshold must lie in [0, 1], got {positive_threshold}"
        )
    return threshold


class M6APredictor:
    """
    Predict m6A modification status for one or many sites.

    The classifier is loaded by the caller and reused across calls; the
    predictor itself keeps no per-call state.

    Attributes:
        classifier: Model adapted to the Classifier interface
        assembler: Feature assembler bound to the schema
        positive_threshold: Default probability cutoff
    """

    def __init__(
        self,
        classifier: Any,
        schema: Optional[FeatureSchema] = None,
        positive_threshold: float = 0.5,
        strict: bool = True,
        positive_label: str = "Positive",
        negative_label: str = "Negative"
    ):
        """
        Initialize predictor.

        Args:
            classifier: Classifier, or fitted estimator with predict_proba
            schema: Feature schema the classifier was trained against
            positive_threshold: Probability above which a site is Positive
            strict: Reject unrecognized categories instead of encoding
                    them as missing
            positive_label: Class label of modified sites
            negative_label: Label assigned to everything else
        """
        self.classifier = as_classifier(classifier)
        self.assembler = FeatureAssembler(schema=schema, strict=strict)
        self.positive_threshold = _check_threshold(positive_threshold)
        self.positive_label = positive_label
        self.negative_label = negative_label

    @property
    def schema(self) -> FeatureSchema:
        return self.assembler.schema

    def predict(
        self,
        feature_df: pd.DataFrame,
        positive_threshold: Optional[float] = None
    ) -> pd.DataFrame:
        """
        Predict m6A probability and status for every row of a table.

        Args:
            feature_df: Table with the required feature columns
            positive_threshold: Overrides the predictor's default cutoff

        Returns:
            Copy of feature_df with predicted_m6A_prob and
            predicted_m6A_status appended, rows in input order
        """
        if positive_threshold is None:
            threshold = self.positive_threshold
        else:
            threshold = _check_threshold(positive_threshold)

        augmented = self.assembler.assemble(feature_df)
        result = feature_df.copy()

        if len(result) == 0:
            result[PROB_COLUMN] = pd.Series(dtype=float)
            result[STATUS_COLUMN] = pd.Series(dtype=object)
            return result

        X = self.assembler.model_matrix(augmented)
        proba = self.classifier.classify(X)
        positive = check_probabilities(proba, len(X), self.positive_label)

        result[PROB_COLUMN] = positive
        result[STATUS_COLUMN] = self.negative_label
        result.loc[positive > threshold, STATUS_COLUMN] = self.positive_label

        n_positive = int((positive > threshold).sum())
        logger.info(
            f"Scored {len(result)} sites: {n_positive} {self.positive_label} "
            f"(threshold={threshold})"
        )
        return result

    def predict_single(
        self,
        gc_content: float,
        RNA_type: str,
        RNA_region: str,
        exon_length: float,
        distance_to_junction: float,
        evolutionary_conservation: float,
        DNA_5mer: str,
        positive_threshold: Optional[float] = None
    ) -> Dict[str, Union[float, str]]:
        """
        Predict m6A probability and status for a single site.

        Returns:
            {"predicted_m6A_prob": float, "predicted_m6A_status": str}
        """
        feature_df = pd.DataFrame({
            "gc_content": [gc_content],
            "RNA_type": [RNA_type],
            "RNA_region": [RNA_region],
            "exon_length": [exon_length],
            "distance_to_junction": [distance_to_junction],
            "evolutionary_conservation": [evolutionary_conservation],
            "DNA_5mer": [DNA_5mer],
        })
        outcome = self.predict(feature_df, positive_threshold=positive_threshold)
        return {
            PROB_COLUMN: float(outcome[PROB_COLUMN].iloc[0]),
            STATUS_COLUMN: str(outcome[STATUS_COLUMN].iloc[0]),
        }

    def __repr__(self) -> str:
        return (
            f"M6APredictor(classifier={self.classifier!r}, "
            f"positive_threshold={self.positive_threshold})"
        )


def prediction_multiple(
    ml_fit: Any,
    feature_df: pd.DataFrame,
    positive_threshold: float = 0.5,
    schema: Optional[FeatureSchema] = None,
    strict: bool = True
) -> pd.DataFrame:
    """
    Predict m6A sites for multiple samples.

    Args:
        ml_fit: Pre-trained classifier
        feature_df: Table with columns gc_content, RNA_type, RNA_region,
                    exon_length, distance_to_junction,
                    evolutionary_conservation and DNA_5mer
        positive_threshold: Probability above which a site is Positive
        schema: Feature schema the classifier was trained against
        strict: Reject unrecognized categories

    Returns:
        feature_df with predicted_m6A_prob and predicted_m6A_status added

    Example:
        >>> model = ModelLoader(config).load("rf_fit.joblib")
        >>> prediction_multiple(model, example_df, positive_threshold=0.6)
    """
    predictor = M6APredictor(
        ml_fit, schema=schema, positive_threshold=positive_threshold, strict=strict
    )
    return predictor.predict(feature_df)


def prediction_single(
    ml_fit: Any,
    gc_content: float,
    RNA_type: str,
    RNA_region: str,
    exon_length: float,
    distance_to_junction: float,
    evolutionary_conservation: float,
    DNA_5mer: str,
    positive_threshold: float = 0.5,
    schema: Optional[FeatureSchema] = None,
    strict: bool = True
) -> Dict[str, Union[float, str]]:
    """
    Predict the m6A status of a single sample.

    Example:
        >>> prediction_single(model, gc_content=0.6, RNA_type="mRNA",
        ...                   RNA_region="CDS", exon_length=12,
        ...                   distance_to_junction=5,
        ...                   evolutionary_conservation=0.8,
        ...                   DNA_5mer="ATCGA")
        {'predicted_m6A_prob': 0.71, 'predicted_m6A_status': 'Positive'}
    """
    predictor = M6APredictor(
        ml_fit, schema=schema, positive_threshold=positive_threshold, strict=strict
    )
    return predictor.predict_single(
        gc_content=gc_content,
        RNA_type=RNA_type,
        RNA_region=RNA_region,
        exon_length=exon_length,
        distance_to_junction=distance_to_junction,
        evolutionary_conservation=evolutionary_conservation,
        DNA_5mer=DNA_5mer,
    )


predict_batch = prediction_multiple
predict_single = prediction_single
