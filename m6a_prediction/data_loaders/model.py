"""
Loader for pre-trained classifier artifacts.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import joblib

from ..models.classifiers import Classifier, as_classifier
from ..schema import FeatureSchema
from .base import DataLoader

logger = logging.getLogger(__name__)


class ModelLoader(DataLoader):
    """
    Load and save classifiers serialised with joblib.

    An artifact is either a bare estimator or a bundle
    {"model": estimator, "schema": {...}} carrying the feature schema the
    model was trained against.
    """

    kind = "Model artifact"

    def load(self, file_path: Union[str, Path], **kwargs) -> Classifier:
        """
        Load a classifier.

        Args:
            file_path: Path to the joblib artifact

        Returns:
            Classifier ready for prediction
        """
        classifier, _ = self.load_bundle(file_path)
        return classifier

    def load_bundle(self, file_path: Union[str, Path]) -> Tuple[Classifier, FeatureSchema]:
        """
        Load a classifier together with its feature schema.

        Artifacts without a stored schema get the configured schema.

        Returns:
            Tuple of (classifier, schema)
        """
        path = self._resolve_path(file_path)
        self._validate_file(path)

        logger.info(f"Loading model from {path.name}...")
        artifact = joblib.load(path)

        if isinstance(artifact, dict):
            if "model" not in artifact:
                raise ValueError(f"Model bundle {path.name} has no 'model' entry")
            model = artifact["model"]
            schema = FeatureSchema.from_dict(artifact.get("schema"))
        else:
            model = artifact
            schema = self.config.get_schema()

        classifier = as_classifier(model)
        logger.info(f"Loaded {classifier!r}")
        return classifier, schema

    def save(
        self,
        model: Any,
        file_path: Union[str, Path],
        schema: Optional[FeatureSchema] = None
    ) -> Path:
        """
        Save a model bundle.

        Args:
            model: Fitted estimator or Classifier
            file_path: Destination path
            schema: Feature schema to store alongside the model

        Returns:
            Resolved output path
        """
        path = self._resolve_path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        schema = schema or self.config.get_schema()
        joblib.dump({"model": model, "schema": schema.to_dict()}, path)
        logger.info(f"Saved model bundle to {path}")
        return path
