"""
Configuration management for the m6A prediction pipeline.

Supports loading configurations from YAML files for:
- Prediction settings (threshold, class labels, strictness)
- Feature schema overrides
- Model backend parameters
- Logging
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..schema import FeatureSchema


class Config:
    """
    Central configuration class for the m6A prediction pipeline.

    Attributes:
        base_dir: Directory relative paths are resolved against
        data_dir: Directory holding bundled example data
        prediction_params: Threshold, class labels and strict mode
        schema_params: Overrides for the feature schema
        model_params: Model backend hyperparameters
        logging_params: Logging level and optional log file
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file. If None, uses defaults.
        """
        self.base_dir = Path.cwd()
        self.data_dir = Path(__file__).parent.parent / "data"

        # Load base configuration
        self._init_defaults()

        # Override with config file if provided
        if config_file:
            self._load_yaml(config_file)

    def _init_defaults(self):
        """Initialize default configuration values."""
        self.prediction_params = {
            "positive_threshold": 0.5,
            "positive_label": "Positive",
            "negative_label": "Negative",
            "strict": True
        }

        self.schema_params: Dict[str, Any] = {}

        # Model parameters
        self.model_params = {
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

        self.logging_params = {
            "level": "INFO",
            "log_file": None
        }

    def _load_yaml(self, config_file: str):
        """Load configuration from YAML file."""
        config_path = Path(config_file)
        if not config_path.is_absolute():
            config_path = self.base_dir / config_file

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {config_path.name} must hold a mapping")
        self._update_from_dict(config_data)

    def _update_from_dict(self, config_dict: Dict[str, Any]):
        """Update configuration from dictionary."""
        if "prediction" in config_dict:
            self.prediction_params.update(config_dict["prediction"])
        if "schema" in config_dict:
            self.schema_params.update(config_dict["schema"])
        if "model_params" in config_dict:
            self.model_params.update(config_dict["model_params"])
        if "logging" in config_dict:
            self.logging_params.update(config_dict["logging"])

    @property
    def positive_threshold(self) -> float:
        return float(self.prediction_params["positive_threshold"])

    @property
    def strict(self) -> bool:
        return bool(self.prediction_params["strict"])

    def get_schema(self) -> FeatureSchema:
        """Build the feature schema with any configured overrides."""
        return FeatureSchema.from_dict(self.schema_params)

    def get_data_path(self, filename: str) -> Path:
        """Get full path for a bundled data file."""
        return self.data_dir / filename

    def __repr__(self) -> str:
        return (
            f"Config(positive_threshold={self.positive_threshold}, "
            f"strict={self.strict}, "
            f"base_dir='{self.base_dir}')"
        )


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Load configuration for the prediction pipeline.

    Args:
        config_file: Path to custom YAML configuration file

    Returns:
        Config object with all settings loaded

    Example:
        >>> config = load_config("configs/prediction.yaml")
        >>> config.positive_threshold
        0.6
    """
    return Config(config_file=config_file)
