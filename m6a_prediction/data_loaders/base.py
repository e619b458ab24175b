"""
Shared path handling for sample-table and model-artifact loaders.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from ..utils.config import Config

logger = logging.getLogger(__name__)


class DataLoader(ABC):
    """
    Abstract base class for the inputs of a prediction run.

    Subclasses read one kind of artifact (a site feature table, a
    serialized classifier) and name it through ``kind`` so a missing
    input is reported as e.g. "Model artifact not found".
    """

    kind = "Input file"

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize loader with configuration.

        Args:
            config: Configuration providing base_dir for relative paths
        """
        self.config = config or Config()

    @abstractmethod
    def load(self, file_path: Union[str, Path], **kwargs) -> Any:
        """
        Load one artifact.

        Args:
            file_path: Absolute, home-relative or base_dir-relative path
            **kwargs: Loader-specific parameters
        """
        pass

    def _resolve_path(self, file_path: Union[str, Path]) -> Path:
        """Expand ``~`` and anchor relative paths at config.base_dir."""
        path = Path(file_path).expanduser()
        if not path.is_absolute():
            path = Path(self.config.base_dir) / path
        return path

    def _validate_file(self, file_path: Path) -> None:
        """Require an existing regular file before handing it to a reader."""
        if not file_path.exists():
            raise FileNotFoundError(f"{self.kind} not found: {file_path}")
        if file_path.is_dir():
            raise IsADirectoryError(f"{self.kind} is a directory: {file_path}")
        if not file_path.is_file():
            raise ValueError(f"{self.kind} is not a regular file: {file_path}")
        logger.debug(f"{self.kind} resolved to {file_path}")
