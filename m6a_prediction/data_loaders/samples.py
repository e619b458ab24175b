"""
Loader for m6A sample feature tables.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from .base import DataLoader

logger = logging.getLogger(__name__)

EXAMPLE_TABLE = "m6A_input_example.csv"


class SampleTableLoader(DataLoader):
    """
    Load delimited sample tables holding m6A site features.

    Columns are read as-is; validation against the feature schema happens
    at prediction time so extra columns pass through untouched.
    """

    kind = "Sample table"

    def load(self, file_path: Union[str, Path], sep: str = ",", **kwargs) -> pd.DataFrame:
        """
        Load a sample table.

        Args:
            file_path: Path to CSV/TSV file
            sep: Field delimiter
            **kwargs: Passed through to pandas.read_csv

        Returns:
            DataFrame with one row per site
        """
        path = self._resolve_path(file_path)
        self._validate_file(path)

        logger.info(f"Loading samples from {path.name}...")
        df = pd.read_csv(path, sep=sep, **kwargs)

        logger.info(f"Loaded {len(df)} samples with {df.shape[1]} columns")
        return df

    def load_example(self) -> pd.DataFrame:
        """Load the example table bundled with the package."""
        return self.load(self.config.get_data_path(EXAMPLE_TABLE))

    def save(self, df: pd.DataFrame, file_path: Union[str, Path], sep: str = ",") -> Path:
        """
        Write a (prediction) table.

        Args:
            df: Table to write
            file_path: Destination path
            sep: Field delimiter

        Returns:
            Resolved output path
        """
        path = self._resolve_path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, sep=sep, index=False)
        logger.info(f"Wrote {len(df)} rows to {path}")
        return path
