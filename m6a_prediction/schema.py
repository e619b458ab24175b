"""
Feature schema shared by model training and inference.

The schema fixes which columns a feature table must carry, the levels of each
categorical field and the exact column order handed to the classifier, so an
encoded table can never be silently misaligned with what a model was fit on.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

NUCLEOTIDE_LEVELS = ["A", "T", "C", "G"]

RNA_TYPE_LEVELS = ["mRNA", "lincRNA", "lncRNA", "pseudogene"]
RNA_REGION_LEVELS = ["CDS", "intron", "3'UTR", "5'UTR"]

REQUIRED_COLUMNS = [
    "gc_content",
    "RNA_type",
    "RNA_region",
    "exon_length",
    "distance_to_junction",
    "evolutionary_conservation",
    "DNA_5mer",
]

NUMERIC_COLUMNS = [
    "gc_content",
    "exon_length",
    "distance_to_junction",
    "evolutionary_conservation",
]

PROB_COLUMN = "predicted_m6A_prob"
STATUS_COLUMN = "predicted_m6A_status"


class FeatureSchema:
    """
    Column contract between feature tables and classifiers.

    Attributes:
        required_columns: Columns that must be present in every input table
        numeric_columns: Columns passed to the model as numbers
        categorical_levels: Declared levels for each enumerated column
        sequence_column: Column holding the DNA sequence to encode
        nucleotide_levels: Allowed symbols at each sequence position
        position_prefix: Prefix of encoded column names
        sequence_length: Fixed sequence length, or None to take it from data
    """

    def __init__(
        self,
        required_columns: Optional[List[str]] = None,
        numeric_columns: Optional[List[str]] = None,
        categorical_levels: Optional[Dict[str, List[str]]] = None,
        sequence_column: str = "DNA_5mer",
        nucleotide_levels: Optional[List[str]] = None,
        position_prefix: str = "position_",
        sequence_length: Optional[int] = None
    ):
        self.required_columns = list(required_columns or REQUIRED_COLUMNS)
        self.numeric_columns = list(numeric_columns or NUMERIC_COLUMNS)
        if categorical_levels is None:
            categorical_levels = {
                "RNA_type": RNA_TYPE_LEVELS,
                "RNA_region": RNA_REGION_LEVELS,
            }
        self.categorical_levels = {k: list(v) for k, v in categorical_levels.items()}
        self.sequence_column = sequence_column
        self.nucleotide_levels = list(nucleotide_levels or NUCLEOTIDE_LEVELS)
        self.position_prefix = position_prefix
        self.sequence_length = sequence_length

        if self.sequence_column not in self.required_columns:
            raise ValueError(
                f"Sequence column '{self.sequence_column}' must be a required column"
            )

    def position_columns(self, length: Optional[int] = None) -> List[str]:
        """
        Names of the encoded per-position columns.

        Args:
            length: Sequence length; defaults to the schema's fixed length

        Returns:
            ['position_1', ..., 'position_n']
        """
        if length is None:
            length = self.sequence_length
        if length is None:
            raise ValueError("Sequence length is not fixed by the schema; pass it explicitly")
        return [f"{self.position_prefix}{i}" for i in range(1, length + 1)]

    def categorical_columns(self, length: Optional[int] = None) -> List[str]:
        """Enumerated columns followed by encoded positions."""
        return list(self.categorical_levels) + self.position_columns(length)

    def model_columns(self, length: Optional[int] = None) -> List[str]:
        """Ordered list of columns the classifier consumes."""
        return self.numeric_columns + self.categorical_columns(length)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required_columns": self.required_columns,
            "numeric_columns": self.numeric_columns,
            "categorical_levels": self.categorical_levels,
            "sequence_column": self.sequence_column,
            "nucleotide_levels": self.nucleotide_levels,
            "position_prefix": self.position_prefix,
            "sequence_length": self.sequence_length,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FeatureSchema":
        """Build a schema from a (possibly partial) dictionary."""
        return cls(**(data or {}))

    def save(self, file_path: Union[str, Path]) -> Path:
        """Write the schema as YAML."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        logger.debug(f"Schema written to {path}")
        return path

    @classmethod
    def load(cls, file_path: Union[str, Path]) -> "FeatureSchema":
        """Read a schema previously written with save()."""
        with open(file_path, "r") as f:
            return cls.from_dict(yaml.safe_load(f))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureSchema):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"FeatureSchema(sequence_column='{self.sequence_column}', "
            f"sequence_length={self.sequence_length}, "
            f"categorical={list(self.categorical_levels)})"
        )
