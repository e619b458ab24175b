"""
Feature validation and assembly for m6A prediction.
"""

import logging
import re
from typing import Optional

import pandas as pd

from ..encoding import DNAEncoder
from ..exceptions import MissingColumnError, UnrecognizedCategoryError
from ..schema import FeatureSchema

logger = logging.getLogger(__name__)


class FeatureAssembler:
    """
    Turn a raw feature table into the table a classifier consumes.

    Handles column presence checks, categorical leveling of enumerated
    fields and encoding of the DNA sequence column. Input tables are never
    modified in place.
    """

    def __init__(self, schema: Optional[FeatureSchema] = None, strict: bool = True):
        """
        Initialize assembler.

        Args:
            schema: Feature schema; defaults to the standard m6A schema
            strict: Reject categorical values outside the declared levels
                    (otherwise they become missing)
        """
        self.schema = schema or FeatureSchema()
        self.strict = strict
        self.encoder = DNAEncoder(schema=self.schema, strict=strict)

    def validate(self, df: pd.DataFrame) -> None:
        """
        Check that all required columns are present.

        Raises:
            MissingColumnError: Listing every absent column
        """
        missing = [c for c in self.schema.required_columns if c not in df.columns]
        if missing:
            raise MissingColumnError(missing)

    def level_categories(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Re-type enumerated columns as categoricals with fixed levels.

        Args:
            df: Feature table containing the enumerated columns

        Returns:
            Copy of the table with leveled columns
        """
        df = df.copy()
        for column, levels in self.schema.categorical_levels.items():
            values = df[column].astype(object)
            unknown = values[~values.isin(levels)]
            if len(unknown) > 0:
                if self.strict:
                    raise UnrecognizedCategoryError(column, unknown.unique(), levels)
                logger.warning(
                    f"{len(unknown)} value(s) in '{column}' outside {levels} "
                    f"encoded as missing"
                )
            df[column] = pd.Categorical(
                [v if v in levels else None for v in values], categories=levels
            )
        return df

    def assemble(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate, level and encode a feature table.

        Args:
            df: Table with the required feature columns; extra columns
                are carried through untouched unless their names look
                like encoded position columns

        Returns:
            Copy of the table with leveled categoricals and the encoded
            sequence columns appended
        """
        self.validate(df)
        leveled = self.level_categories(df)
        encoded = self.encoder.encode(leveled[self.schema.sequence_column])

        pattern = re.compile(rf"{re.escape(self.schema.position_prefix)}\d+")
        colliding = [c for c in leveled.columns if pattern.fullmatch(str(c))]
        if colliding:
            logger.warning(
                f"Input column(s) {colliding} replaced by encoded sequence positions"
            )
            leveled = leveled.drop(columns=colliding)

        augmented = pd.concat([leveled, encoded], axis=1)
        logger.debug(
            f"Assembled {len(augmented)} rows with {encoded.shape[1]} encoded positions"
        )
        return augmented

    def sequence_length(self, augmented: pd.DataFrame) -> int:
        """Count the encoded position columns present in an assembled table."""
        length = 0
        prefix = self.schema.position_prefix
        while f"{prefix}{length + 1}" in augmented.columns:
            length += 1
        return length

    def model_matrix(self, augmented: pd.DataFrame) -> pd.DataFrame:
        """
        Select the classifier's input columns in schema order.

        Args:
            augmented: Output of assemble()

        Returns:
            DataFrame with exactly the schema's model columns
        """
        columns = self.schema.model_columns(self.sequence_length(augmented))
        return augmented[columns]


def assemble_features(
    df: pd.DataFrame,
    schema: Optional[FeatureSchema] = None,
    strict: bool = True
) -> pd.DataFrame:
    """Validate, level and encode a feature table in one call."""
    return FeatureAssembler(schema=schema, strict=strict).assemble(df)
