"""
Categorical encoding of short DNA sequences.
"""

import logging
from typing import Iterable, Optional, Union

import pandas as pd
from pandas.api.types import is_scalar

from ..exceptions import LengthMismatchError, UnrecognizedCategoryError
from ..schema import FeatureSchema

logger = logging.getLogger(__name__)


class DNAEncoder:
    """
    Encode fixed-length DNA sequences as one categorical column per position.

    Each nucleotide becomes a pandas categorical value with levels
    A, T, C, G (schema order), giving a table a tree ensemble or a
    one-hot encoder can consume directly.
    """

    def __init__(self, schema: Optional[FeatureSchema] = None, strict: bool = True):
        """
        Initialize encoder.

        Args:
            schema: Feature schema providing levels, column prefix and length
            strict: Raise on symbols outside the nucleotide levels instead
                    of encoding them as missing
        """
        self.schema = schema or FeatureSchema()
        self.strict = strict

    def encode(self, sequences: Union[pd.Series, Iterable[str]]) -> pd.DataFrame:
        """
        Encode a batch of sequences.

        Args:
            sequences: DNA strings of equal length. A pandas Series keeps
                       its index in the output.

        Returns:
            DataFrame with one row per sequence and columns
            position_1 ... position_n

        Raises:
            LengthMismatchError: If any sequence differs in length from the
                                 first one (or from the schema's fixed length)
            UnrecognizedCategoryError: In strict mode, if a sequence is missing
                                       or a symbol is not a declared nucleotide
        """
        if isinstance(sequences, str):
            sequences = [sequences]

        if isinstance(sequences, pd.Series):
            index = sequences.index
            seqs = sequences.tolist()
        else:
            seqs = list(sequences)
            index = pd.RangeIndex(len(seqs))

        if not seqs:
            return pd.DataFrame(index=index)

        levels = self.schema.nucleotide_levels
        missing = [i for i, s in enumerate(seqs) if is_scalar(s) and pd.isna(s)]
        if missing:
            if self.strict:
                raise UnrecognizedCategoryError(
                    self.schema.sequence_column, [str(seqs[i]) for i in missing], levels
                )
            logger.warning(f"{len(missing)} missing sequence(s) encoded as all-missing positions")

        missing_rows = set(missing)
        seqs = [None if i in missing_rows else str(s).strip().upper() for i, s in enumerate(seqs)]
        observed = [s for s in seqs if s is not None]
        length = self.schema.sequence_length or (len(observed[0]) if observed else 0)

        mismatched = [i for i, s in enumerate(seqs) if s is not None and len(s) != length]
        if mismatched:
            raise LengthMismatchError(length, mismatched)

        unknown = set("".join(s for s in seqs if s is not None)) - set(levels)
        if unknown:
            if self.strict:
                raise UnrecognizedCategoryError(self.schema.sequence_column, unknown, levels)
            logger.warning(
                f"Encoding unrecognized nucleotide(s) {sorted(unknown)} as missing"
            )

        # Categorical construction only accepts declared levels or missing
        rows = [
            [None] * length if s is None else [c if c in levels else None for c in s]
            for s in seqs
        ]
        columns = self.schema.position_columns(length)
        encoded = pd.DataFrame(rows, columns=columns, index=index, dtype=object)
        dtype = pd.CategoricalDtype(categories=levels)
        encoded = encoded.astype({col: dtype for col in columns})

        logger.debug(f"Encoded {len(encoded)} sequences of length {length}")
        return encoded


def dna_encoding(
    sequences: Union[pd.Series, Iterable[str]],
    schema: Optional[FeatureSchema] = None,
    strict: bool = True
) -> pd.DataFrame:
    """
    Encode DNA strings as categorical per-position columns.

    Args:
        sequences: DNA strings of equal length
        schema: Optional feature schema (defaults to the standard one)
        strict: Reject symbols other than A, T, C, G

    Returns:
        Encoded DataFrame

    Example:
        >>> dna_encoding(["ATCGA", "GGGTT"]).iloc[0].tolist()
        ['A', 'T', 'C', 'G', 'A']
    """
    return DNAEncoder(schema=schema, strict=strict).encode(sequences)
