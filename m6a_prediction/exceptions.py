"""
Exceptions raised by the m6A prediction pipeline.
"""

from typing import Iterable, List, Sequence


class M6APredictionError(Exception):
    """Base class for all pipeline errors."""


class MissingColumnError(M6APredictionError, KeyError):
    """
    Raised when a feature table lacks one or more required columns.

    Attributes:
        missing: Names of the absent columns, in schema order
    """

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            f"Feature table is missing required column(s): {', '.join(self.missing)}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class LengthMismatchError(M6APredictionError, ValueError):
    """
    Raised when sequences in one batch do not share the same length.

    Attributes:
        expected: Length every sequence should have
        rows: Positions (0-based) of the offending sequences
    """

    def __init__(self, expected: int, rows: Sequence[int]):
        self.expected = expected
        self.rows = list(rows)
        shown = self.rows[:10]
        more = "" if len(self.rows) <= 10 else f" (and {len(self.rows) - 10} more)"
        super().__init__(
            f"Expected all sequences to have length {expected}; "
            f"rows {shown}{more} differ"
        )


class UnrecognizedCategoryError(M6APredictionError, ValueError):
    """
    Raised when a categorical field holds a value outside its declared levels.

    Attributes:
        column: Name of the offending column
        values: Unrecognized values found
        levels: Declared levels for the column
    """

    def __init__(self, column: str, values: Iterable, levels: Sequence[str]):
        self.column = column
        self.values = sorted({str(v) for v in values})
        self.levels = list(levels)
        super().__init__(
            f"Column '{column}' has unrecognized value(s) {self.values}; "
            f"allowed levels are {self.levels}"
        )


class ClassifierOutputError(M6APredictionError, ValueError):
    """Raised when a classifier returns probabilities in an unusable shape."""
