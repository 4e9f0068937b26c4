# core/errors.py
from __future__ import annotations

from collections.abc import Iterable, Sequence


class M6APredictionError(Exception):
    """Base error for m6aprediction."""


class FeatureValidationError(M6APredictionError, ValueError):
    """Raised when a feature table fails validation before scoring."""


class MissingColumnsError(FeatureValidationError):
    """Raised when required columns are absent from a feature table."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: tuple[str, ...] = tuple(missing)
        super().__init__(f"Missing required column(s): {', '.join(self.missing)}")


class EmptyInputError(FeatureValidationError):
    """Raised when there is nothing to encode or score."""


class FeatureTypeError(FeatureValidationError):
    """Raised when a numeric feature holds values that cannot be parsed as numbers."""


class InvalidThresholdError(FeatureValidationError):
    """Raised when the positive-class threshold is not a probability."""


class SequenceShapeError(M6APredictionError, ValueError):
    """Raised when sequences do not share the expected length."""

    def __init__(self, expected_length: int, mismatches: Sequence[tuple[int, int]]) -> None:
        self.expected_length = expected_length
        self.mismatches = list(mismatches)
        shown = ", ".join(f"row {i} has length {n}" for i, n in self.mismatches[:5])
        more = f" (+{len(self.mismatches) - 5} more)" if len(self.mismatches) > 5 else ""
        super().__init__(
            f"Sequences must all have length {expected_length}; {shown}{more}."
        )


class VocabularyError(M6APredictionError, ValueError):
    """Raised when a categorical value falls outside its fixed vocabulary."""

    def __init__(self, field: str, unknown: Iterable[object], allowed: Sequence[str]) -> None:
        self.field = field
        self.unknown = sorted({str(u) for u in unknown})
        self.allowed = tuple(allowed)
        super().__init__(
            f"Value(s) {self.unknown} in '{field}' are outside the vocabulary {list(self.allowed)}."
        )


class ScorerOutputError(M6APredictionError, RuntimeError):
    """Raised when a scorer returns probabilities that cannot be read back."""
