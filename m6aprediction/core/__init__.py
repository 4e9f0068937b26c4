# core/__init__.py
from __future__ import annotations

from .config import get_config, set_cache_root, set_config, temporary_cache_root, temporary_config
from .errors import (
    EmptyInputError,
    FeatureTypeError,
    FeatureValidationError,
    InvalidThresholdError,
    M6APredictionError,
    MissingColumnsError,
    ScorerOutputError,
    SequenceShapeError,
    VocabularyError,
)

__all__ = [
    # config
    "get_config",
    "set_config",
    "set_cache_root",
    "temporary_cache_root",
    "temporary_config",
    # errors
    "M6APredictionError",
    "FeatureValidationError",
    "MissingColumnsError",
    "EmptyInputError",
    "FeatureTypeError",
    "InvalidThresholdError",
    "SequenceShapeError",
    "VocabularyError",
    "ScorerOutputError",
]
