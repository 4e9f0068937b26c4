# feature_constants.py
from enum import Enum


class VocabularyPolicy(str, Enum):
    """How values outside a fixed vocabulary are handled."""
    error = "error"
    missing = "missing"

