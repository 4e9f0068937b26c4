# m6aprediction/__init__.py
from __future__ import annotations

from importlib import metadata as _metadata

"""
m6aprediction public package surface.

Encode DNA 5-mers into positional categorical features and score m6A sites
with an already-fitted classifier:

    import m6aprediction as m6a
    m6a.encode_sequences(["GGACA", "ACGTT"])
    m6a.predict_batch(model, features, threshold=0.5)
    m6a.predict_single(model, 0.5, "mRNA", "CDS", 10, 8, 0.5, "GGACA")
"""

try:
    __version__ = _metadata.version("m6aprediction")
except _metadata.PackageNotFoundError:  # local dev / not installed
    __version__ = "0.0.1-dev"

from .core import (  # noqa: E402
    EmptyInputError,
    FeatureTypeError,
    FeatureValidationError,
    InvalidThresholdError,
    M6APredictionError,
    MissingColumnsError,
    ScorerOutputError,
    SequenceShapeError,
    VocabularyError,
    get_config,
    set_cache_root,
    set_config,
    temporary_cache_root,
    temporary_config,
)
from .prediction import (  # noqa: E402
    EstimatorScorer,
    Scorer,
    as_scorer,
    predict_batch,
    predict_single,
    prepare_features,
    validate_features,
)
from .sequence_encoder import PositionalEncoder, encode_sequences  # noqa: E402

__all__ = [
    "__version__",
    # encoding
    "encode_sequences",
    "PositionalEncoder",
    # prediction
    "Scorer",
    "EstimatorScorer",
    "as_scorer",
    "validate_features",
    "prepare_features",
    "predict_batch",
    "predict_single",
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
