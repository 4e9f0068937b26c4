"""
m6A site prediction on top of an injected, already-fitted classifier.

- scorer : `Scorer` protocol and the scikit-learn adapter `EstimatorScorer`.
- batch  : feature validation/preparation and `predict_batch`.
- single : `predict_single`, a one-record wrapper over `predict_batch`.
"""

from .batch import model_columns, predict_batch, prepare_features, validate_features
from .scorer import EstimatorScorer, Scorer, as_scorer
from .single import format_probability, predict_single

__all__ = [
    "Scorer",
    "EstimatorScorer",
    "as_scorer",
    "validate_features",
    "prepare_features",
    "model_columns",
    "predict_batch",
    "predict_single",
    "format_probability",
]
