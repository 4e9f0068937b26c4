from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np
import pandas as pd
from sklearn.exceptions import NotFittedError
from sklearn.utils.validation import check_is_fitted

from m6aprediction.constants import POSITIVE_LABEL
from m6aprediction.core.errors import ScorerOutputError
from m6aprediction.logging import add_context, get_logger

_LOG = get_logger(__name__)
add_context(_LOG, component="prediction", facility="scorer")


@runtime_checkable
class Scorer(Protocol):
    """
    Fitted binary classifier seen through the prediction pipeline.

    `predict_proba` receives the model-ready table (required features plus
    ``nt_pos*`` columns) and returns one row per input row and one column per
    class label; a column named ``"Positive"`` is mandatory.
    """

    def predict_proba(self, features: pd.DataFrame) -> pd.DataFrame: ...


class EstimatorScorer:
    """
    Adapt a scikit-learn style estimator (``predict_proba`` + ``classes_``) to `Scorer`.

    Parameters
    ----------
    estimator : Any
        Fitted estimator or pipeline. Pipelines are expected to handle the
        categorical columns themselves (e.g., a ColumnTransformer with a
        OneHotEncoder).
    positive_label : Any, default="Positive"
        Entry of ``estimator.classes_`` that denotes a methylated site; its
        column is relabelled ``"Positive"`` in the output.
    feature_columns : sequence of str, optional
        Columns passed to the estimator. If None, ``feature_names_in_`` is used
        when the estimator exposes it; otherwise the whole table.
    """

    def __init__(
        self,
        estimator: Any,
        positive_label: Any = POSITIVE_LABEL,
        feature_columns: Optional[Sequence[str]] = None,
    ) -> None:
        if not callable(getattr(estimator, "predict_proba", None)):
            raise TypeError(f"{type(estimator).__name__} does not implement predict_proba().")
        self.estimator = estimator
        self.positive_label = positive_label
        self.feature_columns = list(feature_columns) if feature_columns is not None else None

    def _select(self, features: pd.DataFrame) -> pd.DataFrame:
        cols = self.feature_columns
        if cols is None:
            names = getattr(self.estimator, "feature_names_in_", None)
            cols = list(names) if names is not None else None
        if cols is None:
            return features
        return features.loc[:, cols]

    def predict_proba(self, features: pd.DataFrame) -> pd.DataFrame:
        if hasattr(self.estimator, "fit"):
            try:
                check_is_fitted(self.estimator)
            except NotFittedError:
                _LOG.error("Estimator %s is not fitted.", type(self.estimator).__name__)
                raise

        proba = np.asarray(self.estimator.predict_proba(self._select(features)))
        classes = list(self.estimator.classes_)
        if self.positive_label not in classes:
            raise ScorerOutputError(
                f"Positive label {self.positive_label!r} not among estimator classes {classes}."
            )
        labels = [POSITIVE_LABEL if c == self.positive_label else str(c) for c in classes]
        _LOG.debug("Estimator %s scored %d rows.", type(self.estimator).__name__, len(features))
        return pd.DataFrame(proba, columns=labels, index=features.index)

    def __repr__(self) -> str:
        return f"EstimatorScorer({type(self.estimator).__name__}, positive_label={self.positive_label!r})"


def as_scorer(model: Any) -> Scorer:
    """
    Return `model` as a `Scorer`.

    Objects exposing ``classes_`` are treated as scikit-learn estimators and
    wrapped in `EstimatorScorer`; other objects with a ``predict_proba`` method
    are assumed to honour the `Scorer` contract already.

    Raises
    ------
    TypeError
        If `model` cannot produce class probabilities.
    """
    if isinstance(model, EstimatorScorer):
        return model
    if hasattr(model, "classes_") and callable(getattr(model, "predict_proba", None)):
        return EstimatorScorer(model)
    if isinstance(model, Scorer):
        return model
    _LOG.error("Object of type %s cannot be used as a scorer.", type(model).__name__)
    raise TypeError(f"{type(model).__name__} is not a Scorer: it must implement predict_proba(features).")
