from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any, Optional

import numpy as np
import pandas as pd

from m6aprediction.constants import (
    CATEGORICAL_VOCABULARIES,
    DEFAULT_THRESHOLD,
    NEGATIVE_LABEL,
    NUMERIC_COLUMNS,
    POSITION_PREFIX,
    POSITIVE_LABEL,
    PROBABILITY_COLUMN,
    PROBABILITY_DECIMALS,
    REQUIRED_COLUMNS,
    STATUS_COLUMN,
    UNIT_INTERVAL_COLUMNS,
    normalize_policy,
)
from m6aprediction.constants.feature_constants import VocabularyPolicy
from m6aprediction.constants.tool_constants import COLUMN_DNA_5MER
from m6aprediction.core.config import get_config
from m6aprediction.core.errors import (
    EmptyInputError,
    FeatureTypeError,
    InvalidThresholdError,
    MissingColumnsError,
    ScorerOutputError,
    VocabularyError,
)
from m6aprediction.logging import add_context, get_logger
from m6aprediction.sequence_encoder import PositionalEncoder

from .scorer import Scorer, as_scorer

_LOG = get_logger(__name__)
add_context(_LOG, component="prediction", stage="batch")

_POSITION_RE = re.compile(rf"{POSITION_PREFIX}(\d+)")


# ----------------------------
# Validation
# ----------------------------


def validate_features(features: pd.DataFrame) -> None:
    """
    Check that `features` is a DataFrame holding every required column.

    Raises
    ------
    TypeError
        If `features` is not a DataFrame.
    MissingColumnsError
        If any of the seven required columns is absent; ``.missing`` lists them
        in canonical order.
    """
    if not isinstance(features, pd.DataFrame):
        raise TypeError(f"features must be a pandas DataFrame; got {type(features).__name__}.")
    missing = [c for c in REQUIRED_COLUMNS if c not in features.columns]
    if missing:
        err = MissingColumnsError(missing)
        _LOG.error(str(err))
        raise err


def _check_threshold(threshold: Any) -> float:
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        msg = f"Threshold must be a real number; got {threshold!r}."
        _LOG.error(msg)
        raise InvalidThresholdError(msg)
    value = float(threshold)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        msg = f"Threshold must lie in [0, 1]; got {value}."
        _LOG.error(msg)
        raise InvalidThresholdError(msg)
    return value


def _coerce_numeric(table: pd.DataFrame) -> None:
    for col in NUMERIC_COLUMNS:
        converted = pd.to_numeric(table[col], errors="coerce")
        bad = converted.isna() & table[col].notna()
        if bad.any():
            rows = table.index[bad].tolist()[:10]
            msg = f"Column '{col}' holds non-numeric values at rows {rows}."
            _LOG.error(msg)
            raise FeatureTypeError(msg)
        table[col] = converted.astype(float)

    for col in UNIT_INTERVAL_COLUMNS:
        outside = (table[col] < 0) | (table[col] > 1)
        if outside.any():
            _LOG.warning(
                "%d value(s) of '%s' fall outside [0, 1] (rows %s).",
                int(outside.sum()), col, table.index[outside].tolist()[:10],
            )


def _coerce_categorical(table: pd.DataFrame, column: str, vocabulary: Sequence[str], policy: str) -> None:
    raw = table[column]
    present = raw[raw.notna()]
    unknown = present[~present.isin(vocabulary)].unique().tolist()
    if unknown:
        if policy == VocabularyPolicy.error.value:
            err = VocabularyError(column, unknown, vocabulary)
            _LOG.error(str(err))
            raise err
        _LOG.warning(
            "Value(s) %s in '%s' are outside %s and become missing categories.",
            sorted(map(str, unknown)), column, list(vocabulary),
        )
    if raw.isna().any():
        _LOG.warning("Column '%s' has %d missing value(s).", column, int(raw.isna().sum()))
    table[column] = pd.Categorical(raw, categories=list(vocabulary))


def prepare_features(
    features: pd.DataFrame,
    *,
    on_unknown: Optional[str] = None,
    sequence_length: Optional[int] = None,
) -> pd.DataFrame:
    """
    Validate a feature table and append positional nucleotide features.

    The caller's DataFrame is not modified. Numeric columns are parsed as
    floats, ``RNA_type`` and ``RNA_region`` become Categoricals over their
    fixed vocabularies, and ``DNA_5mer`` is encoded into ``nt_pos1..nt_posN``
    (``DNA_5mer`` itself is kept).

    Parameters
    ----------
    features : pd.DataFrame
        Table with the seven required columns; extra columns are carried along.
    on_unknown : {"error", "missing"}, optional
        Out-of-vocabulary policy; defaults to ``get_config().vocabulary_policy``.
    sequence_length : int, optional
        Required 5-mer length; defaults to ``get_config().kmer_length``.

    Returns
    -------
    pd.DataFrame
        Copy of `features` with typed columns and positional features.
    """
    validate_features(features)
    if len(features) == 0:
        _LOG.error("Feature table has no rows.")
        raise EmptyInputError("Feature table has no rows.")

    cfg = get_config()
    policy = normalize_policy(on_unknown if on_unknown is not None else cfg.vocabulary_policy)
    length = sequence_length if sequence_length is not None else cfg.kmer_length

    table = features.copy()
    _coerce_numeric(table)
    for column, vocabulary in CATEGORICAL_VOCABULARIES.items():
        _coerce_categorical(table, column, vocabulary, policy)

    encoded = PositionalEncoder(
        dataset=table,
        sequence_column=COLUMN_DNA_5MER,
        sequence_length=length,
        on_unknown=policy,
    ).run_process()

    header = list(encoded.columns)
    existing = [c for c in table.columns if _is_position_column(c)]
    if existing and existing != header:
        _LOG.warning("Dropping positional columns from a previous encoding: %s", existing)
        table = table.drop(columns=existing)
    elif existing:
        _LOG.debug("Overwriting existing positional columns: %s", existing)
    for col in header:
        # positional assignment; the input index may be arbitrary
        table[col] = encoded[col].array
    return table


def _is_position_column(column: Any) -> bool:
    return _POSITION_RE.fullmatch(str(column)) is not None


def model_columns(table: pd.DataFrame) -> list[str]:
    """Columns handed to the scorer: the required features followed by ``nt_pos1..nt_posN``."""
    positional = sorted(
        (c for c in table.columns if _is_position_column(c)),
        key=lambda c: int(_POSITION_RE.fullmatch(str(c)).group(1)),  # type: ignore[union-attr]
    )
    return list(REQUIRED_COLUMNS) + positional


# ----------------------------
# Scoring
# ----------------------------


def _positive_probabilities(raw: Any, n_rows: int) -> np.ndarray:
    if isinstance(raw, pd.DataFrame):
        labels = {str(c): c for c in raw.columns}
        if POSITIVE_LABEL not in labels:
            raise ScorerOutputError(
                f"Scorer output has no '{POSITIVE_LABEL}' column; got {list(raw.columns)}."
            )
        values: Any = raw[labels[POSITIVE_LABEL]]
    elif isinstance(raw, Mapping) and POSITIVE_LABEL in raw:
        values = raw[POSITIVE_LABEL]
    else:
        raise ScorerOutputError(
            f"Scorer must return a DataFrame with a '{POSITIVE_LABEL}' column; got {type(raw).__name__}."
        )

    try:
        arr = np.atleast_1d(np.asarray(values, dtype=float)).reshape(-1)
    except (TypeError, ValueError) as e:
        raise ScorerOutputError(f"Scorer returned non-numeric probabilities: {e}") from e

    if arr.shape[0] != n_rows:
        raise ScorerOutputError(f"Scorer returned {arr.shape[0]} probabilities for {n_rows} rows.")
    finite = arr[~np.isnan(arr)]
    if finite.size and (finite.min() < 0.0 or finite.max() > 1.0):
        raise ScorerOutputError("Scorer returned probabilities outside [0, 1].")
    if finite.size < arr.size:
        _LOG.warning("Scorer returned %d missing probabilities.", arr.size - finite.size)
    return arr


def _round_probabilities(values: np.ndarray) -> np.ndarray:
    """Round each value to 3 decimals from its exact stored value (0.0025 -> 0.003); NaN stays NaN."""
    return np.array(
        [v if math.isnan(v) else round(float(v), PROBABILITY_DECIMALS) for v in values],
        dtype=float,
    )


def predict_batch(
    model: Scorer | Any,
    features: pd.DataFrame,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    on_unknown: Optional[str] = None,
    sequence_length: Optional[int] = None,
) -> pd.DataFrame:
    """
    Predict m6A status for every row of a feature table.

    Parameters
    ----------
    model : Scorer or fitted scikit-learn estimator
        Supplies class probabilities; estimators are wrapped with `as_scorer`.
    features : pd.DataFrame
        Must contain gc_content, RNA_type, RNA_region, exon_length,
        distance_to_junction, evolutionary_conservation and DNA_5mer.
    threshold : float, default=0.5
        A row is "Positive" when its rounded probability is strictly greater.
    on_unknown, sequence_length
        Forwarded to `prepare_features`.

    Returns
    -------
    pd.DataFrame
        The prepared table plus ``predicted_m6A_prob`` (3 decimals) and
        ``predicted_m6A_status``.

    Raises
    ------
    MissingColumnsError
        Before any other work if a required column is absent.
    ScorerOutputError
        If the scorer output lacks a "Positive" probability per row.
    """
    validate_features(features)
    cutoff = _check_threshold(threshold)
    scorer = as_scorer(model)

    table = prepare_features(features, on_unknown=on_unknown, sequence_length=sequence_length)

    _LOG.info("Scoring %d rows with %s.", len(table), type(scorer).__name__)
    raw = scorer.predict_proba(table.loc[:, model_columns(table)])
    try:
        positive = _positive_probabilities(raw, len(table))
    except ScorerOutputError as e:
        _LOG.error(str(e))
        raise
    probabilities = _round_probabilities(positive)

    table[PROBABILITY_COLUMN] = probabilities
    table[STATUS_COLUMN] = np.where(probabilities > cutoff, POSITIVE_LABEL, NEGATIVE_LABEL)

    n_pos = int((table[STATUS_COLUMN] == POSITIVE_LABEL).sum())
    _LOG.info("Predicted %d positive / %d negative sites (threshold=%.3f).", n_pos, len(table) - n_pos, cutoff)
    return table
