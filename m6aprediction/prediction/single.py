from __future__ import annotations

import math
from typing import Any, Optional

import pandas as pd

from m6aprediction.constants import DEFAULT_THRESHOLD, PROBABILITY_COLUMN, REQUIRED_COLUMNS, STATUS_COLUMN
from m6aprediction.logging import add_context, get_logger
from m6aprediction.types import SinglePrediction

from .batch import predict_batch
from .scorer import Scorer

_LOG = get_logger(__name__)
add_context(_LOG, component="prediction", stage="single")

MISSING_PROBABILITY_TEXT = "NA"


def format_probability(value: float) -> str:
    """
    Shortest text form of a rounded probability: 0.7 -> '0.7', 1.0 -> '1'.

    A missing probability (NaN) is rendered as 'NA'.
    """
    value = float(value)
    if math.isnan(value):
        return MISSING_PROBABILITY_TEXT
    return f"{value:g}"


def predict_single(
    model: Scorer | Any,
    gc_content: float,
    rna_type: str,
    rna_region: str,
    exon_length: float,
    distance_to_junction: float,
    evolutionary_conservation: float,
    dna_5mer: str,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    on_unknown: Optional[str] = None,
) -> SinglePrediction:
    """
    Predict m6A status for one site.

    Builds a one-row feature table, runs `predict_batch` and keeps only the
    derived fields.

    Returns
    -------
    dict
        ``{"probability": str, "status": "Positive" | "Negative"}``

    Examples
    --------
    >>> predict_single(model, 0.5, "mRNA", "CDS", 10, 8, 0.5, "GGACA")  # doctest: +SKIP
    {'probability': '0.7', 'status': 'Positive'}
    """
    values = (
        gc_content,
        rna_type,
        rna_region,
        exon_length,
        distance_to_junction,
        evolutionary_conservation,
        dna_5mer,
    )
    features = pd.DataFrame([values], columns=list(REQUIRED_COLUMNS))
    _LOG.debug("Single-site features: %s", dict(zip(REQUIRED_COLUMNS, values)))

    result = predict_batch(model, features, threshold, on_unknown=on_unknown)
    row = result.iloc[0]
    return {
        "probability": format_probability(row[PROBABILITY_COLUMN]),
        "status": str(row[STATUS_COLUMN]),  # type: ignore[typeddict-item]
    }
