"""Shared stub scorers and feature tables for all test suites."""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence

import numpy as np
import pandas as pd
import pytest


class ConstantScorer:
    """Returns the same Positive probability for every row and records its inputs."""

    def __init__(self, probability: float = 0.7) -> None:
        self.probability = probability
        self.calls = 0
        self.seen: list[pd.DataFrame] = []

    def predict_proba(self, features: pd.DataFrame) -> pd.DataFrame:
        self.calls += 1
        self.seen.append(features.copy())
        p = np.full(len(features), self.probability, dtype=float)
        return pd.DataFrame({"Negative": 1.0 - p, "Positive": p}, index=features.index)


class ListScorer(ConstantScorer):
    """Returns a fixed list of Positive probabilities, one per row."""

    def __init__(self, probabilities: Sequence[float]) -> None:
        super().__init__()
        self.probabilities = list(probabilities)

    def predict_proba(self, features: pd.DataFrame) -> pd.DataFrame:
        self.calls += 1
        self.seen.append(features.copy())
        p = np.asarray(self.probabilities, dtype=float)
        return pd.DataFrame({"Negative": 1.0 - p, "Positive": p}, index=features.index)


class GCScorer(ConstantScorer):
    """Positive probability equals gc_content; deterministic in the input."""

    def predict_proba(self, features: pd.DataFrame) -> pd.DataFrame:
        self.calls += 1
        p = features["gc_content"].to_numpy(dtype=float)
        return pd.DataFrame({"Negative": 1.0 - p, "Positive": p}, index=features.index)


@pytest.fixture(autouse=True)
def _isolate_log_env(tmp_path, monkeypatch) -> Iterator[None]:
    """Strip M6A_* environment overrides and send logs to a temporary file."""
    for k in list(os.environ.keys()):
        if k.startswith("M6A_"):
            monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("M6A_LOG_FILE", str(tmp_path / "m6a.log"))
    yield


@pytest.fixture
def pkg_caplog(caplog) -> Iterator[pytest.LogCaptureFixture]:
    """caplog attached to the package root logger (which does not propagate)."""
    logger = logging.getLogger("m6aprediction")
    previous = logger.level
    logger.addHandler(caplog.handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)
        logger.setLevel(previous)


@pytest.fixture
def feature_df() -> pd.DataFrame:
    """Three well-formed sites."""
    return pd.DataFrame(
        {
            "gc_content": [0.5, 0.3, 0.8],
            "RNA_type": ["mRNA", "lincRNA", "pseudogene"],
            "RNA_region": ["CDS", "intron", "3'UTR"],
            "exon_length": [10, 200, 35],
            "distance_to_junction": [8, 120, 3],
            "evolutionary_conservation": [0.5, 0.9, 0.1],
            "DNA_5mer": ["GGACA", "AGACT", "TGACC"],
        }
    )


@pytest.fixture
def constant_scorer() -> ConstantScorer:
    return ConstantScorer(0.7)


@pytest.fixture
def make_scorer():
    """Factory fixture: make_scorer(0.7) or make_scorer([0.1, 0.9]) or make_scorer('gc')."""

    def _make(kind: float | Sequence[float] | str = 0.7) -> ConstantScorer:
        if kind == "gc":
            return GCScorer()
        if isinstance(kind, (int, float)):
            return ConstantScorer(float(kind))
        return ListScorer(kind)

    return _make
