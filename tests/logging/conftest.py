from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from m6aprediction.logging import reset_logging


@pytest.fixture(autouse=True)
def clean_reset() -> Iterator[None]:
    """Reset the package logger between tests and restore a neutral level."""
    reset_logging("m6aprediction")
    yield
    reset_logging("m6aprediction")
    logging.getLogger("m6aprediction").setLevel(logging.NOTSET)
