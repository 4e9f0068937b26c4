from __future__ import annotations

from collections.abc import Iterator

import pytest

from m6aprediction.core.config import get_config, set_cache_root, set_config


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path) -> Iterator[None]:
    """Point the cache at tmp_path and restore the previous configuration afterwards."""
    previous = get_config()
    monkeypatch.setenv("M6A_LOG_STDERR", "0")
    set_cache_root(tmp_path)
    yield
    set_config(previous)
