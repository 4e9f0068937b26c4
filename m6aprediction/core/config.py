# core/config.py
from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from threading import RLock
from typing import Any

from m6aprediction.constants.config_constants import CachePaths
from m6aprediction.constants.tool_configs import ToolConfig
from m6aprediction.constants.tool_configs import get_config as _get_config
from m6aprediction.constants.tool_configs import set_config as _set_config
from m6aprediction.logging import get_logger

_LOG = get_logger(__name__)
_LOCK = RLock()


def get_config() -> ToolConfig:
    """
    Return the global ToolConfig managed by m6aprediction.constants.tool_configs.

    This is a thin wrapper to avoid duplicating global state in the 'core' package.
    """
    with _LOCK:
        return _get_config()


def set_config(cfg: ToolConfig) -> None:
    """Replace the global configuration."""
    with _LOCK:
        _set_config(cfg)
        _LOG.debug("Configuration replaced: %s", cfg)


def set_cache_root(new_root: Path | str) -> None:
    """
    Override the cache root directory while preserving the rest of the
    current configuration.

    Parameters
    ----------
    new_root : Path or str
        New root path. Will be expanded and resolved.
    """
    root = Path(new_root).expanduser().resolve()
    with _LOCK:
        _set_config(replace(_get_config(), cache_paths=CachePaths(root)))
        _LOG.info("Cache root set to: %s", root)


@contextmanager
def temporary_cache_root(temp_root: Path | str) -> Generator[None, None, None]:
    """
    Temporarily override the cache root (useful for tests or isolated runs).
    """
    prev_root = get_config().cache_paths.cache_root
    set_cache_root(temp_root)
    try:
        yield
    finally:
        set_cache_root(prev_root)


@contextmanager
def temporary_config(**overrides: Any) -> Generator[ToolConfig, None, None]:
    """
    Temporarily replace fields of the global configuration.

    Example
    -------
    >>> with temporary_config(vocabulary_policy="missing"):
    ...     encode_sequences(["ACGTN"])  # N becomes a missing category
    """
    with _LOCK:
        previous = _get_config()
        # replace() re-runs __post_init__, so invalid values fail here
        updated = replace(previous, **overrides)
        _set_config(updated)
    _LOG.debug("Temporary configuration overrides: %s", overrides)
    try:
        yield updated
    finally:
        with _LOCK:
            _set_config(previous)


__all__ = [
    "get_config",
    "set_config",
    "set_cache_root",
    "temporary_cache_root",
    "temporary_config",
    "ToolConfig",
    "CachePaths",
]
