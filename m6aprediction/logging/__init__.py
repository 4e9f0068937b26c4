from __future__ import annotations

from .logging_config import (
    add_context,
    get_logger,
    reset_logging,
    set_global_level,
    setup_logger,
    silence_external,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "add_context",
    "set_global_level",
    "silence_external",
    "reset_logging",
]
