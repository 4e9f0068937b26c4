from __future__ import annotations

import json
import logging
import os
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterable, Optional

from appdirs import user_log_dir

from m6aprediction.constants.logging_constants import (
    LOG_DEFAULT_BACKUPS,
    LOG_DEFAULT_FILE,
    LOG_DEFAULT_JSON,
    LOG_DEFAULT_LEVEL,
    LOG_DEFAULT_MAX_BYTES,
    LOG_DEFAULT_NAME,
    LOG_DEFAULT_STDERR,
    LOG_ENV_PREFIX,
    LOG_LEVEL_MAP,
    env_log_json,
    env_log_level,
    env_log_stderr,
    env_log_utc,
)

# Roots configured by setup_logger; guards against duplicated handlers.
_CONFIGURED_ROOTS: set[str] = set()

# LogRecord attributes that are not user context.
_RESERVED_ATTRS = frozenset(
    {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module", "msecs",
        "msg", "name", "pathname", "process", "processName", "relativeCreated",
        "stack_info", "taskName", "thread", "threadName",
    }
)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{LOG_ENV_PREFIX}{name}")
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _to_level(level: int | str | None) -> int:
    if level is None:
        if os.getenv(f"{LOG_ENV_PREFIX}LEVEL"):
            return env_log_level()
        from m6aprediction.constants.tool_configs import get_config

        cfg = get_config()
        return logging.DEBUG if cfg.debug else int(cfg.log_level)
    if isinstance(level, str):
        return LOG_LEVEL_MAP.get(level.strip().upper(), LOG_DEFAULT_LEVEL)
    return int(level)


def _resolve_log_file(explicit_path: Optional[Path] = None,
                      default_name: str = LOG_DEFAULT_FILE) -> Optional[Path]:
    """
    Decide where the log file goes.

    Priority:
      1) explicit argument `explicit_path`
      2) env M6A_LOG_FILE
      3) m6aprediction.constants.tool_configs.get_config().cache_paths.logs()
      4) appdirs user_log_dir()
      5) None (no file handler)
    """
    candidates: list[Optional[Path]] = [
        Path(explicit_path).expanduser() if explicit_path is not None else None,
    ]
    env_path = os.getenv(f"{LOG_ENV_PREFIX}FILE")
    candidates.append(Path(env_path).expanduser() if env_path else None)

    for p in candidates:
        if p is not None:
            p.parent.mkdir(parents=True, exist_ok=True)
            return p

    # Imported here: tool_configs imports logging_constants, not this module,
    # but the config object should not be built at import time.
    try:
        from m6aprediction.constants.tool_configs import get_config

        root = Path(get_config().cache_paths.logs())
        root.mkdir(parents=True, exist_ok=True)
        return root / default_name
    except OSError:
        pass

    try:
        base = Path(user_log_dir("m6aprediction", "m6aprediction"))
        base.mkdir(parents=True, exist_ok=True)
        return base / default_name
    except OSError:
        return None


class _JsonFormatter(logging.Formatter):
    """One JSON object per record; context attributes become top-level keys."""

    def __init__(self, *, use_utc: bool = False) -> None:
        super().__init__()
        self._use_utc = use_utc

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # type: ignore[override]
        if self._use_utc:
            return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created))
        return super().formatTime(record, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS or k in payload:
                continue
            try:
                json.dumps(v)
                payload[k] = v
            except (TypeError, ValueError):
                payload[k] = str(v)

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False)


def _formatter(fmt: str, datefmt: Optional[str], *, use_json: bool, use_utc: bool) -> logging.Formatter:
    if use_json:
        return _JsonFormatter(use_utc=use_utc)
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)
    if use_utc:
        formatter.converter = time.gmtime
    return formatter


def setup_logger(
    name: str = LOG_DEFAULT_NAME,
    level: int | str | None = None,
    *,
    with_console: bool | None = None,
    with_file: bool = True,
    file_path: Optional[Path] = None,
    fmt_console: str = "[%(levelname)s] %(name)s: %(message)s",
    fmt_file: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt_file: Optional[str] = "%Y-%m-%d %H:%M:%S",
    use_json: Optional[bool] = None,
    use_utc: Optional[bool] = None,
    max_bytes: Optional[int] = None,
    backups: Optional[int] = None,
    propagate: bool = False,
    force_reconfigure: bool = False,
    extra_filters: Optional[Iterable[logging.Filter]] = None,
) -> logging.Logger:
    """
    Configure and return the package root logger.

    Idempotent per `name`: later calls only update levels unless
    `force_reconfigure=True`, in which case handlers are rebuilt.

    Parameters
    ----------
    name : str
        Logger name (package root).
    level : int | str | None
        Logging level. If None, M6A_LOG_LEVEL when set, otherwise
        get_config().log_level (DEBUG when get_config().debug is True).
    with_console : bool | None
        Add a stderr handler. If None, read from M6A_LOG_STDERR.
    with_file : bool
        Add a rotating file handler at the path chosen by `_resolve_log_file`.
    file_path : Optional[Path]
        Force a specific log file.
    use_json : Optional[bool]
        JSON records instead of text. If None, read from M6A_LOG_JSON.
    use_utc : Optional[bool]
        UTC timestamps. If None, read from M6A_LOG_UTC.
    max_bytes, backups : Optional[int]
        Rotation settings; env M6A_LOG_MAX_BYTES / M6A_LOG_BACKUPS when None.
    propagate : bool
        Whether records reach the Python root logger.
    force_reconfigure : bool
        Drop existing handlers and rebuild them.
    extra_filters : Optional[Iterable[logging.Filter]]
        Filters attached to the logger (e.g., context filters).

    Returns
    -------
    logging.Logger
    """
    lvl = _to_level(level)
    if with_console is None:
        with_console = env_log_stderr(LOG_DEFAULT_STDERR)
    if use_json is None:
        use_json = env_log_json(LOG_DEFAULT_JSON)
    if use_utc is None:
        use_utc = env_log_utc()
    if max_bytes is None:
        max_bytes = _env_int("MAX_BYTES", LOG_DEFAULT_MAX_BYTES)
    if backups is None:
        backups = _env_int("BACKUPS", LOG_DEFAULT_BACKUPS)

    logger = logging.getLogger(name)
    logger.propagate = propagate

    if name in _CONFIGURED_ROOTS and not force_reconfigure:
        logger.setLevel(lvl)
        for h in logger.handlers:
            if not isinstance(h, logging.FileHandler):
                h.setLevel(lvl)
        return logger

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    _CONFIGURED_ROOTS.discard(name)

    logger.setLevel(lvl)

    if with_console:
        ch = logging.StreamHandler()
        ch.setLevel(lvl)
        ch.setFormatter(_formatter(fmt_console, None, use_json=bool(use_json), use_utc=bool(use_utc)))
        logger.addHandler(ch)

    if with_file:
        path = _resolve_log_file(explicit_path=file_path)
        if path is not None:
            fh = RotatingFileHandler(path, maxBytes=int(max_bytes), backupCount=int(backups), encoding="utf-8")
            # file stays verbose; the logger level gates what reaches it
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(_formatter(fmt_file, datefmt_file, use_json=bool(use_json), use_utc=bool(use_utc)))
            logger.addHandler(fh)

    for flt in extra_filters or ():
        logger.addFilter(flt)

    _CONFIGURED_ROOTS.add(name)
    return logger


def get_logger(name: str = LOG_DEFAULT_NAME) -> logging.Logger:
    """
    Return a logger, configuring the package root on first use.

    Dotted names below the package root (``m6aprediction.prediction.batch``)
    are returned as children and inherit the root's handlers.
    """
    root = name.split(".", 1)[0]
    if root == LOG_DEFAULT_NAME:
        if root not in _CONFIGURED_ROOTS:
            setup_logger(name=root)
        return logging.getLogger(name)
    if name not in _CONFIGURED_ROOTS:
        setup_logger(name=name)
    return logging.getLogger(name)


class _ContextFilter(logging.Filter):
    """Inject static key/value pairs (component, encoder, ...) into every record."""

    def __init__(self, **static_context: Any) -> None:
        super().__init__()
        self._ctx = static_context

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for k, v in self._ctx.items():
            if not hasattr(record, k):
                setattr(record, k, v)
        return True


def add_context(logger: logging.Logger, **context: Any) -> None:
    """
    Attach static context (e.g., component='prediction', stage='batch') to a logger.
    """
    if not context:
        return
    for flt in logger.filters:
        if isinstance(flt, _ContextFilter) and flt._ctx == context:
            return
    logger.addFilter(_ContextFilter(**context))


def set_global_level(level: int | str, name: str = LOG_DEFAULT_NAME) -> None:
    """Change the level of the package root logger and all of its handlers."""
    lvl = _to_level(level)
    logger = get_logger(name)
    logger.setLevel(lvl)
    for h in logger.handlers:
        h.setLevel(lvl)


def silence_external() -> None:
    """Lower verbosity of third-party libraries used alongside fitted models."""
    for noisy in ("sklearn", "joblib", "matplotlib", "numexpr"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def reset_logging(name: str = LOG_DEFAULT_NAME) -> None:
    """
    Remove all handlers for the given logger name and mark it as unconfigured.
    Useful for test teardown or dynamic reconfiguration.
    """
    logger = logging.getLogger(name)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.filters.clear()
    _CONFIGURED_ROOTS.discard(name)
