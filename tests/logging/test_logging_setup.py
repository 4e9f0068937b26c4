from __future__ import annotations

"""
Tests for m6aprediction.logging: idempotency, console/file behavior, JSON mode,
rotation, context injection, and global controls.
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import pandas as pd

from m6aprediction.core.config import temporary_config
from m6aprediction.logging import (
    add_context,
    get_logger,
    reset_logging,
    set_global_level,
    setup_logger,
    silence_external,
)
from m6aprediction.sequence_encoder import PositionalEncoder

PKG = "m6aprediction"


def _console_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    """FileHandler subclasses StreamHandler, so exclude it explicitly."""
    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            if getattr(h, "stream", None) in (sys.stdout, sys.stderr):
                return h
    return None


def test_setup_logger_idempotent(tmp_path):
    logger = setup_logger(name=PKG, level="INFO", file_path=tmp_path / "a.log")
    n1 = len(logger.handlers)
    logger2 = setup_logger(name=PKG, level="DEBUG")
    assert logger is logger2
    assert len(logger2.handlers) == n1 >= 1
    assert logger2.level == logging.DEBUG


def test_force_reconfigure_rebuilds_handlers(tmp_path):
    logger = setup_logger(name=PKG, with_console=False, file_path=tmp_path / "a.log")
    assert _console_handler(logger) is None
    logger = setup_logger(name=PKG, with_console=True, force_reconfigure=True, file_path=tmp_path / "a.log")
    assert _console_handler(logger) is not None
    assert len(logger.handlers) == 2


def test_env_controls_console_and_level(monkeypatch, capsys):
    monkeypatch.setenv("M6A_LOG_STDERR", "1")
    monkeypatch.setenv("M6A_LOG_LEVEL", "ERROR")
    logger = setup_logger(name=PKG)
    assert logger.level == logging.ERROR
    logger.info("info-hidden")
    logger.error("error-visible")
    err = capsys.readouterr().err
    assert "error-visible" in err
    assert "info-hidden" not in err


def test_json_console_output(monkeypatch, capsys):
    monkeypatch.setenv("M6A_LOG_JSON", "1")
    monkeypatch.setenv("M6A_LOG_STDERR", "1")
    logger = setup_logger(name=PKG, level="INFO")
    logger.info("hello-json", extra={"run_id": "abc123"})
    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "hello-json"
    assert payload["level"] == "INFO"
    assert payload["run_id"] == "abc123"
    assert payload["name"] == PKG


def test_json_utc_timestamp(monkeypatch, capsys):
    monkeypatch.setenv("M6A_LOG_JSON", "1")
    monkeypatch.setenv("M6A_LOG_UTC", "1")
    monkeypatch.setenv("M6A_LOG_STDERR", "1")
    setup_logger(name=PKG, level="INFO").info("utc-line")
    payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert payload["time"].endswith("Z")


def test_file_handler_writes_and_rotates(monkeypatch, tmp_path):
    log_path = tmp_path / "rotate.log"
    monkeypatch.setenv("M6A_LOG_FILE", str(log_path))
    monkeypatch.setenv("M6A_LOG_MAX_BYTES", "512")
    monkeypatch.setenv("M6A_LOG_BACKUPS", "2")
    logger = setup_logger(name=PKG, level="INFO")
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    for i in range(200):
        logger.info("line-%04d %s", i, "x" * 80)
    assert log_path.exists()
    assert (tmp_path / "rotate.log.1").exists()
    assert not (tmp_path / "rotate.log.3").exists()


def test_get_logger_lazy_config_and_children(monkeypatch, tmp_path):
    log_path = tmp_path / "lazy.log"
    monkeypatch.setenv("M6A_LOG_FILE", str(log_path))
    child = get_logger("m6aprediction.prediction.batch")
    root = logging.getLogger(PKG)
    assert len(root.handlers) >= 1
    assert child.handlers == []
    child.warning("from-child")
    assert "from-child" in log_path.read_text(encoding="utf-8")


def test_add_context_injection_with_json(monkeypatch, capsys):
    monkeypatch.setenv("M6A_LOG_JSON", "1")
    monkeypatch.setenv("M6A_LOG_STDERR", "1")
    logger = setup_logger(name=PKG, level="INFO")
    add_context(logger, component="prediction", stage="batch")
    add_context(logger, component="prediction", stage="batch")
    assert len(logger.filters) == 1
    logger.info("ctx-msg", extra={"rows": 3})
    payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert payload["component"] == "prediction"
    assert payload["stage"] == "batch"
    assert payload["rows"] == 3


def test_encoder_logs_reach_package_file(monkeypatch, tmp_path):
    log_path = tmp_path / "encoder.log"
    monkeypatch.setenv("M6A_LOG_FILE", str(log_path))
    PositionalEncoder(dataset=pd.DataFrame({"DNA_5mer": ["GGACA"]})).run_process()
    text = log_path.read_text(encoding="utf-8")
    assert "m6aprediction.sequence_encoder.PositionalEncoder" in text
    assert "Positional encoding completed" in text


def test_reset_logging_removes_handlers(tmp_path):
    lg = setup_logger(name=PKG, level="INFO", file_path=tmp_path / "r.log")
    assert len(lg.handlers) >= 1
    reset_logging(PKG)
    assert logging.getLogger(PKG).handlers == []
    lg3 = setup_logger(name=PKG, level="DEBUG", file_path=tmp_path / "r.log")
    assert len(lg3.handlers) >= 1


def test_silence_external_changes_level():
    noisy = logging.getLogger("sklearn")
    noisy.setLevel(logging.DEBUG)
    silence_external()
    assert logging.getLogger("sklearn").level >= logging.WARNING


def test_set_global_level_affects_handlers(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("M6A_LOG_STDERR", "1")
    log_path = tmp_path / "quiet.log"
    lg = setup_logger(name=PKG, level="DEBUG", file_path=log_path)
    set_global_level("CRITICAL")
    assert lg.level == logging.CRITICAL
    assert all(h.level == logging.CRITICAL for h in lg.handlers)
    lg.error("no-output")
    assert "no-output" not in capsys.readouterr().err
    assert log_path.stat().st_size == 0


def test_level_defaults_to_configured_log_level(tmp_path):
    with temporary_config(log_level=logging.WARNING, debug=False):
        lg = setup_logger(name=PKG, file_path=tmp_path / "cfg.log")
    assert lg.level == logging.WARNING


def test_debug_config_enables_debug_level(tmp_path):
    with temporary_config(log_level=logging.ERROR, debug=True):
        lg = setup_logger(name=PKG, file_path=tmp_path / "dbg.log")
    assert lg.level == logging.DEBUG


def test_env_level_takes_precedence_over_config(monkeypatch, tmp_path):
    monkeypatch.setenv("M6A_LOG_LEVEL", "ERROR")
    with temporary_config(log_level=logging.DEBUG, debug=True):
        lg = setup_logger(name=PKG, file_path=tmp_path / "env.log")
    assert lg.level == logging.ERROR
