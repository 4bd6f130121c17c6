"""Test unified logging configuration.

Tests for pixelcanvas.utils.logging_config:
    - setup_logging idempotency (no duplicate handlers)
    - Human and JSON file output include context fields
    - push_context / pop_context
    - Rotation modes and invalid arguments
    - set_level, install_excepthook, shutdown

Run:
    pytest tests/test_logging_config.py -v
"""

import json
import logging
import logging.handlers
import sys

import pytest

from pixelcanvas.utils import logging_config


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging_config.pop_context()
    logging_config.setup_logging(log_level="WARNING", to_stderr=False, capture_warnings=False)


def test_setup_logging_idempotent():
    root = logging.getLogger()
    logging_config.setup_logging(log_level="INFO")
    first = len(root.handlers)
    logging_config.setup_logging(log_level="INFO")
    logging_config.setup_logging(log_level="DEBUG")
    assert len(root.handlers) == first
    assert root.level == logging.DEBUG


def test_human_file_output_with_context(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logging_config.setup_logging(
        log_level="INFO", log_file=str(log_file), to_stderr=False,
        context={"app": "checkerboard"},
    )
    logging_config.get_logger("pixelcanvas.test").info("hello canvas")

    line = log_file.read_text().strip().splitlines()[-1]
    assert "INFO" in line
    assert "app=checkerboard" in line
    assert line.endswith("hello canvas")


def test_json_file_output(tmp_path):
    log_file = tmp_path / "run.jsonl"
    logging_config.setup_logging(
        log_level="INFO", log_file=str(log_file), json=True, to_stderr=False,
        context={"app": "checkerboard"},
    )
    logging_config.push_context(output="board.ppm")
    logging_config.get_logger("pixelcanvas.test").warning("saved")

    record = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert record["lvl"] == "WARNING"
    assert record["msg"] == "saved"
    assert record["app"] == "checkerboard"
    assert record["output"] == "board.ppm"


def test_pop_context_keys():
    logging_config.push_context(a=1, b=2)
    logging_config.pop_context(keys=["a"])
    formatter = logging_config.ContextFormatter("human", use_color=False)
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    line = formatter.format(record)
    assert "b=2" in line
    assert "a=1" not in line


def test_formatter_without_context():
    logging_config.pop_context()
    formatter = logging_config.ContextFormatter("human", use_color=False)
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "plain %s", ("text",), None)
    line = formatter.format(record)
    assert line.endswith("| plain text")


def test_size_rotation_handler(tmp_path):
    info = logging_config.setup_logging(
        log_file=str(tmp_path / "r.log"), to_stderr=False,
        rotate={"mode": "size", "max_bytes": 1000, "backup_count": 1},
    )
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in info["handlers"])


def test_invalid_rotation_mode(tmp_path):
    with pytest.raises(ValueError):
        logging_config.setup_logging(
            log_file=str(tmp_path / "r.log"), to_stderr=False, rotate={"mode": "weekly"}
        )


def test_invalid_level():
    with pytest.raises(ValueError):
        logging_config.setup_logging(log_level="LOUD")


def test_invalid_format_mode():
    with pytest.raises(ValueError):
        logging_config.ContextFormatter("xml")


def test_set_level_updates_root():
    logging_config.setup_logging(log_level="WARNING", to_stderr=False)
    logging_config.set_level("debug")
    assert logging.getLogger().level == logging.DEBUG


def test_install_excepthook_logs_uncaught(monkeypatch, caplog):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    logging_config.install_excepthook()
    assert sys.excepthook is not sys.__excepthook__

    try:
        raise RuntimeError("render failed")
    except RuntimeError:
        exc_info = sys.exc_info()
    with caplog.at_level(logging.CRITICAL):
        sys.excepthook(*exc_info)
    assert any(
        r.levelno == logging.CRITICAL and r.exc_info[1] is exc_info[1]
        for r in caplog.records
    )


def test_install_excepthook_forwards_keyboard_interrupt(monkeypatch):
    forwarded = []
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    monkeypatch.setattr(sys, "__excepthook__", lambda *args: forwarded.append(args[0]))
    logging_config.install_excepthook()
    sys.excepthook(KeyboardInterrupt, KeyboardInterrupt(), None)
    assert forwarded == [KeyboardInterrupt]


def test_shutdown_flushes_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "shutdown", lambda: calls.append(True))
    logging_config.shutdown()
    assert calls == [True]
