# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

from louvainkit.config.settings import Settings
from louvainkit.logging.context import clear_context, set_level_context, set_run_context
from louvainkit.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_run_context("run1")
        set_level_context(2, "aggregation")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"run_id": "run1", "level": 2, "phase": "aggregation"}

    def test_format_with_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"moves": 3})))
        assert parsed["data"] == {"moves": 3}


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_level(self):
        set_run_context("run9")
        set_level_context(0, "local_move")
        output = TextFormatter().format(_record())
        assert "[run9]" in output
        assert "(level 0, local_move)" in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "louvainkit.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("louvainkit")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("louvainkit")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("louvainkit").handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(log_file=str(log_file))
        root = logging.getLogger("louvainkit")
        assert len(root.handlers) == 2
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()

    def test_from_settings(self):
        setup_logging_from_settings(
            Settings(_env_file=None, log_level="WARNING", log_format="text")
        )
        root = logging.getLogger("louvainkit")
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_module_loggers_propagate(self):
        from louvainkit.louvain import outer_loop

        assert outer_loop.logger.name == "louvainkit.louvain.outer_loop"
