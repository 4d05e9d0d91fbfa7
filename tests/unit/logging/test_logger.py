# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py and logging/handlers.py."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from scripturai.logging.context import clear_context, set_unit_context
from scripturai.logging.handlers import create_rotating_handler, parse_size
from scripturai.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "hello %s", args: tuple = ("world",)) -> logging.LogRecord:
    return logging.LogRecord("scripturai.test", logging.INFO, __file__, 1, msg, args, None)


class TestFormatters:
    def teardown_method(self):
        clear_context()

    def test_json_includes_context(self):
        set_unit_context("KJV/John")
        data = json.loads(JsonFormatter().format(_record()))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["context"] == {"unit": "KJV/John"}

    def test_json_without_context(self):
        data = json.loads(JsonFormatter().format(_record()))
        assert "context" not in data

    def test_text_format(self):
        set_unit_context("KJV/John")
        line = TextFormatter().format(_record())
        assert "<KJV/John>" in line
        assert line.endswith("- hello world")


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger("scripturai").handlers.clear()

    def test_get_logger_namespace(self):
        assert get_logger("scraper").name == "scripturai.scraper"

    def test_reinit_does_not_stack_handlers(self):
        setup_logging(log_format="text")
        setup_logging(log_format="text")
        assert len(logging.getLogger("scripturai").handlers) == 1

    def test_file_handler(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "logs" / "app.log"))
        handlers = logging.getLogger("scripturai").handlers
        assert any(isinstance(h, RotatingFileHandler) for h in handlers)
        for h in handlers:
            h.close()


class TestHandlers:
    @pytest.mark.parametrize("text,expected", [
        ("10MB", 10 * 1024**2),
        ("512kb", 512 * 1024),
        ("1 GB", 1024**3),
    ])
    def test_parse_size(self, text, expected):
        assert parse_size(text) == expected

    def test_parse_size_invalid(self):
        with pytest.raises(ValueError):
            parse_size("ten megabytes")

    def test_rotating_handler(self, tmp_path):
        handler = create_rotating_handler(str(tmp_path / "a" / "b.log"), rotation="1MB", retention=3)
        assert handler.maxBytes == 1024**2
        assert handler.backupCount == 3
        handler.close()
