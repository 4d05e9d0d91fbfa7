# src/logging/logger.py — v2
"""Log formatting and setup for the API and the scraper.

JSON lines in production (one object per record, request or scrape context
under ``context``), a compact text format for local runs.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from scripturai.logging.context import LogContext, get_context

ROOT_LOGGER = "scripturai"


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _context_tag(ctx: LogContext) -> str:
    """Render context as ``[caller] <unit> (mode)``, skipping unset parts."""
    tags = []
    if ctx.caller:
        tags.append(f"[{ctx.caller}]")
    if ctx.unit:
        tags.append(f"<{ctx.unit}>")
    if ctx.mode:
        tags.append(f"({ctx.mode})")
    return " ".join(tags)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with the current log context attached."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            payload["context"] = context
        extra = getattr(record, "data", None)
        if extra:
            payload["data"] = extra
        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """``2026-01-01 12:00:00 [INFO    ] name [caller] <unit> - message``"""

    def format(self, record: logging.LogRecord) -> str:
        head = f"{_record_time(record):%Y-%m-%d %H:%M:%S} [{record.levelname:8s}] {record.name}"
        tag = _context_tag(get_context())
        line = f"{head} {tag} - {record.getMessage()}" if tag else f"{head} - {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the scripturai root."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _handlers(log_file: str | None, rotation: str, retention: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        from scripturai.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation=rotation, retention=retention))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> None:
    """Configure the scripturai logger tree.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional file, rotated by size, in addition to stdout.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Re-init must not stack handlers
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    for handler in _handlers(log_file, rotation, retention):
        handler.setFormatter(formatter)
        root.addHandler(handler)
