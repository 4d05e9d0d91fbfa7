# src/logging/context.py — v1
"""Contextual logging support: attach caller, unit and mode to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per request (caller, mode) or per scraped book (unit).
_caller: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "caller", default=None
)
_unit: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "unit", default=None
)
_mode: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mode", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    caller: str | None = None
    unit: str | None = None
    mode: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(caller=_caller.get(), unit=_unit.get(), mode=_mode.get())


def set_request_context(caller: str, mode: str | None = None) -> None:
    """Set request-level context (called once per HTTP request)."""
    _caller.set(caller)
    _mode.set(mode)


def set_unit_context(unit: str | None) -> None:
    """Set the unit of work being scraped (book, qualified by version)."""
    _unit.set(unit)


def clear_context() -> None:
    """Reset all context variables."""
    _caller.set(None)
    _unit.set(None)
    _mode.set(None)
