# src/core/result.py — v1
"""Typed outcome of a cache-aside lookup.

Keeps "not found", "transient failure" and "success" distinct inside the
content layer. Only the outer boundary (``get_or_compute`` and the HTTP
routes) collapses failures into an empty value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class OutcomeKind(str, Enum):
    HIT = "hit"
    COMPUTED = "computed"
    NOT_FOUND = "not_found"
    TRANSIENT_FAILURE = "transient_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of resolving one content request."""

    kind: OutcomeKind
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.HIT, OutcomeKind.COMPUTED)

    @property
    def not_found(self) -> bool:
        return self.kind is OutcomeKind.NOT_FOUND

    def value_or(self, default: T) -> T:
        """Return the value on success, else ``default``."""
        if self.ok and self.value is not None:
            return self.value
        return default

    @classmethod
    def hit(cls, value: T) -> Outcome[T]:
        return cls(OutcomeKind.HIT, value=value)

    @classmethod
    def computed(cls, value: T) -> Outcome[T]:
        return cls(OutcomeKind.COMPUTED, value=value)

    @classmethod
    def missing(cls, error: Exception | None = None) -> Outcome[T]:
        return cls(OutcomeKind.NOT_FOUND, error=error)

    @classmethod
    def transient(cls, error: Exception | None = None) -> Outcome[T]:
        return cls(OutcomeKind.TRANSIENT_FAILURE, error=error)

    @classmethod
    def unexpected(cls, error: Exception) -> Outcome[T]:
        return cls(OutcomeKind.UNEXPECTED_FAILURE, error=error)


class NotFoundError(LookupError):
    """Base class for requested scripture that does not exist in the store."""


class VerseNotFoundError(NotFoundError):
    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"Verse {document_id} not found")


class ChapterNotFoundError(NotFoundError):
    def __init__(self, version: str, book: str, chapter: int) -> None:
        self.version = version
        self.book = book
        self.chapter = chapter
        super().__init__(f"Chapter {book} {chapter} ({version}) not found")
