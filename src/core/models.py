# src/core/models.py — v1
"""Shared domain models: verses, similar verses, cache entries, ledger records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Union

from pydantic import BaseModel, Field


def make_verse_id(book: str, chapter: int, verse: int) -> str:
    """Version-independent verse identifier: 'Book:Chapter:Verse'."""
    return f"{book}:{chapter}:{verse}"


def make_document_id(book: str, chapter: int, verse: int, version: str) -> str:
    """Unique verse document identifier: 'Book:Chapter:Verse:Version'."""
    return f"{book}:{chapter}:{verse}:{version}"


class VerseRecord(BaseModel):
    """A single verse of one translation, with its embedding vector."""

    id: str
    verse_id: str
    type: Literal["bible-verse"] = "bible-verse"
    version: str
    collection: str
    book: str
    chapter: int
    verse: int
    text: str = ""
    vector: list[float] = Field(default_factory=list)

    @classmethod
    def create(
        cls, book: str, chapter: int, verse: int, version: str, text: str = ""
    ) -> VerseRecord:
        """Build a record with ids and partition derived from its identity."""
        return cls(
            id=make_document_id(book, chapter, verse, version),
            verse_id=make_verse_id(book, chapter, verse),
            version=version,
            collection=book,
            book=book,
            chapter=chapter,
            verse=verse,
            text=text,
        )

    @property
    def has_vector(self) -> bool:
        return len(self.vector) > 0


class SimilarVerse(BaseModel):
    """A nearest-neighbour hit returned to clients."""

    verse_id: str
    text: str


class ChapterVerse(BaseModel):
    """A verse as returned by chapter listings."""

    verse_id: str
    version: str
    book: str
    chapter: int
    verse: int
    text: str

    @classmethod
    def from_record(cls, record: VerseRecord) -> ChapterVerse:
        return cls(
            verse_id=record.verse_id,
            version=record.version,
            book=record.book,
            chapter=record.chapter,
            verse=record.verse,
            text=record.text,
        )


class VerseVersion(BaseModel):
    """The same verse in another translation."""

    version: str
    book: str
    chapter: int
    verse: int
    text: str


CachePayload = Union[str, list[SimilarVerse]]


class CacheEntry(BaseModel):
    """Generated content stored under (key, partition). Upserted, never versioned."""

    key: str
    partition: str
    payload: CachePayload
    cached_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class BookProgress(BaseModel):
    """Resume point for a partially processed unit of scraping work."""

    unit_id: str
    last_completed_batch_start: int


class FailedItem(BaseModel):
    """A verse that exhausted its retry budget, kept for later reprocessing."""

    verse: VerseRecord
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reason: str
