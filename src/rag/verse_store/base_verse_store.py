# src/rag/verse_store/base_verse_store.py — v1
"""Abstract verse store interface: canonical text, chapters, vector lookups."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scripturai.core.models import VerseRecord


class BaseVerseStore(ABC):
    """Unified interface for verse storage backends.

    Records are partitioned by book. Identity never changes; text and vector
    are updated in place by upserts. Nothing here deletes verses.
    """

    @abstractmethod
    async def get_verse(self, document_id: str, book: str) -> VerseRecord | None:
        """Point read by document id ('Book:Chapter:Verse:Version')."""

    @abstractmethod
    async def get_chapter(
        self, version: str, book: str, chapter: int
    ) -> list[VerseRecord]:
        """All verses of a chapter in one version, ordered by verse number."""

    @abstractmethod
    async def find_nearest(
        self,
        version: str,
        exclude_id: str,
        vector: list[float],
        limit: int,
        exclude_chapter: tuple[str, int] | None = None,
    ) -> list[VerseRecord]:
        """Nearest verses of ``version`` by ascending vector distance.

        Never returns ``exclude_id``. When ``exclude_chapter`` is a
        (book, chapter) pair, verses of that chapter are skipped too.
        Tie order is whatever the backend yields.
        """

    @abstractmethod
    async def get_verse_versions(
        self, book: str, chapter: int, verse: int, exclude_version: str
    ) -> list[VerseRecord]:
        """The same verse in every other stored version."""

    @abstractmethod
    async def upsert_verse(self, record: VerseRecord) -> None:
        """Insert or replace a verse in its book partition."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Backend identifier (memory, chromadb)."""
