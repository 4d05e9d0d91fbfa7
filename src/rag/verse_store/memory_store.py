# src/rag/verse_store/memory_store.py — v1
"""In-process verse store with numpy cosine distance.

Used for local development, tests and small corpora. Insertion order is the
natural order used for distance ties.
"""

from __future__ import annotations

import logging

import numpy as np

from scripturai.core.models import VerseRecord, make_verse_id
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore

logger = logging.getLogger(__name__)


def cosine_distances(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """1 - cosine similarity between ``query`` and each row of ``matrix``."""
    query_norm = max(float(np.linalg.norm(query)), 1e-10)
    row_norms = np.maximum(np.linalg.norm(matrix, axis=1), 1e-10)
    similarity = (matrix @ query) / (row_norms * query_norm)
    return 1.0 - similarity


class MemoryVerseStore(BaseVerseStore):
    """Verse store kept in a dict keyed by document id."""

    def __init__(self, records: list[VerseRecord] | None = None) -> None:
        self._records: dict[str, VerseRecord] = {}
        for record in records or []:
            self._records[record.id] = record.model_copy(deep=True)

    async def get_verse(self, document_id: str, book: str) -> VerseRecord | None:
        record = self._records.get(document_id)
        if record is None or record.collection != book:
            return None
        return record.model_copy(deep=True)

    async def get_chapter(
        self, version: str, book: str, chapter: int
    ) -> list[VerseRecord]:
        verses = [
            r for r in self._records.values()
            if r.version == version and r.collection == book and r.chapter == chapter
        ]
        return [r.model_copy(deep=True) for r in sorted(verses, key=lambda r: r.verse)]

    async def find_nearest(
        self,
        version: str,
        exclude_id: str,
        vector: list[float],
        limit: int,
        exclude_chapter: tuple[str, int] | None = None,
    ) -> list[VerseRecord]:
        if not vector or limit <= 0:
            return []

        candidates = [
            r for r in self._records.values()
            if r.version == version
            and r.id != exclude_id
            and len(r.vector) == len(vector)
            and not (
                exclude_chapter is not None
                and (r.book, r.chapter) == exclude_chapter
            )
        ]
        if not candidates:
            return []

        matrix = np.asarray([r.vector for r in candidates], dtype=np.float64)
        distances = cosine_distances(np.asarray(vector, dtype=np.float64), matrix)
        order = np.argsort(distances, kind="stable")[:limit]
        return [candidates[i].model_copy(deep=True) for i in order]

    async def get_verse_versions(
        self, book: str, chapter: int, verse: int, exclude_version: str
    ) -> list[VerseRecord]:
        verse_id = make_verse_id(book, chapter, verse)
        return [
            r.model_copy(deep=True) for r in self._records.values()
            if r.verse_id == verse_id and r.version != exclude_version
        ]

    async def upsert_verse(self, record: VerseRecord) -> None:
        self._records[record.id] = record.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def provider_name(self) -> str:
        return "memory"
