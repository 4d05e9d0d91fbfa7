# src/generation/similar_verses.py — v1
"""Nearest-neighbour verse lookup, cached per (verse, mode)."""

from __future__ import annotations

import logging

from scripturai.core.models import SimilarVerse
from scripturai.core.result import Outcome, VerseNotFoundError
from scripturai.generation.modes import Mode
from scripturai.generation.orchestrator import CacheAsideOrchestrator
from scripturai.generation.prompts import similar_verses_partition, verse_key
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore

logger = logging.getLogger(__name__)


class SimilarVerseFinder:
    """Top-N verses of the same version closest to a source verse."""

    def __init__(self, orchestrator: CacheAsideOrchestrator, verse_store: BaseVerseStore) -> None:
        self._orchestrator = orchestrator
        self._verses = verse_store

    async def find(
        self,
        mode: Mode,
        version: str,
        book: str,
        chapter: int,
        verse: int,
        exclude_chapter: bool = False,
    ) -> Outcome[list[SimilarVerse]]:
        """Resolve similar verses; N is the mode's similar-verse count."""
        document_id = verse_key(version, book, chapter, verse)

        async def compute() -> list[SimilarVerse]:
            source = await self._verses.get_verse(document_id, book)
            if source is None:
                raise VerseNotFoundError(document_id)

            neighbours = await self._verses.find_nearest(
                version=version,
                exclude_id=document_id,
                vector=source.vector,
                limit=mode.max_similar_verses,
                exclude_chapter=(book, chapter) if exclude_chapter else None,
            )
            logger.info("Found %d similar verses for %s.", len(neighbours), document_id)
            return [SimilarVerse(verse_id=n.verse_id, text=n.text) for n in neighbours]

        return await self._orchestrator.resolve(
            document_id,
            similar_verses_partition(book, mode, exclude_chapter),
            compute,
            description=f"similar verses for {document_id}",
        )

    async def find_or_empty(
        self,
        mode: Mode,
        version: str,
        book: str,
        chapter: int,
        verse: int,
        exclude_chapter: bool = False,
    ) -> list[SimilarVerse]:
        outcome = await self.find(mode, version, book, chapter, verse, exclude_chapter)
        return outcome.value_or([])
