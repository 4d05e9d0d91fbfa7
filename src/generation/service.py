# src/generation/service.py — v1
"""Content operations behind the HTTP routes.

Explanations, chapter summaries and verse translations are generated text
cached through the orchestrator; chapter listings and verse versions are
plain store reads.
"""

from __future__ import annotations

import logging

from scripturai.core.models import ChapterVerse, VerseVersion
from scripturai.core.result import ChapterNotFoundError, Outcome, OutcomeKind, VerseNotFoundError
from scripturai.generation.modes import Mode
from scripturai.generation.orchestrator import CacheAsideOrchestrator
from scripturai.generation.prompts import (
    MODERN_TRANSLATION_VERSION,
    TRANSLATION_INSTRUCTION,
    chapter_key,
    context_block,
    explain_prompt,
    explanation_partition,
    mode_prompt,
    summarize_prompt,
    summary_partition,
    translate_prompt,
    translation_partition,
    verse_key,
)
from scripturai.generation.similar_verses import SimilarVerseFinder
from scripturai.llm.models import Message
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore

logger = logging.getLogger(__name__)


class ContentService:
    """Generated and stored scripture content for one request at a time."""

    def __init__(
        self,
        orchestrator: CacheAsideOrchestrator,
        verse_store: BaseVerseStore,
        similar_finder: SimilarVerseFinder,
    ) -> None:
        self._orchestrator = orchestrator
        self._verses = verse_store
        self._similar = similar_finder

    # --- generated text ---

    async def explain_verse(
        self, version: str, book: str, chapter: int, verse: int, mode: Mode
    ) -> Outcome[str]:
        key = verse_key(version, book, chapter, verse)

        async def compute() -> str:
            return await self.complete_with_context(
                mode, version, book, chapter, verse,
                explain_prompt(version, book, chapter, verse),
                include_chapter=True,
                include_similar=True,
            )

        return await self._orchestrator.resolve(
            key, explanation_partition(book, mode), compute,
            description=f"an explanation for {key}",
        )

    async def summarize_chapter(
        self, version: str, book: str, chapter: int, mode: Mode
    ) -> Outcome[str]:
        key = chapter_key(version, book, chapter)

        async def compute() -> str:
            return await self.complete_with_context(
                mode, version, book, chapter, 0,
                summarize_prompt(version, book, chapter),
                include_chapter=True,
                include_similar=False,
            )

        return await self._orchestrator.resolve(
            key, summary_partition(book, mode), compute,
            description=f"a summary for {key}",
        )

    async def translate_verse(
        self, version: str, book: str, chapter: int, verse: int
    ) -> Outcome[str]:
        """Modern-English translation; falls back to the stored MAIV text.

        The fallback text is returned but never cached.
        """
        key = verse_key(version, book, chapter, verse)

        async def compute() -> str:
            source = await self._verses.get_verse(key, book)
            if source is None:
                raise VerseNotFoundError(key)
            messages = [
                Message.system(TRANSLATION_INSTRUCTION),
                Message.user(translate_prompt(version, book, chapter, verse, source.text)),
            ]
            return await self._orchestrator.generate_text(
                messages, label=f"translation of {key}"
            )

        outcome = await self._orchestrator.resolve(
            key, translation_partition(book), compute,
            description=f"a translation for {key}",
        )
        if outcome.kind is not OutcomeKind.TRANSIENT_FAILURE:
            return outcome

        fallback_id = verse_key(MODERN_TRANSLATION_VERSION, book, chapter, verse)
        try:
            fallback = await self._verses.get_verse(fallback_id, book)
        except Exception:
            logger.error("Fallback lookup failed for %s", fallback_id, exc_info=True)
            return outcome
        if fallback is None or not fallback.text:
            return outcome
        logger.info("Using stored %s text for %s.", MODERN_TRANSLATION_VERSION, key)
        return Outcome.computed(fallback.text)

    async def complete_with_context(
        self,
        mode: Mode,
        version: str,
        book: str,
        chapter: int,
        verse: int,
        user_prompt: str,
        include_chapter: bool,
        include_similar: bool,
    ) -> str:
        """Build the message list for ``mode`` and run it with retries."""
        messages = await self.build_messages(
            mode, version, book, chapter, verse, user_prompt,
            include_chapter=include_chapter,
            include_similar=include_similar,
        )
        return await self._orchestrator.generate_text(
            messages,
            mode.completion_options,
            label=f"{mode.value} completion for {book} {chapter}:{verse}",
        )

    async def build_messages(
        self,
        mode: Mode,
        version: str,
        book: str,
        chapter: int,
        verse: int,
        user_prompt: str,
        include_chapter: bool,
        include_similar: bool,
    ) -> list[Message]:
        """System instruction, optional context blocks, then the user turn.

        An empty or failed context fetch drops that block; it never blocks
        generation.
        """
        messages = [Message.system(mode.system_instruction)]

        if include_chapter:
            try:
                chapter_verses = await self._verses.get_chapter(version, book, chapter)
            except Exception:
                logger.warning("Chapter context unavailable for %s %s", book, chapter, exc_info=True)
                chapter_verses = []
            if chapter_verses:
                messages.append(Message.system(context_block(
                    f"Full Bible Chapter from {version}",
                    ((v.verse_id, v.text) for v in chapter_verses),
                )))

        if include_similar:
            similar = await self._similar.find_or_empty(mode, version, book, chapter, verse)
            if similar:
                messages.append(Message.system(context_block(
                    f"Similar Verses from {version}",
                    ((s.verse_id, s.text) for s in similar),
                )))

        messages.append(Message.user(user_prompt))
        messages.append(Message.user(mode_prompt(mode)))
        return messages

    # --- stored scripture ---

    async def get_chapter(self, version: str, book: str, chapter: int) -> list[ChapterVerse]:
        """Chapter verses in order.

        Raises:
            ChapterNotFoundError: No verses stored for the chapter.
        """
        records = await self._verses.get_chapter(version, book, chapter)
        logger.info("Retrieved %d verses for %s:%s.", len(records), book, chapter)
        if not records:
            raise ChapterNotFoundError(version, book, chapter)
        return [ChapterVerse.from_record(r) for r in records]

    async def get_verse_versions(
        self, version: str, book: str, chapter: int, verse: int
    ) -> list[VerseVersion]:
        records = await self._verses.get_verse_versions(book, chapter, verse, exclude_version=version)
        return [
            VerseVersion(version=r.version, book=r.book, chapter=r.chapter, verse=r.verse, text=r.text)
            for r in records
        ]
