# src/batch/embedding_pipeline.py — v2
"""Batch embedding pipeline for scraped verses.

A book is split into contiguous batches processed strictly in order. Each
batch (optional translation, embedding, upsert, progress record) runs under
a batch-level retry budget; a batch that still fails stops the book, which
then resumes from the last recorded offset on the next run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from scripturai.batch.ledger import LedgerEmptyError, ScraperProgressLedger
from scripturai.batch.models import BookOutcome
from scripturai.core.models import FailedItem, VerseRecord
from scripturai.generation.generator import Generator
from scripturai.generation.prompts import SCRAPER_TRANSLATION_INSTRUCTION
from scripturai.llm.models import Message
from scripturai.llm.retry import (
    RetryExhaustedError,
    RetryPolicy,
    batch_policy,
    completion_policy,
    with_retry,
)
from scripturai.logging.context import set_unit_context
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


@dataclass
class _BatchMemo:
    """Per-batch state kept across retry attempts."""

    translated: dict[str, str] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)
    logged: set[str] = field(default_factory=set)


class BatchEmbeddingPipeline:
    """Translate (optionally), embed and store verses batch by batch."""

    def __init__(
        self,
        generator: Generator,
        verse_store: BaseVerseStore,
        ledger: ScraperProgressLedger,
        translate: bool = False,
        translation_policy: RetryPolicy | None = None,
        retry_base_delay_s: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._generator = generator
        self._verses = verse_store
        self._ledger = ledger
        self._translate = translate
        self._translation_policy = translation_policy or completion_policy(
            base_delay_s=retry_base_delay_s
        )
        self._base_delay_s = retry_base_delay_s
        self._sleep = sleep

    @property
    def translates(self) -> bool:
        return self._translate

    async def process_book(
        self,
        unit_id: str,
        verses: list[VerseRecord],
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_retries: int = 3,
    ) -> BookOutcome:
        """Process one book from its resume offset to the end.

        Returns:
            COMPLETED when every batch succeeded (the unit is then marked
            processed), PARTIALLY_FAILED when a batch exhausted its retries.
        """
        set_unit_context(unit_id)
        try:
            start = self._ledger.get_resume_offset(unit_id, batch_size)
            if start:
                logger.info("Resuming %s at offset %d of %d", unit_id, start, len(verses))

            policy = batch_policy(max_retries, self._base_delay_s)
            for offset in range(start, len(verses), batch_size):
                batch = verses[offset:offset + batch_size]
                memo = _BatchMemo()
                try:
                    stored = await with_retry(
                        self._process_batch,
                        unit_id,
                        offset,
                        batch,
                        memo,
                        policy=policy,
                        label=f"batch {offset} of {unit_id}",
                        sleep=self._sleep,
                    )
                except RetryExhaustedError as e:
                    logger.error("Stopping %s at batch %d: %s", unit_id, offset, e)
                    return BookOutcome.PARTIALLY_FAILED
                logger.info(
                    "Stored %d/%d verses of %s batch %d",
                    stored, len(batch), unit_id, offset,
                )

            self._ledger.mark_unit_complete(unit_id)
            return BookOutcome.COMPLETED
        finally:
            set_unit_context(None)

    async def process_failed_translations(self, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
        """Re-embed every verse in the failure ledger, all or nothing.

        The ledger is cleared only when every entry was embedded and stored;
        any error leaves it untouched for a later pass. Entries whose verse is
        already in the store were recovered by a later scrape and are cleared
        without being written again.

        Returns:
            Number of verses reprocessed (0 when nothing was cleared).
        """
        try:
            async with self._ledger.failure_batch() as failures:
                try:
                    records = await self._pending_records(failures.items)
                    logger.info(
                        "Reprocessing %d of %d failed verses",
                        len(records), len(failures.items),
                    )
                    for offset in range(0, len(records), batch_size):
                        await self._embed_and_store(records[offset:offset + batch_size])
                except Exception:
                    logger.error(
                        "Reprocessing failed; keeping all %d ledger entries",
                        len(failures.items),
                        exc_info=True,
                    )
                    return 0
                failures.resolve()
                return len(records)
        except LedgerEmptyError as e:
            logger.error("Nothing to reprocess: %s", e)
            return 0

    async def _pending_records(self, items: list[FailedItem]) -> list[VerseRecord]:
        """Ledger verses that still need embedding, one per verse id."""
        pending: dict[str, VerseRecord] = {}
        for item in items:
            verse = item.verse
            if verse.id in pending:
                continue
            if not verse.text.strip():
                logger.warning("Dropping %s from the failure ledger: no source text", verse.id)
                continue
            if await self._verses.get_verse(verse.id, verse.collection) is not None:
                logger.info("Skipping %s: already stored by a later scrape", verse.id)
                continue
            pending[verse.id] = verse.model_copy(deep=True)
        return list(pending.values())

    async def _process_batch(
        self,
        unit_id: str,
        offset: int,
        batch: list[VerseRecord],
        memo: _BatchMemo,
    ) -> int:
        """One attempt at a batch.

        ``memo`` persists across attempts of the same batch so a retry neither
        pays for a translation twice nor logs a failure twice. Failures reach
        the ledger only after the batch is stored, so an abandoned batch leaves
        nothing behind for the resumed run to contradict.
        """
        records = [v.model_copy(deep=True) for v in batch]
        if self._translate:
            for record in records:
                record.text = await self._translate_verse(record, memo)

        to_embed = [r for r in records if r.text.strip()]
        await self._embed_and_store(to_embed)
        for record in batch:
            reason = memo.failed.get(record.id)
            if reason is not None and record.id not in memo.logged:
                await self._ledger.append_failure(record.model_copy(deep=True), reason)
                memo.logged.add(record.id)
        self._ledger.record_batch_complete(unit_id, offset)
        return len(to_embed)

    async def _translate_verse(self, record: VerseRecord, memo: _BatchMemo) -> str:
        if record.id in memo.translated:
            return memo.translated[record.id]
        if record.id in memo.failed or not record.text.strip():
            return ""

        messages = [
            Message.system(SCRAPER_TRANSLATION_INSTRUCTION),
            Message.user(record.text),
        ]
        try:
            text = await with_retry(
                self._generator.complete_chat,
                messages,
                policy=self._translation_policy,
                label=f"translation of {record.id}",
                sleep=self._sleep,
            )
        except RetryExhaustedError as e:
            memo.failed[record.id] = str(e)
            return ""

        memo.translated[record.id] = text
        return text

    async def _embed_and_store(self, records: list[VerseRecord]) -> None:
        if not records:
            return
        vectors = await self._generator.generate_embeddings([r.text for r in records])
        for record, vector in zip(records, vectors):
            record.vector = vector
            await self._verses.upsert_verse(record)
