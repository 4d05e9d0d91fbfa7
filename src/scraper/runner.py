# src/scraper/runner.py — v1
"""Scrape runs: fetch every book of a source and feed the embedding pipeline."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

from scripturai.batch.embedding_pipeline import BatchEmbeddingPipeline
from scripturai.batch.ledger import ScraperProgressLedger
from scripturai.batch.models import BookOutcome, ScrapeSummary
from scripturai.core.models import VerseRecord
from scripturai.llm.retry import RetryExhaustedError, batch_policy, with_retry
from scripturai.scraper.github_source import GitHubSource, SourceFile

logger = logging.getLogger(__name__)

KJV_VERSION = "KJV"
MODERN_VERSION = "AI"
KJV_REPO = "aruljohn/Bible-kjv"
KJV_INDEX_FILE = "Books.json"


def unit_id_for(version: str, book: str) -> str:
    return f"{version}/{book}"


class ScrapeRunner:
    """Drive one scrape of a source repository, book by book."""

    def __init__(
        self,
        source: GitHubSource,
        pipeline: BatchEmbeddingPipeline,
        ledger: ScraperProgressLedger,
        repo: str = KJV_REPO,
        expected_books: int = 66,
        batch_size: int = 100,
        max_retries: int = 3,
        retry_base_delay_s: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._source = source
        self._pipeline = pipeline
        self._ledger = ledger
        self._repo = repo
        self._expected_books = expected_books
        self._batch_size = batch_size
        self._max_retries = max_retries
        self._base_delay_s = retry_base_delay_s
        self._sleep = sleep

    async def run_kjv(self, modern: bool = False) -> ScrapeSummary:
        """Scrape the KJV books; with ``modern`` store them as the AI translation.

        Books already in the processed list are skipped. A book that fails to
        load or stops part-way is reported as failed and retried next run.
        """
        version = MODERN_VERSION if modern else KJV_VERSION
        if modern and not self._pipeline.translates:
            raise ValueError("A modern scrape needs a translating pipeline")

        started = time.monotonic()
        files = await self._source.list_files(self._repo, (".json",), (KJV_INDEX_FILE,))
        summary = ScrapeSummary(version=version, total_books=len(files))

        if not files:
            logger.warning("No files found to process in %s", self._repo)
            return summary
        if len(files) != self._expected_books:
            logger.warning(
                "Expected %d books in %s but found %d; aborting",
                self._expected_books, self._repo, len(files),
            )
            return summary

        for file in files:
            book = file.stem
            unit_id = unit_id_for(version, book)
            if self._ledger.is_unit_complete(unit_id):
                logger.info("Skipping %s; already processed", unit_id)
                summary.skipped.append(book)
                continue

            verses = await self._load(file, version)
            if not verses:
                summary.failed.append(book)
                continue

            outcome = await self._pipeline.process_book(
                unit_id, verses, self._batch_size, self._max_retries
            )
            if outcome is BookOutcome.COMPLETED:
                logger.info("Completed processing %s", unit_id)
                summary.completed.append(book)
            else:
                logger.warning("Partial failure in %s; not marking as processed", unit_id)
                summary.failed.append(book)

        summary.duration_seconds = round(time.monotonic() - started, 3)
        logger.info(
            "Scrape of %s finished: %d completed, %d skipped, %d failed",
            version, len(summary.completed), len(summary.skipped), len(summary.failed),
        )
        return summary

    async def _load(self, file: SourceFile, version: str) -> list[VerseRecord]:
        try:
            return await with_retry(
                self._source.load_book,
                file.download_url,
                file.name,
                version,
                policy=batch_policy(self._max_retries, self._base_delay_s),
                label=f"load {file.name}",
                sleep=self._sleep,
            )
        except RetryExhaustedError as e:
            logger.error("Failed to load %s: %s", file.name, e)
            return []
