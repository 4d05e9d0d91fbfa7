# tests/unit/scraper/test_runner.py — v1
"""Tests for scraper/runner.py — book selection and outcome accounting."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from scripturai.batch.ledger import ScraperProgressLedger
from scripturai.batch.models import BookOutcome
from scripturai.scraper.github_source import SourceFile, SourceFormatError
from scripturai.scraper.runner import ScrapeRunner


def _files(count: int) -> list[SourceFile]:
    return [SourceFile(name=f"Book{i}.json", download_url=f"https://raw.example/Book{i}.json") for i in range(count)]


@pytest.fixture
def ledger(tmp_path):
    return ScraperProgressLedger(tmp_path / "ledger")


@pytest.fixture
def pipeline():
    mock = MagicMock()
    mock.translates = False
    mock.process_book = AsyncMock(return_value=BookOutcome.COMPLETED)
    return mock


@pytest.fixture
def source(make_verse):
    mock = AsyncMock()
    mock.list_files.return_value = _files(66)

    async def _load(url, filename, version):
        return [make_verse(filename.removesuffix(".json"), 1, 1, "text", version=version)]

    mock.load_book.side_effect = _load
    return mock


def _runner(source, pipeline, ledger, recorded_sleep):
    return ScrapeRunner(source, pipeline, ledger, sleep=recorded_sleep)


class TestRunKjv:
    @pytest.mark.asyncio
    async def test_processes_every_book(self, source, pipeline, ledger, recorded_sleep):
        summary = await _runner(source, pipeline, ledger, recorded_sleep).run_kjv()
        assert summary.version == "KJV"
        assert len(summary.completed) == 66
        assert pipeline.process_book.await_count == 66
        source.list_files.assert_awaited_once_with("aruljohn/Bible-kjv", (".json",), ("Books.json",))
        unit_id = pipeline.process_book.await_args_list[0].args[0]
        assert unit_id == "KJV/Book0"

    @pytest.mark.asyncio
    async def test_wrong_book_count_aborts(self, source, pipeline, ledger, recorded_sleep):
        source.list_files.return_value = _files(65)
        summary = await _runner(source, pipeline, ledger, recorded_sleep).run_kjv()
        assert summary.total_books == 65
        pipeline.process_book.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_skips_processed_books(self, source, pipeline, ledger, recorded_sleep):
        ledger.mark_unit_complete("KJV/Book0")
        summary = await _runner(source, pipeline, ledger, recorded_sleep).run_kjv()
        assert summary.skipped == ["Book0"]
        assert pipeline.process_book.await_count == 65

    @pytest.mark.asyncio
    async def test_load_failure_retried_then_reported(self, source, pipeline, ledger, recorded_sleep):
        source.list_files.return_value = _files(66)
        original = source.load_book.side_effect

        async def _load(url, filename, version):
            if filename == "Book3.json":
                raise SourceFormatError("bad file")
            return await original(url, filename, version)

        source.load_book.side_effect = _load
        summary = await _runner(source, pipeline, ledger, recorded_sleep).run_kjv()
        assert summary.failed == ["Book3"]
        assert pipeline.process_book.await_count == 65
        assert source.load_book.await_count == 65 + 3

    @pytest.mark.asyncio
    async def test_partial_failure_reported(self, source, pipeline, ledger, recorded_sleep):
        pipeline.process_book.side_effect = (
            [BookOutcome.PARTIALLY_FAILED] + [BookOutcome.COMPLETED] * 65
        )
        summary = await _runner(source, pipeline, ledger, recorded_sleep).run_kjv()
        assert summary.failed == ["Book0"]
        assert len(summary.completed) == 65

    @pytest.mark.asyncio
    async def test_modern_uses_ai_version(self, source, pipeline, ledger, recorded_sleep):
        pipeline.translates = True
        summary = await _runner(source, pipeline, ledger, recorded_sleep).run_kjv(modern=True)
        assert summary.version == "AI"
        verses = pipeline.process_book.await_args_list[0].args[1]
        assert verses[0].version == "AI"

    @pytest.mark.asyncio
    async def test_modern_requires_translating_pipeline(self, source, pipeline, ledger, recorded_sleep):
        with pytest.raises(ValueError):
            await _runner(source, pipeline, ledger, recorded_sleep).run_kjv(modern=True)
