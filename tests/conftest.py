# tests/conftest.py — v1
"""Shared test fixtures for all unit tests.

Provides an in-memory content store, mocked chat and embedding providers,
a small verse corpus and a recording sleep. No external services.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.core.models import CacheEntry, CachePayload, VerseRecord
from scripturai.generation.generator import Generator
from scripturai.llm.models import LLMResponse
from scripturai.rag.verse_store.memory_store import MemoryVerseStore


class InMemoryContentStore(BaseContentStore):
    """Dict-backed content store that counts writes."""

    def __init__(self) -> None:
        self.entries: dict[tuple[str, str], CacheEntry] = {}
        self.upsert_calls = 0

    async def get(self, key: str, partition: str) -> CacheEntry | None:
        return self.entries.get((key, partition))

    async def upsert(self, key: str, partition: str, payload: CachePayload) -> None:
        self.upsert_calls += 1
        self.entries[(key, partition)] = CacheEntry(key=key, partition=partition, payload=payload)


def make_response(content: str) -> LLMResponse:
    return LLMResponse(content=content, model="gpt-4o-mini", provider="openai")


def verse(
    book: str,
    chapter: int,
    number: int,
    text: str,
    vector: list[float] | None = None,
    version: str = "KJV",
) -> VerseRecord:
    record = VerseRecord.create(book, chapter, number, version, text)
    record.vector = vector or []
    return record


# === FIXTURES: Providers ===


@pytest.fixture
def llm_client() -> AsyncMock:
    """Chat/image client returning a fixed completion."""
    client = AsyncMock()
    client.complete.return_value = make_response("For God so loved the world.")
    client.generate_image.return_value = b"\x89PNG fake"
    client.provider_name = "openai"
    return client


@pytest.fixture
def embedder() -> AsyncMock:
    """Embedder returning one 3-d vector per text."""
    mock = AsyncMock()

    async def _embed(texts: list[str]) -> list[list[float]]:
        return [[float(len(t)), 1.0, 0.0] for t in texts]

    mock.embed_texts.side_effect = _embed
    return mock


@pytest.fixture
def generator(llm_client: AsyncMock, embedder: AsyncMock) -> Generator:
    return Generator(llm_client, embedder)


@pytest.fixture
def recorded_sleep() -> AsyncMock:
    """Stand-in for asyncio.sleep; delays are in ``await_args_list``."""
    return AsyncMock(return_value=None)


# === FIXTURES: Stores ===


@pytest.fixture
def content_store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def sample_verses() -> list[VerseRecord]:
    """John 3:14-17 plus neighbours in other chapters and versions."""
    return [
        verse("John", 3, 14, "And as Moses lifted up the serpent in the wilderness,", [0.0, 0.0, 1.0]),
        verse("John", 3, 15, "That whosoever believeth in him should not perish,", [0.8, 0.2, 0.0]),
        verse("John", 3, 16, "For God so loved the world,", [1.0, 0.0, 0.0]),
        verse("John", 3, 17, "For God sent not his Son into the world to condemn the world;", [0.9, 0.1, 0.0]),
        verse("John", 4, 1, "When therefore the Lord knew how the Pharisees had heard", [0.0, 1.0, 0.0]),
        verse("Romans", 5, 8, "But God commendeth his love toward us,", [0.95, 0.05, 0.0]),
        verse("1 John", 4, 9, "In this was manifested the love of God toward us,", [0.7, 0.3, 0.0]),
        verse("John", 3, 16, "For God loved the world so much", [1.0, 0.0, 0.0], version="MAIV"),
        verse("John", 3, 16, "For God so loved the world that he gave", version="NIV"),
    ]


@pytest.fixture
def verse_store(sample_verses: list[VerseRecord]) -> MemoryVerseStore:
    return MemoryVerseStore(sample_verses)


@pytest.fixture
def make_verse():
    """Factory for VerseRecords: make_verse(book, chapter, number, text, vector, version)."""
    return verse


@pytest.fixture
def make_llm_response():
    return make_response
