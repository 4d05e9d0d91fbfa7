# tests/unit/cache/test_sqlite_store.py — v1
"""Tests for cache/sqlite_store.py — full functional tests (stdlib sqlite3)."""

from __future__ import annotations

import pytest

from scripturai.cache.sqlite_store import SqliteContentStore
from scripturai.core.models import SimilarVerse


@pytest.fixture
def store(tmp_path):
    s = SqliteContentStore(db_path=tmp_path / "cache.db")
    yield s
    s.close()


class TestSqliteContentStore:
    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("k", "p") is None

    @pytest.mark.asyncio
    async def test_upsert_and_get(self, store):
        await store.upsert("John:3:KJV", "John:Summary:Study", "Summary")
        entry = await store.get("John:3:KJV", "John:Summary:Study")
        assert entry.payload == "Summary"

    @pytest.mark.asyncio
    async def test_one_row_per_address(self, store):
        await store.upsert("k", "p", "a")
        await store.upsert("k", "p", "b")
        count = store._conn.execute("SELECT COUNT(*) FROM content_cache").fetchone()[0]
        assert count == 1
        assert (await store.get("k", "p")).payload == "b"

    @pytest.mark.asyncio
    async def test_list_payload(self, store):
        await store.upsert("k", "p", [SimilarVerse(verse_id="John:3:17", text="For God sent")])
        entry = await store.get("k", "p")
        assert entry.payload[0].verse_id == "John:3:17"

    @pytest.mark.asyncio
    async def test_persists_across_connections(self, tmp_path):
        first = SqliteContentStore(tmp_path / "c.db")
        await first.upsert("k", "p", "kept")
        first.close()
        second = SqliteContentStore(tmp_path / "c.db")
        assert (await second.get("k", "p")).payload == "kept"
        second.close()
