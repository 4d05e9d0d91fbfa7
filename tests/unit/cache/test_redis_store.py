# tests/unit/cache/test_redis_store.py — v1
"""Tests for cache/redis_store.py — mocked Redis client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

redis = pytest.importorskip("redis")

from scripturai.cache.redis_store import RedisContentStore  # noqa: E402


@pytest.fixture
def store():
    hashes: dict[str, dict[str, str]] = {}
    client = MagicMock()
    client.hget.side_effect = lambda name, key: hashes.get(name, {}).get(key)
    client.hset.side_effect = lambda name, key, value: hashes.setdefault(name, {}).__setitem__(key, value)
    with patch.object(redis.Redis, "from_url", return_value=client):
        s = RedisContentStore(redis_url="redis://localhost:6379/0")
    s.hashes = hashes
    return s


class TestRedisContentStore:
    @pytest.mark.asyncio
    async def test_upsert_and_get(self, store):
        await store.upsert("John:3:16:KJV", "John:Translation", "For God loved")
        entry = await store.get("John:3:16:KJV", "John:Translation")
        assert entry.payload == "For God loved"
        assert "John:3:16:KJV" in store.hashes["scripturai:content:John:Translation"]

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("k", "p") is None

    @pytest.mark.asyncio
    async def test_undecodable_entry_is_none(self, store):
        store.hashes["scripturai:content:p"] = {"k": "not json"}
        assert await store.get("k", "p") is None
