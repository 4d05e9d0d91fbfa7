# src/cache/redis_store.py — v2
"""Redis-based content store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance API deployments sharing one cache.
"""

from __future__ import annotations

import logging

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.core.models import CacheEntry, CachePayload

logger = logging.getLogger(__name__)

_KEY_PREFIX = "scripturai:content:"


class RedisContentStore(BaseContentStore):
    """Redis-backed content store: one hash per partition, one field per key."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    async def get(self, key: str, partition: str) -> CacheEntry | None:
        data = self._client.hget(f"{_KEY_PREFIX}{partition}", key)
        if data is None:
            return None
        try:
            return CacheEntry.model_validate_json(data)
        except Exception as e:
            logger.warning("Failed to deserialize cache entry %s/%s: %s", partition, key, e)
            return None

    async def upsert(self, key: str, partition: str, payload: CachePayload) -> None:
        entry = CacheEntry(key=key, partition=partition, payload=payload)
        self._client.hset(f"{_KEY_PREFIX}{partition}", key, entry.model_dump_json())
