# src/cache/base_cache_store.py — v2
"""Abstract content store interface.

Generated artifacts live under a composite (key, partition) address, e.g.
key ``John:3:16:KJV`` in partition ``John:Explanation:Devotional``. Writes
are upserts: at most one entry per address, last write wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from scripturai.core.models import CacheEntry, CachePayload


class BaseContentStore(ABC):
    """Unified interface for content cache backends."""

    @abstractmethod
    async def get(self, key: str, partition: str) -> CacheEntry | None:
        """Retrieve the entry at (key, partition), or None."""

    @abstractmethod
    async def upsert(self, key: str, partition: str, payload: CachePayload) -> None:
        """Create or overwrite the entry at (key, partition)."""
