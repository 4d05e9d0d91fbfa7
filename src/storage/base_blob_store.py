# src/storage/base_blob_store.py — v1
"""Abstract blob store interface for generated chapter images."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class BaseBlobStore(ABC):
    """Unified interface for blob storage backends."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if a blob exists."""

    @abstractmethod
    async def get_last_modified(self, path: str) -> datetime:
        """Timezone-aware UTC last-modified time of an existing blob."""

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str = "image/png") -> None:
        """Write a blob, overwriting any existing one."""

    @abstractmethod
    def get_url(self, path: str) -> str:
        """Public URL of a blob."""
