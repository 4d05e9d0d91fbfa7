# src/rag/verse_store/verse_store_factory.py — v1
"""Factory: instantiate the verse store from configuration."""

from __future__ import annotations

import logging

from scripturai.config.settings import Settings, UnsupportedBackendError
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore

logger = logging.getLogger(__name__)


def create_verse_store(settings: Settings | None = None) -> BaseVerseStore:
    """Create the configured verse store (memory by default)."""
    store_type = "memory" if settings is None else settings.verse_store_type

    if store_type == "memory":
        from scripturai.rag.verse_store.memory_store import MemoryVerseStore
        return MemoryVerseStore()

    if store_type == "chromadb":
        from scripturai.rag.verse_store.chromadb_store import ChromaDBVerseStore
        assert settings is not None
        logger.debug("Creating ChromaDB verse store: %s", settings.verse_store_collection)
        return ChromaDBVerseStore(
            collection=settings.verse_store_collection,
            persist_path=settings.verse_store_path,
            host=settings.verse_store_host or None,
            port=settings.verse_store_port,
        )

    raise UnsupportedBackendError(f"Unsupported verse store type: {store_type!r}")
