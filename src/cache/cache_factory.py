# src/cache/cache_factory.py — v3
"""Factory for content store instantiation."""

from __future__ import annotations

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.config.settings import Settings, UnsupportedBackendError


def create_content_store(settings: Settings | None = None) -> BaseContentStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the JSON backend.

    Returns:
        Configured BaseContentStore implementation.
    """
    backend = "json" if settings is None else settings.cache_backend
    cache_root = "output/.cache" if settings is None else str(settings.cache_root)

    if backend == "json":
        from scripturai.cache.json_store import JsonContentStore
        return JsonContentStore(cache_root=cache_root)

    if backend == "sqlite":
        from scripturai.cache.sqlite_store import SqliteContentStore
        return SqliteContentStore(db_path=f"{cache_root}/scripturai_cache.db")

    if backend == "redis":
        from scripturai.cache.redis_store import RedisContentStore
        if settings is None or not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisContentStore(redis_url=settings.cache_redis_url)

    raise UnsupportedBackendError(f"Unsupported cache backend: {backend!r}")
