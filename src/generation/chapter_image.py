# src/generation/chapter_image.py — v1
"""Chapter illustration with a fixed staleness window.

The blob's last-modified time is the cache clock: images younger than the
TTL are reused, older ones are regenerated and overwritten.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.generation.generator import Generator
from scripturai.generation.modes import Mode
from scripturai.generation.prompts import chapter_key, image_prompt, summary_partition
from scripturai.storage.base_blob_store import BaseBlobStore

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TTL = timedelta(days=180)


def image_path(version: str, book: str, chapter: int) -> str:
    return f"{version}/{book}/{chapter}.png".replace(" ", "_")


class ChapterImageService:
    """Return a fresh-enough chapter image URL, generating one if needed."""

    def __init__(
        self,
        generator: Generator,
        blob_store: BaseBlobStore,
        content_store: BaseContentStore,
        ttl: timedelta = DEFAULT_IMAGE_TTL,
        image_size: str | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._generator = generator
        self._blobs = blob_store
        self._content = content_store
        self._ttl = ttl
        self._image_size = image_size
        self._clock = clock

    async def generate(self, version: str, book: str, chapter: int) -> str:
        """URL of the chapter image, or "" on any failure."""
        path = image_path(version, book, chapter)
        try:
            if await self._blobs.exists(path):
                age = self._clock() - await self._blobs.get_last_modified(path)
                if age < self._ttl:
                    logger.info(
                        "Found existing image for %s %s (age %.1f days)",
                        book, chapter, age.total_seconds() / 86400,
                    )
                    return self._blobs.get_url(path)
                logger.info(
                    "Image for %s %s expired (%.1f days). Regenerating.",
                    book, chapter, age.total_seconds() / 86400,
                )

            summary = await self._cached_summary(version, book, chapter)
            image = await self._generator.generate_image(
                image_prompt(book, chapter, summary), self._image_size
            )
            await self._blobs.upload(path, image)
            logger.info("Uploaded new image for %s %s.", book, chapter)
            return self._blobs.get_url(path)
        except Exception:
            logger.error("Failed to generate or store image for %s %s.", book, chapter, exc_info=True)
            return ""

    async def _cached_summary(self, version: str, book: str, chapter: int) -> str:
        """Devotional summary from the content cache, if one was generated."""
        try:
            entry = await self._content.get(
                chapter_key(version, book, chapter),
                summary_partition(book, Mode.DEVOTIONAL),
            )
        except Exception:
            logger.warning("Summary lookup failed for %s %s", book, chapter, exc_info=True)
            return ""
        if entry is None or not isinstance(entry.payload, str):
            return ""
        return entry.payload
