# src/api/container.py — v1
"""Composition root: build every client once from Settings.

The HTTP app and the CLI both receive an ``AppContainer`` instead of
reaching for module-level singletons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta

from scripturai.batch.embedding_pipeline import BatchEmbeddingPipeline
from scripturai.batch.ledger import ScraperProgressLedger
from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.cache.cache_factory import create_content_store
from scripturai.config.settings import Settings
from scripturai.generation.chapter_image import ChapterImageService
from scripturai.generation.generator import Generator
from scripturai.generation.orchestrator import CacheAsideOrchestrator
from scripturai.generation.service import ContentService
from scripturai.generation.similar_verses import SimilarVerseFinder
from scripturai.llm.client_factory import create_llm_client
from scripturai.llm.retry import completion_policy
from scripturai.rag.embeddings.embedder_factory import create_embedder
from scripturai.rag.verse_store.base_verse_store import BaseVerseStore
from scripturai.rag.verse_store.verse_store_factory import create_verse_store
from scripturai.scraper.github_source import GitHubSource
from scripturai.scraper.runner import ScrapeRunner
from scripturai.storage.base_blob_store import BaseBlobStore
from scripturai.storage.blob_factory import create_blob_store

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Wired services for one process."""

    settings: Settings
    generator: Generator
    content_store: BaseContentStore
    verse_store: BaseVerseStore
    blob_store: BaseBlobStore
    orchestrator: CacheAsideOrchestrator = field(init=False)
    similar_finder: SimilarVerseFinder = field(init=False)
    content: ContentService = field(init=False)
    images: ChapterImageService = field(init=False)

    def __post_init__(self) -> None:
        s = self.settings
        self.orchestrator = CacheAsideOrchestrator(
            self.content_store,
            self.generator,
            policy=completion_policy(s.retry_max_attempts, s.retry_base_delay_s),
            timeout_s=s.generation_timeout_s or None,
        )
        self.similar_finder = SimilarVerseFinder(self.orchestrator, self.verse_store)
        self.content = ContentService(self.orchestrator, self.verse_store, self.similar_finder)
        self.images = ChapterImageService(
            self.generator,
            self.blob_store,
            self.content_store,
            ttl=timedelta(days=s.image_ttl_days),
            image_size=s.llm_image_size,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> AppContainer:
        """Create providers and stores selected by ``settings``."""
        settings = settings or Settings()
        generator = Generator(create_llm_client(settings), create_embedder(settings))
        container = cls(
            settings=settings,
            generator=generator,
            content_store=create_content_store(settings),
            verse_store=create_verse_store(settings),
            blob_store=create_blob_store(settings),
        )
        logger.info(
            "Container ready: llm=%s, cache=%s, verses=%s, blobs=%s",
            settings.llm_provider,
            settings.cache_backend,
            container.verse_store.provider_name,
            settings.blob_store_type,
        )
        return container

    def ledger(self) -> ScraperProgressLedger:
        return ScraperProgressLedger(self.settings.scraper_ledger_dir)

    def pipeline(self, translate: bool = False) -> BatchEmbeddingPipeline:
        s = self.settings
        return BatchEmbeddingPipeline(
            self.generator,
            self.verse_store,
            self.ledger(),
            translate=translate,
            translation_policy=completion_policy(s.retry_max_attempts, s.retry_base_delay_s),
            retry_base_delay_s=s.retry_base_delay_s,
        )

    def scrape_runner(self, source: GitHubSource, modern: bool = False) -> ScrapeRunner:
        s = self.settings
        pipeline = self.pipeline(translate=modern)
        return ScrapeRunner(
            source,
            pipeline,
            self.ledger(),
            repo=s.scraper_source_repo,
            expected_books=s.scraper_expected_books,
            batch_size=s.scraper_batch_size,
            max_retries=s.scraper_max_retries,
            retry_base_delay_s=s.retry_base_delay_s,
        )
