# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for every deployment-specific setting: LLM and
embedding providers, the content cache, the verse store, the blob store
used for chapter images, the scraper and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class UnsupportedBackendError(ValueError):
    """Raised by factories for a backend name they do not know."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM ===
    llm_provider: Literal["openai", "azure"] = "openai"
    llm_chat_model: str = "gpt-4o-mini"
    llm_image_model: str = "gpt-image-1"
    llm_image_size: str = "1536x1024"
    openai_api_key: str = ""
    azure_openai_endpoint: str = ""
    azure_openai_api_version: str = "2024-10-21"

    # === Embeddings ===
    embedding_provider: Literal["openai", "azure"] = "openai"
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536

    # === Retry ===
    retry_max_attempts: int = 3
    retry_base_delay_s: float = 1.0
    # 0 disables the per-request generation timeout.
    generation_timeout_s: float = 0.0

    # === Content cache ===
    cache_backend: Literal["json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.scripturai/cache")
    cache_redis_url: str = ""

    # === Verse store ===
    verse_store_type: Literal["memory", "chromadb"] = "memory"
    verse_store_path: Path = Path("~/.scripturai/verses")
    verse_store_host: str = ""
    verse_store_port: int = 8000
    verse_store_collection: str = "bible_verses"

    # === Blob store (chapter images) ===
    blob_store_type: Literal["local", "s3"] = "local"
    blob_store_root: Path = Path("~/.scripturai/blobs")
    blob_public_base_url: str = ""
    blob_s3_bucket: str = ""
    blob_s3_prefix: str = "scripturai/"
    blob_s3_region: str = ""
    image_ttl_days: int = 180

    # === Scraper ===
    scraper_batch_size: int = 100
    scraper_max_retries: int = 3
    scraper_ledger_dir: Path = Path("~/.scripturai/ledger")
    scraper_source_repo: str = "aruljohn/Bible-kjv"
    scraper_expected_books: int = 66

    # === HTTP server ===
    api_host: str = "127.0.0.1"
    api_port: int = 8080

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("scraper_batch_size", "retry_max_attempts", "scraper_max_retries")
    @classmethod
    def validate_positive(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if self.blob_store_type == "s3" and not self.blob_s3_bucket:
            errors.append("BLOB_STORE_TYPE=s3 requires BLOB_S3_BUCKET")

        uses_azure = "azure" in (self.llm_provider, self.embedding_provider)
        if uses_azure and not self.azure_openai_endpoint:
            errors.append("azure provider requires AZURE_OPENAI_ENDPOINT")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off jobs).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
