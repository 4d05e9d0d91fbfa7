# src/batch/models.py — v2
"""Batch processing models: BookOutcome, ScrapeSummary."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class BookOutcome(str, Enum):
    """How far one book got through the embedding pipeline."""

    COMPLETED = "completed"
    PARTIALLY_FAILED = "partially_failed"


class ScrapeSummary(BaseModel):
    """Summary of one scrape run across all books."""

    version: str
    total_books: int
    completed: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
