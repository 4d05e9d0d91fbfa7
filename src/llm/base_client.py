# src/llm/base_client.py — v2
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scripturai.llm.models import CompletionOptions, LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for chat and image generation providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        options: CompletionOptions | None = None,
    ) -> LLMResponse:
        """Chat completion. Empty content is returned, not raised."""

    @abstractmethod
    async def generate_image(self, prompt: str, size: str | None = None) -> bytes:
        """Generate one image and return its encoded bytes (PNG)."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (openai, azure)."""
