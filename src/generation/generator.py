# src/generation/generator.py — v1
"""Generator: one façade over chat, embedding and image providers.

Callers see plain values: completion text ("" when the provider gave none),
vectors in input order, and image bytes. Retrying is the caller's concern
(see ``scripturai.llm.retry``).
"""

from __future__ import annotations

import logging

from scripturai.llm.base_client import BaseLLMClient
from scripturai.llm.models import CompletionOptions, Message
from scripturai.rag.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class Generator:
    """Chat, embedding and image generation behind one object."""

    def __init__(self, llm_client: BaseLLMClient, embedder: BaseEmbedder) -> None:
        self._llm = llm_client
        self._embedder = embedder

    async def complete_chat(
        self,
        messages: list[Message],
        options: CompletionOptions | None = None,
    ) -> str:
        """Return the completion text, or "" when none was produced."""
        response = await self._llm.complete(messages, options)
        content = response.content.strip()
        if not content:
            logger.info(
                "Empty completion from %s (finish reason: %s)",
                response.provider,
                response.finish_reason,
            )
        return content

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Embed ``texts``; raises if the provider returns a different count."""
        vectors = await self._embedder.embed_texts(texts)
        if len(vectors) != len(texts):
            raise ValueError(
                f"Embedding count mismatch: sent {len(texts)}, got {len(vectors)}"
            )
        return vectors

    async def generate_image(self, prompt: str, size: str | None = None) -> bytes:
        return await self._llm.generate_image(prompt, size)
