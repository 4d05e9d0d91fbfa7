# src/rag/embeddings/openai_embedder.py — v2
"""OpenAI / Azure OpenAI embedding adapter.

Models: text-embedding-3-small, text-embedding-3-large (or an Azure
deployment name when ``azure_endpoint`` is set).
"""

from __future__ import annotations

import logging

from scripturai.rag.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """Embeddings via the OpenAI API."""

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        dimensions: int = 1536,
        azure_endpoint: str = "",
        api_version: str = "2024-10-21",
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self._azure_endpoint = azure_endpoint
        self._api_version = api_version
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            if self._azure_endpoint:
                self.__client = openai.AsyncAzureOpenAI(
                    api_key=self._api_key or "",
                    azure_endpoint=self._azure_endpoint,
                    api_version=self._api_version,
                )
            else:
                self.__client = openai.AsyncOpenAI(api_key=self._api_key or "")
        return self.__client

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in one request, re-ordered by the returned index."""
        if not texts:
            return []
        response = await self._client.embeddings.create(input=texts, model=self._model)
        ordered = sorted(response.data, key=lambda item: item.index)
        return [item.embedding for item in ordered]

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "azure" if self._azure_endpoint else "openai"

    @property
    def model_name(self) -> str:
        return self._model
