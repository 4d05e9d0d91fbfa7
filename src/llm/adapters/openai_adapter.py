# src/llm/adapters/openai_adapter.py — v2
"""OpenAI / Azure OpenAI adapter implementing BaseLLMClient.

Uses the official openai SDK. With ``azure_endpoint`` set the Azure client is
used and model names are deployment names.
"""

from __future__ import annotations

import base64
import time
from typing import Any

from scripturai.llm.base_client import BaseLLMClient
from scripturai.llm.models import CompletionOptions, LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """Chat completions and image generation through the openai SDK."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        image_model: str = "gpt-image-1",
        image_size: str = "1536x1024",
        api_key: str = "",
        azure_endpoint: str = "",
        api_version: str = "2024-10-21",
        **kwargs: Any,
    ):
        self._model = model
        self._image_model = image_model
        self._image_size = image_size
        self._api_key = api_key
        self._azure_endpoint = azure_endpoint
        self._api_version = api_version
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            import openai

            if self._azure_endpoint:
                self.__client = openai.AsyncAzureOpenAI(
                    api_key=self._api_key,
                    azure_endpoint=self._azure_endpoint,
                    api_version=self._api_version,
                )
            else:
                self.__client = openai.AsyncOpenAI(api_key=self._api_key)
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        options: CompletionOptions | None = None,
    ) -> LLMResponse:
        opts = options or CompletionOptions()
        oai_messages: list[dict[str, Any]] = [
            {"role": m.role, "content": m.content} for m in messages
        ]

        t0 = time.monotonic()
        resp = await self._client.chat.completions.create(
            model=self._model,
            messages=oai_messages,
            temperature=opts.temperature,
            top_p=opts.top_p,
            max_completion_tokens=opts.max_output_tokens,
        )
        latency = int((time.monotonic() - t0) * 1000)

        usage = resp.usage
        content = ""
        finish_reason = None
        if resp.choices:
            choice = resp.choices[0]
            content = choice.message.content or ""
            finish_reason = choice.finish_reason
        return LLMResponse(
            content=content,
            finish_reason=finish_reason,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider=self.provider_name,
            latency_ms=latency,
            raw_response=resp,
        )

    async def generate_image(self, prompt: str, size: str | None = None) -> bytes:
        resp = await self._client.images.generate(
            model=self._image_model,
            prompt=prompt,
            size=size or self._image_size,
            n=1,
        )
        if not resp.data or not resp.data[0].b64_json:
            raise ValueError("Image provider returned no image data")
        return base64.b64decode(resp.data[0].b64_json)

    @property
    def provider_name(self) -> str:
        return "azure" if self._azure_endpoint else "openai"
