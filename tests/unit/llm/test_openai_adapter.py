# tests/unit/llm/test_openai_adapter.py — v1
"""Tests for llm/adapters/openai_adapter.py — mocked SDK client."""

from __future__ import annotations

import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from scripturai.llm.adapters.openai_adapter import OpenAIAdapter
from scripturai.llm.models import CompletionOptions, Message


def _chat_response(content, finish_reason="stop"):
    choices = []
    if content is not None:
        choices.append(
            SimpleNamespace(message=SimpleNamespace(content=content), finish_reason=finish_reason)
        )
    return SimpleNamespace(
        choices=choices,
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=40),
    )


@pytest.fixture
def sdk():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.images.generate = AsyncMock()
    return client


@pytest.fixture
def adapter(sdk):
    a = OpenAIAdapter(model="gpt-4o-mini", image_size="1024x1024", api_key="sk-test")
    a._OpenAIAdapter__client = sdk
    return a


class TestComplete:
    @pytest.mark.asyncio
    async def test_maps_response(self, adapter, sdk):
        sdk.chat.completions.create.return_value = _chat_response("In the beginning")
        resp = await adapter.complete([Message.system("sys"), Message.user("Explain")])
        assert resp.content == "In the beginning"
        assert resp.input_tokens == 120
        assert resp.output_tokens == 40
        assert resp.provider == "openai"

    @pytest.mark.asyncio
    async def test_passes_sampling_options(self, adapter, sdk):
        sdk.chat.completions.create.return_value = _chat_response("ok")
        await adapter.complete([Message.user("x")], CompletionOptions(temperature=0.2, max_output_tokens=100))
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.2
        assert kwargs["top_p"] == 0.9
        assert kwargs["max_completion_tokens"] == 100
        assert kwargs["messages"] == [{"role": "user", "content": "x"}]

    @pytest.mark.asyncio
    async def test_no_choices_is_empty(self, adapter, sdk):
        sdk.chat.completions.create.return_value = _chat_response(None)
        resp = await adapter.complete([Message.user("x")])
        assert resp.content == ""
        assert resp.finish_reason is None

    @pytest.mark.asyncio
    async def test_null_content_is_empty(self, adapter, sdk):
        sdk.chat.completions.create.return_value = _chat_response(None)
        sdk.chat.completions.create.return_value.choices.append(
            SimpleNamespace(message=SimpleNamespace(content=None), finish_reason="content_filter")
        )
        resp = await adapter.complete([Message.user("x")])
        assert resp.content == ""
        assert resp.finish_reason == "content_filter"


class TestGenerateImage:
    @pytest.mark.asyncio
    async def test_decodes_b64(self, adapter, sdk):
        sdk.images.generate.return_value = SimpleNamespace(
            data=[SimpleNamespace(b64_json=base64.b64encode(b"png-bytes").decode())]
        )
        assert await adapter.generate_image("a prompt") == b"png-bytes"
        assert sdk.images.generate.call_args.kwargs["size"] == "1024x1024"

    @pytest.mark.asyncio
    async def test_size_override(self, adapter, sdk):
        sdk.images.generate.return_value = SimpleNamespace(
            data=[SimpleNamespace(b64_json=base64.b64encode(b"x").decode())]
        )
        await adapter.generate_image("a prompt", "1536x1024")
        assert sdk.images.generate.call_args.kwargs["size"] == "1536x1024"

    @pytest.mark.asyncio
    async def test_no_data_raises(self, adapter, sdk):
        sdk.images.generate.return_value = SimpleNamespace(data=[])
        with pytest.raises(ValueError):
            await adapter.generate_image("a prompt")


def test_azure_provider_name():
    assert OpenAIAdapter(azure_endpoint="https://example.openai.azure.com").provider_name == "azure"
