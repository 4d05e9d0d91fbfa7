# src/llm/models.py — v2
"""LLM-specific types: Message, CompletionOptions, LLMResponse."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant", "system"]
    content: str

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role="user", content=content)


class CompletionOptions(BaseModel):
    """Sampling options for a chat completion."""

    temperature: float = 0.5
    top_p: float = 0.9
    max_output_tokens: int = 4096


class LLMResponse(BaseModel):
    """Normalized response from the chat provider.

    ``content`` is empty when the provider returned no choice or no text.
    """

    content: str
    finish_reason: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    model: str
    provider: str
    latency_ms: int = 0
    raw_response: Any = None
