# tests/unit/generation/test_orchestrator.py — v1
"""Tests for generation/orchestrator.py — cache-aside resolve and recovery."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from scripturai.core.result import OutcomeKind, VerseNotFoundError
from scripturai.generation.orchestrator import CacheAsideOrchestrator
from scripturai.llm.models import Message
from scripturai.llm.retry import RetryExhaustedError

KEY = "John:3:16:KJV"
PARTITION = "John:Explanation:Devotional"


@pytest.fixture
def orchestrator(content_store, generator, recorded_sleep):
    return CacheAsideOrchestrator(content_store, generator, sleep=recorded_sleep)


class TestResolve:
    @pytest.mark.asyncio
    async def test_miss_computes_and_caches(self, orchestrator, content_store):
        compute = AsyncMock(return_value="An explanation")
        outcome = await orchestrator.resolve(KEY, PARTITION, compute)
        assert outcome.kind is OutcomeKind.COMPUTED
        assert outcome.value == "An explanation"
        assert content_store.entries[(KEY, PARTITION)].payload == "An explanation"

    @pytest.mark.asyncio
    async def test_second_call_is_a_hit_without_compute(self, orchestrator):
        compute = AsyncMock(return_value="An explanation")
        first = await orchestrator.resolve(KEY, PARTITION, compute)
        second = await orchestrator.resolve(KEY, PARTITION, compute)
        assert second.kind is OutcomeKind.HIT
        assert second.value == first.value
        assert compute.await_count == 1

    @pytest.mark.asyncio
    async def test_partitions_are_independent(self, orchestrator):
        compute = AsyncMock(side_effect=["devotional", "study"])
        a = await orchestrator.resolve(KEY, "John:Explanation:Devotional", compute)
        b = await orchestrator.resolve(KEY, "John:Explanation:Study", compute)
        assert (a.value, b.value) == ("devotional", "study")

    @pytest.mark.asyncio
    async def test_upsert_failure_still_returns_content(self, orchestrator, content_store):
        content_store.upsert = AsyncMock(side_effect=RuntimeError("store down"))
        outcome = await orchestrator.resolve(KEY, PARTITION, AsyncMock(return_value="text"))
        assert outcome.ok
        assert outcome.value == "text"

    @pytest.mark.asyncio
    async def test_read_failure_is_a_miss(self, orchestrator, content_store):
        content_store.get = AsyncMock(side_effect=RuntimeError("timeout"))
        compute = AsyncMock(return_value="text")
        outcome = await orchestrator.resolve(KEY, PARTITION, compute)
        assert outcome.kind is OutcomeKind.COMPUTED
        compute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_cached_payload_is_recomputed(self, orchestrator, content_store):
        await content_store.upsert(KEY, PARTITION, "")
        outcome = await orchestrator.resolve(KEY, PARTITION, AsyncMock(return_value="fresh"))
        assert outcome.kind is OutcomeKind.COMPUTED
        assert outcome.value == "fresh"

    @pytest.mark.asyncio
    async def test_not_found_is_distinct_and_not_cached(self, orchestrator, content_store):
        compute = AsyncMock(side_effect=VerseNotFoundError(KEY))
        outcome = await orchestrator.resolve(KEY, PARTITION, compute)
        assert outcome.not_found
        assert isinstance(outcome.error, VerseNotFoundError)
        assert content_store.upsert_calls == 0

    @pytest.mark.asyncio
    async def test_retry_exhaustion_is_transient(self, orchestrator, content_store):
        compute = AsyncMock(side_effect=RetryExhaustedError("chat", 3))
        outcome = await orchestrator.resolve(KEY, PARTITION, compute)
        assert outcome.kind is OutcomeKind.TRANSIENT_FAILURE
        assert content_store.upsert_calls == 0

    @pytest.mark.asyncio
    async def test_empty_result_is_transient_and_not_cached(self, orchestrator, content_store):
        outcome = await orchestrator.resolve(KEY, PARTITION, AsyncMock(return_value="  "))
        assert outcome.kind is OutcomeKind.TRANSIENT_FAILURE
        assert content_store.entries == {}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_captured(self, orchestrator):
        outcome = await orchestrator.resolve(KEY, PARTITION, AsyncMock(side_effect=KeyError("x")))
        assert outcome.kind is OutcomeKind.UNEXPECTED_FAILURE
        assert isinstance(outcome.error, KeyError)

    @pytest.mark.asyncio
    async def test_timeout_is_transient(self, content_store, generator):
        orchestrator = CacheAsideOrchestrator(content_store, generator, timeout_s=0.01)

        async def slow() -> str:
            await asyncio.sleep(1)
            return "late"

        outcome = await orchestrator.resolve(KEY, PARTITION, slow)
        assert outcome.kind is OutcomeKind.TRANSIENT_FAILURE
        assert content_store.entries == {}


class TestGetOrCompute:
    @pytest.mark.asyncio
    async def test_returns_value(self, orchestrator):
        value = await orchestrator.get_or_compute(KEY, PARTITION, AsyncMock(return_value="text"))
        assert value == "text"

    @pytest.mark.asyncio
    async def test_failure_collapses_to_empty_string(self, orchestrator):
        value = await orchestrator.get_or_compute(
            KEY, PARTITION, AsyncMock(side_effect=RuntimeError("boom"))
        )
        assert value == ""

    @pytest.mark.asyncio
    async def test_custom_empty_value(self, orchestrator):
        value = await orchestrator.get_or_compute(
            KEY, PARTITION, AsyncMock(side_effect=VerseNotFoundError(KEY)), empty=[]
        )
        assert value == []


class TestGenerateText:
    @pytest.mark.asyncio
    async def test_returns_completion(self, orchestrator, llm_client):
        text = await orchestrator.generate_text([Message.user("hi")])
        assert text == "For God so loved the world."
        assert llm_client.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_completions_retry_three_times(
        self, orchestrator, llm_client, recorded_sleep, make_llm_response
    ):
        llm_client.complete.return_value = make_llm_response("")
        with pytest.raises(RetryExhaustedError):
            await orchestrator.generate_text([Message.user("hi")])
        assert llm_client.complete.await_count == 3
        assert [c.args[0] for c in recorded_sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_retry_ceiling_recovers_to_empty(
        self, orchestrator, llm_client, recorded_sleep, make_llm_response
    ):
        llm_client.complete.return_value = make_llm_response("")

        async def compute() -> str:
            return await orchestrator.generate_text([Message.user("hi")])

        value = await orchestrator.get_or_compute(KEY, PARTITION, compute)
        assert value == ""
        assert llm_client.complete.await_count == 3
        assert sum(c.args[0] for c in recorded_sleep.await_args_list) >= 3.0
