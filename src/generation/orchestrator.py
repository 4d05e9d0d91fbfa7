# src/generation/orchestrator.py — v1
"""Cache-aside coordination for generated content.

For one request: read (key, partition) from the content store; on a miss run
the compute function, persist a non-empty result, and return it. Failures
never escape ``get_or_compute``; ``resolve`` keeps them typed so the HTTP
layer can tell "not found" from "try again later".

Concurrent misses on the same address are not coordinated: both compute and
both upsert, and the later write wins.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.core.models import CachePayload
from scripturai.core.result import NotFoundError, Outcome
from scripturai.generation.generator import Generator
from scripturai.llm.models import CompletionOptions, Message
from scripturai.llm.retry import RetryExhaustedError, RetryPolicy, completion_policy, is_empty, with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=CachePayload)

ComputeFn = Callable[[], Awaitable[T]]


class CacheAsideOrchestrator:
    """Look up, compute on miss, persist, return."""

    def __init__(
        self,
        content_store: BaseContentStore,
        generator: Generator,
        policy: RetryPolicy | None = None,
        timeout_s: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._store = content_store
        self._generator = generator
        self._policy = policy or completion_policy()
        self._timeout_s = timeout_s
        self._sleep = sleep

    @property
    def generator(self) -> Generator:
        return self._generator

    async def resolve(
        self,
        key: str,
        partition: str,
        compute_fn: ComputeFn[T],
        description: str | None = None,
    ) -> Outcome[T]:
        """Return the cached payload or compute, cache and return a new one."""
        description = description or f"{partition}/{key}"

        cached = await self._lookup(key, partition, description)
        if cached is not None:
            return Outcome.hit(cached)

        try:
            if self._timeout_s:
                value = await asyncio.wait_for(compute_fn(), timeout=self._timeout_s)
            else:
                value = await compute_fn()
        except NotFoundError as e:
            logger.info("Cannot compute %s: %s", description, e)
            return Outcome.missing(e)
        except RetryExhaustedError as e:
            logger.error("Giving up on %s: %s", description, e)
            return Outcome.transient(e)
        except asyncio.TimeoutError as e:
            logger.error("Timed out computing %s after %.1fs", description, self._timeout_s)
            return Outcome.transient(e)
        except Exception as e:
            logger.error("An error occurred while computing %s", description, exc_info=True)
            return Outcome.unexpected(e)

        if is_empty(value):
            logger.warning("Computed empty content for %s; not caching", description)
            return Outcome.transient()

        await self._persist(key, partition, value, description)
        return Outcome.computed(value)

    async def get_or_compute(
        self,
        key: str,
        partition: str,
        compute_fn: ComputeFn[T],
        description: str | None = None,
        empty: Any = "",
    ) -> T:
        """Like ``resolve`` but collapses every failure into ``empty``."""
        outcome = await self.resolve(key, partition, compute_fn, description)
        return outcome.value_or(empty)

    async def generate_text(
        self,
        messages: list[Message],
        options: CompletionOptions | None = None,
        label: str = "chat completion",
    ) -> str:
        """Run a chat completion under the retry policy.

        Raises:
            RetryExhaustedError: Every attempt returned empty content.
        """
        return await with_retry(
            self._generator.complete_chat,
            messages,
            options,
            policy=self._policy,
            label=label,
            sleep=self._sleep,
        )

    async def _lookup(self, key: str, partition: str, description: str) -> Any:
        try:
            entry = await self._store.get(key, partition)
        except Exception:
            logger.warning("Cache read failed for %s; treating as miss", description, exc_info=True)
            return None

        if entry is None or is_empty(entry.payload):
            logger.info("Cache miss for %s.", description)
            return None

        logger.info("Cache hit for %s.", description)
        return entry.payload

    async def _persist(self, key: str, partition: str, value: Any, description: str) -> None:
        try:
            await self._store.upsert(key, partition, value)
            logger.info("Cached %s.", description)
        except Exception:
            logger.error("Failed to cache %s.", description, exc_info=True)
