# src/llm/retry.py — v2
"""Bounded retry policy with linear backoff.

One policy abstraction shared by the content orchestrator (retry on empty
completions) and the embedding pipeline (retry a whole batch on errors).
Attempt ``n`` that needs a retry is followed by ``delay_fn(n)`` seconds of
real sleep; no sleep follows the final attempt.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class RetryExhaustedError(Exception):
    """All attempts of a retried call were used up."""

    def __init__(
        self,
        label: str,
        attempts: int,
        last_error: Exception | None = None,
        last_result: Any = None,
    ) -> None:
        self.label = label
        self.attempts = attempts
        self.last_error = last_error
        self.last_result = last_result
        reason = f"{last_error}" if last_error is not None else "empty result"
        super().__init__(f"'{label}' failed after {attempts} attempts: {reason}")


def linear_delay(base_s: float = 1.0) -> Callable[[int], float]:
    """Delay of ``base_s * attempt`` seconds (1s, 2s, 3s ... for base 1)."""

    def _delay(attempt: int) -> float:
        return base_s * attempt

    return _delay


def is_empty(result: Any) -> bool:
    """True for None, empty strings (incl. whitespace) and empty containers."""
    if result is None:
        return True
    if isinstance(result, str):
        return not result.strip()
    try:
        return len(result) == 0
    except TypeError:
        return False


def _never(_: Any) -> bool:
    return False


def _always(_: Any) -> bool:
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try, how long to wait, and what counts as retryable."""

    max_attempts: int = 3
    delay_fn: Callable[[int], float] = linear_delay(1.0)
    should_retry_result: Callable[[Any], bool] = _never
    should_retry_error: Callable[[Exception], bool] = _never


def completion_policy(max_attempts: int = 3, base_delay_s: float = 1.0) -> RetryPolicy:
    """Retry chat completions that come back empty; errors propagate."""
    return RetryPolicy(
        max_attempts=max_attempts,
        delay_fn=linear_delay(base_delay_s),
        should_retry_result=is_empty,
    )


def batch_policy(max_attempts: int = 3, base_delay_s: float = 1.0) -> RetryPolicy:
    """Retry a unit of scraping work on any exception."""
    return RetryPolicy(
        max_attempts=max_attempts,
        delay_fn=linear_delay(base_delay_s),
        should_retry_error=_always,
    )


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    policy: RetryPolicy,
    label: str = "call",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    **kwargs: Any,
) -> Any:
    """Execute an async function under a retry policy.

    Non-retryable errors propagate unchanged.

    Raises:
        RetryExhaustedError: If the last allowed attempt is still retryable.
    """
    attempt = 1
    while True:
        last_error: Exception | None = None
        result: Any = None
        try:
            result = await fn(*args, **kwargs)
        except Exception as e:
            if not policy.should_retry_error(e):
                raise
            last_error = e
        else:
            if not policy.should_retry_result(result):
                return result

        if attempt >= policy.max_attempts:
            raise RetryExhaustedError(label, attempt, last_error, result) from last_error

        delay = policy.delay_fn(attempt)
        logger.warning(
            "'%s' attempt %d/%d %s, retrying in %.1fs",
            label,
            attempt,
            policy.max_attempts,
            f"failed: {last_error}" if last_error else "returned empty",
            delay,
        )
        await sleep(delay)
        attempt += 1
