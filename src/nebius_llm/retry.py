"""Retry policy with exponential backoff and jitter."""

from __future__ import annotations

import asyncio
import logging
import random
from contextlib import aclosing
from dataclasses import dataclass
from typing import AsyncGenerator, Awaitable, Callable, TypeVar

from nebius_llm.errors import SDKError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Configuration for automatic retries."""

    max_retries: int = 2
    base_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0
    jitter: bool = True
    on_retry: Callable[[Exception, int, float], None] | None = None


def delay_for_attempt(attempt: int, policy: RetryPolicy) -> float:
    """Calculate delay for a given retry attempt (0-indexed)."""
    delay = min(
        policy.base_delay * (policy.backoff_multiplier ** attempt),
        policy.max_delay,
    )
    if policy.jitter:
        delay = delay * random.uniform(0.5, 1.5)
    return delay


def _wait_before_retry(error: SDKError, attempt: int, policy: RetryPolicy) -> float | None:
    """Return the delay before the next attempt, or None if error must propagate."""
    if not getattr(error, "retryable", False):
        return None

    if attempt >= policy.max_retries:
        return None

    retry_after = getattr(error, "retry_after", None)
    if retry_after is not None and retry_after > policy.max_delay:
        return None

    if retry_after is not None:
        return retry_after
    return delay_for_attempt(attempt, policy)


async def _sleep_for_retry(error: SDKError, attempt: int, wait: float, policy: RetryPolicy) -> None:
    logger.warning(
        "Retrying after %s (attempt %d/%d, waiting %.2fs): %s",
        type(error).__name__,
        attempt + 1,
        policy.max_retries,
        wait,
        error,
    )
    if policy.on_retry is not None:
        policy.on_retry(error, attempt + 1, wait)
    await asyncio.sleep(wait)


async def retry(
    fn: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
) -> T:
    """Execute fn with retry logic per the policy.

    Only retries on SDKError subclasses with retryable=True.
    Non-SDKError exceptions and non-retryable SDKErrors are raised immediately.
    """
    attempt = 0
    while True:
        try:
            return await fn()
        except SDKError as e:
            wait = _wait_before_retry(e, attempt, policy)
            if wait is None:
                raise
            await _sleep_for_retry(e, attempt, wait, policy)
            attempt += 1


async def retry_stream(
    fn: Callable[[], AsyncGenerator[T, None]],
    policy: RetryPolicy,
) -> AsyncGenerator[T, None]:
    """Re-run a whole async-generator call per the policy.

    A retry only happens while nothing has been yielded yet. Once an item
    reached the caller, any later error propagates unchanged so items are
    never delivered twice. Closing this generator closes the inner one.
    """
    attempt = 0
    while True:
        yielded = False
        try:
            async with aclosing(fn()) as items:
                async for item in items:
                    yielded = True
                    yield item
            return
        except SDKError as e:
            if yielded:
                raise
            wait = _wait_before_retry(e, attempt, policy)
            if wait is None:
                raise
            await _sleep_for_retry(e, attempt, wait, policy)
            attempt += 1
