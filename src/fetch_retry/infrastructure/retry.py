"""Retry loop around an asynchronous fetch using tenacity.

Every failed attempt is retried until the budget from ``retries`` runs out;
the last failure is re-raised unchanged. Attempts are strictly sequential and
separated by a single awaited scheduling step with zero delay.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from fetch_retry.domain.config import RetryPolicy
from fetch_retry.infrastructure.http_client import fetch as default_fetch
from fetch_retry.infrastructure.options import Options, retry_policy_from_options

logger = logging.getLogger(__name__)

Fetch = Callable[[Any, Optional[Options]], Awaitable[Any]]
Scheduler = Callable[[float], Awaitable[None]]


def _make_before_sleep_log(policy: RetryPolicy) -> Callable[[RetryCallState], None]:
    def _before_sleep_log(retry_state: RetryCallState) -> None:
        if retry_state.outcome is None:
            return
        exception = retry_state.outcome.exception()
        attempt = retry_state.attempt_number
        logger.debug(f"Fetch attempt {attempt}/{policy.max_attempts} failed: {exception!r}. Retrying...")

    return _before_sleep_log


def create_async_retrying(policy: RetryPolicy, scheduler: Scheduler) -> AsyncRetrying:
    """Create a tenacity controller for one logical request.

    Args:
        policy: Retry budget
        scheduler: Awaited with a zero delay between two attempts

    Returns:
        AsyncRetrying instance (one per call, never shared)
    """
    return AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_none(),
        retry=retry_if_exception_type(Exception),
        reraise=True,
        sleep=scheduler,
        before_sleep=_make_before_sleep_log(policy),
    )


class RetryingFetch:
    """Drop-in replacement for a fetch function that retries failed attempts.

    Args:
        fetch: Underlying fetch, called as ``fetch(target, options)``
            (defaults to the requests-backed fetch)
        scheduler: Coroutine function run between attempts (defaults to
            ``asyncio.sleep``, i.e. a cooperative zero-delay yield)
    """

    def __init__(self, fetch: Optional[Fetch] = None, scheduler: Optional[Scheduler] = None):
        self.fetch = fetch if fetch is not None else default_fetch
        self.scheduler = scheduler if scheduler is not None else asyncio.sleep

    async def __call__(self, target: Any, options: Optional[Options] = None) -> Any:
        """Fetch ``target``, retrying on failure.

        Args:
            target: Passed unmodified to every attempt
            options: Passed unmodified to every attempt; ``retries`` sets the budget

        Returns:
            Result of the first successful attempt

        Raises:
            ConfigurationError: If options are invalid (no attempt is made)
            Exception: The error raised by the last attempt once the budget is spent
        """
        policy = retry_policy_from_options(options)
        retrying = create_async_retrying(policy, self.scheduler)

        async def _attempt() -> Any:
            # fetch may be a plain function returning a future
            return await self.fetch(target, options)

        try:
            return await retrying(_attempt)
        except Exception as e:
            logger.debug(f"Fetch failed after {policy.max_attempts} attempt(s): {e!r}")
            raise


async def retrying_fetch(target: Any, options: Optional[Options] = None) -> Any:
    """Fetch ``target`` with the default fetch, retrying up to ``options['retries']`` times."""
    return await RetryingFetch()(target, options)
