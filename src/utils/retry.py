"""Retry with backoff and model fallback for generative API calls.

Each model in the fallback list gets a fixed schedule of attempts. Only
overload errors are retried on the same model; quota errors move on to the
next model straight away, and anything else propagates untouched.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProviderErrorKind(str, Enum):
    """What a provider failure means for the retry loop."""

    OVERLOADED = "overloaded"  # transient 503, retry locally
    QUOTA_EXCEEDED = "quota_exceeded"  # 429, try the next model
    OTHER = "other"  # not retryable


class ModelOverloadedError(Exception):
    """Every model stayed overloaded for its whole retry schedule."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.last_error = last_error


class QuotaExceededError(Exception):
    """The last model tried had exhausted its quota."""

    def __init__(
        self,
        message: str,
        retry_after_seconds: Optional[int] = None,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds
        self.last_error = last_error


@dataclass(frozen=True)
class RetrySchedule:
    """Delays (ms) before each attempt on one model, plus random jitter."""

    delays_ms: tuple = (0, 500, 1200, 2500, 4500, 8000)
    max_jitter_ms: int = 200

    @property
    def attempts(self) -> int:
        return len(self.delays_ms)

    def wait_seconds(self, attempt: int, jitter: Callable[[], float] = random.random) -> float:
        """Seconds to wait before ``attempt`` (0-based)."""
        delay = self.delays_ms[attempt]
        if delay <= 0:
            return 0.0
        return (delay + int(jitter() * self.max_jitter_ms)) / 1000


TEXT_RETRY_SCHEDULE = RetrySchedule()
IMAGE_RETRY_SCHEDULE = RetrySchedule(
    delays_ms=(0, 600, 1400, 2800, 5200, 9000),
    max_jitter_ms=250,
)


async def call_with_retry(
    call: Callable[[str], Awaitable[T]],
    model: str,
    classify: Callable[[BaseException], ProviderErrorKind],
    schedule: RetrySchedule = TEXT_RETRY_SCHEDULE,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    jitter: Callable[[], float] = random.random,
) -> T:
    """Call ``call(model)`` retrying only on overload.

    Raises:
        ValueError: If the schedule has no attempts
        The last error once the schedule is exhausted, or immediately for
        quota and unclassified errors.
    """
    if schedule.attempts == 0:
        raise ValueError("Retry schedule needs at least one attempt")

    last_attempt = schedule.attempts - 1
    for attempt in range(schedule.attempts):
        wait = schedule.wait_seconds(attempt, jitter)
        if wait > 0:
            await sleep(wait)

        try:
            return await call(model)
        except Exception as e:
            if classify(e) != ProviderErrorKind.OVERLOADED:
                raise
            logger.warning(
                f"Model {model} overloaded (attempt {attempt + 1}/{schedule.attempts}): {e}"
            )
            if attempt == last_attempt:
                raise


async def call_with_fallback(
    call: Callable[[str], Awaitable[T]],
    models: Sequence[str],
    classify: Callable[[BaseException], ProviderErrorKind],
    retry_after: Callable[[BaseException], Optional[int]] = lambda e: None,
    schedule: RetrySchedule = TEXT_RETRY_SCHEDULE,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    jitter: Callable[[], float] = random.random,
) -> T:
    """Try each model in order until one call succeeds.

    Args:
        call: Coroutine function taking a model name
        models: Model names, cheapest first
        classify: Maps a raised exception to a ProviderErrorKind
        retry_after: Extracts a retry-after hint (seconds) from a quota error
        schedule: Per-model retry schedule
        sleep: Awaitable sleep, injectable for tests
        jitter: Returns a float in [0, 1) scaling the schedule jitter

    Returns:
        The first successful result

    Raises:
        QuotaExceededError: All models failed and the last one was out of quota
        ModelOverloadedError: All models failed and the last one was overloaded
        Exception: Any unclassified error, as soon as it happens
        ValueError: If no models are given
    """
    if not models:
        raise ValueError("At least one model is required")

    last_error: Optional[BaseException] = None
    last_kind: Optional[ProviderErrorKind] = None

    for model in models:
        try:
            return await call_with_retry(call, model, classify, schedule, sleep, jitter)
        except Exception as e:
            kind = classify(e)
            if kind == ProviderErrorKind.OTHER:
                raise
            last_error, last_kind = e, kind
            logger.warning(f"Falling back from {model} ({kind.value}): {e}")

    if last_kind == ProviderErrorKind.QUOTA_EXCEEDED:
        raise QuotaExceededError(
            str(last_error),
            retry_after_seconds=retry_after(last_error),
            last_error=last_error,
        )
    raise ModelOverloadedError(str(last_error), last_error=last_error)
