"""
Bounded retry for the startup steps.

``async_retry`` wraps a coroutine function so that the listed exceptions are
retried with exponential backoff and jitter. A single attempt means no retry:
the first exception propagates unchanged.
"""

import asyncio
import functools
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    OSError,
)


@dataclass(frozen=True)
class RetryConfig:
    """Backoff policy for one retried call.

    Attributes:
        max_attempts: Total attempts, the first one included
        base_delay: Wait before the second attempt, in seconds
        max_delay: Upper bound for a single wait before jitter is added
        exponential_base: Growth factor between consecutive waits
        jitter: Add a random extra of up to ``jitter_max`` times the delay
        exceptions: Exception types that earn another attempt
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True
    jitter_max: float = 0.5
    exceptions: Tuple[Type[Exception], ...] = DEFAULT_RETRY_EXCEPTIONS

    def calculate_delay(self, attempt: int) -> float:
        """Seconds to wait after the zero-based *attempt* failed."""
        delay = min(self.base_delay * self.exponential_base**attempt, self.max_delay)
        if self.jitter:
            delay += delay * random.uniform(0, self.jitter_max)
        return delay

    def has_attempts_left(self, attempt: int) -> bool:
        return attempt + 1 < self.max_attempts


async def _call_with_retry(
    config: RetryConfig,
    func: Callable[..., Awaitable[T]],
    *args: Any,
    **kwargs: Any,
) -> T:
    attempt = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except config.exceptions as e:
            if not config.has_attempts_left(attempt):
                if config.max_attempts > 1:
                    logger.error(
                        f"{func.__name__} gave up after {config.max_attempts} attempts: "
                        f"{type(e).__name__}: {e}"
                    )
                raise

            delay = config.calculate_delay(attempt)
            attempt += 1
            logger.warning(
                f"{func.__name__} failed (attempt {attempt}/{config.max_attempts}): "
                f"{type(e).__name__}: {e}; retrying in {delay:.2f}s"
            )
            await asyncio.sleep(delay)


def async_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: Sequence[Type[Exception]] = DEFAULT_RETRY_EXCEPTIONS,
) -> Callable:
    """
    Decorator for retrying async functions with exponential backoff.

    Usage:
        provision_step = async_retry(
            max_attempts=3, exceptions=(ProvisioningError,)
        )(provision)
    """
    config = RetryConfig(
        max_attempts=max_attempts,
        base_delay=base_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        exceptions=tuple(exceptions),
    )

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await _call_with_retry(config, func, *args, **kwargs)

        return wrapper

    return decorator
