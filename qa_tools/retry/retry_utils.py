# ================================================================================
# Retry Utilities
# ================================================================================
#
# Bounded retry loops with fixed or exponential backoff, plus a polling wait.
#
# Key Features:
#   - Caller decides which errors are retryable (should_retry)
#   - Exactly max_attempts calls, then the last error is re-raised unchanged
#   - backoff_factor=1 gives a fixed delay
#   - Sync, async and decorator forms
#
# Usage:
#   user = retry(lambda: client.get_user_by_id(1), max_attempts=5)
#   wait_for(lambda: page_ready(), timeout=10, interval=0.5)
#
# ================================================================================

import asyncio
import time
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, TypeVar

from loguru import logger


T = TypeVar("T")


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""
    pass


def _always_retry(error: BaseException) -> bool:
    return True


class RetryConfig:
    """Configuration for retry behavior. Delays are in seconds."""

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 10.0,
        backoff_factor: float = 2.0,
        should_retry: Optional[Callable[[BaseException], bool]] = None,
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Total number of calls, including the first one
            initial_delay: Delay after the first failure
            max_delay: Upper bound for any single delay
            backoff_factor: Multiplier applied to the delay after each failure
            should_retry: Predicate classifying an error as retryable
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor
        self.should_retry = should_retry or _always_retry

    def delay_for(self, attempt: int) -> float:
        """Delay before the retry that follows failed attempt number `attempt` (0-based)."""
        delay = self.initial_delay * (self.backoff_factor ** attempt)
        return min(delay, self.max_delay)


def retry(
    fn: Callable[[], T],
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    backoff_factor: float = 2.0,
    should_retry: Optional[Callable[[BaseException], bool]] = None,
    config: Optional[RetryConfig] = None,
) -> T:
    """
    Call fn until it succeeds or attempts run out.

    A non-retryable error propagates immediately. After the final attempt
    the last error is re-raised as the same object.
    """
    config = config or RetryConfig(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        backoff_factor=backoff_factor,
        should_retry=should_retry,
    )

    last_exception: Optional[Exception] = None

    for attempt in range(config.max_attempts):
        try:
            return fn()
        except Exception as e:
            if not config.should_retry(e):
                raise
            last_exception = e
            if attempt < config.max_attempts - 1:
                delay = config.delay_for(attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{config.max_attempts} failed: {e}. "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)

    logger.error(f"All {config.max_attempts} attempts failed: {last_exception}")
    raise last_exception


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
    backoff_factor: float = 2.0,
    should_retry: Optional[Callable[[BaseException], bool]] = None,
    config: Optional[RetryConfig] = None,
) -> T:
    """Coroutine counterpart of retry(); fn is called to produce a fresh awaitable each attempt."""
    config = config or RetryConfig(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        backoff_factor=backoff_factor,
        should_retry=should_retry,
    )

    last_exception: Optional[Exception] = None

    for attempt in range(config.max_attempts):
        try:
            return await fn()
        except Exception as e:
            if not config.should_retry(e):
                raise
            last_exception = e
            if attempt < config.max_attempts - 1:
                delay = config.delay_for(attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{config.max_attempts} failed: {e}. "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)

    logger.error(f"All {config.max_attempts} attempts failed: {last_exception}")
    raise last_exception


def with_retry(config: RetryConfig = None):
    """
    Decorator form of retry().

    Works for plain functions and coroutine functions.

    Args:
        config: RetryConfig object for controlling retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable):
        if asyncio.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                return await retry_async(lambda: func(*args, **kwargs), config=config)
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            return retry(lambda: func(*args, **kwargs), config=config)
        return wrapper

    return decorator


def wait_for(
    condition: Callable[[], Any],
    timeout: float = 30.0,
    interval: float = 1.0,
    timeout_message: Optional[str] = None,
) -> Any:
    """
    Poll condition until it returns a truthy value.

    Errors raised by condition count as "not yet" and are logged at DEBUG.

    Returns:
        The first truthy value returned by condition

    Raises:
        WaitTimeoutError: If timeout (seconds) elapses first
    """
    deadline = time.monotonic() + timeout
    last_error: Optional[Exception] = None

    while True:
        try:
            result = condition()
            if result:
                return result
        except Exception as e:
            last_error = e
            logger.debug(f"Condition raised while waiting: {e}")

        if time.monotonic() >= deadline:
            message = timeout_message or f"Condition not met within {timeout}s"
            if last_error is not None:
                raise WaitTimeoutError(f"{message} (last error: {last_error})") from last_error
            raise WaitTimeoutError(message)

        time.sleep(interval)


__all__ = [
    "RetryConfig",
    "WaitTimeoutError",
    "retry",
    "retry_async",
    "with_retry",
    "wait_for",
]
