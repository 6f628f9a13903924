from qa_tools.retry.retry_utils import (
    RetryConfig,
    WaitTimeoutError,
    retry,
    retry_async,
    wait_for,
    with_retry,
)

__all__ = [
    "RetryConfig",
    "WaitTimeoutError",
    "retry",
    "retry_async",
    "wait_for",
    "with_retry",
]
