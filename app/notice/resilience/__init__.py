"""Resilience patterns for the dispatch pipeline.

This module contains retry configuration and backoff policies used by
retry-wrapped senders.
"""

from notice.resilience.retry import (
    ExponentialBackoffRetryPolicy,
    RetryConfig,
    RetryPolicy,
)

__all__ = [
    "ExponentialBackoffRetryPolicy",
    "RetryConfig",
    "RetryPolicy",
]
