"""In-line retry with exponential backoff.

Architecture:
- RetryConfig: Attempts, initial delay and jitter, with per-channel overrides
- RetryPolicy: Protocol for retry decisions
- ExponentialBackoffRetryPolicy: Default policy, retries RetryableSendError only

Usage:
    from notice.resilience.retry import RetryConfig, ExponentialBackoffRetryPolicy

    policy = ExponentialBackoffRetryPolicy(RetryConfig(max_attempts=5))
    if policy.should_retry(attempt, error):
        time.sleep(policy.next_delay_millis(attempt) / 1000)
"""

from notice.resilience.retry.config import (
    INITIAL_DELAY_KEY,
    JITTER_KEY,
    MAX_ATTEMPTS_KEY,
    RetryConfig,
)
from notice.resilience.retry.policy import ExponentialBackoffRetryPolicy, RetryPolicy

__all__ = [
    "RetryConfig",
    "RetryPolicy",
    "ExponentialBackoffRetryPolicy",
    "MAX_ATTEMPTS_KEY",
    "INITIAL_DELAY_KEY",
    "JITTER_KEY",
]
