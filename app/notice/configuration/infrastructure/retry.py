"""Retry backoff settings for retry-wrapped senders."""

from pydantic import Field

from notice.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Default retry policy used when a sender is retry-wrapped.

    A SenderConfiguration may override each value per channel through the
    ``retry.maxAttempts``, ``retry.initialDelayMillis`` and
    ``retry.jitterMillis`` config keys.

    Environment Variables:
        RETRY_MAX_ATTEMPTS: Total attempts including the first (default: 3)
        RETRY_INITIAL_DELAY_MILLIS: Delay before the second attempt (default: 200)
        RETRY_JITTER_MILLIS: Upper bound of the random delay added (default: 100)

    Exponential Backoff:
        Delay calculation: initial_delay * (2 ^ (attempt - 1)) + random(0, jitter)

        Example with defaults (initial=200ms, jitter=100ms):
            Attempt 1 failed: 200-299ms
            Attempt 2 failed: 400-499ms
            Attempt 3 failed: no retry, error propagates
    """

    max_attempts: int = Field(
        default=3,
        alias="RETRY_MAX_ATTEMPTS",
        description="Maximum send attempts, including the first one",
    )
    initial_delay_millis: int = Field(
        default=200,
        alias="RETRY_INITIAL_DELAY_MILLIS",
        description="Base delay for exponential backoff (milliseconds)",
    )
    jitter_millis: int = Field(
        default=100,
        alias="RETRY_JITTER_MILLIS",
        description="Exclusive upper bound of the random jitter (milliseconds)",
    )
