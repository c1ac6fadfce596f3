"""Retry policies for retry-wrapped senders.

A policy is a pure decision function: given the attempt number that just
failed and its error, should the caller try again, and how long should it
wait first. The caller owns the attempt counter.
"""

import random
from typing import Optional, Protocol, Tuple, Type

from notice.resilience.retry.config import RetryConfig


class RetryPolicy(Protocol):
    """Protocol for retry decisions.

    Example:
        class FixedDelayPolicy:
            def should_retry(self, attempt: int, error: BaseException) -> bool:
                return attempt < 2

            def next_delay_millis(self, attempt: int) -> int:
                return 500
    """

    def should_retry(self, attempt: int, error: BaseException) -> bool:
        """Decide whether to retry after ``attempt`` failed with ``error``.

        Args:
            attempt: 1-based number of the attempt that failed
            error: Exception raised by that attempt

        Returns:
            True to retry, False to propagate the error
        """
        ...

    def next_delay_millis(self, attempt: int) -> int:
        """Delay before the attempt following ``attempt``.

        Args:
            attempt: 1-based number of the attempt that failed

        Returns:
            Delay in milliseconds
        """
        ...


class ExponentialBackoffRetryPolicy:
    """Exponential backoff with additive jitter.

    ``delay(attempt) = initial_delay * 2 ** (attempt - 1) + randrange(0, jitter)``

    Only errors of the retryable types are retried; anything else
    propagates on the first failure.

    Attributes:
        config: RetryConfig with attempts, initial delay and jitter bound
        retryable_errors: Exception types eligible for retry
    """

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        retryable_errors: Optional[Tuple[Type[BaseException], ...]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if retryable_errors is None:
            # Imported here, the dispatch package depends on resilience
            from notice.dispatch.exceptions import RetryableSendError

            retryable_errors = (RetryableSendError,)

        self.config = config or RetryConfig()
        self.retryable_errors = retryable_errors
        self._rng = rng or random.Random()

    @property
    def max_attempts(self) -> int:
        return self.config.max_attempts

    def should_retry(self, attempt: int, error: BaseException) -> bool:
        if attempt >= self.config.max_attempts:
            return False
        return isinstance(error, self.retryable_errors)

    def next_delay_millis(self, attempt: int) -> int:
        if attempt < 1:
            raise ValueError("attempt must be at least 1")

        delay = self.config.initial_delay_millis * (2 ** (attempt - 1))
        if self.config.jitter_millis > 0:
            delay += self._rng.randrange(0, self.config.jitter_millis)
        return delay
