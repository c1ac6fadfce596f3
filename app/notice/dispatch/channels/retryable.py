"""Retry decorator for senders."""

import time
from typing import Callable, Optional

from notice.dispatch.channels.base import Sender
from notice.dispatch.exceptions import SenderConfigurationError
from notice.dispatch.models import SendRequest, SenderConfiguration
from notice.logging import get_module_logger
from notice.resilience.retry import (
    ExponentialBackoffRetryPolicy,
    RetryConfig,
    RetryPolicy,
)

logger = get_module_logger()


class RetryableSender(Sender):
    """Wraps a sender and re-attempts failed sends according to a policy.

    The backoff blocks the calling thread. ``configure`` rebuilds the policy
    from the channel's ``retry.*`` keys on top of ``base_config``; pass an
    explicit ``policy`` to bypass that.

    Args:
        delegate: Sender to wrap
        policy: Retry policy (default: exponential backoff from base_config)
        base_config: Defaults used when the channel config has no retry keys
        sleep: Blocking sleep taking seconds (default time.sleep)
    """

    def __init__(
        self,
        delegate: Sender,
        policy: Optional[RetryPolicy] = None,
        base_config: Optional[RetryConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delegate = delegate
        self._base_config = base_config or RetryConfig()
        self._fixed_policy = policy is not None
        self.policy: RetryPolicy = policy or ExponentialBackoffRetryPolicy(self._base_config)
        self._sleep = sleep

    @property
    def channel_type(self) -> str:
        return self.delegate.channel_type

    def configure(self, config: SenderConfiguration) -> None:
        if self._fixed_policy:
            return
        try:
            retry_config = self._base_config.with_overrides(config.config)
        except ValueError as e:
            raise SenderConfigurationError(str(e)) from e
        self.policy = ExponentialBackoffRetryPolicy(retry_config)

    def send(self, request: SendRequest) -> str:
        attempt = 1
        while True:
            try:
                return self.delegate.send(request)
            except Exception as e:
                if not self.policy.should_retry(attempt, e):
                    if attempt > 1:
                        logger.warning(
                            "send_retries_exhausted",
                            channel_type=self.channel_type,
                            attempts=attempt,
                            error=str(e),
                        )
                    raise
                delay_millis = self.policy.next_delay_millis(attempt)
                logger.info(
                    "send_retry_scheduled",
                    channel_type=self.channel_type,
                    attempt=attempt,
                    delay_millis=delay_millis,
                    error=str(e),
                )
                self._sleep(delay_millis / 1000.0)
                attempt += 1

    def destroy(self) -> None:
        self.delegate.destroy()
