"""Infrastructure settings for the dispatch pipeline."""

from notice.configuration.infrastructure.dispatch import DispatchSettings
from notice.configuration.infrastructure.idempotency import IdempotencySettings
from notice.configuration.infrastructure.retry import RetrySettings

__all__ = ["DispatchSettings", "IdempotencySettings", "RetrySettings"]
