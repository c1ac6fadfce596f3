"""Idempotency infrastructure settings."""

from pydantic import Field

from notice.configuration.base import InfrastructureSettings


class IdempotencySettings(InfrastructureSettings):
    """Idempotency cache configuration for suppressing duplicate sends.

    Environment Variables:
        IDEMPOTENCY_TTL_SECONDS: Time-to-live for idempotency cache entries (default: 3600s = 1h)
        IDEMPOTENCY_NAMESPACE: Key namespace for request ids (default: notice)

    Example:
        ```python
        from notice.services import get_settings

        ttl = get_settings().idempotency.IDEMPOTENCY_TTL_SECONDS
        ```
    """

    IDEMPOTENCY_TTL_SECONDS: int = Field(default=3600, alias="IDEMPOTENCY_TTL_SECONDS")
    IDEMPOTENCY_NAMESPACE: str = Field(default="notice", alias="IDEMPOTENCY_NAMESPACE")
