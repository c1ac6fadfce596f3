"""Dispatch pipeline settings."""

from typing import Optional

from pydantic import Field

from notice.configuration.base import InfrastructureSettings


class DispatchSettings(InfrastructureSettings):
    """Notice dispatch pipeline configuration.

    Environment Variables:
        NOTICE_RETRY_ENABLED: Wrap resolved senders with the retry decorator (default: False)
        NOTICE_EXECUTOR_MAX_WORKERS: Worker pool size for async sends (default: CPU count)
        NOTICE_DEFAULT_TEMPLATE_TYPE: Renderer used when a configuration names none (default: text)
        NOTICE_LOAD_PLUGINS: Discover senders and interceptors from installed plugins (default: True)
    """

    retry_enabled: bool = Field(
        default=False,
        alias="NOTICE_RETRY_ENABLED",
        description="Wrap resolved senders with RetryableSender",
    )
    executor_max_workers: Optional[int] = Field(
        default=None,
        alias="NOTICE_EXECUTOR_MAX_WORKERS",
        description="Thread pool size for async dispatch (None = CPU count)",
    )
    default_template_type: str = Field(
        default="text",
        alias="NOTICE_DEFAULT_TEMPLATE_TYPE",
        description="Template renderer used when SenderConfiguration.template_type is unset",
    )
    load_plugins: bool = Field(
        default=True,
        alias="NOTICE_LOAD_PLUGINS",
        description="Load senders and interceptors from 'notice' entry points",
    )
