"""Configuration module - public API.

Centralized configuration for the notice dispatch pipeline using Pydantic
BaseSettings with one settings class per concern.

Exports:
    Settings: Main settings class (aggregator)
    DispatchSettings, RetrySettings, IdempotencySettings: Section classes

Example:
    ```python
    from notice.services import get_settings

    settings = get_settings()
    retry_enabled = settings.dispatch.retry_enabled
    ```
"""

from notice.configuration.settings import Settings
from notice.configuration.infrastructure import (
    DispatchSettings,
    IdempotencySettings,
    RetrySettings,
)

__all__ = ["Settings", "DispatchSettings", "IdempotencySettings", "RetrySettings"]
