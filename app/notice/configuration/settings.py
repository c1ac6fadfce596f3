"""Notice dispatch configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from notice.configuration.infrastructure import (
    DispatchSettings,
    IdempotencySettings,
    RetrySettings,
)


class Settings(BaseSettings):
    """Notice dispatch configuration settings - main aggregator.

    Aggregates the per-concern settings into a single configuration object:

    - **dispatch**: Pipeline behavior (retry wrapping, worker pool, renderer)
    - **retry**: Default backoff policy for retry-wrapped senders
    - **idempotency**: Duplicate suppression cache

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from notice.services import get_settings

        settings = get_settings()

        if settings.dispatch.retry_enabled:
            max_attempts = settings.retry.max_attempts
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    dispatch: DispatchSettings
    retry: RetrySettings
    idempotency: IdempotencySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "dispatch": DispatchSettings,
            "retry": RetrySettings,
            "idempotency": IdempotencySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
