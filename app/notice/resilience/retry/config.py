"""Retry policy configuration.

This module defines configuration for in-line send retries and how it is
read from settings and from a channel's SenderConfiguration.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from notice.configuration import RetrySettings

MAX_ATTEMPTS_KEY = "retry.maxAttempts"
INITIAL_DELAY_KEY = "retry.initialDelayMillis"
JITTER_KEY = "retry.jitterMillis"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for exponential backoff with jitter.

    Attributes:
        max_attempts: Total attempts, including the first one
        initial_delay_millis: Delay after the first failed attempt
        jitter_millis: Exclusive upper bound of the random delay added

    Example:
        # Default configuration
        config = RetryConfig()

        # Per-channel overrides on top of settings
        config = RetryConfig.from_settings(settings.retry).with_overrides(
            {"retry.maxAttempts": "5"}
        )
    """

    max_attempts: int = 3
    initial_delay_millis: int = 200
    jitter_millis: int = 100

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay_millis < 0:
            raise ValueError("initial_delay_millis must be >= 0")
        if self.jitter_millis < 0:
            raise ValueError("jitter_millis must be >= 0")

    @classmethod
    def from_settings(cls, settings: "RetrySettings") -> "RetryConfig":
        """Build the default config from RetrySettings."""
        return cls(
            max_attempts=settings.max_attempts,
            initial_delay_millis=settings.initial_delay_millis,
            jitter_millis=settings.jitter_millis,
        )

    def with_overrides(self, config: Optional[Mapping[str, Any]]) -> "RetryConfig":
        """Apply ``retry.*`` keys from a channel config.

        Values may be ints or numeric strings (channel configs are often
        loaded from text). Absent keys keep the current value.

        Args:
            config: Channel config mapping, may be None

        Returns:
            New RetryConfig with overrides applied

        Raises:
            ValueError: If a retry key is not an integer or is out of range
        """
        if not config:
            return self

        overrides = {}
        for key, field_name in (
            (MAX_ATTEMPTS_KEY, "max_attempts"),
            (INITIAL_DELAY_KEY, "initial_delay_millis"),
            (JITTER_KEY, "jitter_millis"),
        ):
            value = config.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or (
                isinstance(value, float) and not value.is_integer()
            ):
                raise ValueError(f"{key} must be an integer, got {value!r}")
            try:
                overrides[field_name] = int(value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"{key} must be an integer, got {value!r}") from e

        return replace(self, **overrides) if overrides else self
