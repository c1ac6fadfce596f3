"""Unit tests for settings classes."""

import pytest

from notice.configuration import (
    DispatchSettings,
    IdempotencySettings,
    RetrySettings,
    Settings,
)

pytestmark = pytest.mark.unit

ENV_VARS = [
    "PREFIX",
    "LOG_LEVEL",
    "NOTICE_RETRY_ENABLED",
    "NOTICE_EXECUTOR_MAX_WORKERS",
    "NOTICE_DEFAULT_TEMPLATE_TYPE",
    "NOTICE_LOAD_PLUGINS",
    "RETRY_MAX_ATTEMPTS",
    "RETRY_INITIAL_DELAY_MILLIS",
    "RETRY_JITTER_MILLIS",
    "IDEMPOTENCY_TTL_SECONDS",
    "IDEMPOTENCY_NAMESPACE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the process environment and any local .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_dispatch_defaults(self):
        settings = DispatchSettings()

        assert settings.retry_enabled is False
        assert settings.executor_max_workers is None
        assert settings.default_template_type == "text"
        assert settings.load_plugins is True

    def test_retry_defaults(self):
        settings = RetrySettings()

        assert settings.max_attempts == 3
        assert settings.initial_delay_millis == 200
        assert settings.jitter_millis == 100

    def test_idempotency_defaults(self):
        settings = IdempotencySettings()

        assert settings.IDEMPOTENCY_TTL_SECONDS == 3600
        assert settings.IDEMPOTENCY_NAMESPACE == "notice"

    def test_aggregator_builds_sections(self):
        settings = Settings()

        assert isinstance(settings.dispatch, DispatchSettings)
        assert isinstance(settings.retry, RetrySettings)
        assert isinstance(settings.idempotency, IdempotencySettings)
        assert settings.LOG_LEVEL == "INFO"


class TestEnvironmentOverrides:
    def test_dispatch_from_env(self, monkeypatch):
        monkeypatch.setenv("NOTICE_RETRY_ENABLED", "true")
        monkeypatch.setenv("NOTICE_EXECUTOR_MAX_WORKERS", "8")
        monkeypatch.setenv("NOTICE_DEFAULT_TEMPLATE_TYPE", "jinja2")
        monkeypatch.setenv("NOTICE_LOAD_PLUGINS", "false")

        settings = Settings()

        assert settings.dispatch.retry_enabled is True
        assert settings.dispatch.executor_max_workers == 8
        assert settings.dispatch.default_template_type == "jinja2"
        assert settings.dispatch.load_plugins is False

    def test_retry_from_env(self, monkeypatch):
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "6")
        monkeypatch.setenv("RETRY_JITTER_MILLIS", "0")

        settings = RetrySettings()

        assert settings.max_attempts == 6
        assert settings.jitter_millis == 0

    def test_env_file_is_read(self, tmp_path):
        (tmp_path / ".env").write_text("IDEMPOTENCY_TTL_SECONDS=60\n")

        assert IdempotencySettings().IDEMPOTENCY_TTL_SECONDS == 60

    def test_explicit_section_wins(self, monkeypatch):
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "6")

        settings = Settings(retry=RetrySettings(RETRY_MAX_ATTEMPTS=2))

        assert settings.retry.max_attempts == 2


class TestIsProduction:
    def test_production_without_prefix(self):
        assert Settings().is_production is True

    def test_not_production_with_prefix(self, monkeypatch):
        monkeypatch.setenv("PREFIX", "dev-")

        assert Settings().is_production is False
