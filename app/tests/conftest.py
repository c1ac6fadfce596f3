"""Shared fixtures for notice dispatch tests."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from notice.configuration import DispatchSettings, Settings
from notice.dispatch.registry import SenderRegistry
from notice.dispatch.service import NoticeService
from tests.factories.notices import (
    RecordingSender,
    make_send_request,
    make_sender_configuration,
)


@pytest.fixture
def notice_settings():
    """Settings with plugin discovery and retry wrapping turned off."""
    return Settings(
        dispatch=DispatchSettings(
            NOTICE_RETRY_ENABLED=False,
            NOTICE_LOAD_PLUGINS=False,
            NOTICE_EXECUTOR_MAX_WORKERS=4,
        )
    )


@pytest.fixture
def send_request_factory():
    """Factory for SendRequest instances with unique request ids."""
    return make_send_request


@pytest.fixture
def sender_config_factory():
    """Factory for SenderConfiguration instances (channel ``fake`` by default)."""
    return make_sender_configuration


@pytest.fixture
def recording_sender():
    return RecordingSender()


@pytest.fixture
def sender_registry(recording_sender):
    """Registry whose ``fake`` channel always resolves to ``recording_sender``."""
    registry = SenderRegistry()
    registry.register("fake", lambda: recording_sender)
    return registry


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def notice_service_factory(notice_settings, sender_registry, executor):
    """Factory for NoticeService instances wired for tests.

    Defaults to the ``sender_registry`` fixture, the shared executor and a
    sleep that returns immediately. Keyword arguments override any
    constructor argument.

    Example:
        service = notice_service_factory(idempotency_store=InMemoryIdempotencyStore())
    """
    services = []

    def _factory(**kwargs) -> NoticeService:
        kwargs.setdefault("registry", sender_registry)
        kwargs.setdefault("settings", notice_settings)
        kwargs.setdefault("executor", executor)
        kwargs.setdefault("load_plugins", False)
        kwargs.setdefault("sleep", lambda seconds: None)
        service = NoticeService(**kwargs)
        services.append(service)
        return service

    yield _factory

    for service in services:
        service.destroy()
