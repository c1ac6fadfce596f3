"""
Factory functions for dependency injection.

Provides process-scoped singleton providers for the dispatch pipeline.
"""

from functools import lru_cache

from notice.configuration import Settings
from notice.dispatch.gates import CacheIdempotencyStore
from notice.dispatch.plugins import register_plugin_senders
from notice.dispatch.registry import SenderRegistry, register_builtin_senders
from notice.dispatch.service import NoticeService
from notice.idempotency import IdempotencyCache, InMemoryIdempotencyCache


@lru_cache
def get_settings() -> Settings:
    """
    Get process-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_sender_registry() -> SenderRegistry:
    """
    Get process-scoped sender registry singleton.

    Senders come from installed plugins (the built-in console, email and SMS
    senders included) unless NOTICE_LOAD_PLUGINS is false, in which case
    only the built-in senders are registered.

    Returns:
        SenderRegistry: Cached registry shared by every NoticeService.
    """
    registry = SenderRegistry()
    if get_settings().dispatch.load_plugins:
        register_plugin_senders(registry)
    else:
        register_builtin_senders(registry)
    return registry


@lru_cache
def get_idempotency_cache() -> IdempotencyCache:
    """
    Get process-scoped idempotency cache singleton.

    Returns:
        IdempotencyCache: In-memory TTL cache.
    """
    return InMemoryIdempotencyCache()


@lru_cache
def get_notice_service() -> NoticeService:
    """
    Get process-scoped notice service singleton.

    Wires the shared sender registry and a cache-backed idempotency gate,
    so a request id is sent at most once per IDEMPOTENCY_TTL_SECONDS.

    Usage:
        from notice.services import get_notice_service

        result = get_notice_service().send(request, config)

    Returns:
        NoticeService: Cached service instance.
    """
    settings = get_settings()
    return NoticeService(
        registry=get_sender_registry(),
        idempotency_store=CacheIdempotencyStore(
            get_idempotency_cache(),
            ttl_seconds=settings.idempotency.IDEMPOTENCY_TTL_SECONDS,
            namespace=settings.idempotency.IDEMPOTENCY_NAMESPACE,
        ),
        settings=settings,
    )
