"""
Dependency injection services.

Provides process-scoped provider functions for the dispatch pipeline.
"""

from notice.services.providers import (
    get_idempotency_cache,
    get_notice_service,
    get_sender_registry,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_sender_registry",
    "get_idempotency_cache",
    "get_notice_service",
]
