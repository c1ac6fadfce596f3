"""Idempotency cache.

Records completed operations under an idempotency key for a TTL so a retried
request can be recognised as a duplicate.

Usage:

    from notice.idempotency import InMemoryIdempotencyCache, IdempotencyKeyBuilder

    cache = InMemoryIdempotencyCache()
    key = IdempotencyKeyBuilder("notice").build("send", request_id="req-1")

    if cache.get(key) is None:
        ...
        cache.set(key, {"receipt_id": "abc"}, ttl_seconds=3600)
"""

from notice.idempotency.cache import IdempotencyCache
from notice.idempotency.key_builder import IdempotencyKeyBuilder
from notice.idempotency.memory import InMemoryIdempotencyCache

__all__ = [
    "IdempotencyCache",
    "IdempotencyKeyBuilder",
    "InMemoryIdempotencyCache",
]
