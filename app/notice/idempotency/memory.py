"""In-process idempotency cache with per-entry TTL."""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from notice.idempotency.cache import IdempotencyCache
from notice.logging import get_module_logger

logger = get_module_logger()


class InMemoryIdempotencyCache(IdempotencyCache):
    """Thread-safe in-memory idempotency cache.

    Suitable for single-process deployments and tests. Expired entries are
    dropped lazily on read and when stats are collected.

    Attributes:
        clock: Monotonic time source (seconds), injectable for tests
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._entries: Dict[str, Tuple[float, Dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            expires_at, response = entry
            if self.clock() >= expires_at:
                del self._entries[key]
                self._misses += 1
                logger.debug("idempotency_entry_expired", idempotency_key=key)
                return None

            self._hits += 1
            return dict(response)

    def set(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        with self._lock:
            self._entries[key] = (self.clock() + ttl_seconds, dict(response))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            now = self.clock()
            expired = [k for k, (exp, _) in self._entries.items() if now >= exp]
            for key in expired:
                del self._entries[key]

            return {
                "backend": "memory",
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
