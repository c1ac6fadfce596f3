"""Admission gates consulted before a notice is rendered and sent.

Gate order in the pipeline is idempotency, rate limit, then blacklist.
The no-op implementations admit everything and are the service defaults.
"""

import threading
import time
from abc import ABC, abstractmethod
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable, Optional, Set

from notice.dispatch.models import SendRequest
from notice.idempotency import IdempotencyCache, IdempotencyKeyBuilder
from notice.logging import get_module_logger

logger = get_module_logger()


class IdempotencyStore(ABC):
    """Remembers request ids that were sent successfully."""

    @abstractmethod
    def exists(self, request_id: str) -> bool:
        """Return True if the request id was already sent."""
        pass

    @abstractmethod
    def put(self, request_id: str) -> None:
        """Record a successfully sent request id."""
        pass


class RateLimiter(ABC):
    """Per-request admission by send rate.

    ``allow`` must not change state; the pipeline calls ``record`` only
    after a send succeeds.
    """

    @abstractmethod
    def allow(self, request: SendRequest) -> bool:
        pass

    @abstractmethod
    def record(self, request: SendRequest) -> None:
        pass


class BlacklistChecker(ABC):
    """Pure predicate rejecting blocked destinations."""

    @abstractmethod
    def is_blacklisted(self, request: SendRequest) -> bool:
        pass


class NoopIdempotencyStore(IdempotencyStore):
    def exists(self, request_id: str) -> bool:
        return False

    def put(self, request_id: str) -> None:
        return None


class NoopRateLimiter(RateLimiter):
    def allow(self, request: SendRequest) -> bool:
        return True

    def record(self, request: SendRequest) -> None:
        return None


class NoopBlacklistChecker(BlacklistChecker):
    def is_blacklisted(self, request: SendRequest) -> bool:
        return False


class InMemoryIdempotencyStore(IdempotencyStore):
    """Thread-safe set of sent request ids. Entries never expire."""

    def __init__(self):
        self._ids: Set[str] = set()
        self._lock = threading.Lock()

    def exists(self, request_id: str) -> bool:
        with self._lock:
            return request_id in self._ids

    def put(self, request_id: str) -> None:
        with self._lock:
            self._ids.add(request_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)


class CacheIdempotencyStore(IdempotencyStore):
    """Idempotency store backed by a TTL IdempotencyCache.

    Request ids are namespaced through IdempotencyKeyBuilder so several
    services can share one cache backend.

    Args:
        cache: Cache backend
        ttl_seconds: How long a sent request id blocks duplicates
        namespace: Key namespace
    """

    def __init__(
        self,
        cache: IdempotencyCache,
        ttl_seconds: int = 3600,
        namespace: str = "notice",
    ):
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self._keys = IdempotencyKeyBuilder(namespace)

    def _key(self, request_id: str) -> str:
        return self._keys.build("send", request_id=request_id)

    def exists(self, request_id: str) -> bool:
        return self.cache.get(self._key(request_id)) is not None

    def put(self, request_id: str) -> None:
        self.cache.set(
            self._key(request_id),
            {"request_id": request_id, "sent_at": time.time()},
            ttl_seconds=self.ttl_seconds,
        )


class InMemoryRateLimiter(RateLimiter):
    """Per-target limit of ``max_requests`` sends in any ``window_seconds``.

    Example:
        # At most 5 notices per recipient per minute
        limiter = InMemoryRateLimiter(max_requests=5, window_seconds=60)
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sent: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    @staticmethod
    def _target_key(request: SendRequest) -> str:
        return (request.target or "").strip().lower()

    def _recent(self, key: str, now: float) -> int:
        timestamps = self._sent.get(key)
        if not timestamps:
            return 0
        cutoff = now - self.window_seconds
        return sum(1 for ts in timestamps if ts > cutoff)

    def allow(self, request: SendRequest) -> bool:
        with self._lock:
            return self._recent(self._target_key(request), self._clock()) < self.max_requests

    def record(self, request: SendRequest) -> None:
        key = self._target_key(request)
        with self._lock:
            now = self._clock()
            timestamps = self._sent[key]
            cutoff = now - self.window_seconds
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()
            timestamps.append(now)


class InMemoryBlacklistChecker(BlacklistChecker):
    """Rejects requests whose target or any cc address is blocked.

    Matching is case-insensitive and ignores surrounding whitespace.
    """

    def __init__(self, blocked: Optional[Iterable[str]] = None):
        self._blocked: Set[str] = set()
        self._lock = threading.Lock()
        for address in blocked or ():
            self.add(address)

    @staticmethod
    def _normalize(address: str) -> str:
        return address.strip().lower()

    def add(self, address: str) -> None:
        with self._lock:
            self._blocked.add(self._normalize(address))

    def remove(self, address: str) -> None:
        with self._lock:
            self._blocked.discard(self._normalize(address))

    def is_blacklisted(self, request: SendRequest) -> bool:
        addresses = [request.target or ""] + list(request.cc)
        with self._lock:
            hit = next(
                (a for a in addresses if self._normalize(a) in self._blocked), None
            )
        if hit is not None:
            logger.debug("blacklisted_address", address=hit)
        return hit is not None
