"""In-process send metrics."""

import threading
from collections import Counter
from typing import Any, Dict, Optional


class NoticeMetrics:
    """Thread-safe counters for sent and failed notices.

    Example:
        metrics = NoticeMetrics()
        metrics.record_success(0.12)
        metrics.record_failure("RATE_LIMITED")
        metrics.get_stats()["failures_by_code"]  # {"RATE_LIMITED": 1}
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sent = 0
        self._failed = 0
        self._failures_by_code: Counter = Counter()
        self._total_send_seconds = 0.0

    def record_success(self, duration_seconds: float) -> None:
        with self._lock:
            self._sent += 1
            self._total_send_seconds += duration_seconds

    def record_failure(self, error_code: Optional[str]) -> None:
        with self._lock:
            self._failed += 1
            self._failures_by_code[error_code or "UNKNOWN"] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot of the counters.

        ``average_send_seconds`` covers successful sends only and is 0.0
        before the first one.
        """
        with self._lock:
            average = self._total_send_seconds / self._sent if self._sent else 0.0
            return {
                "sent": self._sent,
                "failed": self._failed,
                "failures_by_code": dict(self._failures_by_code),
                "total_send_seconds": self._total_send_seconds,
                "average_send_seconds": average,
            }

    def reset(self) -> None:
        with self._lock:
            self._sent = 0
            self._failed = 0
            self._failures_by_code.clear()
            self._total_send_seconds = 0.0
