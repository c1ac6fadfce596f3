"""Idempotency key builder for consistent key generation."""

import hashlib
from typing import Any


class IdempotencyKeyBuilder:
    """Build deterministic idempotency keys.

    Provides a consistent key format with namespace isolation, so request
    ids from different senders sharing one cache cannot collide.

    Example:
        >>> builder = IdempotencyKeyBuilder(namespace="notice")
        >>> builder.build(operation="send", request_id="req-1")
        'notice:send:1f0c...'
    """

    def __init__(self, namespace: str):
        """Initialize key builder.

        Args:
            namespace: Namespace for key isolation (e.g., "notice")
        """
        if not namespace:
            raise ValueError("namespace is required")
        self.namespace = namespace

    def build(self, operation: str, **components: Any) -> str:
        """Build idempotency key from components.

        Args:
            operation: Operation type (e.g., "send")
            **components: Key components (request_id, channel_type, etc.)

        Returns:
            Idempotency key string
        """
        sorted_components = sorted(components.items())

        key_parts = [self.namespace, operation]
        key_parts.extend(f"{k}={v}" for k, v in sorted_components)
        key_string = "|".join(str(part) for part in key_parts)

        key_hash = hashlib.sha256(key_string.encode()).hexdigest()[:16]

        return f"{self.namespace}:{operation}:{key_hash}"
