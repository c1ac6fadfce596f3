"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_send_context(): Context manager for send-scoped logging
    - get_request_id(): Request id bound to the current context

Formatters:
    - mask_sensitive_data(): Processor to redact credential-like fields
    - truncate_large_values(): Processor to limit string lengths

Example:
    from notice.logging import get_module_logger, bind_send_context

    logger = get_module_logger()

    with bind_send_context(request_id="req-123", channel_type="sms"):
        logger.info("dispatching")
"""

from notice.logging.setup import (
    configure_logging,
    get_module_logger,
)
from notice.logging.context import (
    bind_send_context,
    get_request_id,
)
from notice.logging.formatters import (
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_send_context",
    "get_request_id",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
