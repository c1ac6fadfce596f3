"""Send-scoped context binding for structured logging.

Every log line emitted while a request is moving through the pipeline
carries the request id and channel, including lines written by senders,
renderers and interceptors.

Usage:
    from notice.logging import bind_send_context

    with bind_send_context(request_id="req-123", channel_type="email"):
        logger.info("rendering_template")

Dependencies:
    - structlog.contextvars
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_send_context(
    request_id: str,
    channel_type: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind send-scoped context to all logs within the context manager.

    Context is held in structlog contextvars, so each worker thread of the
    async pool sees only the request it is processing.

    Args:
        request_id: Request id of the send (also the idempotency key).
        channel_type: Channel the request is dispatched to.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"request_id": request_id}

    if channel_type is not None:
        context["channel_type"] = channel_type

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_request_id() -> Optional[str]:
    """Get the request id bound to the current logging context.

    Returns:
        The request id if a send is in progress on this thread, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("request_id")
