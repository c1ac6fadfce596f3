"""Notice dispatch pipeline.

Public API:
    NoticeService: Sync, async and batch send entry points
    SendRequest, SendResult, SenderConfiguration: Pipeline value objects
    SenderRegistry: Channel type to sender mapping with identity caching
    Sender and channel implementations: see notice.dispatch.channels

Usage:
    from notice.dispatch import NoticeService, SendRequest, SenderConfiguration

    service = NoticeService()
    result = service.send(
        SendRequest(request_id="req-1", target="+15555550100", template_content="Deploy {{version}} done",
                    variables={"version": "1.4.2"}),
        SenderConfiguration(channel_type="sms", config={"sms.api_url": "...", "sms.api_key": "..."}),
    )
"""

from notice.dispatch.exceptions import (
    NoticeException,
    NoticeRejectedError,
    NoticeValidationError,
    RetryableSendError,
    SendError,
    SenderConfigurationError,
    TemplateRenderError,
    UnsupportedChannelError,
)
from notice.dispatch.gates import (
    BlacklistChecker,
    CacheIdempotencyStore,
    IdempotencyStore,
    InMemoryBlacklistChecker,
    InMemoryIdempotencyStore,
    InMemoryRateLimiter,
    NoopBlacklistChecker,
    NoopIdempotencyStore,
    NoopRateLimiter,
    RateLimiter,
)
from notice.dispatch.interceptors import LoggingInterceptor, NoticeSendInterceptor
from notice.dispatch.metrics import NoticeMetrics
from notice.dispatch.models import (
    SendErrorCode,
    SendRequest,
    SendResult,
    SenderConfiguration,
)
from notice.dispatch.registry import SenderRegistry, register_builtin_senders
from notice.dispatch.rendering import (
    TemplateRenderer,
    TemplateRendererRegistry,
    get_renderer,
)
from notice.dispatch.service import NoticeService

__all__ = [
    # Service
    "NoticeService",
    # Models
    "SendErrorCode",
    "SendRequest",
    "SendResult",
    "SenderConfiguration",
    # Registry
    "SenderRegistry",
    "register_builtin_senders",
    # Gates and interceptors
    "IdempotencyStore",
    "RateLimiter",
    "BlacklistChecker",
    "NoopIdempotencyStore",
    "NoopRateLimiter",
    "NoopBlacklistChecker",
    "InMemoryIdempotencyStore",
    "CacheIdempotencyStore",
    "InMemoryRateLimiter",
    "InMemoryBlacklistChecker",
    "NoticeSendInterceptor",
    "LoggingInterceptor",
    # Rendering
    "TemplateRenderer",
    "TemplateRendererRegistry",
    "get_renderer",
    # Metrics
    "NoticeMetrics",
    # Exceptions
    "NoticeException",
    "NoticeValidationError",
    "NoticeRejectedError",
    "SendError",
    "RetryableSendError",
    "SenderConfigurationError",
    "UnsupportedChannelError",
    "TemplateRenderError",
]
