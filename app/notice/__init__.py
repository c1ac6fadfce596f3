"""Multi-channel notice dispatch.

Subpackages:
- configuration: Settings management (Settings, DispatchSettings, RetrySettings)
- logging: Structured logging (configure_logging, get_module_logger)
- dispatch: Send pipeline, gates, renderers, channel senders (NoticeService)
- idempotency: TTL idempotency cache and key builder
- resilience: Retry configuration and backoff policies
- services: Process-scoped providers (get_settings, get_notice_service)
"""

__version__ = "0.1.0"
