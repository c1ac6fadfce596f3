"""Send interceptors.

Interceptors observe every send. ``before_send`` runs after the admission
gates and before rendering; ``after_send`` runs once the channel accepted
the message; ``on_error`` runs for any failure, gate rejections included.
"""

from notice.dispatch.models import SendRequest, SendResult
from notice.logging import get_module_logger

logger = get_module_logger()


class NoticeSendInterceptor:
    """Base interceptor with no-op hooks. Override the ones you need.

    An exception from ``before_send`` or ``after_send`` fails the send.
    Exceptions from ``on_error`` are logged and ignored.
    """

    def before_send(self, request: SendRequest) -> None:
        pass

    def after_send(self, request: SendRequest, result: SendResult) -> None:
        pass

    def on_error(self, request: SendRequest, error: BaseException) -> None:
        pass


class LoggingInterceptor(NoticeSendInterceptor):
    """Logs each stage of a send."""

    def before_send(self, request: SendRequest) -> None:
        logger.info("notice_before_send", target=request.target, cc_count=len(request.cc))

    def after_send(self, request: SendRequest, result: SendResult) -> None:
        logger.info("notice_after_send", receipt_id=result.receipt_id)

    def on_error(self, request: SendRequest, error: BaseException) -> None:
        logger.warning(
            "notice_on_error",
            error=str(error),
            error_type=type(error).__name__,
        )
