"""Console channel: writes notices to the log instead of delivering them."""

import uuid

from notice.dispatch.channels.base import Sender
from notice.dispatch.models import SendRequest
from notice.logging import get_module_logger

logger = get_module_logger()


class ConsoleSender(Sender):
    """Log-only sender for development and tests."""

    @property
    def channel_type(self) -> str:
        """Channel identifier."""
        return "console"

    def send(self, request: SendRequest) -> str:
        receipt_id = uuid.uuid4().hex
        logger.info(
            "console_notice",
            target=request.target,
            cc=request.cc,
            content=request.template_content,
            receipt_id=receipt_id,
        )
        return receipt_id
