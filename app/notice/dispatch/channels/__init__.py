"""Channel senders.

Each sender delivers a rendered SendRequest over one transport and returns a
receipt id. RetryableSender wraps any of them with backoff retries.
"""

from notice.dispatch.channels.base import Sender
from notice.dispatch.channels.console import ConsoleSender
from notice.dispatch.channels.email import EmailSender
from notice.dispatch.channels.retryable import RetryableSender
from notice.dispatch.channels.sms import SmsSender

__all__ = [
    "Sender",
    "ConsoleSender",
    "EmailSender",
    "RetryableSender",
    "SmsSender",
]
