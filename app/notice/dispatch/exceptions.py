"""Dispatch error taxonomy.

Only NoticeValidationError ever reaches a caller of NoticeService; every
other error is converted into a failed SendResult inside the pipeline.
"""

from typing import Optional


class NoticeException(Exception):
    """Base class for all dispatch errors."""


class NoticeValidationError(NoticeException, ValueError):
    """The request is structurally invalid (caller misuse)."""


class NoticeRejectedError(NoticeException):
    """An admission gate refused the request.

    Attributes:
        error_code: Machine code of the gate that refused (e.g. DUPLICATE_REQUEST)
    """

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.error_code = error_code


class SendError(NoticeException):
    """A channel failed to deliver; retrying will not help."""


class RetryableSendError(SendError):
    """A channel failed to deliver for a transient reason.

    Attributes:
        retry_after: Optional hint from the provider, in seconds
    """

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class SenderConfigurationError(NoticeException):
    """A channel configuration is missing required keys or has bad values."""


class UnsupportedChannelError(NoticeException):
    """No sender is registered for the requested channel type."""


class TemplateRenderError(NoticeException):
    """A template could not be rendered or its type is unknown."""
