"""Dispatch pipeline value objects.

Uses Pydantic BaseModel for:
- Runtime type validation of requests and configurations
- Frozen, self-checking results
- Consistent serialization (model_dump) for logs and idempotency records
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class SendErrorCode(str, Enum):
    """Machine codes carried by failed SendResults."""

    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    BLACKLISTED = "BLACKLISTED"
    SEND_FAILED = "SEND_FAILED"


class SendRequest(BaseModel):
    """A single notification to deliver.

    The request shape is checked by NoticeService.send rather than by the
    model, so a blank request id, target or template reaches the service
    and is reported there as NoticeValidationError.

    Attributes:
        request_id: Unique id; doubles as the idempotency key
        target: Destination address (email, phone number, user id...)
        template_content: Template text; replaced by the rendered output
        cc: Secondary targets, honored by channels that support them
        variables: Substitution values for the template

    Example:
        request = SendRequest(
            request_id="order-123-shipped",
            target="user@example.com",
            template_content="Hello {{name}}, your order shipped.",
            variables={"name": "Ada"},
        )
    """

    request_id: Optional[str] = None
    target: Optional[str] = None
    template_content: Optional[str] = None
    cc: List[str] = Field(default_factory=list)
    variables: Dict[str, Any] = Field(default_factory=dict)


class SendResult(BaseModel):
    """Outcome of a send.

    Exactly one of ``receipt_id`` (success) and ``error_message`` (failure)
    is set. ``request_id`` is always populated for correlation.

    Attributes:
        success: Whether the channel accepted the message
        request_id: Id of the request this result belongs to
        receipt_id: Channel-specific receipt (message id, provider id...)
        error_message: Human-readable failure reason
        error_code: Machine code for the failure category
    """

    model_config = {"frozen": True}

    success: bool
    request_id: str
    receipt_id: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    @model_validator(mode="after")
    def check_outcome(self) -> "SendResult":
        """Enforce receipt on success and error message on failure."""
        if self.success:
            if self.receipt_id is None or self.error_message is not None:
                raise ValueError("successful result needs receipt_id and no error_message")
        else:
            if self.error_message is None or self.receipt_id is not None:
                raise ValueError("failed result needs error_message and no receipt_id")
        return self

    @property
    def is_success(self) -> bool:
        """Check if delivery was successful."""
        return self.success

    @classmethod
    def ok(cls, request_id: str, receipt_id: str) -> "SendResult":
        """Create a successful result."""
        return cls(success=True, request_id=request_id, receipt_id=receipt_id)

    @classmethod
    def fail(
        cls,
        error_message: Optional[str],
        request_id: str,
        error_code: Optional[str] = SendErrorCode.SEND_FAILED.value,
    ) -> "SendResult":
        """Create a failed result.

        An empty or missing message (e.g. an exception raised without
        arguments) is replaced by a generic one so the result stays valid.
        """
        return cls(
            success=False,
            request_id=request_id,
            error_message=error_message or "Notice send failed",
            error_code=error_code,
        )


class SenderConfiguration(BaseModel):
    """Channel selection and channel-specific configuration.

    Attributes:
        channel_type: Registry key of the channel (case-insensitive)
        config: Opaque channel settings; also carries ``retry.*`` overrides
        template_type: Renderer to use; None selects the configured default

    Example:
        config = SenderConfiguration(
            channel_type="email",
            config={
                "mail.host": "smtp.example.com",
                "mail.username": "noreply@example.com",
                "mail.password": "...",
                "retry.maxAttempts": 5,
            },
            template_type="text",
        )
    """

    channel_type: str
    config: Dict[str, Any] = Field(default_factory=dict)
    template_type: Optional[str] = None
