"""SMS channel implementation using an HTTP notification gateway."""

from typing import Optional

import requests

from notice.dispatch.channels.base import Sender
from notice.dispatch.exceptions import (
    RetryableSendError,
    SendError,
    SenderConfigurationError,
)
from notice.dispatch.models import SendRequest, SenderConfiguration
from notice.logging import get_module_logger

logger = get_module_logger()

MAX_SMS_LENGTH = 1600
DEFAULT_TIMEOUT_SECONDS = 10


class SmsSender(Sender):
    """SMS notification channel.

    Posts messages to ``{sms.api_url}/v2/notifications/sms`` using an API
    key header. Throttling (429) and server errors (5xx) are reported as
    retryable; any other non-success status is permanent.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()
        self._api_url: Optional[str] = None
        self._api_key: Optional[str] = None
        self._timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def channel_type(self) -> str:
        """Channel identifier."""
        return "sms"

    def configure(self, config: SenderConfiguration) -> None:
        values = config.config
        missing = [key for key in ("sms.api_url", "sms.api_key") if not values.get(key)]
        if missing:
            raise SenderConfigurationError(
                f"Missing SMS configuration: {', '.join(missing)}"
            )

        try:
            self._timeout = float(values.get("sms.timeout", DEFAULT_TIMEOUT_SECONDS))
        except (TypeError, ValueError) as e:
            raise SenderConfigurationError(f"Invalid SMS configuration: {e}") from e

        self._api_url = str(values["sms.api_url"]).rstrip("/")
        self._api_key = values["sms.api_key"]
        logger.info("initialized_sms_channel", api_url=self._api_url)

    def send(self, request: SendRequest) -> str:
        if self._api_url is None:
            raise SenderConfigurationError("SMS sender used before configure()")

        message = request.template_content
        if len(message) > MAX_SMS_LENGTH:
            logger.warning(
                "sms_message_truncated",
                target=request.target,
                original_length=len(message),
            )
            message = message[: MAX_SMS_LENGTH - 3] + "..."

        url = f"{self._api_url}/v2/notifications/sms"
        headers = {
            "Authorization": f"ApiKey-v1 {self._api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "phone_number": request.target,
            "message": message,
            "reference": request.request_id,
        }

        try:
            response = self._session.post(
                url, json=payload, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as e:
            logger.warning("sms_transient_failure", target=request.target, error=str(e))
            raise RetryableSendError(f"SMS gateway unreachable: {e}") from e

        status = response.status_code
        if status in (200, 201):
            receipt_id = response.json().get("id")
            if receipt_id is None or receipt_id == "":
                raise SendError("SMS gateway response has no notification id")
            receipt_id = str(receipt_id)
            logger.info("sms_sent", target=request.target, receipt_id=receipt_id)
            return receipt_id

        if status == 429 or status >= 500:
            retry_after = response.headers.get("Retry-After")
            logger.warning("sms_transient_failure", target=request.target, status_code=status)
            raise RetryableSendError(
                f"SMS gateway error: HTTP {status}",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        logger.error("sms_failed", target=request.target, status_code=status)
        raise SendError(f"SMS gateway error: HTTP {status}")

    def destroy(self) -> None:
        self._session.close()
