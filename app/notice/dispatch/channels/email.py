"""Email channel implementation using SMTP."""

import smtplib
import socket
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Any, Dict, Optional

from notice.dispatch.channels.base import Sender
from notice.dispatch.exceptions import (
    RetryableSendError,
    SendError,
    SenderConfigurationError,
)
from notice.dispatch.models import SendRequest, SenderConfiguration
from notice.logging import get_module_logger

logger = get_module_logger()

REQUIRED_KEYS = ("mail.host", "mail.username", "mail.password")

DEFAULT_PORT = 587
DEFAULT_SUBJECT = "Notification"
DEFAULT_TIMEOUT_SECONDS = 10


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class EmailSender(Sender):
    """Email notification channel using an SMTP relay.

    A connection is opened per message, so one configured instance can be
    shared between worker threads.

    Config keys:
        mail.host, mail.username, mail.password: Required
        mail.port: SMTP port (default 587)
        mail.from: From address (default mail.username)
        mail.subject: Subject line (default "Notification")
        mail.starttls: Upgrade the connection with STARTTLS (default true)
        mail.timeout: Socket timeout in seconds (default 10)
    """

    def __init__(self, smtp_factory=smtplib.SMTP):
        self._smtp_factory = smtp_factory
        self._settings: Optional[Dict[str, Any]] = None

    @property
    def channel_type(self) -> str:
        """Channel identifier."""
        return "email"

    def configure(self, config: SenderConfiguration) -> None:
        values = config.config
        missing = [key for key in REQUIRED_KEYS if not values.get(key)]
        if missing:
            raise SenderConfigurationError(
                f"Missing email configuration: {', '.join(missing)}"
            )

        try:
            port = int(values.get("mail.port", DEFAULT_PORT))
            timeout = float(values.get("mail.timeout", DEFAULT_TIMEOUT_SECONDS))
        except (TypeError, ValueError) as e:
            raise SenderConfigurationError(f"Invalid email configuration: {e}") from e

        self._settings = {
            "host": values["mail.host"],
            "port": port,
            "username": values["mail.username"],
            "password": values["mail.password"],
            "from": values.get("mail.from") or values["mail.username"],
            "subject": values.get("mail.subject", DEFAULT_SUBJECT),
            "starttls": _as_bool(values.get("mail.starttls", True)),
            "timeout": timeout,
        }
        logger.info(
            "initialized_email_channel",
            backend="smtp",
            host=self._settings["host"],
            port=port,
        )

    def send(self, request: SendRequest) -> str:
        if self._settings is None:
            raise SenderConfigurationError("Email sender used before configure()")

        settings = self._settings
        message_id = make_msgid()

        message = EmailMessage()
        message["Message-ID"] = message_id
        message["From"] = settings["from"]
        message["To"] = request.target
        if request.cc:
            message["Cc"] = ", ".join(request.cc)
        message["Subject"] = settings["subject"]
        message.set_content(request.template_content)

        try:
            with self._smtp_factory(
                settings["host"], settings["port"], timeout=settings["timeout"]
            ) as smtp:
                if settings["starttls"]:
                    smtp.starttls()
                smtp.login(settings["username"], settings["password"])
                smtp.send_message(message)
        except (smtplib.SMTPRecipientsRefused, smtplib.SMTPAuthenticationError) as e:
            logger.error("email_rejected", target=request.target, error=str(e))
            raise SendError(f"SMTP rejected message: {e}") from e
        except (
            smtplib.SMTPConnectError,
            smtplib.SMTPServerDisconnected,
            socket.timeout,
            ConnectionError,
        ) as e:
            logger.warning("email_transient_failure", target=request.target, error=str(e))
            raise RetryableSendError(f"SMTP connection failed: {e}") from e
        except smtplib.SMTPException as e:
            logger.error("email_send_error", target=request.target, error=str(e))
            raise SendError(f"SMTP error: {e}") from e

        logger.info("email_sent", target=request.target, message_id=message_id)
        return message_id
