"""Sender abstract base class.

All channel implementations (console, email, SMS) must implement this interface.
"""

from abc import ABC, abstractmethod

from notice.dispatch.models import SendRequest, SenderConfiguration


class Sender(ABC):
    """Abstract base class for channel senders.

    A sender is created by the SenderRegistry, configured once with the
    channel's SenderConfiguration, then shared by every pipeline invocation
    for that channel until the registry is destroyed. Implementations must
    therefore tolerate concurrent ``send`` calls.

    Error contract for ``send``:
    - RetryableSendError for transient failures (timeouts, 5xx, throttling)
    - SendError (or any other exception) for failures retrying cannot fix

    Example Implementation:
        class WebhookSender(Sender):

            @property
            def channel_type(self) -> str:
                return "webhook"

            def configure(self, config: SenderConfiguration) -> None:
                self._url = config.config["webhook.url"]

            def send(self, request: SendRequest) -> str:
                response = requests.post(self._url, json={"text": request.template_content})
                return response.json()["id"]
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Channel identifier (console, email, sms).

        Returns:
            Channel type string used for registry lookup and logging
        """
        pass

    @abstractmethod
    def send(self, request: SendRequest) -> str:
        """Deliver a rendered request.

        Args:
            request: Request whose template_content has been rendered

        Returns:
            Channel-specific receipt id

        Raises:
            RetryableSendError: Transient delivery failure
            SendError: Permanent delivery failure
        """
        pass

    def configure(self, config: SenderConfiguration) -> None:
        """Apply channel configuration. Called once, before the first send.

        Args:
            config: Channel configuration

        Raises:
            SenderConfigurationError: Required keys are missing or invalid
        """

    def destroy(self) -> None:
        """Release resources held by the sender (connections, sessions)."""
