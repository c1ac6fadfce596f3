"""Sender registry.

Maps channel types to sender factories and caches one configured sender per
channel type for the life of the registry.
"""

import threading
from typing import Callable, Dict, List, Type, Union

from notice.dispatch.channels import ConsoleSender, EmailSender, SmsSender
from notice.dispatch.channels.base import Sender
from notice.dispatch.exceptions import UnsupportedChannelError
from notice.dispatch.models import SenderConfiguration
from notice.logging import get_module_logger

logger = get_module_logger()

SenderFactory = Callable[[], Sender]


class SenderRegistry:
    """Registry of channel senders with identity caching.

    The first ``get_sender`` for a channel type builds the sender from its
    factory and configures it with the configuration passed on that call.
    Later calls return the same instance and ignore their configuration.

    Example:
        registry = SenderRegistry()
        registry.register("console", ConsoleSender)

        sender = registry.get_sender("console", SenderConfiguration(channel_type="console"))
        assert sender is registry.get_sender("CONSOLE", config)
    """

    def __init__(self):
        self._factories: Dict[str, SenderFactory] = {}
        self._instances: Dict[str, Sender] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(channel_type: str) -> str:
        if not channel_type or not channel_type.strip():
            raise UnsupportedChannelError("Channel type must not be blank")
        return channel_type.strip().lower()

    def register(
        self, channel_type: str, sender: Union[Type[Sender], SenderFactory, Sender]
    ) -> None:
        """Register a sender for a channel type.

        Args:
            channel_type: Channel key, case-insensitive
            sender: Sender subclass, zero-argument factory, or a Sender
                instance whose class is used as the factory
        """
        if isinstance(sender, Sender):
            factory: SenderFactory = type(sender)
        elif callable(sender):
            factory = sender
        else:
            raise TypeError(f"Cannot register {sender!r} as a sender factory")

        key = self._key(channel_type)
        with self._lock:
            replaced = key in self._factories
            self._factories[key] = factory
        logger.info("sender_registered", channel_type=key, replaced=replaced)

    def get_sender(self, channel_type: str, config: SenderConfiguration) -> Sender:
        """Return the cached sender for a channel, creating it on first use.

        Raises:
            UnsupportedChannelError: No sender is registered for the channel
            SenderConfigurationError: The new sender rejected the configuration
        """
        key = self._key(channel_type)
        with self._lock:
            sender = self._instances.get(key)
            if sender is not None:
                return sender

            factory = self._factories.get(key)
            if factory is None:
                raise UnsupportedChannelError(f"Unsupported channel type: {channel_type}")

            sender = factory()
            sender.configure(config)
            self._instances[key] = sender

        logger.info("sender_created", channel_type=key, sender=type(sender).__name__)
        return sender

    def destroy(self) -> None:
        """Destroy every cached sender once and clear the cache.

        Registrations are kept; the next ``get_sender`` builds a fresh sender.
        """
        with self._lock:
            instances = list(self._instances.items())
            self._instances.clear()

        for key, sender in instances:
            try:
                sender.destroy()
            except Exception as e:
                logger.error(
                    "sender_destroy_failed",
                    channel_type=key,
                    error=str(e),
                    exc_info=True,
                )
        logger.info("sender_registry_destroyed", destroyed=len(instances))

    def registered_channels(self) -> List[str]:
        with self._lock:
            return sorted(self._factories)

    def is_registered(self, channel_type: str) -> bool:
        if not channel_type:
            return False
        with self._lock:
            return channel_type.strip().lower() in self._factories


def register_builtin_senders(registry: SenderRegistry) -> None:
    """Register the console, email and SMS senders."""
    registry.register("console", ConsoleSender)
    registry.register("email", EmailSender)
    registry.register("sms", SmsSender)
