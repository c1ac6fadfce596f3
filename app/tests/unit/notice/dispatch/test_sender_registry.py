"""Unit tests for SenderRegistry."""

import threading

import pytest

from notice.dispatch.channels import ConsoleSender, EmailSender, SmsSender
from notice.dispatch.exceptions import SenderConfigurationError, UnsupportedChannelError
from notice.dispatch.registry import SenderRegistry, register_builtin_senders
from tests.factories.notices import RecordingSender, make_sender_configuration

pytestmark = pytest.mark.unit


class FailingConfigureSender(RecordingSender):
    def configure(self, config):
        raise SenderConfigurationError("mail.host is required")


class BrokenDestroySender(RecordingSender):
    def destroy(self):
        super().destroy()
        raise RuntimeError("socket already closed")


class TestRegister:
    def test_register_class(self):
        registry = SenderRegistry()
        registry.register("fake", RecordingSender)

        sender = registry.get_sender("fake", make_sender_configuration())

        assert isinstance(sender, RecordingSender)

    def test_register_instance_uses_its_class(self):
        registry = SenderRegistry()
        prototype = RecordingSender()
        registry.register("fake", prototype)

        sender = registry.get_sender("fake", make_sender_configuration())

        assert isinstance(sender, RecordingSender)
        assert sender is not prototype

    def test_register_rejects_non_callable(self):
        registry = SenderRegistry()

        with pytest.raises(TypeError):
            registry.register("fake", 42)

    def test_channel_keys_are_case_insensitive(self):
        registry = SenderRegistry()
        registry.register("Email", RecordingSender)

        assert registry.is_registered("EMAIL")
        assert registry.registered_channels() == ["email"]
        assert registry.get_sender("email", make_sender_configuration()) is registry.get_sender(
            "eMaIl", make_sender_configuration()
        )

    def test_is_registered_unknown(self):
        registry = SenderRegistry()

        assert registry.is_registered("fax") is False
        assert registry.is_registered("") is False

    def test_register_builtin_senders(self):
        registry = SenderRegistry()
        register_builtin_senders(registry)

        assert registry.registered_channels() == ["console", "email", "sms"]
        assert isinstance(
            registry.get_sender("console", make_sender_configuration("console")), ConsoleSender
        )


class TestGetSender:
    def test_identity_caching(self):
        registry = SenderRegistry()
        registry.register("fake", RecordingSender)
        config = make_sender_configuration()

        first = registry.get_sender("fake", config)
        second = registry.get_sender("fake", config)

        assert first is second
        assert first.configured_with == [config]

    def test_later_configuration_is_ignored(self):
        registry = SenderRegistry()
        registry.register("fake", RecordingSender)

        sender = registry.get_sender("fake", make_sender_configuration(config={"a": 1}))
        registry.get_sender("fake", make_sender_configuration(config={"a": 2}))

        assert len(sender.configured_with) == 1
        assert sender.configured_with[0].config == {"a": 1}

    def test_unknown_channel(self):
        registry = SenderRegistry()

        with pytest.raises(UnsupportedChannelError, match="fax"):
            registry.get_sender("fax", make_sender_configuration("fax"))

    def test_blank_channel(self):
        registry = SenderRegistry()

        with pytest.raises(UnsupportedChannelError):
            registry.get_sender("  ", make_sender_configuration())

    def test_configure_error_propagates_and_nothing_is_cached(self):
        registry = SenderRegistry()
        registry.register("fake", FailingConfigureSender)

        with pytest.raises(SenderConfigurationError):
            registry.get_sender("fake", make_sender_configuration())
        with pytest.raises(SenderConfigurationError):
            registry.get_sender("fake", make_sender_configuration())

    def test_builtin_email_configure_error_propagates(self):
        registry = SenderRegistry()
        register_builtin_senders(registry)

        with pytest.raises(SenderConfigurationError, match="mail.host"):
            registry.get_sender("email", make_sender_configuration("email"))

    def test_concurrent_first_use_creates_one_instance(self):
        created = []

        def factory():
            sender = RecordingSender()
            created.append(sender)
            return sender

        registry = SenderRegistry()
        registry.register("fake", factory)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(registry.get_sender("fake", make_sender_configuration()))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert all(sender is created[0] for sender in results)


class TestDestroy:
    def test_destroy_then_get_builds_fresh_instance(self):
        registry = SenderRegistry()
        registry.register("fake", RecordingSender)
        config = make_sender_configuration()
        old = registry.get_sender("fake", config)

        registry.destroy()
        new = registry.get_sender("fake", config)

        assert new is not old
        assert old.destroy_calls == 1
        assert new.configured_with == [config]

    def test_destroy_calls_each_sender_once(self):
        registry = SenderRegistry()
        registry.register("fake", RecordingSender)
        sender = registry.get_sender("fake", make_sender_configuration())

        registry.destroy()
        registry.destroy()

        assert sender.destroy_calls == 1

    def test_destroy_continues_after_failure(self):
        registry = SenderRegistry()
        registry.register("broken", BrokenDestroySender)
        registry.register("fake", RecordingSender)
        broken = registry.get_sender("broken", make_sender_configuration("broken"))
        healthy = registry.get_sender("fake", make_sender_configuration())

        registry.destroy()

        assert broken.destroy_calls == 1
        assert healthy.destroy_calls == 1

    def test_destroy_keeps_registrations(self):
        registry = SenderRegistry()
        registry.register("fake", RecordingSender)

        registry.destroy()

        assert registry.is_registered("fake")


def test_builtin_sender_classes_report_channel_types():
    assert ConsoleSender().channel_type == "console"
    assert EmailSender().channel_type == "email"
    assert SmsSender().channel_type == "sms"
