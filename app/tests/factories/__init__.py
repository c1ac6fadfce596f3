"""Test data factories for deterministic test data generation."""

from tests.factories.notices import (
    RecordingSender,
    ScriptedSender,
    make_failing_sender,
    make_flaky_sender,
    make_send_request,
    make_sender_configuration,
)

__all__ = [
    "RecordingSender",
    "ScriptedSender",
    "make_failing_sender",
    "make_flaky_sender",
    "make_send_request",
    "make_sender_configuration",
]
