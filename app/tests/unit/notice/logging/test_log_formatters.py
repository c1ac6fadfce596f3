"""Unit tests for custom structlog processors."""

import pytest

from notice.logging import mask_sensitive_data, truncate_large_values

pytestmark = pytest.mark.unit


class TestMaskSensitiveData:
    def test_masks_sensitive_keys(self):
        processor = mask_sensitive_data()

        result = processor(
            None,
            "info",
            {"event": "configured", "password": "hunter2", "API_KEY": "abc", "host": "smtp"},
        )

        assert result == {
            "event": "configured",
            "password": "***REDACTED***",
            "API_KEY": "***REDACTED***",
            "host": "smtp",
        }

    def test_masks_nested_config_values(self):
        processor = mask_sensitive_data()

        result = processor(
            None,
            "info",
            {"config": {"mail.password": "hunter2", "mail.host": "smtp", "sms.api_key": "k"}},
        )

        assert result["config"] == {
            "mail.password": "***REDACTED***",
            "mail.host": "smtp",
            "sms.api_key": "***REDACTED***",
        }

    def test_none_values_are_not_masked(self):
        result = mask_sensitive_data()(None, "info", {"token": None})

        assert result == {"token": None}

    def test_custom_mask_and_patterns(self):
        processor = mask_sensitive_data(mask_value="***", additional_patterns=frozenset({"phone"}))

        result = processor(None, "info", {"phone_number": "+15555550100"})

        assert result == {"phone_number": "***"}


class TestTruncateLargeValues:
    def test_truncates_long_strings(self):
        result = truncate_large_values(max_length=10)(None, "info", {"content": "x" * 25})

        assert result["content"] == "x" * 10 + "...[truncated, 25 chars total]"

    def test_leaves_short_and_non_string_values(self):
        event = {"content": "short", "count": 10**12}

        assert truncate_large_values(max_length=10)(None, "info", event) == event
