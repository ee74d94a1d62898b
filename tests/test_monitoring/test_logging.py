"""
Tests for creatorshare.monitoring.logging.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog

from creatorshare import __version__
from creatorshare.monitoring.logging import (
    add_service_info,
    add_timestamp,
    bind_context,
    configure_logging,
    log_duration,
    mask_wallet,
    sanitize_sensitive_data,
    unbind_context,
)

WALLET = "0x" + "1234" + "a" * 32 + "abcd"


# =============================================================================
# Processors
# =============================================================================


class TestProcessors:
    def test_timestamp_is_utc_iso(self) -> None:
        result = add_timestamp(None, "info", {"event": "x"})  # type: ignore[arg-type]
        assert result["timestamp"].endswith("+00:00")

    def test_service_info(self) -> None:
        result = add_service_info(None, "info", {"event": "x"})  # type: ignore[arg-type]
        assert result["service"] == "creatorshare"
        assert result["version"] == __version__


class TestMaskWallet:
    def test_masks_address(self) -> None:
        assert mask_wallet(WALLET) == "0x1234...abcd"

    def test_masks_inside_text(self) -> None:
        assert mask_wallet(f"paid {WALLET} twice") == "paid 0x1234...abcd twice"

    def test_leaves_short_hex_alone(self) -> None:
        assert mask_wallet("0xdeadbeef") == "0xdeadbeef"


class TestSanitizeSensitiveData:
    def test_redacts_secret_keys(self) -> None:
        event: dict[str, Any] = {
            "event": "frame_received",
            "message_bytes": "0a0b0c",
            "headers": {"Authorization": "Bearer abc"},
        }
        result = sanitize_sensitive_data(None, "info", event)  # type: ignore[arg-type]

        assert result["message_bytes"] == "[REDACTED]"
        assert result["headers"]["Authorization"] == "[REDACTED]"
        assert result["event"] == "frame_received"

    def test_masks_wallets_in_nested_values(self) -> None:
        event: dict[str, Any] = {"event": "tx", "wallets": [WALLET], "to": {"wallet": WALLET}}
        result = sanitize_sensitive_data(None, "info", event)  # type: ignore[arg-type]

        assert result["wallets"] == ["0x1234...abcd"]
        assert result["to"]["wallet"] == "0x1234...abcd"

    def test_non_strings_untouched(self) -> None:
        event: dict[str, Any] = {"amount": 1.5, "ok": True}
        result = sanitize_sensitive_data(None, "info", event)  # type: ignore[arg-type]
        assert result == {"amount": 1.5, "ok": True}


# =============================================================================
# Configuration and Context
# =============================================================================


class TestConfigureLogging:
    @pytest.mark.parametrize("json_output", [True, False])
    def test_configures(self, json_output: bool) -> None:
        configure_logging(level="WARNING", json_output=json_output)
        assert structlog.is_configured()

    def test_without_sanitizing(self) -> None:
        configure_logging(level="WARNING", sanitize_logs=False)
        processors = structlog.get_config()["processors"]
        assert sanitize_sensitive_data not in processors


class TestContext:
    def test_bind_and_unbind(self) -> None:
        bind_context(correlation_id="abc")
        assert structlog.contextvars.get_contextvars()["correlation_id"] == "abc"

        unbind_context("correlation_id")
        assert "correlation_id" not in structlog.contextvars.get_contextvars()


class TestLogDuration:
    def test_logs_completion(self) -> None:
        logger = MagicMock()
        with log_duration(logger, "content_query", page=2):
            pass

        name, kwargs = logger.debug.call_args.args[0], logger.debug.call_args.kwargs
        assert name == "content_query_completed"
        assert kwargs["page"] == 2
        assert kwargs["duration_ms"] >= 0

    def test_logs_failure_and_reraises(self) -> None:
        logger = MagicMock()
        with pytest.raises(ValueError), log_duration(logger, "content_query"):
            raise ValueError("boom")

        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "content_query_failed"
        assert logger.error.call_args.kwargs["error"] == "boom"
