"""
Unit tests for the optional Logfire monitoring module.

This test suite covers:
- Environment variable parsing
- Initialization guards (disabled, missing token)
- Custom logging helpers degrading gracefully when Logfire is off
"""

import importlib
import os
from unittest.mock import MagicMock, patch

import sassify.core.monitoring as monitoring


class TestLogfireEnvironmentConfiguration:
    """Test environment variable configuration for Logfire."""

    def teardown_method(self):
        importlib.reload(monitoring)

    def test_logfire_disabled_by_default(self):
        with patch.dict(os.environ, {}, clear=True):
            importlib.reload(monitoring)

            assert monitoring.LOGFIRE_ENABLED is False
            assert monitoring.LOGFIRE_SERVICE_NAME == "sassify-server"

    def test_logfire_enabled_with_yes_string(self):
        with patch.dict(os.environ, {"LOGFIRE_ENABLED": "yes"}):
            importlib.reload(monitoring)

            assert monitoring.LOGFIRE_ENABLED is True


class TestInitializeLogfire:
    def test_disabled_does_not_configure(self):
        fake_logfire = MagicMock()
        with patch.object(monitoring, "LOGFIRE_ENABLED", False), patch.dict("sys.modules", {"logfire": fake_logfire}):
            monitoring.initialize_logfire()

        fake_logfire.configure.assert_not_called()

    def test_enabled_without_token_does_not_configure(self):
        fake_logfire = MagicMock()
        with (
            patch.object(monitoring, "LOGFIRE_ENABLED", True),
            patch.object(monitoring, "LOGFIRE_TOKEN", ""),
            patch.dict("sys.modules", {"logfire": fake_logfire}),
        ):
            monitoring.initialize_logfire()

        fake_logfire.configure.assert_not_called()

    def test_enabled_with_token_instruments_app(self):
        fake_logfire = MagicMock()
        app = MagicMock()
        with (
            patch.object(monitoring, "LOGFIRE_ENABLED", True),
            patch.object(monitoring, "LOGFIRE_TOKEN", "token"),
            patch.dict("sys.modules", {"logfire": fake_logfire}),
        ):
            monitoring.initialize_logfire(app)

        fake_logfire.configure.assert_called_once()
        fake_logfire.instrument_fastapi.assert_called_once_with(app=app)


class TestLoggingHelpers:
    def test_helpers_are_noops_when_disabled(self):
        fake_logfire = MagicMock()
        with patch.object(monitoring, "LOGFIRE_ENABLED", False), patch.dict("sys.modules", {"logfire": fake_logfire}):
            monitoring.log_llm_call("gpt-4o-mini", 120, purpose="blog")
            monitoring.log_webhook_event("stripe", "invoice.paid", "invoice_created")
            monitoring.log_error("ValueError", "boom")

        fake_logfire.info.assert_not_called()
        fake_logfire.error.assert_not_called()

    def test_webhook_event_is_forwarded_when_enabled(self):
        fake_logfire = MagicMock()
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.dict("sys.modules", {"logfire": fake_logfire}):
            monitoring.log_webhook_event("stripe", "invoice.paid", "invoice_created")

        fake_logfire.info.assert_called_once_with(
            "Webhook processed", provider="stripe", event_type="invoice.paid", outcome="invoice_created"
        )
