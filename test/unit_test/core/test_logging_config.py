"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
log levels and formats, and that noisy third-party loggers are quietened.
"""

import logging

import pytest

from sassify.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    root_logger = logging.getLogger()
    handler = next((h for h in root_logger.handlers if isinstance(h, logging.StreamHandler)), None)
    assert handler is not None
    return handler


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level

    def test_setup_logging_replaces_existing_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        assert len(logging.getLogger().handlers) == 1


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        assert _console_handler().formatter._fmt == expected_format


class TestModuleLevels:
    def test_third_party_loggers_are_quiet(self):
        setup_logging(enable_file=False)

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_service_loggers_are_verbose(self):
        setup_logging(enable_file=False)

        assert MODULE_LOG_LEVELS["sassify.server.services"] == "DEBUG"
        assert logging.getLogger("sassify.server.services").level == logging.DEBUG

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("sassify.server.services.mailer")

        assert logger.name == "sassify.server.services.mailer"
        assert logger is logging.getLogger("sassify.server.services.mailer")
