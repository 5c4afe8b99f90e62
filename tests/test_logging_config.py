"""Tests for logging configuration."""

import logging
from unittest.mock import MagicMock

from bsserve.orchestration.config import LoggingConfig
from bsserve.orchestration.logging_config import (
    BSServeFormatter,
    get_logger,
    log_labelled,
    setup_logging,
)


class TestBSServeFormatter:
    """Tests for BSServeFormatter class."""

    def test_init_with_format_string(self):
        """Test formatter initialization with format string."""
        format_string = "%(levelname)s | %(name)s | %(message)s"
        formatter = BSServeFormatter(format_string)
        assert formatter._style._fmt == format_string

    def test_format_basic_record(self):
        """Test formatting a basic log record."""
        formatter = BSServeFormatter("%(levelname)s | %(name)s | %(message)s")
        record = logging.LogRecord(
            name="bsserve.browsersync.launcher",
            level=logging.INFO,
            pathname="",
            lineno=1,
            msg="Server address: http://127.0.0.1:4000",
            args=(),
            exc_info=None,
        )

        formatted = formatter.format(record)
        assert formatted == (
            "INFO | bsserve.browsersync.launcher | Server address: http://127.0.0.1:4000"
        )


class TestSetupLogging:
    """Tests for setup_logging function."""

    def setup_method(self):
        """Clear logging handlers before each test."""
        logger = logging.getLogger("bsserve")
        logger.handlers.clear()
        logger.propagate = True

    def test_setup_logging_default(self):
        """Test setup logging with default configuration."""
        setup_logging(LoggingConfig())

        logger = logging.getLogger("bsserve")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.propagate is False

    def test_setup_logging_without_config(self):
        """Test setup logging without a configuration."""
        setup_logging()

        assert logging.getLogger("bsserve").level == logging.INFO

    def test_setup_logging_debug_level(self):
        """Test setup logging with DEBUG level."""
        setup_logging(LoggingConfig(level="debug"))

        assert logging.getLogger("bsserve").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        """Test an unknown level falls back to INFO."""
        setup_logging(LoggingConfig(level="CHATTY"))

        assert logging.getLogger("bsserve").level == logging.INFO

    def test_setup_logging_custom_format(self):
        """Test setup logging with custom format string."""
        custom_format = "%(name)s - %(levelname)s - %(message)s"
        setup_logging(LoggingConfig(format_string=custom_format))

        formatter = logging.getLogger("bsserve").handlers[0].formatter
        assert isinstance(formatter, BSServeFormatter)
        assert formatter._style._fmt == custom_format

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """Test repeated setup keeps a single handler."""
        setup_logging()
        setup_logging()

        assert len(logging.getLogger("bsserve").handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self):
        """Test loggers are namespaced under bsserve."""
        logger = get_logger("browsersync.launcher")
        assert logger.name == "bsserve.browsersync.launcher"
        assert isinstance(logger, logging.Logger)


class TestLogLabelled:
    """Tests for log_labelled."""

    def test_short_label_is_right_aligned(self):
        """Test short labels are right-aligned."""
        logger = MagicMock()

        log_labelled(logger, logging.INFO, "UI address:", "http://127.0.0.1:3001")

        logger.log.assert_called_once_with(
            logging.INFO, "         UI address: http://127.0.0.1:3001"
        )

    def test_long_label_is_kept(self):
        """Test long labels are not truncated."""
        logger = MagicMock()

        log_labelled(logger, logging.DEBUG, "Generating browser-sync config file:", "x.js")

        logger.log.assert_called_once_with(
            logging.DEBUG, "Generating browser-sync config file: x.js"
        )
