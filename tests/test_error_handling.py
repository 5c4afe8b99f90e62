"""Tests for error handling."""

import logging
from unittest.mock import MagicMock

import pytest

from bsserve.orchestration.error_handling import (
    ErrorCategory,
    ErrorHandler,
    ErrorInfo,
    ErrorSeverity,
)
from bsserve.orchestration.exceptions import (
    CleanupError,
    SiteBuildError,
    StreamReadError,
    ValidationError,
)


@pytest.fixture
def handler():
    handler = ErrorHandler()
    handler.logger = MagicMock()
    return handler


class TestErrorInfo:
    """Tests for ErrorInfo."""

    def test_defaults(self):
        """Test suggestions default to an empty list."""
        info = ErrorInfo(
            category=ErrorCategory.STREAM_IO,
            severity=ErrorSeverity.MEDIUM,
            message="read failed",
        )

        assert info.recovery_suggestions == []


class TestErrorHandler:
    """Tests for ErrorHandler."""

    def test_takes_category_and_severity_from_exception(self, handler):
        """Test category, severity and context come from a BSServeError."""
        info = handler.handle_error(SiteBuildError("Site build failed", returncode=1))

        assert info.category == ErrorCategory.SITE_BUILD
        assert info.severity == ErrorSeverity.HIGH
        assert info.context == {"returncode": 1}

    def test_plain_exception_uses_given_category(self, handler):
        """Test a plain exception takes the category it is given."""
        info = handler.handle_error(
            RuntimeError("no pty"), ErrorCategory.PROCESS_SPAWN, {"pid": None}
        )

        assert info.severity == ErrorSeverity.CRITICAL
        assert info.context == {"pid": None}
        assert info.recovery_suggestions

    def test_plain_exception_without_category(self, handler):
        """Test a plain exception without a category is a configuration error."""
        info = handler.handle_error(RuntimeError("boom"))

        assert info.category == ErrorCategory.CONFIGURATION
        assert info.severity == ErrorSeverity.HIGH

    def test_binary_suggestions_name_the_binary(self, handler):
        """Test binary suggestions mention the failing binary."""
        info = handler.handle_error(ValidationError("bad", binary_path="/bin/bs"))

        assert "/bin/bs" in info.recovery_suggestions[0]

    def test_log_levels(self, handler):
        """Test medium severity errors log at WARNING."""
        handler.handle_error(StreamReadError("read failed", details="EBADF"))

        handler.logger.log.assert_any_call(logging.WARNING, "read failed")
        handler.logger.log.assert_any_call(logging.WARNING, "Details: EBADF")

    def test_critical_errors_log_suggestions(self, handler):
        """Test critical errors log their recovery suggestions."""
        handler.handle_error(ValidationError("bad binary", binary_path="/bin/bs"))

        handler.logger.log.assert_called_once_with(logging.CRITICAL, "bad binary")
        message = handler.logger.info.call_args.args[0]
        assert message.startswith("Try: ")
        assert "npm install browser-sync" in message

    def test_low_severity_logs_at_debug(self, handler):
        """Test low severity errors log at DEBUG."""
        handler.handle_error(CleanupError("cannot delete"))

        handler.logger.log.assert_called_once_with(logging.DEBUG, "cannot delete")
        handler.logger.info.assert_not_called()
