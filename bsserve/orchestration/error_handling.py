"""Error reporting for the serve workflow."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur."""

    CONFIGURATION = "configuration"
    BINARY_RESOLUTION = "binary_resolution"
    VALIDATION_FAILURE = "validation_failure"
    SITE_BUILD = "site_build"
    PROCESS_SPAWN = "process_spawn"
    STREAM_IO = "stream_io"
    FILE_OPERATION = "file_operation"


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    recovery_suggestions: Optional[List[str]] = None

    def __post_init__(self):
        if self.recovery_suggestions is None:
            self.recovery_suggestions = []


class ErrorHandler:
    """Turns exceptions into logged, categorised error reports."""

    def __init__(self):
        """Initialize error handler."""
        self.logger = logging.getLogger("bsserve.error_handler")
        self.suggestion_handlers: Dict[ErrorCategory, Callable] = {
            ErrorCategory.BINARY_RESOLUTION: self._handle_binary_error,
            ErrorCategory.VALIDATION_FAILURE: self._handle_binary_error,
            ErrorCategory.PROCESS_SPAWN: self._handle_spawn_error,
            ErrorCategory.SITE_BUILD: self._handle_site_build_error,
            ErrorCategory.CONFIGURATION: self._handle_configuration_error,
        }

    def handle_error(
        self,
        exception: Exception,
        category: Optional[ErrorCategory] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """Log an error with its details and recovery suggestions.

        Args:
            exception: The exception that occurred
            category: Category of error. Taken from the exception when omitted.
            context: Additional context about the error

        Returns:
            ErrorInfo describing the error
        """
        if category is None:
            category = getattr(exception, "category", ErrorCategory.CONFIGURATION)

        merged_context = dict(getattr(exception, "context", None) or {})
        merged_context.update(context or {})

        error_info = ErrorInfo(
            category=category,
            severity=getattr(exception, "severity", None)
            or self._assess_severity(category),
            message=str(exception),
            details=getattr(exception, "details", None),
            context=merged_context,
            recovery_suggestions=list(
                getattr(exception, "recovery_suggestions", None) or []
            ),
        )

        if not error_info.recovery_suggestions and category in self.suggestion_handlers:
            error_info.recovery_suggestions = self.suggestion_handlers[category](
                error_info
            )

        self._log_error(error_info)

        return error_info

    def _assess_severity(self, category: ErrorCategory) -> ErrorSeverity:
        if category in (
            ErrorCategory.BINARY_RESOLUTION,
            ErrorCategory.VALIDATION_FAILURE,
            ErrorCategory.PROCESS_SPAWN,
        ):
            return ErrorSeverity.CRITICAL

        if category in (ErrorCategory.CONFIGURATION, ErrorCategory.SITE_BUILD):
            return ErrorSeverity.HIGH

        return ErrorSeverity.LOW

    def _log_error(self, error_info: ErrorInfo) -> None:
        """Log error information.

        Args:
            error_info: Error information to log
        """
        level_map = {
            ErrorSeverity.LOW: logging.DEBUG,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }

        level = level_map[error_info.severity]

        self.logger.log(level, error_info.message)

        if error_info.details:
            self.logger.log(level, f"Details: {error_info.details}")

        if error_info.recovery_suggestions:
            self.logger.info(
                f"Try: {'; '.join(error_info.recovery_suggestions)}"
            )

    def _handle_binary_error(self, error_info: ErrorInfo) -> List[str]:
        suggestions = [
            "Install Browsersync locally with `npm install browser-sync`",
            "Pass the binary location with --browser-sync PATH",
        ]
        binary = (error_info.context or {}).get("binary_path")
        if binary:
            suggestions.insert(0, f"Check that {binary} runs `--version`")
        return suggestions

    def _handle_spawn_error(self, error_info: ErrorInfo) -> List[str]:
        return [
            "Check that the browser-sync binary is executable",
            "Check that pseudo-terminals are available on this system",
        ]

    def _handle_site_build_error(self, error_info: ErrorInfo) -> List[str]:
        return [
            "Run the build command by hand to see its full output",
            "Use --skip-initial-build to serve an existing destination",
        ]

    def _handle_configuration_error(self, error_info: ErrorInfo) -> List[str]:
        return [
            "Review configuration file syntax",
            "Create a template with --create-config",
        ]
