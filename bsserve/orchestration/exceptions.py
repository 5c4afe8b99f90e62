"""Custom exceptions for bsserve."""

from typing import Any, Dict, List, Optional

from bsserve.orchestration.error_handling import ErrorCategory, ErrorSeverity


class BSServeError(Exception):
    """Base exception for all bsserve errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
    ):
        """Initialize bsserve error.

        Args:
            message: Error message
            category: Error category
            severity: Error severity level
            details: Additional error details
            context: Error context information
            recovery_suggestions: Suggestions for error recovery
        """
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.details = details
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []


class BinaryNotFoundError(BSServeError):
    """No browser-sync executable could be located."""

    def __init__(
        self,
        message: str = "Unable to locate browser-sync binary.",
        searched: Optional[List[str]] = None,
        details: Optional[str] = None,
    ):
        context = {}
        if searched:
            context["searched"] = searched

        super().__init__(
            message=message,
            category=ErrorCategory.BINARY_RESOLUTION,
            severity=ErrorSeverity.CRITICAL,
            details=details,
            context=context,
            recovery_suggestions=[
                "Install Browsersync locally with `npm install browser-sync`",
                "Install Browsersync globally with `npm install -g browser-sync`",
                "Pass the binary location with --browser-sync PATH",
            ],
        )


class ValidationError(BSServeError):
    """A precondition for spawning the server does not hold."""

    def __init__(
        self,
        message: str,
        binary_path: Optional[str] = None,
        validation_type: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize validation error.

        Args:
            message: Error message
            binary_path: Binary that failed the version probe
            validation_type: Type of validation that failed
            details: Additional error details
            context: Error context information
        """
        context = context or {}
        if binary_path:
            context["binary_path"] = binary_path
        if validation_type:
            context["validation_type"] = validation_type

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION_FAILURE,
            severity=ErrorSeverity.CRITICAL,
            details=details,
            context=context,
        )


class SpawnError(BSServeError):
    """The OS refused to create the child process or its pseudo-terminal."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        details: Optional[str] = None,
    ):
        context = {}
        if command:
            context["command"] = command

        super().__init__(
            message=message,
            category=ErrorCategory.PROCESS_SPAWN,
            severity=ErrorSeverity.CRITICAL,
            details=details,
            context=context,
        )


class StreamReadError(BSServeError):
    """Reading the child's output failed after streaming began."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.STREAM_IO,
            severity=ErrorSeverity.MEDIUM,
            details=details,
        )


class CleanupError(BSServeError):
    """A generated file could not be removed."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        details: Optional[str] = None,
    ):
        context = {}
        if file_path:
            context["file_path"] = file_path

        super().__init__(
            message=message,
            category=ErrorCategory.FILE_OPERATION,
            severity=ErrorSeverity.LOW,
            details=details,
            context=context,
        )


class ConfigurationError(BSServeError):
    """Exception for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that caused error
            details: Additional error details
            context: Error context information
        """
        context = context or {}
        if config_key:
            context["config_key"] = config_key

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            details=details,
            context=context,
            recovery_suggestions=[
                "Review configuration file syntax",
                "Check the value passed on the command line",
                "Create a template with --create-config",
            ],
        )


class SiteBuildError(BSServeError):
    """The site build command failed."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        details: Optional[str] = None,
    ):
        context: Dict[str, Any] = {}
        if command:
            context["command"] = command
        if returncode is not None:
            context["returncode"] = returncode

        super().__init__(
            message=message,
            category=ErrorCategory.SITE_BUILD,
            severity=ErrorSeverity.HIGH,
            details=details,
            context=context,
        )
