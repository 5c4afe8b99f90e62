"""Exit codes for bsserve."""

import signal
from enum import IntEnum
from typing import Dict

from bsserve.orchestration.error_handling import ErrorCategory, ErrorSeverity


class ExitCode(IntEnum):
    """Exit codes for different failure scenarios."""

    # Success
    SUCCESS = 0

    # General errors (1-10)
    GENERAL_ERROR = 1

    # Configuration errors (11-20)
    CONFIGURATION_ERROR = 11
    INVALID_CONFIG_FILE = 12

    # Binary errors (21-30)
    BINARY_NOT_FOUND = 21
    BINARY_VALIDATION_FAILED = 22
    DESTINATION_NOT_FOUND = 23

    # Site build errors (31-40)
    SITE_BUILD_FAILED = 31

    # Process errors (41-50)
    SPAWN_FAILED = 41

    # Interrupted (SIGINT)
    KEYBOARD_INTERRUPT = 130


class ExitCodeManager:
    """Manager for exit codes and termination logic."""

    def __init__(self):
        """Initialize exit code manager."""
        self._error_to_exit_code: Dict[ErrorCategory, ExitCode] = {
            ErrorCategory.CONFIGURATION: ExitCode.CONFIGURATION_ERROR,
            ErrorCategory.BINARY_RESOLUTION: ExitCode.BINARY_NOT_FOUND,
            ErrorCategory.VALIDATION_FAILURE: ExitCode.BINARY_VALIDATION_FAILED,
            ErrorCategory.SITE_BUILD: ExitCode.SITE_BUILD_FAILED,
            ErrorCategory.PROCESS_SPAWN: ExitCode.SPAWN_FAILED,
        }

    def get_exit_code_for_error(
        self,
        category: ErrorCategory,
        severity: ErrorSeverity,
        error_message: str = "",
    ) -> ExitCode:
        """Get appropriate exit code for an error.

        Args:
            category: Error category
            severity: Error severity
            error_message: Error message for specific error detection

        Returns:
            Appropriate exit code
        """
        if category == ErrorCategory.CONFIGURATION:
            if "file" in error_message.lower():
                return ExitCode.INVALID_CONFIG_FILE

        elif category == ErrorCategory.VALIDATION_FAILURE:
            if "destination" in error_message.lower():
                return ExitCode.DESTINATION_NOT_FOUND

        return self._error_to_exit_code.get(category, ExitCode.GENERAL_ERROR)

    def get_exit_code_for_returncode(self, returncode: int) -> int:
        """Translate a child's return code into this process's exit status.

        A child killed by signal N reports -N; shells report that as 128 + N.
        """
        if returncode == -signal.SIGINT:
            return ExitCode.KEYBOARD_INTERRUPT
        if returncode < 0:
            return 128 + abs(returncode)
        return returncode
