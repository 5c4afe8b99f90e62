"""Tests for custom exceptions."""

from bsserve.orchestration.error_handling import ErrorCategory, ErrorSeverity
from bsserve.orchestration.exceptions import (
    BinaryNotFoundError,
    BSServeError,
    CleanupError,
    ConfigurationError,
    SiteBuildError,
    SpawnError,
    StreamReadError,
    ValidationError,
)


class TestBSServeError:
    """Tests for the base exception."""

    def test_basic_error(self):
        """Test defaults of the base exception."""
        error = BSServeError("boom", ErrorCategory.CONFIGURATION)

        assert str(error) == "boom"
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.details is None
        assert error.context == {}
        assert error.recovery_suggestions == []

    def test_full_error(self):
        """Test every field of the base exception."""
        error = BSServeError(
            "boom",
            ErrorCategory.SITE_BUILD,
            severity=ErrorSeverity.HIGH,
            details="more",
            context={"a": 1},
            recovery_suggestions=["retry"],
        )

        assert error.severity == ErrorSeverity.HIGH
        assert error.details == "more"
        assert error.context == {"a": 1}
        assert error.recovery_suggestions == ["retry"]


class TestSpecificErrors:
    """Tests for the specific exceptions."""

    def test_binary_not_found(self):
        """Test BinaryNotFoundError."""
        error = BinaryNotFoundError(searched=["node_modules/.bin/browser-sync", "PATH"])

        assert str(error) == "Unable to locate browser-sync binary."
        assert error.category == ErrorCategory.BINARY_RESOLUTION
        assert error.severity == ErrorSeverity.CRITICAL
        assert error.context["searched"] == ["node_modules/.bin/browser-sync", "PATH"]
        assert any("npm install" in s for s in error.recovery_suggestions)

    def test_validation_error(self):
        """Test ValidationError."""
        error = ValidationError(
            "bad binary", binary_path="/bin/bs", validation_type="version"
        )

        assert isinstance(error, BSServeError)
        assert error.category == ErrorCategory.VALIDATION_FAILURE
        assert error.severity == ErrorSeverity.CRITICAL
        assert error.context == {"binary_path": "/bin/bs", "validation_type": "version"}

    def test_validation_error_keeps_context(self):
        """Test ValidationError merges given context."""
        error = ValidationError("bad", context={"extra": True}, binary_path="/bin/bs")

        assert error.context == {"extra": True, "binary_path": "/bin/bs"}

    def test_spawn_error(self):
        """Test SpawnError."""
        error = SpawnError("no pty", command=["bs", "start"], details="ENOENT")

        assert error.category == ErrorCategory.PROCESS_SPAWN
        assert error.context["command"] == ["bs", "start"]
        assert error.details == "ENOENT"

    def test_stream_read_error(self):
        """Test StreamReadError."""
        error = StreamReadError("read failed")

        assert error.category == ErrorCategory.STREAM_IO
        assert error.severity == ErrorSeverity.MEDIUM

    def test_cleanup_error(self):
        """Test CleanupError."""
        error = CleanupError("cannot delete", file_path=".bs-config.abc.js")

        assert error.category == ErrorCategory.FILE_OPERATION
        assert error.severity == ErrorSeverity.LOW
        assert error.context["file_path"] == ".bs-config.abc.js"

    def test_configuration_error(self):
        """Test ConfigurationError."""
        error = ConfigurationError("bad port", config_key="port")

        assert error.category == ErrorCategory.CONFIGURATION
        assert error.severity == ErrorSeverity.HIGH
        assert error.context["config_key"] == "port"
        assert error.recovery_suggestions

    def test_site_build_error(self):
        """Test SiteBuildError keeps a zero return code."""
        error = SiteBuildError("failed", command=["jekyll", "build"], returncode=0)

        assert error.category == ErrorCategory.SITE_BUILD
        assert error.context == {"command": ["jekyll", "build"], "returncode": 0}
