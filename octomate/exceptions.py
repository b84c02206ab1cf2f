"""Exception classes for octomate."""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class OctomateError(Exception):
    """Base exception class for octomate."""

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(OctomateError):
    """Missing or unreadable batch file, or invalid settings."""

    severity = ErrorSeverity.FATAL


class SchemaError(OctomateError):
    """Batch document failed validation.

    Raised before any command is executed, so the whole run is aborted.
    """

    severity = ErrorSeverity.FATAL

    def __init__(
        self,
        message: str,
        location: str | None = None,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.location = location
        self.source = source
        prefix = f"{location}: " if location else ""
        suffix = f" (file: {source})" if source else ""
        super().__init__(f"{prefix}{message}{suffix}", details)


class UnsupportedVersion(SchemaError):
    """Batch ``version`` is missing or not supported."""


class MissingRequiredField(SchemaError):
    """A required key is absent or a required list is empty."""


class UnknownCommand(SchemaError):
    """A ``runs`` entry names a command that is not registered."""


class MalformedStructure(SchemaError):
    """Wrong type, invalid value or otherwise malformed document."""


class RemoteError(OctomateError):
    """Remote API call failed.

    Recorded against the command that caused it and never propagated
    out of the execution engine.
    """

    severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)
