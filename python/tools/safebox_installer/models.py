"""Models and exception hierarchy for the safebox binary installer."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class InstallerError(Exception):
    """Base exception for installer operations with structured context."""

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        file_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
        **context: Any
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.file_path = file_path
        self.original_error = original_error
        self.context = context

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.error_code:
            parts.append(f"Code: {self.error_code}")
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.original_error:
            parts.append(f"Cause: {self.original_error}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": str(self.args[0]) if self.args else "",
            "error_code": self.error_code,
            "file_path": str(self.file_path) if self.file_path else None,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "exception_type": self.__class__.__name__
        }


class UnsupportedPlatformError(InstallerError):
    """Raised when the host platform or architecture has no prebuilt binary."""

    def __init__(self, package_name: str, kind: str, value: str) -> None:
        super().__init__(
            f"{package_name} is not supported for this {kind}: {value}",
            error_code="UNSUPPORTED_PLATFORM",
            package_name=package_name,
            kind=kind,
            value=value
        )


class DownloadError(InstallerError):
    """Raised when fetching the binary fails."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        file_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
        error_code: str = "DOWNLOAD_ERROR",
        **context: Any
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            file_path=file_path,
            original_error=original_error,
            url=url,
            **context
        )
        self.url = url


class HTTPStatusError(DownloadError):
    """Raised when the release host answers with anything but 200. Never retried."""

    def __init__(self, package_name: str, status_code: int, *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Error downloading {package_name} binary. HTTP Status Code: {status_code}",
            url=url,
            error_code="HTTP_STATUS_ERROR",
            status_code=status_code
        )
        self.status_code = status_code


class DownloadIncompleteError(DownloadError):
    """Raised when a transfer ends without a usable binary on disk."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        file_path: Optional[Path] = None,
        original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(
            message,
            url=url,
            file_path=file_path,
            original_error=original_error,
            error_code="DOWNLOAD_INCOMPLETE"
        )


class InvalidCommandError(InstallerError):
    """Raised when the dispatcher receives an unknown command."""

    def __init__(self, command: str) -> None:
        super().__init__(
            "Invalid command. `install` and `uninstall` are the only supported commands",
            error_code="INVALID_COMMAND",
            command=command
        )


class Command(str, Enum):
    """Commands understood by the installer entry point."""

    INSTALL = "install"
    UNINSTALL = "uninstall"

    @classmethod
    def parse(cls, value: str) -> Command:
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidCommandError(value) from e


class AttemptStatus(str, Enum):
    """Outcome class of a single install attempt."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class AttemptResult:
    """Result of one pass through the install state machine."""
    status: AttemptStatus
    reason: Optional[str] = None
    error: Optional[Exception] = None
    from_cache: bool = False

    @classmethod
    def success(cls, *, from_cache: bool = False) -> AttemptResult:
        return cls(AttemptStatus.SUCCESS, from_cache=from_cache)

    @classmethod
    def retryable(cls, reason: str, error: Optional[Exception] = None) -> AttemptResult:
        return cls(AttemptStatus.RETRYABLE, reason=reason, error=error)

    @classmethod
    def fatal(cls, error: Exception) -> AttemptResult:
        return cls(AttemptStatus.FATAL, reason=str(error), error=error)


@dataclass
class InstallResult:
    """Represents the result of an install operation."""
    success: bool
    attempts: int
    binary_path: Optional[Path] = None
    from_cache: bool = False
    error_message: Optional[str] = None

    @property
    def retries(self) -> int:
        """Number of attempts made after the first one."""
        return max(self.attempts - 1, 0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "attempts": self.attempts,
            "retries": self.retries,
            "binary_path": str(self.binary_path) if self.binary_path else None,
            "from_cache": self.from_cache,
            "error_message": self.error_message
        }
