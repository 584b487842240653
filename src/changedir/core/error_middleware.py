"""
Centralized error formatting for the CLI.

Maps exceptions to a stable code and a severity. Severity decides both the
color and whether the invocation ends with exit code 1.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from rich.markup import escape

from changedir.core.result import (
    AtRootError,
    CapacityExceededError,
    ChangeDirError,
    ConfigurationError,
    DirectoryNotFoundError,
    DuplicateBookmarkError,
    EmptyHistoryError,
    EmptyStoreError,
    SelectionError,
    StorageError,
)


class ErrorSeverity(Enum):
    """Severity levels for error display."""

    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


@dataclass(frozen=True, slots=True)
class FormattedError:
    """A formatted error ready for display."""

    message: str
    severity: ErrorSeverity
    code: str
    details: dict[str, Any]
    traceback: str | None = None

    @property
    def fatal(self) -> bool:
        return self.severity in {ErrorSeverity.ERROR, ErrorSeverity.CRITICAL}


def _error_code(exc: Exception) -> str:
    """Derive an error code from exception type."""
    if isinstance(exc, DuplicateBookmarkError):
        return "DUPLICATE"
    if isinstance(exc, SelectionError):
        return "INVALID_SELECTION"
    if isinstance(exc, CapacityExceededError):
        return "CAPACITY_EXCEEDED"
    if isinstance(exc, (EmptyStoreError, EmptyHistoryError)):
        return "EMPTY"
    if isinstance(exc, DirectoryNotFoundError):
        return "NOT_FOUND"
    if isinstance(exc, AtRootError):
        return "AT_ROOT"
    if isinstance(exc, StorageError):
        return "STORAGE_ERROR"
    if isinstance(exc, ConfigurationError):
        return "CONFIG_ERROR"
    if isinstance(exc, ChangeDirError):
        return "CHANGEDIR_ERROR"
    if isinstance(exc, FileNotFoundError):
        return "FILE_NOT_FOUND"
    if isinstance(exc, PermissionError):
        return "PERMISSION_DENIED"
    return "UNEXPECTED_ERROR"


def _severity(exc: Exception) -> ErrorSeverity:
    """Determine severity based on exception type."""
    if isinstance(exc, DuplicateBookmarkError):
        return ErrorSeverity.WARNING
    if isinstance(exc, (StorageError, ConfigurationError)):
        return ErrorSeverity.CRITICAL
    return ErrorSeverity.ERROR


def format_error(
    exc: Exception,
    *,
    include_traceback: bool = False,
) -> FormattedError:
    """Format an exception into a structured error.

    Args:
        exc: The exception to format
        include_traceback: Whether to include full traceback (for debugging)

    Returns:
        FormattedError ready for display
    """
    details: dict[str, Any] = {}
    if isinstance(exc, ChangeDirError):
        details = exc.context.copy()
        message = exc.message
    else:
        message = str(exc)

    if isinstance(exc, OSError):
        if exc.filename:
            details["path"] = str(exc.filename)
        if exc.errno:
            details["errno"] = exc.errno

    tb = None
    if include_traceback:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return FormattedError(
        message=message,
        severity=_severity(exc),
        code=_error_code(exc),
        details=details,
        traceback=tb,
    )


def format_for_cli(error: FormattedError, *, verbose: bool = False) -> str:
    """Format error for CLI display with Rich markup.

    Ordinary runs print the bare message; the code and details appear with
    `verbose` or for critical (storage, configuration) failures.
    """
    color_map = {
        ErrorSeverity.WARNING: "yellow",
        ErrorSeverity.ERROR: "red",
        ErrorSeverity.CRITICAL: "bold red",
    }
    color = color_map.get(error.severity, "red")

    if not verbose and error.severity is not ErrorSeverity.CRITICAL:
        return f"[{color}]{escape(error.message)}[/{color}]"

    parts = [f"[{color}]{error.code}[/{color}]: {escape(error.message)}"]

    if error.details:
        detail_lines = [f"  {k}: {escape(str(v))}" for k, v in error.details.items()]
        parts.append("\n".join(detail_lines))

    if error.traceback:
        parts.append(f"\n[dim]{escape(error.traceback)}[/dim]")

    return "\n".join(parts)


__all__ = [
    "ErrorSeverity",
    "FormattedError",
    "format_error",
    "format_for_cli",
]
