"""
Result types and error hierarchy for changedir.

This module provides:
1. Result[T, E] type for explicit error handling
2. Domain-specific exception hierarchy
3. Helper functions for Result operations

Usage:
    from changedir.core.result import Ok, Err, Result, EmptyHistoryError

    def most_recent(history: list[Path]) -> Result[Path, EmptyHistoryError]:
        if not history:
            return Err(EmptyHistoryError("No directory history."))
        return Ok(history[0])

    result = most_recent(entries)
    if result.is_ok():
        print(result.value)
    else:
        print(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)
F = TypeVar("F", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the contained value (ignores default for Ok)."""
        return self.value

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value."""
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain operations that may fail."""
        return fn(self.value)


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Return the default value."""
        return default

    def map(self, fn: Callable[[T], U]) -> Err[E]:
        """No-op for Err - returns self unchanged."""
        return self

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Err[E]:
        """Short-circuit for Err - returns self unchanged."""
        return self


# Type alias for Result
Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class ChangeDirError(Exception):
    """Base exception for all changedir errors.

    All custom exceptions should inherit from this class so the CLI can
    present them consistently.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ConfigurationError(ChangeDirError):
    """Raised for configuration issues.

    Examples:
    - Home directory cannot be determined
    - Invalid config values
    """

    pass


class StorageError(ChangeDirError):
    """Raised when a backing file cannot be written or removed."""

    pass


class DuplicateBookmarkError(ChangeDirError):
    """Raised when the directory is already bookmarked. Never fatal."""

    pass


class CapacityExceededError(ChangeDirError):
    """Raised when the bookmark store already holds its maximum."""

    pass


class SelectionError(ChangeDirError):
    """Base for failures resolving a selection character."""

    pass


class InvalidSelectionError(SelectionError):
    """Raised for a character outside 0-9 and a-z."""

    pass


class IndexOutOfRangeError(SelectionError):
    """Raised when a valid character addresses no entry."""

    pass


class EmptyStoreError(ChangeDirError):
    """Raised when there is nothing to choose from."""

    pass


class EmptyHistoryError(ChangeDirError):
    """Raised when `back` is requested without any recorded visit."""

    pass


class DirectoryNotFoundError(ChangeDirError):
    """Raised when a target directory cannot be located or no longer exists."""

    pass


class AtRootError(ChangeDirError):
    """Raised when going up from the filesystem root."""

    pass


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def try_result(fn: Callable[[], T], error_type: type[E] = ChangeDirError) -> Result[T, E]:
    """Execute a function and wrap the result in Ok/Err.

    Args:
        fn: Function to execute
        error_type: Exception type to catch (default: ChangeDirError)

    Returns:
        Ok(value) on success, Err(exception) on failure
    """
    try:
        return Ok(fn())
    except error_type as exc:
        return Err(exc)


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "ChangeDirError",
    "ConfigurationError",
    "StorageError",
    "DuplicateBookmarkError",
    "CapacityExceededError",
    "SelectionError",
    "InvalidSelectionError",
    "IndexOutOfRangeError",
    "EmptyStoreError",
    "EmptyHistoryError",
    "DirectoryNotFoundError",
    "AtRootError",
    # Helpers
    "try_result",
]
