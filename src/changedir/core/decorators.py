from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import typer

from changedir.core.console import APP_LOGGER, stderr_console
from changedir.core.error_middleware import format_error, format_for_cli
from changedir.core.result import ChangeDirError, Err, Result

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


def _verbose() -> bool:
    return logging.getLogger(APP_LOGGER).isEnabledFor(logging.DEBUG)


def report(exc: Exception) -> None:
    """Print `exc` to stderr; exit with code 1 unless it is only a warning."""
    formatted = format_error(exc, include_traceback=False)
    stderr_console.print(format_for_cli(formatted, verbose=_verbose()), soft_wrap=True)
    if formatted.fatal:
        raise typer.Exit(code=1)


def unwrap_or_exit(result: Result[T, ChangeDirError]) -> T | None:
    """Return the Ok value, or report the error (exiting when it is fatal)."""
    if isinstance(result, Err):
        report(result.error)
        return None
    return result.value


def handle_exceptions(func: F) -> F:
    """Decorate CLI entrypoints to present friendly errors and exit cleanly."""

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (ChangeDirError, OSError) as exc:
            report(exc)
            return None

    return sync_wrapper  # type: ignore[return-value]


__all__ = ["handle_exceptions", "report", "unwrap_or_exit"]
