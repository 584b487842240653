"""Rich consoles and log routing for changedir.

stdout carries listings, status lines and, in print mode, the chosen path.
Anything addressed to the person at the terminal rather than the shell
wrapper goes to stderr: menus, prompts, warnings, errors and log records.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER = "changedir"

console = Console()
stderr_console = Console(stderr=True)


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    # Unknown names come back as "Level X" strings.
    return number if isinstance(number, int) else logging.WARNING


def setup_logging(level: str | int = logging.WARNING, verbose: bool = False) -> logging.Logger:
    """Send records from the changedir logger tree to stderr through Rich.

    `verbose` forces DEBUG whatever `level` says. Records never reach the
    root logger, so other libraries' handlers cannot write to stdout.
    """
    numeric_level = logging.DEBUG if verbose else _level_number(level)

    handler = RichHandler(
        console=stderr_console,
        markup=False,
        rich_tracebacks=True,
        show_path=False,
        show_time=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(APP_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False
    return logger


__all__ = ["APP_LOGGER", "console", "setup_logging", "stderr_console"]
