"""Delivery of the chosen directory to the invoking shell.

The tool cannot change its parent's working directory, so a shell function
wraps it and performs the `cd`. Two hand-off styles are supported:

    - StdoutSink: print the path as the only stdout line (`cd "$(changedir -b)"`)
    - TargetFileSink: write the path to a side-channel file the wrapper reads
      after the process exits
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import typer

from changedir.core.config import AppConfig
from changedir.core.result import StorageError

logger = logging.getLogger(__name__)


class ResultSink(Protocol):
    def reset(self) -> None:
        """Forget any result left over from a previous invocation."""
        ...

    def emit(self, target: Path) -> None:
        """Hand `target` to the enclosing shell."""
        ...


class StdoutSink:
    def reset(self) -> None:
        pass

    def emit(self, target: Path) -> None:
        typer.echo(str(target))


class TargetFileSink:
    def __init__(self, path: Path) -> None:
        self.path = path

    def reset(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(
                "Failed to clear target file",
                context={"path": str(self.path), "error": exc.strerror or str(exc)},
            ) from exc
        logger.debug("Removed stale target file %s", self.path)

    def emit(self, target: Path) -> None:
        logger.debug("Writing target %s to %s", target, self.path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(target), encoding="utf-8")
        except OSError as exc:
            raise StorageError(
                "Failed to write target file",
                context={"path": str(self.path), "error": exc.strerror or str(exc)},
            ) from exc


def create_sink(config: AppConfig) -> ResultSink:
    if config.output.mode == "file":
        return TargetFileSink(config.storage.target_path)
    return StdoutSink()


__all__ = ["ResultSink", "StdoutSink", "TargetFileSink", "create_sink"]
