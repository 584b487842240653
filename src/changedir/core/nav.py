"""Directory navigation core logic.

Provides the actions behind every command-line flag:
    - Bookmark management (add, forget, forget all)
    - Selection from the unified bookmark/history list
    - Back, up and down movement
    - Lookup of a directory by name

Every successful move records the target in history and hands it to the
configured ResultSink. `back` is the exception: it emits the previous
directory without recording it again, so going back does not refresh that
entry's recency.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from changedir.core import selector
from changedir.core.config import AppConfig
from changedir.core.result import (
    AtRootError,
    ChangeDirError,
    DirectoryNotFoundError,
    EmptyHistoryError,
    EmptyStoreError,
    Err,
    Ok,
    Result,
    try_result,
)
from changedir.core.sink import ResultSink
from changedir.core.store import BookmarkStore, HistoryStore

logger = logging.getLogger(__name__)

MAX_ANCESTOR_DEPTH = 5


@dataclass
class ForgetOutcome:
    directory: Path
    removed: bool


class Navigator:
    def __init__(
        self,
        bookmarks: BookmarkStore,
        history: HistoryStore,
        sink: ResultSink,
        cwd: Path | None = None,
    ) -> None:
        self.bookmarks = bookmarks
        self.history = history
        self.sink = sink
        self._cwd = cwd

    @classmethod
    def from_config(
        cls, config: AppConfig, sink: ResultSink, cwd: Path | None = None
    ) -> Navigator:
        return cls(
            BookmarkStore(config.storage.bookmark_path),
            HistoryStore(config.storage.history_path),
            sink,
            cwd=cwd,
        )

    # ------------------------------------------------------------------
    # Working directory
    # ------------------------------------------------------------------

    def current(self) -> Result[Path, ChangeDirError]:
        if self._cwd is not None:
            return Ok(self._cwd)
        try:
            path = Path.cwd()
        except OSError as exc:
            logger.debug("Error getting current directory: %s", exc)
            return Err(ChangeDirError(f"Error getting current directory: {exc}"))
        logger.debug("Current directory: %s", path)
        return Ok(path)

    def _arrive(self, target: Path) -> Result[Path, ChangeDirError]:
        logger.debug("Selected directory: %s", target)
        self.history.record_visit(target)
        self.sink.emit(target)
        return Ok(target)

    # ------------------------------------------------------------------
    # Bookmarks
    # ------------------------------------------------------------------

    def bookmark_current(self) -> Result[Path, ChangeDirError]:
        def _add(current: Path) -> Result[Path, ChangeDirError]:
            logger.debug("Bookmarking current directory: %s", current)
            return try_result(lambda: self.bookmarks.add(current)).map(lambda _: current)

        return self.current().and_then(_add)

    def forget_current(self) -> Result[ForgetOutcome, ChangeDirError]:
        def _forget(current: Path) -> Result[ForgetOutcome, ChangeDirError]:
            logger.debug("Forgetting current directory: %s", current)
            return try_result(lambda: ForgetOutcome(current, self.bookmarks.remove(current)))

        return self.current().and_then(_forget)

    def forget_all(self) -> Result[bool, ChangeDirError]:
        logger.debug("Forgetting all bookmarks, file: %s", self.bookmarks.path)
        return try_result(self.bookmarks.remove_all)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def entries(self) -> list[selector.Entry]:
        """The unified list: bookmarks, then history entries not bookmarked."""
        return selector.build(self.bookmarks.load(), self.history.load())

    def choose(
        self, char: str, entries: list[selector.Entry] | None = None
    ) -> Result[Path, ChangeDirError]:
        logger.debug("Choosing directory by character: %r", char)
        if entries is None:
            entries = self.entries()
        if not entries:
            return Err(EmptyStoreError("No bookmarked directories."))

        return (
            selector.resolve(entries, char)
            .map(lambda entry: entry.path)
            .and_then(self._arrive)
        )

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def back(self) -> Result[Path, ChangeDirError]:
        logger.debug("Changing to previous directory")
        try:
            previous = self.history.most_recent()
        except EmptyHistoryError as exc:
            return Err(exc)

        logger.debug("Previous directory: %s", previous)
        if not previous.exists():
            logger.debug("Previous directory no longer exists")
            return Err(
                DirectoryNotFoundError(f"Previous directory no longer exists: {previous}")
            )

        self.sink.emit(previous)
        return Ok(previous)

    def up(self) -> Result[Path, ChangeDirError]:
        def _parent(current: Path) -> Result[Path, ChangeDirError]:
            parent = current.parent
            if parent == current:
                logger.debug("Already at root directory")
                return Err(AtRootError("Already at root directory."))
            logger.debug("Parent directory: %s", parent)
            return self._arrive(parent)

        return self.current().and_then(_parent)

    def subdirectories(self) -> Result[list[Path], ChangeDirError]:
        """Immediate subdirectories of the working directory, sorted by path."""

        def _scan(current: Path) -> Result[list[Path], ChangeDirError]:
            logger.debug("Listing subdirectories of: %s", current)
            try:
                found = sorted(_iter_subdirectories(current))
            except OSError as exc:
                return Err(
                    ChangeDirError(
                        "Failed to list subdirectories",
                        context={"path": str(current), "error": exc.strerror or str(exc)},
                    )
                )
            logger.debug("Found %d subdirectories", len(found))
            if not found:
                return Err(EmptyStoreError("No subdirectories found."))
            return Ok(found)

        return self.current().and_then(_scan)

    def choose_subdirectory(self, char: str, subdirs: list[Path]) -> Result[Path, ChangeDirError]:
        return selector.resolve(subdirs, char).and_then(self._arrive)

    # ------------------------------------------------------------------
    # Lookup by name
    # ------------------------------------------------------------------

    def find(self, name: str) -> Result[Path, ChangeDirError]:
        """Search bookmarks, then children, then ancestors for `name`."""

        def _search(current: Path) -> Result[Path, ChangeDirError]:
            logger.debug("Searching for directory: %r", name)
            found = (
                self._find_in_bookmarks(name)
                or _find_in_children(current, name)
                or _find_in_ancestors(current, name)
            )
            if found is None:
                logger.debug("Directory not found in any location")
                return Err(DirectoryNotFoundError(f"Directory not found: {name}"))
            return self._arrive(found)

        if not name:
            return Err(DirectoryNotFoundError("Directory not found: (empty name)"))
        return self.current().and_then(_search)

    def _find_in_bookmarks(self, name: str) -> Path | None:
        logger.debug("Searching in bookmarks")
        for bookmark in self.bookmarks.load():
            if bookmark.name != name:
                continue
            if bookmark.is_dir():
                logger.debug("Found in bookmarks: %s", bookmark)
                return bookmark
            logger.debug("Bookmark %s exists but directory does not", bookmark)
        return None


def _iter_subdirectories(directory: Path) -> list[Path]:
    found: list[Path] = []
    with os.scandir(directory) as it:
        for entry in it:
            try:
                if entry.is_dir():
                    found.append(Path(entry.path))
            except OSError:
                continue
    return found


def _find_in_children(current: Path, name: str) -> Path | None:
    logger.debug("Searching in current directory subdirectories")
    try:
        children = _iter_subdirectories(current)
    except OSError as exc:
        logger.debug("Could not scan %s: %s", current, exc)
        return None
    for child in children:
        if child.name == name:
            logger.debug("Found in subdirectories: %s", child)
            return child
    return None


def _find_in_ancestors(current: Path, name: str) -> Path | None:
    logger.debug("Searching in parent directories")
    for depth, ancestor in enumerate(current.parents[:MAX_ANCESTOR_DEPTH], start=1):
        candidate = ancestor / name
        logger.debug("Checking at depth %d: %s", depth, candidate)
        if candidate.is_dir():
            logger.debug("Found in parent directories: %s", candidate)
            return candidate
    return None


__all__ = ["ForgetOutcome", "MAX_ANCESTOR_DEPTH", "Navigator"]
