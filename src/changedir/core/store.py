"""Persisted path lists: bookmarks and visit history.

Both stores keep one absolute path per line in a UTF-8 text file. The whole
file is read on load and rewritten on every mutation; there is no locking, so
two simultaneous invocations can lose one side's update.
"""

from __future__ import annotations

import logging
from pathlib import Path

from changedir.core.result import (
    CapacityExceededError,
    DuplicateBookmarkError,
    EmptyHistoryError,
    StorageError,
)

logger = logging.getLogger(__name__)

MAX_BOOKMARKS = 36
MAX_HISTORY = 10


class PathListStore:
    """A newline-delimited list of paths backed by a single file."""

    label = "entries"

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[Path]:
        """Read all entries; a missing or unreadable file yields an empty list."""
        logger.debug("Loading %s from: %s", self.label, self.path)
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("%s file does not exist", self.label.capitalize())
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read %s: %s", self.path, exc)
            return []

        entries = [Path(line.strip()) for line in raw.splitlines() if line.strip()]
        logger.debug("Loaded %d %s", len(entries), self.label)
        return entries

    def save(self, entries: list[Path]) -> None:
        """Overwrite the backing file with `entries`, one per line."""
        logger.debug("Saving %d %s to: %s", len(entries), self.label, self.path)
        content = "\n".join(str(entry) for entry in entries)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StorageError(
                f"Failed to save {self.label}",
                context={"path": str(self.path), "error": exc.strerror or str(exc)},
            ) from exc


class BookmarkStore(PathListStore):
    label = "bookmarks"

    def add(self, directory: Path) -> list[Path]:
        """Append `directory` and persist.

        Raises:
            DuplicateBookmarkError: `directory` is already bookmarked.
            CapacityExceededError: the store already holds MAX_BOOKMARKS entries.
            StorageError: the file could not be written.
        """
        bookmarks = self.load()
        if directory in bookmarks:
            logger.debug("Directory already bookmarked")
            raise DuplicateBookmarkError(
                "Current directory is already bookmarked.", context={"path": str(directory)}
            )

        logger.debug("Current bookmark count: %d", len(bookmarks))
        if len(bookmarks) >= MAX_BOOKMARKS:
            raise CapacityExceededError(
                f"Maximum of {MAX_BOOKMARKS} bookmarks reached. Remove a bookmark first.",
                context={"count": len(bookmarks)},
            )

        bookmarks.append(directory)
        self.save(bookmarks)
        return bookmarks

    def remove(self, directory: Path) -> bool:
        """Drop every entry equal to `directory`; persist only when one was found."""
        bookmarks = self.load()
        remaining = [entry for entry in bookmarks if entry != directory]
        if len(remaining) == len(bookmarks):
            logger.debug("Directory was not bookmarked")
            return False

        self.save(remaining)
        return True

    def remove_all(self) -> bool:
        """Delete the backing file. Returns False when there was nothing to delete."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.debug("Bookmark file does not exist")
            return False
        except OSError as exc:
            raise StorageError(
                "Failed to remove bookmarks",
                context={"path": str(self.path), "error": exc.strerror or str(exc)},
            ) from exc
        logger.debug("Removed bookmark file %s", self.path)
        return True


class HistoryStore(PathListStore):
    """Most-recent-first list of visited directories, capped at MAX_HISTORY."""

    label = "history entries"

    def record_visit(self, directory: Path) -> list[Path]:
        logger.debug("Adding to history: %s", directory)
        history = self.load()

        deduped = [entry for entry in history if entry != directory]
        if len(deduped) < len(history):
            logger.debug("Removed duplicate entry from history")

        deduped.insert(0, directory)
        if len(deduped) > MAX_HISTORY:
            logger.debug("Truncated history, removed %d old entries", len(deduped) - MAX_HISTORY)
            del deduped[MAX_HISTORY:]

        self.save(deduped)
        return deduped

    def most_recent(self) -> Path:
        history = self.load()
        if not history:
            raise EmptyHistoryError("No directory history.")
        return history[0]


__all__ = [
    "MAX_BOOKMARKS",
    "MAX_HISTORY",
    "BookmarkStore",
    "HistoryStore",
    "PathListStore",
]
