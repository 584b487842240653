"""Single-character addressing over bookmarks and history.

Entries are addressed `0`-`9` then `a`-`z`, so at most 36 of them can ever be
shown or selected. The unified list puts bookmarks first, then every history
entry that is not already a bookmark, each group keeping its own order.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeVar

from changedir.core.result import (
    Err,
    IndexOutOfRangeError,
    InvalidSelectionError,
    Ok,
    Result,
    SelectionError,
)

logger = logging.getLogger(__name__)

ALPHABET = string.digits + string.ascii_lowercase
MAX_ADDRESSABLE = len(ALPHABET)
UNADDRESSABLE = "?"

T = TypeVar("T")


class Source(Enum):
    BOOKMARK = "bookmark"
    HISTORY = "history"


@dataclass(frozen=True, slots=True)
class Entry:
    path: Path
    source: Source


@dataclass(frozen=True, slots=True)
class Row:
    """One displayable line of the unified list."""

    char: str
    entry: Entry


def index_to_char(index: int) -> str:
    if 0 <= index < MAX_ADDRESSABLE:
        return ALPHABET[index]
    return UNADDRESSABLE


def char_to_index(char: str) -> int:
    """Map `0-9` to 0..9 and `a-z` to 10..35.

    Raises:
        InvalidSelectionError: for any other character.
    """
    if len(char) != 1 or char not in ALPHABET:
        raise InvalidSelectionError(
            f"Invalid selection: {char!r} is not 0-9 or a-z", context={"char": char}
        )
    return ALPHABET.index(char)


def build(bookmarks: Sequence[Path], history: Sequence[Path]) -> list[Entry]:
    bookmarked = set(bookmarks)
    entries = [Entry(path, Source.BOOKMARK) for path in bookmarks]
    entries.extend(Entry(path, Source.HISTORY) for path in history if path not in bookmarked)
    return entries


def resolve(items: Sequence[T], char: str) -> Result[T, SelectionError]:
    """Resolve a selection character against `items`.

    This is the only place a typed character turns into a list element; every
    interactive or by-argument choice goes through it.
    """
    try:
        index = char_to_index(char)
    except InvalidSelectionError as exc:
        logger.debug("Invalid character: %r", char)
        return Err(exc)

    logger.debug("Parsed index: %d", index)
    limit = min(len(items), MAX_ADDRESSABLE)
    if index >= limit:
        logger.debug("Index %d out of range (max: %d)", index, limit)
        return Err(
            IndexOutOfRangeError(
                f"Invalid selection: {char!r} is out of range",
                context={"index": index, "size": limit},
            )
        )
    return Ok(items[index])


def addressable(entries: Sequence[Entry]) -> list[Row | None]:
    """Rows in display order, capped at MAX_ADDRESSABLE.

    A `None` marks the blank separator between bookmarks and history; it only
    appears when both groups have at least one visible row.
    """
    rows: list[Row | None] = []
    previous: Source | None = None
    for index, entry in enumerate(entries[:MAX_ADDRESSABLE]):
        if previous is Source.BOOKMARK and entry.source is Source.HISTORY:
            rows.append(None)
        rows.append(Row(index_to_char(index), entry))
        previous = entry.source
    return rows


__all__ = [
    "ALPHABET",
    "MAX_ADDRESSABLE",
    "Entry",
    "Row",
    "Source",
    "addressable",
    "build",
    "char_to_index",
    "index_to_char",
    "resolve",
]
