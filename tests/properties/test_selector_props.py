"""Property-based tests for single-character addressing using Hypothesis."""

from __future__ import annotations

from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from changedir.core import selector
from changedir.core.result import IndexOutOfRangeError, InvalidSelectionError

path_lists = st.lists(
    st.integers(min_value=0, max_value=60).map(lambda n: Path(f"/p/{n}")), max_size=50, unique=True
)


@given(index=st.integers(min_value=0, max_value=35))
def test_char_round_trip(index: int) -> None:
    assert selector.char_to_index(selector.index_to_char(index)) == index


@given(bookmarks=path_lists, history=path_lists)
def test_build_length_and_order(bookmarks: list[Path], history: list[Path]) -> None:
    entries = selector.build(bookmarks, history)
    leftover = [path for path in history if path not in bookmarks]

    assert len(entries) == len(bookmarks) + len(leftover)
    assert [entry.path for entry in entries] == bookmarks + leftover


@given(bookmarks=path_lists, history=path_lists)
def test_display_order_matches_addressing(bookmarks: list[Path], history: list[Path]) -> None:
    entries = selector.build(bookmarks, history)
    rows = [row for row in selector.addressable(entries) if row is not None]

    assert len(rows) == min(len(entries), selector.MAX_ADDRESSABLE)
    for index, row in enumerate(rows):
        assert row.char == selector.index_to_char(index)
        assert selector.resolve(entries, row.char).unwrap() is row.entry


@given(items=path_lists, char=st.characters())
def test_resolve_never_raises(items: list[Path], char: str) -> None:
    result = selector.resolve(items, char)
    if result.is_ok():
        assert result.value in items
    else:
        assert isinstance(result.error, (InvalidSelectionError, IndexOutOfRangeError))
