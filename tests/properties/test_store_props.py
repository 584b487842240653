"""Property-based tests for the bookmark and history stores using Hypothesis.

These tests verify the persisted-list invariants:
- the bookmark store never exceeds its capacity nor holds duplicates
- the history store never exceeds its bound nor holds duplicates
- the most recently visited path is always first in history
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from changedir.core.result import CapacityExceededError, DuplicateBookmarkError
from changedir.core.store import MAX_BOOKMARKS, MAX_HISTORY, BookmarkStore, HistoryStore

# === Strategies ===

# A small pool of paths so duplicates and re-visits happen often.
path_strategy = st.integers(min_value=0, max_value=45).map(lambda n: Path(f"/dir/{n}"))

bookmark_op_strategy = st.tuples(st.sampled_from(["add", "remove"]), path_strategy)


# === Property Tests ===


@given(ops=st.lists(bookmark_op_strategy, max_size=80))
@settings(max_examples=60, deadline=None)
def test_bookmarks_bounded_and_unique(ops: list[tuple[str, Path]]) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = BookmarkStore(Path(tmp) / "bookmarks")
        for op, path in ops:
            if op == "add":
                try:
                    store.add(path)
                except (DuplicateBookmarkError, CapacityExceededError):
                    pass
            else:
                store.remove(path)

            entries = store.load()
            assert len(entries) <= MAX_BOOKMARKS
            assert len(entries) == len(set(entries))


@given(visits=st.lists(path_strategy, min_size=1, max_size=40))
@settings(max_examples=60, deadline=None)
def test_history_bounded_unique_and_recent_first(visits: list[Path]) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = HistoryStore(Path(tmp) / "history")
        for path in visits:
            store.record_visit(path)

            entries = store.load()
            assert entries[0] == path
            assert len(entries) <= MAX_HISTORY
            assert len(entries) == len(set(entries))


@given(visits=st.lists(path_strategy, min_size=1, max_size=40))
@settings(max_examples=40, deadline=None)
def test_history_matches_last_distinct_visits(visits: list[Path]) -> None:
    expected: list[Path] = []
    for path in reversed(visits):
        if path not in expected:
            expected.append(path)

    with tempfile.TemporaryDirectory() as tmp:
        store = HistoryStore(Path(tmp) / "history")
        for path in visits:
            store.record_visit(path)

        assert store.load() == expected[:MAX_HISTORY]
