from __future__ import annotations

from pathlib import Path

import pytest

from changedir.core.result import (
    CapacityExceededError,
    DuplicateBookmarkError,
    EmptyHistoryError,
    StorageError,
)
from changedir.core.store import MAX_BOOKMARKS, MAX_HISTORY, BookmarkStore, HistoryStore


def test_load_missing_file_is_empty(tmp_path: Path) -> None:
    store = BookmarkStore(tmp_path / "nope" / "bookmarks")
    assert store.load() == []


def test_load_skips_blank_lines_and_trims(tmp_path: Path) -> None:
    path = tmp_path / "bookmarks"
    path.write_text("/a\n\n   \n  /b  \n/c", encoding="utf-8")

    assert BookmarkStore(path).load() == [Path("/a"), Path("/b"), Path("/c")]


def test_load_unreadable_file_is_empty(tmp_path: Path) -> None:
    # A directory where the file should be cannot be read as text.
    path = tmp_path / "bookmarks"
    path.mkdir()

    assert BookmarkStore(path).load() == []


def test_save_creates_parents_and_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "deep" / "nested" / "bookmarks"
    store = BookmarkStore(path)

    store.save([Path("/one"), Path("/two")])
    assert path.read_text(encoding="utf-8") == "/one\n/two"

    store.save([Path("/three")])
    assert path.read_text(encoding="utf-8") == "/three"


def test_save_failure_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = BookmarkStore(blocker / "bookmarks")

    with pytest.raises(StorageError) as excinfo:
        store.save([Path("/a")])

    assert excinfo.value.context["path"] == str(blocker / "bookmarks")


def test_add_appends_in_order(tmp_path: Path) -> None:
    store = BookmarkStore(tmp_path / "bookmarks")
    store.add(Path("/a"))
    store.add(Path("/b"))

    assert store.load() == [Path("/a"), Path("/b")]


def test_add_duplicate_is_rejected_without_writing(tmp_path: Path) -> None:
    path = tmp_path / "bookmarks"
    store = BookmarkStore(path)
    store.add(Path("/a"))
    before = path.read_text(encoding="utf-8")

    with pytest.raises(DuplicateBookmarkError):
        store.add(Path("/a"))

    assert path.read_text(encoding="utf-8") == before


def test_add_beyond_capacity_leaves_file_unchanged(tmp_path: Path) -> None:
    path = tmp_path / "bookmarks"
    store = BookmarkStore(path)
    store.save([Path(f"/dir{i}") for i in range(MAX_BOOKMARKS)])
    before = path.read_text(encoding="utf-8")

    with pytest.raises(CapacityExceededError):
        store.add(Path("/one-too-many"))

    assert path.read_text(encoding="utf-8") == before
    assert len(store.load()) == MAX_BOOKMARKS


def test_duplicate_is_reported_before_capacity(tmp_path: Path) -> None:
    store = BookmarkStore(tmp_path / "bookmarks")
    store.save([Path(f"/dir{i}") for i in range(MAX_BOOKMARKS)])

    with pytest.raises(DuplicateBookmarkError):
        store.add(Path("/dir0"))


def test_remove_only_persists_on_change(tmp_path: Path) -> None:
    path = tmp_path / "bookmarks"
    store = BookmarkStore(path)

    assert store.remove(Path("/a")) is False
    assert not path.exists()

    store.save([Path("/a"), Path("/b"), Path("/a")])
    assert store.remove(Path("/a")) is True
    assert store.load() == [Path("/b")]


def test_remove_all(tmp_path: Path) -> None:
    path = tmp_path / "bookmarks"
    store = BookmarkStore(path)

    assert store.remove_all() is False

    store.add(Path("/a"))
    assert store.remove_all() is True
    assert not path.exists()


def test_record_visit_moves_revisit_to_front(tmp_path: Path) -> None:
    history = HistoryStore(tmp_path / "history")
    history.record_visit(Path("/x"))
    history.record_visit(Path("/y"))
    history.record_visit(Path("/x"))

    assert history.load() == [Path("/x"), Path("/y")]


def test_record_visit_truncates_to_most_recent(tmp_path: Path) -> None:
    history = HistoryStore(tmp_path / "history")
    for i in range(MAX_HISTORY + 3):
        history.record_visit(Path(f"/d{i}"))

    entries = history.load()
    assert len(entries) == MAX_HISTORY
    assert entries[0] == Path(f"/d{MAX_HISTORY + 2}")
    assert Path("/d0") not in entries


def test_most_recent(tmp_path: Path) -> None:
    history = HistoryStore(tmp_path / "history")
    with pytest.raises(EmptyHistoryError):
        history.most_recent()

    history.record_visit(Path("/a"))
    history.record_visit(Path("/b"))
    assert history.most_recent() == Path("/b")
