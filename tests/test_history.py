"""Tests for the history store."""

from __future__ import annotations

import json
import logging

import pytest
from pathlib import Path

from wd.errors import HistoryStoreError
from wd.history.store import (
    LoadStatus,
    PathHistory,
    load_history,
    read_history,
    save_history,
)


@pytest.fixture
def db(tmp_path: Path) -> Path:
    return tmp_path / "data" / "wd" / "wddb"


class TestPromote:
    def test_insert_into_empty(self):
        h = PathHistory()
        h.promote("/a")
        assert h.paths() == ["/a"]

    def test_moves_to_front(self):
        h = PathHistory(["/a", "/b", "/c"])
        h.promote("/c")
        assert h.paths() == ["/c", "/a", "/b"]

    def test_idempotent(self):
        once = PathHistory(["/a", "/b", "/c"]).promote("/b")
        twice = PathHistory(["/a", "/b", "/c"]).promote("/b").promote("/b")
        assert once.paths() == twice.paths() == ["/b", "/a", "/c"]

    def test_x_y_x(self):
        h = PathHistory(["/r1", "/r2"])
        h.promote("/x").promote("/y").promote("/x")
        assert h.paths() == ["/x", "/y", "/r1", "/r2"]

    def test_no_duplicates(self):
        h = PathHistory()
        for p in ["/a", "/b", "/a", "/c", "/b"]:
            h.promote(p)
        assert sorted(h.paths()) == ["/a", "/b", "/c"]
        assert len(h) == 3


class TestRemove:
    def test_remove_middle(self):
        h = PathHistory(["/a", "/x", "/b"])
        h.remove("/x")
        assert h.paths() == ["/a", "/b"]

    def test_remove_absent_is_noop(self):
        h = PathHistory(["/a", "/b"])
        h.remove("/nope")
        assert h.paths() == ["/a", "/b"]

    def test_contains(self):
        h = PathHistory(["/a"])
        assert "/a" in h
        h.remove("/a")
        assert "/a" not in h


class TestLoad:
    def test_missing_file_is_empty(self, db: Path):
        result = read_history(db)
        assert result.status is LoadStatus.OK
        assert result.history.paths() == []

    def test_creates_parent_directory(self, db: Path):
        read_history(db)
        assert db.parent.is_dir()

    def test_reads_paths_in_order(self, db: Path):
        db.parent.mkdir(parents=True)
        db.write_text(json.dumps({"paths": ["/b", "/a"]}), encoding="utf-8")
        assert load_history(db).paths() == ["/b", "/a"]

    @pytest.mark.parametrize(
        "content",
        [
            "not valid data",
            '{"paths": ["/a", "/b"',
            "",
            '["/a", "/b"]',
            '{"path": ["/a"]}',
            '{"paths": "/a"}',
            '{"paths": ["/a", 3]}',
            "null",
        ],
    )
    def test_corrupted_is_empty(self, db: Path, content: str):
        db.parent.mkdir(parents=True)
        db.write_text(content, encoding="utf-8")
        result = read_history(db)
        assert result.corrupted
        assert result.reason
        assert result.history.paths() == []

    def test_invalid_utf8_is_corrupted(self, db: Path):
        db.parent.mkdir(parents=True)
        db.write_bytes(b'{"paths": ["\xff\xfe"]}')
        assert read_history(db).corrupted

    def test_corrupted_logs_warning(self, db: Path, caplog):
        db.parent.mkdir(parents=True)
        db.write_text("garbage", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="wd.history.store"):
            history = load_history(db)
        assert history.paths() == []
        assert "corrupted" in caplog.text

    def test_duplicates_collapsed(self, db: Path):
        db.parent.mkdir(parents=True)
        db.write_text(json.dumps({"paths": ["/a", "/b", "/a"]}), encoding="utf-8")
        assert load_history(db).paths() == ["/a", "/b"]

    def test_uncreatable_data_directory_warns_then_fails(self, tmp_path: Path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="wd.history.store"):
            with pytest.raises(HistoryStoreError):
                load_history(blocker / "sub" / "wddb")
        assert "Could not create data directory" in caplog.text

    def test_directory_in_place_of_file_is_hard_error(self, db: Path):
        db.mkdir(parents=True)
        with pytest.raises(HistoryStoreError):
            read_history(db)


class TestSave:
    def test_round_trip(self, db: Path):
        original = PathHistory(["/home/u/proj", "/tmp", "/home/u/notes"])
        save_history(original, db)
        first = load_history(db)
        save_history(first, db)
        assert load_history(db).paths() == original.paths()

    def test_file_shape(self, db: Path):
        save_history(PathHistory(["/x", "/y"]), db)
        assert json.loads(db.read_text(encoding="utf-8")) == {"paths": ["/x", "/y"]}

    def test_truncates_previous_content(self, db: Path):
        save_history(PathHistory([f"/long/path/{i}" for i in range(50)]), db)
        save_history(PathHistory(["/short"]), db)
        assert load_history(db).paths() == ["/short"]

    def test_non_ascii_and_surrogate_paths_round_trip(self, db: Path):
        paths = ["/home/u/文档", "/tmp/bad\udcff"]
        save_history(PathHistory(paths), db)
        assert load_history(db).paths() == paths

    def test_unwritable_destination(self, db: Path):
        db.mkdir(parents=True)
        with pytest.raises(HistoryStoreError):
            save_history(PathHistory(["/a"]), db)
