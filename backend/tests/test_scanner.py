"""
Tests for recursive directory snapshots.
"""

import os
from pathlib import Path

import pytest

from shuttle.watchfolders import DirectorySnapshot, EnumerationError, FileScanner


class TestFileScanner:
    """Tests for FileScanner.snapshot."""

    def test_records_files_with_sizes(self, inbox: Path):
        (inbox / "a.txt").write_bytes(b"aaa")
        (inbox / "sub").mkdir()
        (inbox / "sub" / "b.txt").write_bytes(b"bb")

        snapshot = FileScanner().snapshot(str(inbox))

        assert dict(snapshot.entries) == {
            os.path.join(str(inbox), "a.txt"): 3,
            os.path.join(str(inbox), "sub", "b.txt"): 2,
        }

    def test_directories_are_not_entries(self, inbox: Path):
        (inbox / "empty_dir").mkdir()

        snapshot = FileScanner().snapshot(str(inbox))

        assert len(snapshot) == 0
        assert os.path.join(str(inbox), "empty_dir") not in snapshot

    def test_missing_directory_raises(self, tmp_path: Path):
        """An unlistable directory aborts the snapshot instead of returning it empty."""
        missing = tmp_path / "missing"

        with pytest.raises(EnumerationError) as exc_info:
            FileScanner().snapshot(str(missing))

        assert exc_info.value.directory == str(missing)

    def test_snapshot_is_read_only(self, inbox: Path):
        (inbox / "a.txt").write_bytes(b"a")

        snapshot = FileScanner().snapshot(str(inbox))

        with pytest.raises(TypeError):
            snapshot.entries["/x"] = 1


class TestDirectorySnapshot:
    """Tests for snapshot diffing."""

    def test_new_paths_reports_only_additions(self, inbox: Path):
        scanner = FileScanner()
        (inbox / "a").write_bytes(b"1")
        (inbox / "b").write_bytes(b"2")
        before = scanner.snapshot(str(inbox))

        (inbox / "c").write_bytes(b"3")
        after = scanner.snapshot(str(inbox))

        assert after.new_paths(before) == [os.path.join(str(inbox), "c")]

    def test_size_change_is_not_new(self):
        before = DirectorySnapshot("/d", {"/d/a": 1})
        after = DirectorySnapshot("/d", {"/d/a": 500})

        assert after.new_paths(before) == []

    def test_removal_is_not_reported(self):
        before = DirectorySnapshot("/d", {"/d/a": 1, "/d/b": 1})
        after = DirectorySnapshot("/d", {"/d/a": 1})

        assert after.new_paths(before) == []

    def test_everything_is_new_against_empty(self):
        after = DirectorySnapshot("/d", {"/d/b": 1, "/d/a": 1})

        assert after.new_paths(DirectorySnapshot.empty("/d")) == ["/d/a", "/d/b"]
