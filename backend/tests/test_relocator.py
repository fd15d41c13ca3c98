"""
Tests for rename-or-copy relocation.
"""

import errno
from pathlib import Path

import pytest

from shuttle.relocation import RelocationError, RelocationMethod, Relocator, relocate


def cross_device_rename(source: str, destination: str) -> None:
    raise OSError(errno.EXDEV, "Invalid cross-device link")


class TestRename:
    """Same-filesystem moves."""

    def test_rename_on_same_filesystem(self, inbox: Path, outbox: Path):
        """Rename is tried first and wins when source and destination share a device."""
        source = inbox / "clip.mov"
        source.write_bytes(b"frames")
        destination = outbox / "clip.mov"

        method = relocate(str(source), str(destination))

        assert method == RelocationMethod.RENAMED
        assert not source.exists()
        assert destination.read_bytes() == b"frames"

    def test_rename_replaces_existing_destination(self, inbox: Path, outbox: Path):
        """An existing file at the destination is replaced."""
        source = inbox / "report.txt"
        source.write_text("new")
        destination = outbox / "report.txt"
        destination.write_text("old")

        Relocator().relocate(str(source), str(destination))

        assert destination.read_text() == "new"


class TestCopyFallback:
    """Moves where rename fails and the bytes are copied instead."""

    def test_copy_when_rename_fails(self, inbox: Path, outbox: Path):
        """Cross-device rename falls back to copy then delete."""
        source = inbox / "big.bin"
        payload = bytes(range(256)) * 8192
        source.write_bytes(payload)
        destination = outbox / "big.bin"

        method = Relocator(rename=cross_device_rename).relocate(
            str(source), str(destination)
        )

        assert method == RelocationMethod.COPIED
        assert not source.exists()
        assert destination.read_bytes() == payload

    def test_copy_of_empty_file(self, inbox: Path, outbox: Path):
        """Zero-byte files survive the copy path."""
        source = inbox / "empty.txt"
        source.write_bytes(b"")
        destination = outbox / "empty.txt"

        Relocator(rename=cross_device_rename).relocate(str(source), str(destination))

        assert destination.exists()
        assert destination.stat().st_size == 0
        assert not source.exists()

    def test_missing_source_fails_at_open_source(self, inbox: Path, outbox: Path):
        """A source that vanished fails both rename and the copy open."""
        with pytest.raises(RelocationError) as exc_info:
            Relocator().relocate(str(inbox / "gone.bin"), str(outbox / "gone.bin"))

        assert exc_info.value.stage == "open_source"
        assert not (outbox / "gone.bin").exists()

    def test_missing_destination_dir_fails_at_create_destination(
        self, inbox: Path, tmp_path: Path
    ):
        """Nonexistent destination directory is not created by default."""
        source = inbox / "a.txt"
        source.write_text("data")
        destination = tmp_path / "nowhere" / "a.txt"

        with pytest.raises(RelocationError) as exc_info:
            Relocator().relocate(str(source), str(destination))

        assert exc_info.value.stage == "create_destination"
        assert source.read_text() == "data"

    def test_delete_failure_leaves_both_copies(self, inbox: Path, outbox: Path):
        """When the source cannot be removed, the copy stays and the error says so."""
        source = inbox / "locked.bin"
        source.write_bytes(b"content")
        destination = outbox / "locked.bin"

        def refuse_remove(path):
            raise PermissionError(errno.EACCES, "Permission denied")

        relocator = Relocator(rename=cross_device_rename, remove=refuse_remove)

        with pytest.raises(RelocationError) as exc_info:
            relocator.relocate(str(source), str(destination))

        assert exc_info.value.stage == "delete_source"
        assert source.read_bytes() == b"content"
        assert destination.read_bytes() == b"content"

    def test_retry_after_delete_failure(self, inbox: Path, outbox: Path):
        """Relocating again after a delete failure finishes the move."""
        source = inbox / "retry.bin"
        source.write_bytes(b"content")
        destination = outbox / "retry.bin"

        def refuse_remove(path):
            raise PermissionError(errno.EACCES, "Permission denied")

        with pytest.raises(RelocationError):
            Relocator(rename=cross_device_rename, remove=refuse_remove).relocate(
                str(source), str(destination)
            )

        Relocator().relocate(str(source), str(destination))

        assert not source.exists()
        assert destination.read_bytes() == b"content"


class TestCreateDestination:
    """Opt-in creation of missing destination directories."""

    def test_creates_missing_parent(self, inbox: Path, tmp_path: Path):
        source = inbox / "a.txt"
        source.write_text("data")
        destination = tmp_path / "new" / "nested" / "a.txt"

        method = Relocator(create_destination=True).relocate(
            str(source), str(destination)
        )

        assert method == RelocationMethod.RENAMED
        assert destination.read_text() == "data"

    def test_unwritable_parent_fails_at_create_destination_dir(
        self, inbox: Path, tmp_path: Path
    ):
        """A file where the destination directory should be cannot be replaced."""
        source = inbox / "a.txt"
        source.write_text("data")
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(RelocationError) as exc_info:
            Relocator(create_destination=True).relocate(
                str(source), str(blocker / "a.txt")
            )

        assert exc_info.value.stage == "create_destination_dir"
        assert source.exists()
