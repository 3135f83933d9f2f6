"""Tests for filesystem mutations, contents, and the working directory.

Mutations fail loudly: the ``OSError`` raised by the operating system is
passed to the caller untouched, and nothing is ever silently overwritten.
"""

import os
import stat

import pytest

from pathkit import Path


class TestMkdir:
    """Verify single-level and recursive directory creation."""

    def test_mkdir(self, fixtures: Path) -> None:
        """mkdir() creates one directory."""
        path = fixtures + "made"
        path.mkdir()
        assert path.is_directory

    def test_mkdir_missing_parent_raises(self, fixtures: Path) -> None:
        """mkdir() does not create parents."""
        with pytest.raises(FileNotFoundError):
            (fixtures + "a/b/c").mkdir()

    def test_mkdir_existing_raises(self, fixtures: Path) -> None:
        """mkdir() refuses an existing directory."""
        with pytest.raises(FileExistsError):
            (fixtures + "directory").mkdir()

    def test_mkpath_creates_chain(self, fixtures: Path) -> None:
        """mkpath() creates every missing level."""
        path = fixtures + "a/b/c"
        path.mkpath()
        assert path.is_directory

    def test_mkpath_is_idempotent(self, fixtures: Path) -> None:
        """Running mkpath() twice is not an error."""
        path = fixtures + "a/b/c"
        path.mkpath()
        path.mkpath()
        assert path.is_directory

    def test_mkpath_through_file_raises(self, fixtures: Path) -> None:
        """A file in the chain stops mkpath()."""
        with pytest.raises(OSError):  # noqa: PT011
            (fixtures + "file/sub").mkpath()


class TestDelete:
    """Verify deleting files, directories and links."""

    def test_delete_file(self, fixtures: Path) -> None:
        """A file is removed."""
        path = fixtures + "file"
        path.delete()
        assert not path.exists

    def test_delete_directory_recursively(self, fixtures: Path) -> None:
        """A directory is removed along with its contents."""
        path = fixtures + "directory"
        path.delete()
        assert not path.exists

    def test_delete_symlink_keeps_target(self, fixtures: Path) -> None:
        """Deleting a link to a directory leaves the directory alone."""
        link = fixtures + "symlinks/directory"
        link.delete()
        assert not link.is_symlink
        assert (fixtures + "directory/child").exists

    def test_delete_missing_raises(self, fixtures: Path) -> None:
        """Deleting nothing propagates FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            (fixtures + "missing").delete()


class TestMoveAndCopy:
    """Verify move() and copy()."""

    def test_move_file(self, fixtures: Path) -> None:
        """The file appears at the destination and leaves the source."""
        source = fixtures + "file"
        destination = fixtures + "moved"
        source.move(destination)
        assert not source.exists
        assert destination.read_text() == "contents"

    def test_move_onto_existing_raises(self, fixtures: Path) -> None:
        """An existing destination is never overwritten."""
        with pytest.raises(FileExistsError):
            (fixtures + "file").move(fixtures + "directory/child")
        assert (fixtures + "directory/child").read_text() == "child"

    def test_move_accepts_strings(self, fixtures: Path) -> None:
        """The destination may be a plain string."""
        (fixtures + "file").move(f"{fixtures}/renamed")
        assert (fixtures + "renamed").exists

    def test_copy_file(self, fixtures: Path) -> None:
        """Both source and copy exist afterwards."""
        destination = fixtures + "copied"
        (fixtures + "file").copy(destination)
        assert (fixtures + "file").exists
        assert destination.read_text() == "contents"

    def test_copy_directory(self, fixtures: Path) -> None:
        """Directories are copied recursively."""
        destination = fixtures + "copied"
        (fixtures + "directory").copy(destination)
        assert (destination + "child").read_text() == "child"

    def test_copy_onto_existing_raises(self, fixtures: Path) -> None:
        """copy() refuses to overwrite."""
        with pytest.raises(FileExistsError):
            (fixtures + "file").copy(fixtures + "directory/child")

    def test_copy_missing_source_raises(self, fixtures: Path) -> None:
        """Copying nothing propagates FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            (fixtures + "missing").copy(fixtures + "copied")


class TestLinks:
    """Verify hard and symbolic link creation."""

    def test_hard_link_shares_inode(self, fixtures: Path) -> None:
        """A hard link names the same inode."""
        source = fixtures + "file"
        destination = fixtures + "hard"
        source.link(destination)
        assert os.stat(source).st_ino == os.stat(destination).st_ino

    def test_hard_link_existing_raises(self, fixtures: Path) -> None:
        """A hard link cannot replace an existing entry."""
        with pytest.raises(FileExistsError):
            (fixtures + "file").link(fixtures + "directory/child")

    def test_symlink_is_created_at_self(self, fixtures: Path) -> None:
        """symlink() creates the link at this path, pointing at the argument."""
        link = fixtures + "alias"
        link.symlink(fixtures + "file")
        assert link.is_symlink
        assert link.symlink_destination() == fixtures + "file"

    def test_symlink_existing_raises(self, fixtures: Path) -> None:
        """A symlink cannot replace an existing entry."""
        with pytest.raises(FileExistsError):
            (fixtures + "file").symlink(fixtures + "directory")


class TestContents:
    """Verify reading and atomically writing file contents."""

    def test_read_bytes(self, fixtures: Path) -> None:
        """The raw bytes are returned."""
        assert (fixtures + "file").read_bytes() == b"contents"

    def test_write_then_read_text(self, fixtures: Path) -> None:
        """Written text reads back identically."""
        path = fixtures + "notes.txt"
        path.write_text("héllo")
        assert path.read_text() == "héllo"

    def test_write_replaces_contents(self, fixtures: Path) -> None:
        """A second write replaces the first."""
        path = fixtures + "file"
        path.write_bytes(b"new")
        assert path.read_bytes() == b"new"

    def test_write_keeps_existing_mode(self, fixtures: Path) -> None:
        """Overwriting keeps the file's permission bits."""
        path = fixtures + "permissions/executable"
        path.write_text("#!/bin/sh\nexit 0\n")
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o755

    def test_write_leaves_no_temporary_files(self, fixtures: Path) -> None:
        """Only the target remains in the directory."""
        (fixtures + "directory/new").write_text("x")
        assert sorted(os.listdir(fixtures + "directory")) == ["child", "new"]

    def test_write_to_missing_directory_raises(self, fixtures: Path) -> None:
        """Writing below a missing directory propagates FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            (fixtures + "missing/file").write_text("x")

    def test_read_missing_raises(self, fixtures: Path) -> None:
        """Reading a missing file propagates FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            (fixtures + "missing").read_bytes()


class TestCurrentDirectory:
    """Verify the process working directory helpers."""

    def test_current_matches_os(self) -> None:
        """current() reports the live working directory."""
        assert Path.current().string == os.getcwd()

    def test_set_current(self, fixtures: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """set_current() changes the working directory."""
        monkeypatch.chdir(os.getcwd())
        Path.set_current(fixtures)
        assert Path.current() == fixtures

    def test_set_current_missing_raises(self) -> None:
        """Changing into a missing directory propagates the OS error."""
        with pytest.raises(FileNotFoundError):
            Path.set_current("/pathkit/test")

    def test_chdir_restores_on_exit(self, fixtures: Path) -> None:
        """The previous directory is back after the block."""
        previous = Path.current()
        with (fixtures + "directory").chdir() as inside:
            assert Path.current() == inside
            assert Path("child").is_file
        assert Path.current() == previous

    def test_chdir_restores_on_error(self, fixtures: Path) -> None:
        """The previous directory is restored when the block raises."""
        previous = Path.current()
        with pytest.raises(RuntimeError, match="boom"), fixtures.chdir():
            msg = "boom"
            raise RuntimeError(msg)
        assert Path.current() == previous


class TestTemporaries:
    """Verify the temporary-directory helpers."""

    def test_temporary_reads_environment(self, fixtures: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """TMPDIR decides the temporary directory."""
        monkeypatch.setenv("TMPDIR", fixtures.string)
        assert Path.temporary() == fixtures

    def test_home_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """HOME decides the home directory."""
        monkeypatch.setenv("HOME", "/home/sam")
        assert Path.home() == Path("/home/sam")

    def test_process_unique_is_stable(self, fixtures: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The per-process directory is created once and reused."""
        monkeypatch.setenv("TMPDIR", fixtures.string)
        first = Path.process_unique_temporary()
        second = Path.process_unique_temporary()
        assert first == second
        assert first.is_directory
        assert first.parent() == fixtures

    def test_unique_temporary_differs_per_call(self, fixtures: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Every call creates a new directory inside the per-process one."""
        monkeypatch.setenv("TMPDIR", fixtures.string)
        first = Path.unique_temporary()
        second = Path.unique_temporary()
        assert first != second
        assert first.is_directory
        assert second.is_directory
        assert first.parent() == Path.process_unique_temporary()
