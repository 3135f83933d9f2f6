"""Lazy, single-pass directory traversal.

A :class:`DirectoryEnumerator` walks a directory tree in pre-order: each
directory is yielded before its contents.  It holds a stack of open
``os.scandir`` handles, one per directory currently being read, so a
walk over a huge tree never materializes more than one directory level
at a time.

Descent into a directory is deferred until the *next* entry is asked
for.  That window is what makes :meth:`DirectoryEnumerator.skip_descendants`
possible: called right after a directory is yielded, it cancels the
pending descent and the walk moves on to that directory's siblings.

Key properties:
    - **Single pass** — an enumerator cannot be rewound.  Iterate a
      :class:`PathSequence` to get a fresh enumerator each time.
    - **Symlinks are not followed** — a symlink to a directory is yielded
      but never entered, so cycles are impossible.
    - **Handles are released** when the walk is exhausted, on
      :meth:`~DirectoryEnumerator.close`, when a ``with`` block exits, or
      when an abandoned enumerator is garbage collected.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from enum import IntFlag
from typing import TYPE_CHECKING, Self

from pathkit.algebra import SEPARATOR, split_extension

if TYPE_CHECKING:
    from types import TracebackType

    from pathkit.path import Path

logger = logging.getLogger(__name__)

BUNDLE_EXTENSIONS = frozenset({"app", "appex", "bundle", "framework", "kext", "plugin"})
"""Directory extensions treated as opaque packages."""


class EnumerationOptions(IntFlag):
    """Filters applied while enumerating a directory tree."""

    NONE = 0
    SKIPS_SUBDIRECTORY_DESCENDANTS = 1
    SKIPS_PACKAGE_DESCENDANTS = 2
    SKIPS_HIDDEN_FILES = 4


def is_package_name(name: str) -> bool:
    """Return True if a directory called *name* is a package."""
    _, extension = split_extension(name)
    return extension.lower() in BUNDLE_EXTENSIONS


class DirectoryEnumerator(Iterator["Path"]):
    """Iterate every entry below *root*, depth first.

    Args:
        root: The directory to walk.  Yielded paths are ``root + subpath``.
        options: Filters to apply.
        strict: Raise ``OSError`` when a directory cannot be read instead
            of silently skipping it.

    """

    def __init__(
        self,
        root: Path,
        options: EnumerationOptions = EnumerationOptions.NONE,
        *,
        strict: bool = False,
    ) -> None:
        """Open the root directory."""
        self._root = root
        self._options = options
        self._strict = strict
        self._stack: list[tuple[str, Iterator[os.DirEntry[str]]]] = []
        self._pending: tuple[str, str] | None = None
        self._open("", root.string or ".")

    @property
    def options(self) -> EnumerationOptions:
        """Return the filters this enumerator was created with."""
        return self._options

    def __iter__(self) -> Self:
        """Return the enumerator itself (it is single-pass)."""
        return self

    def __next__(self) -> Path:
        """Return the next entry, or raise StopIteration when exhausted."""
        self._descend()
        while self._stack:
            prefix, handle = self._stack[-1]
            entry = next(handle, None)
            if entry is None:
                self._close_top()
                continue
            if self._is_hidden(entry):
                continue
            relative = prefix + entry.name
            if self._may_descend(entry):
                self._pending = (relative, entry.path)
            return self._root + relative
        raise StopIteration

    def skip_descendants(self) -> None:
        """Do not descend into the most recently yielded directory.

        Has no effect if the last entry was not a directory, or if the
        enumerator has already moved past it.
        """
        self._pending = None

    def close(self) -> None:
        """Release every open directory handle."""
        self._pending = None
        while self._stack:
            self._close_top()

    def __del__(self) -> None:
        """Release handles left open by a walk that was abandoned part-way."""
        self.close()

    def __enter__(self) -> Self:
        """Use the enumerator as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close all handles on the way out."""
        self.close()

    def _descend(self) -> None:
        """Open the directory yielded last time, unless it was skipped."""
        if self._pending is None:
            return
        relative, full = self._pending
        self._pending = None
        self._open(relative + SEPARATOR, full)

    def _open(self, prefix: str, path: str) -> None:
        """Push a scandir handle for *path*, or log and skip on failure."""
        try:
            handle = os.scandir(path)
        except OSError:
            if self._strict:
                self.close()
                raise
            logger.debug("Skipping unreadable directory %s", path, exc_info=True)
            return
        self._stack.append((prefix, handle))

    def _close_top(self) -> None:
        _, handle = self._stack.pop()
        handle.close()  # pyright: ignore[reportAttributeAccessIssue]

    def _is_hidden(self, entry: os.DirEntry[str]) -> bool:
        return bool(self._options & EnumerationOptions.SKIPS_HIDDEN_FILES) and entry.name.startswith(".")

    def _may_descend(self, entry: os.DirEntry[str]) -> bool:
        if self._options & EnumerationOptions.SKIPS_SUBDIRECTORY_DESCENDANTS:
            return False
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            return False
        if not is_dir:
            return False
        return not (self._options & EnumerationOptions.SKIPS_PACKAGE_DESCENDANTS and is_package_name(entry.name))


class PathSequence:
    """A restartable view of a directory tree.

    Each call to ``iter()`` opens a brand-new :class:`DirectoryEnumerator`,
    so the sequence can be walked any number of times.
    """

    def __init__(self, root: Path, options: EnumerationOptions = EnumerationOptions.NONE) -> None:
        """Remember the root and the filters for later walks."""
        self._root = root
        self._options = options

    def __iter__(self) -> DirectoryEnumerator:
        """Start a fresh walk."""
        return DirectoryEnumerator(self._root, self._options)
