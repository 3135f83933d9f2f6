"""Volume capabilities — is the filesystem under a path case-sensitive?

Abbreviating a path with ``~`` needs to know whether ``/Users/Kim`` and
``/users/kim`` name the same directory.  That depends on the volume the
path lives on, not on the path string, so the question is put to a
:class:`FileSystemInfo` object:

- **DefaultFileSystemInfo** asks the live volume.
- **FixedFileSystemInfo** always gives the same answer, which lets tests
  pretend to be on either kind of volume.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathkit.path import Path

# Platforms whose default volumes fold case.
_CASE_FOLDING_PLATFORMS = ("darwin", "win32", "cygwin")


class FileSystemInfo(ABC):
    """Answer questions about the volume that holds a path."""

    @abstractmethod
    def is_case_sensitive(self, path: Path) -> bool:
        """Return True if the volume containing *path* is case-sensitive."""


class DefaultFileSystemInfo(FileSystemInfo):
    """Query the real volume on every call.

    Strategy, in order:

    1. ``pathconf(_PC_CASE_SENSITIVE)`` where the platform offers it.
    2. Probe the nearest existing ancestor: if its name with the case
       swapped resolves to the same file, the volume folds case.
    3. Fall back to the platform default.

    The answer is only reliable for paths that exist (or have an
    existing ancestor on the same volume).
    """

    def is_case_sensitive(self, path: Path) -> bool:
        """Return True if the volume containing *path* is case-sensitive."""
        anchor = _nearest_existing(os.path.abspath(path.string or "."))
        if anchor is not None:
            answer = _pathconf_answer(anchor)
            if answer is not None:
                return answer
            answer = _probe_answer(anchor)
            if answer is not None:
                return answer
        return not sys.platform.startswith(_CASE_FOLDING_PLATFORMS)


@dataclass(frozen=True)
class FixedFileSystemInfo(FileSystemInfo):
    """Always report the same case sensitivity."""

    case_sensitive: bool

    def is_case_sensitive(self, path: Path) -> bool:  # noqa: ARG002
        """Return the fixed answer regardless of *path*."""
        return self.case_sensitive


def _nearest_existing(path: str) -> str | None:
    """Walk up from *path* until an existing entry is found."""
    current = path
    while not os.path.lexists(current):
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent
    return current


def _pathconf_answer(path: str) -> bool | None:
    """Ask ``pathconf`` directly, or return None when it cannot say."""
    if "PC_CASE_SENSITIVE" not in os.pathconf_names:
        return None
    try:
        return bool(os.pathconf(path, "PC_CASE_SENSITIVE"))
    except OSError:
        return None


def _probe_answer(path: str) -> bool | None:
    """Compare *path* against its case-swapped twin.

    Returns None when the last component has no letters to swap, or
    when the ancestor is the root directory.
    """
    head, name = os.path.split(path)
    swapped = name.swapcase()
    if not name or swapped == name:
        return None
    twin = os.path.join(head, swapped)
    try:
        return not os.path.samefile(path, twin)
    except FileNotFoundError:
        return True
    except OSError:
        return None
