"""Convenience helpers built purely on the public ``Path`` surface.

Nothing here reaches into ``Path`` internals: every helper is written in
terms of ``string``, ``components``, ``extension``, ``last_component``,
``+``, ``is_directory``, ``exists`` and ``children()``.  That keeps the
core small and proves it is a sufficient foundation.
"""

import contextlib
import os

from pathkit.algebra import SEPARATOR
from pathkit.enumerator import BUNDLE_EXTENSIONS
from pathkit.path import Path

STDIO = Path("-")
"""Stands for standard input or output in command-line arguments."""

IGNORED_DIRECTORY_ENTRIES = frozenset({".DS_Store"})
"""Entries that do not count when deciding if a directory is empty."""


def is_tty(path: Path) -> bool:
    """Return True if *path* is the standard input/output sentinel."""
    return path.string.strip() == STDIO.string


def is_bundle(path: Path) -> bool:
    """Return True for a directory with a bundle extension (``.app``, ...)."""
    if not path.is_directory:
        return False
    extension = path.extension
    return extension is not None and extension.lower() in BUNDLE_EXTENSIONS


def is_app_bundle(path: Path) -> bool:
    """Return True for an application bundle."""
    return is_bundle(path) and path.extension == "app"


def removing_last_component(path: Path) -> Path:
    """Return *path* without its final component.

    Examples::

        "a/b/c.txt" → "a/b"
        "/a"        → "/"
        "a"         → "."
        "a/b/"      → "a/b"

    A trailing separator counts as the last component, so removing it
    leaves the directory name in place.
    """
    components = path.components
    if not components:
        return path
    components.pop()
    return Path(components=components)


def relative_to(path: Path, base: Path) -> Path:
    """Return *path* expressed relative to *base*.

    Only a whole-component prefix is removed: ``/my/custom/path/file.txt``
    relative to ``/my/custom/`` is ``path/file.txt``, while
    ``/my/customer`` relative to ``/my/custom`` is returned unchanged.
    """
    if not path.string:
        return path
    if base.string == SEPARATOR:
        return Path(path.string[1:]) if path.is_absolute else path
    prefix = base.string.rstrip(SEPARATOR)
    if path.string == prefix:
        return Path("")
    if path.string.startswith(prefix + SEPARATOR):
        return Path(path.string[len(prefix) + 1 :])
    return path


def appending_suffix(path: Path, suffix: str) -> Path:
    """Insert *suffix* into the file name, before the extension.

    ``/path/to/myfile.txt`` with ``_new`` becomes ``/path/to/myfile_new.txt``.
    """
    extension = path.extension
    if extension is None:
        name = path.last_component + suffix
    else:
        name = f"{path.last_component_without_extension}{suffix}.{extension}"
    return _directory_of(path) + name


def appending_extension(path: Path, extension: str) -> Path:
    """Append ``.extension`` (given without the dot) to the file name."""
    return _directory_of(path) + f"{path.last_component}.{extension}"


def _directory_of(path: Path) -> Path:
    """Return the directory holding the named item, ignoring a trailing ``/``."""
    components = path.components
    if len(components) > 1 and components[-1] == SEPARATOR:
        components.pop()
    return removing_last_component(Path(components=components))


def creating_subpath(path: Path, subpath: Path | str) -> Path:
    """Create ``path + subpath`` like ``mkdir -p`` and return it.

    Raises:
        FileExistsError: If the full path exists and is not a directory.
        NotADirectoryError: If a file sits part way along the chain.

    """
    full = path + subpath
    if not full.is_directory:
        full.mkpath()
    return full


def is_empty_directory(path: Path) -> bool:
    """Return True for an existing directory with no meaningful entries."""
    if not path.is_directory:
        return False
    try:
        children = path.children()
    except OSError:
        return False
    return all(child.last_component in IGNORED_DIRECTORY_ENTRIES for child in children)


def file_size(path: Path) -> int | None:
    """Return the size in bytes of the file at *path*, or None if unknown."""
    with contextlib.suppress(OSError, ValueError):
        return os.stat(path).st_size
    return None
