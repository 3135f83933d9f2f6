"""The ``Path`` value type — a filesystem path with string semantics.

A :class:`Path` wraps exactly one string and never rewrites it behind
your back.  Two consequences follow:

- **Equality is textual.**  ``Path("a/../b") != Path("b")`` even though
  both name the same file.  Use :meth:`Path.equivalent_to` when you want
  "same after normalization".
- **Nothing is cached.**  ``exists``, ``is_directory`` and the other
  predicates stat the filesystem every time they are read, so they
  always reflect the live state of the disk.

Operations fall into four families:

1. **Algebra** (pure) — ``+``/``/``, ``normalize()``, ``absolute()``,
   ``abbreviate()``, ``components``.  These never fail.
2. **Queries** — ``exists``, ``is_file``, ``is_readable``, ...  These
   never raise; any OS failure reads as ``False``.
3. **Mutations** — ``mkdir()``, ``delete()``, ``move()``, ...  These
   let the ``OSError`` from the operating system propagate unchanged.
4. **Traversal** — ``children()``, ``recursive_children()``, lazy
   iteration, ``glob()`` and ``match()``.

Example::

    >>> Path("/usr/local") + "../bin/python"
    Path('/usr/bin/python')
"""

from __future__ import annotations

import contextlib
import errno
import functools
import json
import logging
import os
import shutil
import stat
import tempfile
import uuid
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote, urlsplit

from pydantic_core import core_schema

from pathkit import algebra, globbing
from pathkit.config import PathContext
from pathkit.enumerator import DirectoryEnumerator, EnumerationOptions, PathSequence
from pathkit.fsinfo import DefaultFileSystemInfo, FileSystemInfo

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

logger = logging.getLogger(__name__)

_PROCESS_TOKEN = uuid.uuid4().hex

DEFAULT_FILE_MODE = 0o644
"""Permissions for files created by an atomic write."""


@functools.total_ordering
class Path:
    """An immutable, string-backed filesystem path.

    Args:
        path: The raw path.  Stored verbatim; ``""`` is a valid path
            meaning "no path".
        components: Build the path by joining these with ``/`` instead.
        fs_info: Where to ask whether the path's volume is
            case-sensitive (see :meth:`abbreviate`).

    """

    separator = algebra.SEPARATOR

    __slots__ = ("_fs_info", "_path")

    def __init__(
        self,
        path: PathLike = "",
        *,
        components: Iterable[str] | None = None,
        fs_info: FileSystemInfo | None = None,
    ) -> None:
        """Wrap *path*, or join *components*."""
        if components is not None:
            if path:
                msg = "Pass either a path or components, not both"
                raise TypeError(msg)
            self._path = algebra.join_components(components)
        else:
            self._path = os.fspath(path)
        self._fs_info = fs_info if fs_info is not None else DefaultFileSystemInfo()

    @classmethod
    def from_components(cls, components: Iterable[str]) -> Path:
        """Create a path by joining *components* with ``/``."""
        return cls(components=components)

    def _derive(self, path: str) -> Path:
        """Create a sibling value that shares this path's volume info."""
        return Path(path, fs_info=self._fs_info)

    # -- Conversion ---------------------------------------------------------

    @property
    def string(self) -> str:
        """Return the raw path string."""
        return self._path

    @property
    def fs_info(self) -> FileSystemInfo:
        """Return the volume-info capability this path consults."""
        return self._fs_info

    @property
    def url(self) -> str:
        """Return a ``file://`` URL for the absolute form of this path."""
        return "file://" + quote(self.absolute().string)

    @classmethod
    def from_url(cls, url: str) -> Path:
        """Create a path from a ``file://`` URL.

        Raises:
            ValueError: If *url* uses any scheme other than ``file``.

        """
        parts = urlsplit(url)
        if parts.scheme not in ("", "file"):
            msg = f"Not a file URL: {url}"
            raise ValueError(msg)
        return cls(unquote(parts.path))

    def __str__(self) -> str:
        """Return the raw path string."""
        return self._path

    def __repr__(self) -> str:
        """Return ``Path('...')``."""
        return f"Path({self._path!r})"

    def __fspath__(self) -> str:
        """Let ``open()``, ``os`` and ``shutil`` accept a Path directly."""
        return self._path

    def to_json(self) -> str:
        """Encode as a single JSON string."""
        return json.dumps(self._path)

    @classmethod
    def from_json(cls, data: str | bytes) -> Path:
        """Decode a path previously produced by :meth:`to_json`.

        Raises:
            TypeError: If the JSON value is not a string.

        """
        value = json.loads(data)
        if not isinstance(value, str):
            msg = f"Expected a JSON string, got {type(value).__name__}"
            raise TypeError(msg)
        return cls(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,  # noqa: ANN401, ARG003
        handler: GetCoreSchemaHandler,  # noqa: ARG003
    ) -> core_schema.CoreSchema:
        """Validate from a plain string and serialize back to one."""
        from_str = core_schema.no_info_after_validator_function(cls, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    # -- Equality, ordering, hashing ------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Compare raw strings; ``foo.txt`` and ``./foo.txt`` differ."""
        if not isinstance(other, Path):
            return NotImplemented
        return self._path == other._path

    def __lt__(self, other: object) -> bool:
        """Order lexicographically by raw string."""
        if not isinstance(other, Path):
            return NotImplemented
        return self._path < other._path

    def __hash__(self) -> int:
        """Hash the raw string, consistent with ``__eq__``."""
        return hash(self._path)

    def equivalent_to(self, other: PathLike) -> bool:
        """Return True if the paths are equal or normalize to the same path."""
        other_path = other if isinstance(other, Path) else Path(other)
        return self == other_path or self.normalize() == other_path.normalize()

    # -- Operators --------------------------------------------------------------

    def __add__(self, other: object) -> Path:
        """Append a path fragment; see :func:`pathkit.algebra.concatenate`."""
        if not isinstance(other, (Path, str)):
            return NotImplemented
        return self._derive(algebra.concatenate(self._path, str(other)))

    def __radd__(self, other: object) -> Path:
        """Support ``"prefix" + Path(...)``."""
        if not isinstance(other, str):
            return NotImplemented
        return Path(algebra.concatenate(other, self._path), fs_info=self._fs_info)

    __truediv__ = __add__
    __rtruediv__ = __radd__

    # -- Path info ----------------------------------------------------------

    @property
    def is_absolute(self) -> bool:
        """Return True if the path begins with ``/``."""
        return self._path.startswith(algebra.SEPARATOR)

    @property
    def is_relative(self) -> bool:
        """Return True if the path is not absolute."""
        return not self.is_absolute

    def absolute(self, context: PathContext | None = None) -> Path:
        """Return the normalized absolute form of this path.

        A leading ``~`` is expanded first; anything still relative is
        then resolved against the working directory.

        Args:
            context: Supplies the home and working directories.  Defaults
                to the live process environment.

        """
        if self.is_absolute:
            return self.normalize()
        ctx = context if context is not None else PathContext.from_environ()
        expanded = self._derive(algebra.expand_tilde(self._path, ctx.home))
        if expanded.is_absolute:
            return expanded.normalize()
        return (self._derive(ctx.current_directory()) + self).normalize()

    def normalize(self) -> Path:
        """Collapse ``.``, ``..`` and doubled separators without touching the disk."""
        return self._derive(algebra.normalize(self._path))

    def abbreviate(self, context: PathContext | None = None) -> Path:
        """Replace a leading home-directory prefix with ``~``.

        The comparison folds case when the volume does, as reported by
        this path's :class:`~pathkit.fsinfo.FileSystemInfo` (asked anew on
        every call).  Only a whole leading component run matches, so a
        sibling such as ``/home/kimberly`` is left alone when home is
        ``/home/kim``.  A home of ``/`` abbreviates every absolute path.
        """
        if not self._path:
            return self
        ctx = context if context is not None else PathContext.from_environ()
        # Root home strips to "", so every absolute path matches.
        home = ctx.home.rstrip(algebra.SEPARATOR)
        head = self._path[: len(home)]
        if self._fs_info.is_case_sensitive(self):
            matched = head == home
        else:
            matched = head.lower() == home.lower()
        rest = self._path[len(home) :]
        if not matched or (rest and not rest.startswith(algebra.SEPARATOR)):
            return self
        if rest in ("", algebra.SEPARATOR):
            return self._derive(algebra.TILDE)
        return self._derive(algebra.TILDE + rest)

    def symlink_destination(self) -> Path:
        """Return the path a symbolic link points to.

        A relative link target is interpreted from the link's own parent
        directory.  Only one level of linking is followed.

        Raises:
            OSError: If the path is not a symlink or cannot be read.

        """
        target = self._derive(os.readlink(self._path))
        if target.is_relative:
            return self + algebra.PARENT + target
        return target

    # -- Components ---------------------------------------------------------

    @property
    def components(self) -> list[str]:
        """Return the path split on ``/``; an absolute path starts with ``"/"``."""
        return algebra.split_components(self._path)

    @property
    def last_component(self) -> str:
        """Return the final component."""
        return algebra.last_component(self._path)

    @property
    def last_component_without_extension(self) -> str:
        """Return the final component with its extension removed."""
        stem, _ = algebra.split_extension(self.last_component)
        return stem

    @property
    def extension(self) -> str | None:
        """Return the text after the last dot of the final component, if any."""
        _, extension = algebra.split_extension(self.last_component)
        return extension or None

    # -- File info ------------------------------------------------------------

    @property
    def exists(self) -> bool:
        """Return True if something exists here (symlinks are followed)."""
        return os.path.exists(self._path)

    @property
    def is_directory(self) -> bool:
        """Return True for a directory, or a symlink to one."""
        mode = self._stat_mode()
        return mode is not None and stat.S_ISDIR(mode)

    @property
    def is_file(self) -> bool:
        """Return True for anything that exists and is not a directory."""
        mode = self._stat_mode()
        return mode is not None and not stat.S_ISDIR(mode)

    @property
    def is_symlink(self) -> bool:
        """Return True if the path is a symbolic link, dangling or not."""
        try:
            os.readlink(self._path)
        except (OSError, ValueError):
            return False
        return True

    @property
    def is_readable(self) -> bool:
        """Return True if the process may read the path."""
        return self._access(os.R_OK)

    @property
    def is_writable(self) -> bool:
        """Return True if the process may write the path."""
        return self._access(os.W_OK)

    @property
    def is_executable(self) -> bool:
        """Return True if the process may execute (or search) the path."""
        return self._access(os.X_OK)

    @property
    def is_deletable(self) -> bool:
        """Return True if the path exists and its directory allows unlinking.

        In a sticky directory such as ``/tmp`` only root or an owner of the
        entry or the directory may unlink it.
        """
        if not os.path.lexists(self._path):
            return False
        parent = os.path.dirname(self._path.rstrip(algebra.SEPARATOR)) or algebra.CURRENT
        with contextlib.suppress(OSError, ValueError):
            if not os.access(parent, os.W_OK | os.X_OK):
                return False
            parent_info = os.stat(parent)
            if not parent_info.st_mode & stat.S_ISVTX:
                return True
            uid = os.geteuid()
            return uid in (0, parent_info.st_uid, os.lstat(self._path).st_uid)
        return False

    def _stat_mode(self) -> int | None:
        with contextlib.suppress(OSError, ValueError):
            return os.stat(self.normalize().string).st_mode
        return None

    def _access(self, mode: int) -> bool:
        with contextlib.suppress(OSError, ValueError):
            return os.access(self._path, mode)
        return False

    # -- File manipulation ----------------------------------------------------

    def mkdir(self) -> None:
        """Create this directory.

        Raises:
            FileNotFoundError: If the parent directory does not exist.
            FileExistsError: If the path already exists.

        """
        os.mkdir(self._path)
        logger.debug("Created directory %s", self._path)

    def mkpath(self) -> None:
        """Create this directory and any missing parents.

        Succeeds without change if the directory already exists.

        Raises:
            FileExistsError: If the path exists and is not a directory.
            NotADirectoryError: If a parent is not a directory.

        """
        os.makedirs(self._path, exist_ok=True)
        logger.debug("Created directory chain %s", self._path)

    def delete(self) -> None:
        """Delete the file, or the directory and everything inside it.

        A symlink is removed itself; its target is untouched.

        Raises:
            FileNotFoundError: If nothing exists at the path.

        """
        if os.path.isdir(self._path) and not os.path.islink(self._path):
            shutil.rmtree(self._path)
        else:
            os.remove(self._path)
        logger.debug("Deleted %s", self._path)

    def move(self, destination: PathLike) -> None:
        """Move to *destination*, which must include the new name.

        Raises:
            FileExistsError: If *destination* already exists.

        """
        target = _coerce(destination)
        _refuse_existing(target)
        shutil.move(self._path, target.string)
        logger.debug("Moved %s to %s", self._path, target)

    def copy(self, destination: PathLike) -> None:
        """Copy to *destination*, which must include the new name.

        Directories are copied recursively; symlinks inside are copied as
        symlinks.

        Raises:
            FileExistsError: If *destination* already exists.

        """
        target = _coerce(destination)
        _refuse_existing(target)
        if os.path.isdir(self._path) and not os.path.islink(self._path):
            shutil.copytree(self._path, target.string, symlinks=True)
        else:
            shutil.copy2(self._path, target.string, follow_symlinks=False)
        logger.debug("Copied %s to %s", self._path, target)

    def link(self, destination: PathLike) -> None:
        """Create a hard link to this file at *destination*."""
        target = _coerce(destination)
        os.link(self._path, target.string)
        logger.debug("Hard-linked %s at %s", self._path, target)

    def symlink(self, destination: PathLike) -> None:
        """Create a symbolic link *at this path* pointing to *destination*.

        *destination* is stored verbatim, so a relative destination is
        interpreted from this path's parent directory.
        """
        target = _coerce(destination)
        os.symlink(target.string, self._path)
        logger.debug("Symlinked %s to %s", self._path, target)

    # -- Contents ---------------------------------------------------------------

    def read_bytes(self) -> bytes:
        """Return the file's contents."""
        with open(self._path, "rb") as handle:
            return handle.read()

    def read_text(self, encoding: str = "utf-8") -> str:
        """Return the file's contents decoded with *encoding*."""
        with open(self._path, encoding=encoding) as handle:
            return handle.read()

    def write_bytes(self, data: bytes) -> None:
        """Replace the file's contents atomically.

        The data goes to a temporary file next to the target, which is
        then renamed over it, so readers never see a half-written file.
        """
        target = self.normalize().string
        directory = os.path.dirname(target) or "."
        fd, temp = tempfile.mkstemp(dir=directory, prefix=".pathkit-")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            if os.path.exists(target):
                shutil.copymode(target, temp)
            else:
                os.chmod(temp, DEFAULT_FILE_MODE)
            os.replace(temp, target)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(temp)
            raise

    def write_text(self, text: str, encoding: str = "utf-8") -> None:
        """Encode *text* and replace the file's contents atomically."""
        self.write_bytes(text.encode(encoding))

    # -- Current directory --------------------------------------------------------

    @classmethod
    def current(cls) -> Path:
        """Return the process's current working directory."""
        return cls(os.getcwd())

    @classmethod
    def set_current(cls, path: PathLike) -> None:
        """Change the process's current working directory.

        Raises:
            FileNotFoundError: If *path* does not exist.
            NotADirectoryError: If *path* is not a directory.

        """
        os.chdir(os.fspath(path))
        logger.debug("Changed working directory to %s", os.fspath(path))

    @contextlib.contextmanager
    def chdir(self) -> Iterator[Path]:
        """Work inside this directory for the duration of a ``with`` block.

        The previous working directory is restored however the block
        exits, exceptions included.

        The working directory is shared by the whole process, so this is
        not safe to use from several threads at once; callers that need
        that must serialize access themselves.
        """
        previous = Path.current()
        Path.set_current(self)
        try:
            yield self
        finally:
            Path.set_current(previous)

    # -- Well-known directories -----------------------------------------------

    @classmethod
    def home(cls, context: PathContext | None = None) -> Path:
        """Return the invoking user's home directory."""
        ctx = context if context is not None else PathContext.from_environ()
        return cls(ctx.home)

    @classmethod
    def temporary(cls, context: PathContext | None = None) -> Path:
        """Return the temporary directory for the current user."""
        ctx = context if context is not None else PathContext.from_environ()
        return cls(ctx.temporary)

    @classmethod
    def process_unique_temporary(cls, context: PathContext | None = None) -> Path:
        """Return a temporary directory unique to this process, creating it once."""
        path = cls.temporary(context) + f"pathkit-{os.getpid()}-{_PROCESS_TOKEN}"
        if not path.exists:
            path.mkdir()
        return path

    @classmethod
    def unique_temporary(cls, context: PathContext | None = None) -> Path:
        """Create and return a new temporary directory on every call."""
        path = cls.process_unique_temporary(context) + str(uuid.uuid4()).upper()
        path.mkdir()
        return path

    # -- Traversing ---------------------------------------------------------------

    def parent(self) -> Path:
        """Return the parent directory (``self + ".."``)."""
        return self + algebra.PARENT

    def children(self) -> list[Path]:
        """Return the immediate entries of this directory, in OS order.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.

        """
        return [self + name for name in os.listdir(self._path)]

    def recursive_children(self) -> list[Path]:
        """Return every entry below this directory, in OS order.

        Symlinked directories are listed but not entered.

        Raises:
            OSError: If this directory, or one below it, cannot be read.

        """
        with DirectoryEnumerator(self, strict=True) as walker:
            return list(walker)

    def __iter__(self) -> DirectoryEnumerator:
        """Walk the directory tree lazily, depth first."""
        return DirectoryEnumerator(self)

    def iterate_children(self, options: EnumerationOptions = EnumerationOptions.NONE) -> PathSequence:
        """Return a restartable deep walk filtered by *options*."""
        return PathSequence(self, options)

    # -- Globbing -----------------------------------------------------------------

    def glob(self, pattern: str) -> list[Path]:
        """Expand *pattern* relative to this path.  Never raises."""
        return [Path(match) for match in globbing.expand((self + pattern).string)]

    def match(self, pattern: str) -> bool:
        """Return True if the raw path matches the shell *pattern*."""
        return globbing.fnmatch(self._path, pattern)


def glob(pattern: str) -> list[Path]:
    """Expand a shell glob *pattern* into the matching paths.

    Supports ``*``, ``?``, ``[...]``, ``{a,b}`` and a leading ``~``.
    Matching directories carry a trailing ``/``.  A pattern without
    matches, or one that cannot be parsed, yields ``[]``.
    """
    return [Path(match) for match in globbing.expand(pattern)]


PathLike = Path | str | os.PathLike[str]
"""Anything accepted where a path is expected."""


def _coerce(path: PathLike) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _refuse_existing(target: Path) -> None:
    """Raise FileExistsError if *target* exists (even as a dangling link)."""
    if os.path.lexists(target.string):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), target.string)
