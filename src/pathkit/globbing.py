"""Shell-style pattern expansion and matching.

Two related operations:

- **expand** walks the filesystem and returns every path a glob pattern
  names, the way a POSIX shell would: ``*``, ``?``, ``[...]`` classes,
  ``{a,b}`` braces, a leading ``~``, and a trailing ``/`` on each
  directory that matches.  Results are sorted.
- **fnmatch** tests one string against one pattern without touching the
  filesystem.  ``*`` crosses ``/`` and a leading dot is an ordinary
  character, as with ``fnmatch(3)`` called with no flags.

Both lean on ``wcmatch``, whose flag sets map closely onto the libc
``GLOB_*`` and ``FNM_*`` options.
"""

import logging

from wcmatch import fnmatch as wcfnmatch
from wcmatch import glob as wcglob

logger = logging.getLogger(__name__)

GLOB_FLAGS = wcglob.BRACE | wcglob.GLOBTILDE | wcglob.MARK | wcglob.CASE
"""Equivalent of ``GLOB_BRACE | GLOB_TILDE | GLOB_MARK``."""

FNMATCH_FLAGS = wcfnmatch.CASE | wcfnmatch.DOTMATCH
"""Equivalent of ``fnmatch(3)`` with no flags set."""


def expand(pattern: str) -> list[str]:
    """Return the sorted paths matching *pattern*.

    Never raises: a pattern with no matches and a pattern that cannot be
    compiled both produce an empty list.
    """
    if not pattern:
        return []
    try:
        matches = wcglob.glob(pattern, flags=GLOB_FLAGS)
    except Exception:  # noqa: BLE001
        logger.debug("Glob pattern %r could not be expanded", pattern, exc_info=True)
        return []
    return sorted(matches)


def fnmatch(name: str, pattern: str) -> bool:
    """Return True if *name* matches the shell *pattern*."""
    return wcfnmatch.fnmatch(name, pattern, flags=FNMATCH_FLAGS)
