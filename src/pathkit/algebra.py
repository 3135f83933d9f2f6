"""Pure string algebra for POSIX paths.

Everything in this module works on plain strings and never touches the
filesystem.  The :class:`~pathkit.path.Path` value type delegates to
these functions so the rules live in exactly one place.

Component model:

- A path splits into **components** on ``/``.  Empty pieces from
  repeated separators are dropped.
- An absolute path keeps its root as a leading ``"/"`` component:
  ``"/usr/bin"`` → ``["/", "usr", "bin"]``.
- A trailing separator survives as a trailing ``"/"`` marker:
  ``"usr/bin/"`` → ``["usr", "bin", "/"]``.

Concatenation is the interesting part.  ``"a/b" + "../c"`` must give
``"a/c"``: leading ``..`` components on the right eat trailing
components on the left, but only while there is something real to eat.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable

SEPARATOR = "/"
CURRENT = "."
PARENT = ".."
TILDE = "~"


def split_components(path: str) -> list[str]:
    """Split *path* into its components.

    Examples::

        "a/b/c.d"   → ["a", "b", "c.d"]
        "/a/b"      → ["/", "a", "b"]
        "a/b/"      → ["a", "b", "/"]
        "/"         → ["/"]
        ""          → []

    """
    if not path:
        return []
    names = [name for name in path.split(SEPARATOR) if name]
    if not names:
        return [SEPARATOR]
    components: list[str] = []
    if path.startswith(SEPARATOR):
        components.append(SEPARATOR)
    components.extend(names)
    if path.endswith(SEPARATOR):
        components.append(SEPARATOR)
    return components


def join_components(components: Iterable[str]) -> str:
    """Join *components* back into a path string.

    An empty sequence yields ``"."``.  A leading ``"/"`` root followed by
    more components is not doubled: ``["/", "usr"]`` → ``"/usr"``.
    """
    parts = list(components)
    if not parts:
        return CURRENT
    joined = SEPARATOR.join(parts)
    if parts[0] == SEPARATOR and len(parts) > 1:
        return joined[1:]
    return joined


def concatenate(lhs: str, rhs: str) -> str:
    """Append *rhs* to *lhs*, collapsing ``.`` and leading ``..``.

    Rules:

    1. An absolute *rhs* replaces *lhs* entirely.
    2. A single trailing ``/`` marker on the left is dropped and ``.``
       components vanish from both sides.
    3. While the right starts with ``..`` and the left still has a last
       component that is not itself ``..``, one component is removed
       from each side.  A lone root ``/`` on the left is never removed.

    Examples::

        "a/b" + "../c"   → "a/c"
        "a"   + ".."     → "."
        "/"   + "../x"   → "/x"
        "../" + "../x"   → "../../x"
        "a/b" + "/etc"   → "/etc"

    """
    if rhs.startswith(SEPARATOR):
        return rhs

    left = split_components(lhs)
    right = split_components(rhs)

    if len(left) > 1 and left[-1] == SEPARATOR:
        left.pop()
    trailing_slash = len(right) > 1 and right[-1] == SEPARATOR
    if trailing_slash:
        right.pop()

    left = [name for name in left if name != CURRENT]
    right = [name for name in right if name != CURRENT]

    while right and right[0] == PARENT and left and left[-1] != PARENT:
        if len(left) > 1 or left[0] != SEPARATOR:
            left.pop()
        right.pop(0)

    joined = join_components(left + right)
    if trailing_slash and not joined.endswith(SEPARATOR):
        joined += SEPARATOR
    return joined


def normalize(path: str) -> str:
    """Collapse ``.``, ``..`` and redundant separators lexically.

    Symlinks are not consulted and ``~`` is left alone.  The empty string
    stays empty rather than becoming ``"."``.
    """
    if not path:
        return path
    normalized = posixpath.normpath(path)
    # POSIX lets normpath keep exactly two leading slashes.
    if normalized.startswith("//"):
        normalized = SEPARATOR + normalized.lstrip(SEPARATOR)
    return normalized


def expand_tilde(path: str, home: str) -> str:
    """Replace a leading ``~`` or ``~/`` with *home*.

    ``~user`` forms are looked up in the password database.  Paths that
    do not start with ``~`` are returned unchanged.
    """
    if path == TILDE or path.startswith(TILDE + SEPARATOR):
        root = home.rstrip(SEPARATOR) or SEPARATOR
        rest = path[1:]
        if root == SEPARATOR:
            return rest or SEPARATOR
        return root + rest
    if path.startswith(TILDE):
        return posixpath.expanduser(path)
    return path


def last_component(path: str) -> str:
    """Return the final component, ignoring a trailing separator.

    ``"/"`` stays ``"/"`` and ``""`` stays ``""``.
    """
    components = split_components(path)
    if len(components) > 1 and components[-1] == SEPARATOR:
        components.pop()
    return components[-1] if components else ""


def split_extension(name: str) -> tuple[str, str]:
    """Split a single component into ``(stem, extension)``.

    The extension is whatever follows the last dot, provided the dot is
    neither the first character nor the last.  ``".."`` and ``".bashrc"``
    therefore have no extension.
    """
    dot = name.rfind(".")
    if dot <= 0 or dot == len(name) - 1 or name == PARENT:
        return (name, "")
    return (name[:dot], name[dot + 1 :])
