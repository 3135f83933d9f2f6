"""Ambient path context — home, temporary and working directories.

Resolving ``~`` or a relative path needs three values that live outside
the path itself:

- **home** — the invoking user's home directory, from ``HOME`` or else
  the password database.
- **temporary** — the scratch directory, from ``TMPDIR``/``TEMP``/``TMP``.
- **cwd** — the directory relative paths are resolved against.

By default these are read fresh from the process on every call.  Callers
who want reproducible resolution (or who cannot afford to touch the
process-wide working directory) build a :class:`PathContext` once and
pass it explicitly.
"""

from __future__ import annotations

import os
import pwd
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass

TEMPORARY_VARIABLES = ("TMPDIR", "TEMP", "TMP")
"""Environment variables consulted for the temporary directory, in order."""


@dataclass(frozen=True)
class PathContext:
    """A snapshot of the values relative paths are resolved against.

    Attributes:
        home: The home directory ``~`` expands to.
        temporary: The directory temporaries are created under.
        cwd: Working directory for relative paths.  ``None`` means
            "ask the process at resolution time".

    """

    home: str
    temporary: str
    cwd: str | None = None

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        cwd: str | None = None,
    ) -> PathContext:
        """Build a context from environment variables.

        Args:
            environ: Variables to read (defaults to ``os.environ``).
            cwd: Optional fixed working directory.

        """
        env = os.environ if environ is None else environ
        home = env.get("HOME") or account_home()
        temporary = next(
            (env[name] for name in TEMPORARY_VARIABLES if env.get(name)),
            None,
        )
        if temporary is None:
            temporary = tempfile.gettempdir()
        return cls(home=home, temporary=temporary, cwd=cwd)

    def current_directory(self) -> str:
        """Return the fixed working directory, or the live process one."""
        return self.cwd if self.cwd is not None else os.getcwd()


def account_home() -> str:
    """Return the home directory recorded in the password database.

    Used when ``HOME`` is unset, so an explicit environment mapping is
    never mixed with the process environment.  Falls back to ``/`` for
    a user with no password entry.
    """
    try:
        return pwd.getpwuid(os.getuid()).pw_dir
    except KeyError:
        return "/"
