"""Shared fixtures — a small on-disk tree to exercise real filesystem calls.

Layout created under ``tmp_path``::

    file                      regular file
    directory/child           regular file inside a directory
    .hidden                   hidden file
    permissions/executable    mode 0o755
    permissions/plain         mode 0o644
    symlinks/file       -> ../file
    symlinks/directory  -> ../directory
    symlinks/swift      -> /usr/bin/swift   (absolute, usually dangling)
"""

import os
from pathlib import Path as StdPath

import pytest

from pathkit import Path, PathContext

HOME = "/home/kim"


@pytest.fixture
def fixtures(tmp_path: StdPath) -> Path:
    """Build the fixture tree and return its root as a pathkit Path."""
    root = tmp_path.resolve()
    (root / "file").write_text("contents")
    (root / "directory").mkdir()
    (root / "directory" / "child").write_text("child")
    (root / ".hidden").write_text("")
    (root / "permissions").mkdir()
    (root / "permissions" / "executable").write_text("#!/bin/sh\n")
    (root / "permissions" / "executable").chmod(0o755)
    (root / "permissions" / "plain").write_text("")
    (root / "permissions" / "plain").chmod(0o644)
    (root / "symlinks").mkdir()
    os.symlink("../file", root / "symlinks" / "file")
    os.symlink("../directory", root / "symlinks" / "directory")
    os.symlink("/usr/bin/swift", root / "symlinks" / "swift")
    return Path(str(root))


@pytest.fixture
def context() -> PathContext:
    """Return a fixed context so resolution does not depend on the machine."""
    return PathContext(home=HOME, temporary="/tmp", cwd="/work")
