"""POSIX permission changes — ``chmod`` and ``chmod -R``.

A recursive change touches many files, and some of them may refuse.
:class:`~pathkit.errors.FailureMode` lets the caller choose what happens
then: keep going and log each failure (``OPEN``), or stop and raise the
first one (``CLOSED``).

The full list of targets is collected *before* any mode is changed, so
removing search permission from a directory does not hide its contents
from the walk.
"""

import errno
import logging
import os

from pathkit.errors import FailureMode
from pathkit.path import Path

logger = logging.getLogger(__name__)


def chmod(path: Path, mode: int) -> None:
    """Set the permission bits of *path*, like ``chmod <mode>``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        PermissionError: If the process may not change the mode.

    """
    os.chmod(path.string, mode)


def chmod_recursive(path: Path, mode: int, failure_mode: FailureMode = FailureMode.OPEN) -> list[Path]:
    """Set the permission bits of *path* and everything below it.

    Args:
        path: A file or directory.
        mode: The permission bits to apply.
        failure_mode: Whether a failing item stops the walk.

    Returns:
        The items whose mode could not be changed (always empty in
        ``CLOSED`` mode, which raises instead).

    Raises:
        FileNotFoundError: If *path* does not exist.
        OSError: The first failure, in ``CLOSED`` mode.

    """
    if not path.exists and not path.is_symlink:
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path.string)

    items = [path]
    if path.is_directory and not path.is_symlink:
        items.extend(path.recursive_children())

    failed: list[Path] = []
    for item in items:
        try:
            chmod(item, mode)
        except OSError as exc:
            if failure_mode is FailureMode.CLOSED:
                raise
            logger.warning("chmod: failed to change permission for %s: %s", item, exc)
            failed.append(item)
    return failed
