"""Guards that turn path predicates into exceptions.

Command-line tools usually want "fail with a clear message" rather than
a boolean.  Each ``validate_*`` function checks one condition and raises
:class:`~pathkit.errors.PathValidationError` when it does not hold.

The stdio sentinel ``-`` always passes: it names a stream, not a file.
"""

from pathkit.errors import PathValidationError
from pathkit.helpers import is_tty
from pathkit.path import Path


def _require(condition: bool, message: str) -> None:  # noqa: FBT001
    if not condition:
        raise PathValidationError(message)


def validate_file_exists(path: Path) -> None:
    """Require an existing regular (non-directory) file.

    Raises:
        PathValidationError: If nothing exists or it is a directory.

    """
    if is_tty(path):
        return
    _require(path.exists, f'File doesn\'t exist at "{path}".')
    _require(not path.is_directory, f'Path is not a regular file at "{path}".')


def validate_directory_exists(path: Path) -> None:
    """Require an existing directory.

    Raises:
        PathValidationError: If nothing exists or it is not a directory.

    """
    if is_tty(path):
        return
    _require(path.exists, f'Directory doesn\'t exist at "{path}".')
    _require(path.is_directory, f'Path is not a directory at "{path}".')


def validate_exists(path: Path) -> None:
    """Require that something exists at *path*."""
    if is_tty(path):
        return
    _require(path.exists, f'Path doesn\'t exist at "{path}".')


def validate_not_exists(path: Path) -> None:
    """Require that nothing exists at *path*."""
    if is_tty(path):
        return
    _require(not path.exists, f'Path already exists at "{path}".')
