"""pathkit — effortless, string-backed filesystem paths.

Re-exports public symbols so callers can write::

    from pathkit import Path, glob
"""

from pathkit.config import PathContext
from pathkit.enumerator import BUNDLE_EXTENSIONS, DirectoryEnumerator, EnumerationOptions, PathSequence
from pathkit.errors import FailureMode, PathKitError, PathValidationError
from pathkit.fsinfo import DefaultFileSystemInfo, FileSystemInfo, FixedFileSystemInfo
from pathkit.helpers import (
    STDIO,
    appending_extension,
    appending_suffix,
    creating_subpath,
    file_size,
    is_app_bundle,
    is_bundle,
    is_empty_directory,
    is_tty,
    relative_to,
    removing_last_component,
)
from pathkit.path import Path, PathLike, glob
from pathkit.permissions import chmod, chmod_recursive
from pathkit.validation import (
    validate_directory_exists,
    validate_exists,
    validate_file_exists,
    validate_not_exists,
)

__all__ = [
    "BUNDLE_EXTENSIONS",
    "STDIO",
    "DefaultFileSystemInfo",
    "DirectoryEnumerator",
    "EnumerationOptions",
    "FailureMode",
    "FileSystemInfo",
    "FixedFileSystemInfo",
    "Path",
    "PathContext",
    "PathKitError",
    "PathLike",
    "PathSequence",
    "PathValidationError",
    "appending_extension",
    "appending_suffix",
    "chmod",
    "chmod_recursive",
    "creating_subpath",
    "file_size",
    "glob",
    "is_app_bundle",
    "is_bundle",
    "is_empty_directory",
    "is_tty",
    "relative_to",
    "removing_last_component",
    "validate_directory_exists",
    "validate_exists",
    "validate_file_exists",
    "validate_not_exists",
]
