"""Exception types and failure policies shared across the package.

Most failures in this package are plain ``OSError`` subclasses raised by
the operating system and passed through untouched.  The classes here
cover the few conditions the package detects on its own.
"""

from enum import StrEnum


class PathKitError(Exception):
    """Base class for errors raised by pathkit itself."""


class PathValidationError(PathKitError):
    """Raise when a path fails a validation guard."""


class FailureMode(StrEnum):
    """How a multi-step operation reacts when one of its steps fails.

    - OPEN   — log the failure and carry on with the remaining steps.
    - CLOSED — stop at the first failure and raise it.
    """

    OPEN = "open"
    CLOSED = "closed"
