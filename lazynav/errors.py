"""Exception types raised at the navigator's collaborator boundaries.

Filesystem and search-process failures are caught where they happen and turned
into user-visible messages. ``PreconditionViolation`` and
``UnhandledActionError`` are programming errors and are allowed to propagate.
"""

from __future__ import annotations


class LazyNavError(Exception):
    """Base class for lazynav errors."""


class FileSystemError(LazyNavError):
    """A stat/read/create/delete/rename/write call failed."""

    def __init__(self, operation: str, path: str, cause: OSError | None = None) -> None:
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"{operation} failed for {path}{detail}")


class SearchProcessError(LazyNavError):
    """External search process could not run or reported an error."""

    def __init__(self, directory: str, message: str) -> None:
        self.directory = directory
        self.message = message
        super().__init__(message)


class PreconditionViolation(LazyNavError):
    """Operation was asked to act on a path that cannot be valid."""


class UnhandledActionError(LazyNavError):
    """Menu entry carried an action tag with no handler."""
