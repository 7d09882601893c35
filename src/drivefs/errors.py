"""Error kinds raised by filesystem operations."""

from __future__ import annotations

__all__ = [
    "ConflictError",
    "FileSystemError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "NotFoundError",
    "OperationCancelledError",
    "TransportError",
]


class FileSystemError(Exception):
    """Base error for filesystem operations."""

    pass


class NotFoundError(FileSystemError, FileNotFoundError):
    """Path does not resolve to a node of the required kind."""

    pass


class ConflictError(FileSystemError):
    """Destination is occupied by an incompatible node.

    Raised for a file where a folder is required (or the reverse) and for a
    sibling that already holds a requested name.
    """

    pass


class InvalidArgumentError(FileSystemError, ValueError):
    """Argument rejected before any remote call was made."""

    pass


class InvalidOperationError(FileSystemError):
    """Operation is not permitted on the target, e.g. deleting the root."""

    pass


class TransportError(FileSystemError):
    """The remote store reported a failure."""

    pass


class OperationCancelledError(FileSystemError):
    """A cancellation token was triggered while the operation was running."""

    pass
