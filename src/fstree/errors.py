"""Error types raised by fstree.

Every error derives from FsTreeError and also from the closest builtin
exception, so callers can catch either ``FsTreeError`` or, for example,
``FileNotFoundError``.
"""

from __future__ import annotations

__all__ = [
    "FsTreeError",
    "InvalidArgumentError",
    "InvalidNameError",
    "OpenFailedError",
    "PathNotFoundError",
]


class FsTreeError(Exception):
    """Base class for fstree errors."""

    pass


class InvalidNameError(FsTreeError, ValueError):
    """A file or directory name failed validation."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Invalid file name: "{name}"')


class PathNotFoundError(FsTreeError, FileNotFoundError):
    """A path is missing or is not the kind of entry the operation needs."""

    def __init__(self, path: object, detail: str = "The path does not exist") -> None:
        self.path = str(path)
        super().__init__(f'{detail}: "{self.path}"')

    def __str__(self) -> str:
        return self.args[0]


class OpenFailedError(FsTreeError, OSError):
    """A file handle could not be acquired for reading or writing."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = str(path)
        message = f'Failed to open the file: "{self.path}"'
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class InvalidArgumentError(FsTreeError, ValueError):
    """An argument is of the wrong kind for the requested operation."""

    pass
