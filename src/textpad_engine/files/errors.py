"""Failure taxonomy for dialog and filesystem operations."""

from __future__ import annotations

import errno
from enum import Enum
from typing import Optional


class IOErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    IS_A_DIRECTORY = "is_a_directory"
    INVALID_DATA = "invalid_data"
    OTHER = "other"


_ERRNO_KINDS = {
    errno.ENOENT: IOErrorKind.NOT_FOUND,
    errno.EACCES: IOErrorKind.PERMISSION_DENIED,
    errno.EPERM: IOErrorKind.PERMISSION_DENIED,
    errno.EISDIR: IOErrorKind.IS_A_DIRECTORY,
}


class FileError(Exception):
    """Base class for every failure a file operation reports to the session."""

    def describe(self) -> str:
        return str(self)


class DialogClosed(FileError):
    """The user dismissed the open/save prompt."""

    def __init__(self, purpose: str = "open") -> None:
        super().__init__(f"{purpose} dialog closed")
        self.purpose = purpose

    def describe(self) -> str:
        return "Dialog closed"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DialogClosed) and other.purpose == self.purpose

    def __hash__(self) -> int:
        return hash((DialogClosed, self.purpose))


class IOFailed(FileError):
    """A read or write failed; ``kind`` is the matchable category."""

    def __init__(self, kind: IOErrorKind, *, path: Optional[str] = None) -> None:
        super().__init__(f"{kind.value}: {path}" if path else kind.value)
        self.kind = kind
        self.path = path

    def describe(self) -> str:
        label = self.kind.value.replace("_", " ")
        return f"I/O error ({label})" + (f": {self.path}" if self.path else "")

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, IOFailed)
            and other.kind == self.kind
            and other.path == self.path
        )

    def __hash__(self) -> int:
        return hash((IOFailed, self.kind, self.path))


def classify(exc: BaseException) -> IOErrorKind:
    """Map an ``OSError``/``UnicodeError`` onto an ``IOErrorKind``."""

    if isinstance(exc, UnicodeError):
        return IOErrorKind.INVALID_DATA
    if isinstance(exc, FileNotFoundError):
        return IOErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return IOErrorKind.PERMISSION_DENIED
    if isinstance(exc, IsADirectoryError):
        return IOErrorKind.IS_A_DIRECTORY
    if isinstance(exc, OSError) and exc.errno is not None:
        return _ERRNO_KINDS.get(exc.errno, IOErrorKind.OTHER)
    return IOErrorKind.OTHER


__all__ = [
    "DialogClosed",
    "FileError",
    "IOErrorKind",
    "IOFailed",
    "classify",
]
