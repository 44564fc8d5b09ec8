"""Intents the session reacts to.

User intents come from the host (toolbar, key bindings, text widget). Result
intents (``FileOpened``/``FileSaved``) are produced by finished file effects and
fed back through the same entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from textpad_engine.config import HighlightTheme
from textpad_engine.files import FileError


@dataclass(frozen=True, slots=True)
class New:
    pass


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace the buffer with ``content``; one Edit is one undo step."""

    content: str


@dataclass(frozen=True, slots=True)
class Open:
    pass


@dataclass(frozen=True, slots=True)
class Save:
    pass


@dataclass(frozen=True, slots=True)
class Undo:
    pass


@dataclass(frozen=True, slots=True)
class Redo:
    pass


@dataclass(frozen=True, slots=True)
class ThemeSelected:
    theme: HighlightTheme


@dataclass(frozen=True, slots=True)
class FileOpened:
    path: Optional[Path] = None
    content: Optional[str] = None
    error: Optional[FileError] = None

    @classmethod
    def success(cls, path: Path, content: str) -> "FileOpened":
        return cls(path=path, content=content)

    @classmethod
    def failure(cls, error: FileError) -> "FileOpened":
        return cls(error=error)


@dataclass(frozen=True, slots=True)
class FileSaved:
    """``content`` is the exact text that was written to ``path``."""

    path: Optional[Path] = None
    content: Optional[str] = None
    error: Optional[FileError] = None

    @classmethod
    def success(cls, path: Path, content: str) -> "FileSaved":
        return cls(path=path, content=content)

    @classmethod
    def failure(cls, error: FileError) -> "FileSaved":
        return cls(error=error)


Intent = Union[
    New, Edit, Open, Save, Undo, Redo, ThemeSelected, FileOpened, FileSaved
]

__all__ = [
    "Edit",
    "FileOpened",
    "FileSaved",
    "Intent",
    "New",
    "Open",
    "Redo",
    "Save",
    "ThemeSelected",
    "Undo",
]
