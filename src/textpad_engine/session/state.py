"""Session record and transition result."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from textpad_engine.buffer import UndoHistory
from textpad_engine.config import DEFAULT_THEME, HighlightTheme
from textpad_engine.files import FileError

from .effects import Effect


@dataclass(frozen=True, slots=True)
class Session:
    """Observable editor state.

    ``saved_content`` is the text last loaded from or written to ``path``;
    it is None for a document that has never touched the disk.
    """

    path: Optional[Path] = None
    content: str = ""
    dirty: bool = True
    error: Optional[FileError] = None
    theme: HighlightTheme = DEFAULT_THEME
    history: UndoHistory = field(default_factory=UndoHistory.seeded)
    saved_content: Optional[str] = None

    def differs_from_disk(self, content: str) -> bool:
        return self.saved_content is None or self.saved_content != content


@dataclass(frozen=True, slots=True)
class Transition:
    session: Session
    effects: Tuple[Effect, ...] = ()


__all__ = ["Session", "Transition"]
