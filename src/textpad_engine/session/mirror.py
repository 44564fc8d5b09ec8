"""Host-facing snapshot of a session."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .state import Session


@dataclass(slots=True)
class SessionMirror:
    """Everything a host needs to redraw: text, status line and button state."""

    text: str
    path: Optional[Path]
    dirty: bool
    error: Optional[str]
    theme: str
    can_undo: bool
    can_redo: bool
    word_count: int

    @classmethod
    def from_session(cls, session: Session) -> "SessionMirror":
        return cls(
            text=session.content,
            path=session.path,
            dirty=session.dirty,
            error=session.error.describe() if session.error is not None else None,
            theme=session.theme.value,
            can_undo=session.history.can_undo(),
            can_redo=session.history.can_redo(),
            word_count=len(session.content.split()),
        )

    @property
    def can_save(self) -> bool:
        return self.dirty

    def status_text(self) -> str:
        label = str(self.path) if self.path is not None else "New file"
        if self.dirty:
            label += " *"
        parts = [label]
        if self.error:
            parts.append(self.error)
        parts.append(f"Words: {self.word_count}")
        parts.append(self.theme)
        return " | ".join(parts)


__all__ = ["SessionMirror"]
