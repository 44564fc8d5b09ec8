"""Document session: state record, transitions and the effect driver."""

from .controller import Listener, SessionController
from .effects import Effect, LoadFile, PickAndLoad, SaveFile, perform
from .intents import (
    Edit,
    FileOpened,
    FileSaved,
    Intent,
    New,
    Open,
    Redo,
    Save,
    ThemeSelected,
    Undo,
)
from .mirror import SessionMirror
from .state import Session, Transition
from .update import initialize, update

__all__ = [
    "Edit",
    "Effect",
    "FileOpened",
    "FileSaved",
    "Intent",
    "Listener",
    "LoadFile",
    "New",
    "Open",
    "PickAndLoad",
    "Redo",
    "Save",
    "SaveFile",
    "Session",
    "SessionController",
    "SessionMirror",
    "ThemeSelected",
    "Transition",
    "Undo",
    "initialize",
    "perform",
    "update",
]
