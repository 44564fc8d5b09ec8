"""Buffer content and undo/redo data structures."""

from .history import Content, HistoryStep, UndoHistory

__all__ = [
    "Content",
    "HistoryStep",
    "UndoHistory",
]
