"""Pure session transitions: ``(Session, Intent) -> Transition``."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Optional, Type

from textpad_engine.buffer import HistoryStep, UndoHistory
from textpad_engine.config import EditorConfig

from .effects import LoadFile, PickAndLoad, SaveFile
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
from .state import Session, Transition

IntentHandler = Callable[[Session, Any], Transition]


def initialize(config: Optional[EditorConfig] = None) -> Transition:
    """Cold start: an empty dirty buffer plus a load of the startup document."""

    config = config or EditorConfig()
    session = Session(theme=config.theme)
    return Transition(session, (LoadFile(config.startup_file()),))


def update(session: Session, intent: Intent) -> Transition:
    handler = _INTENT_HANDLERS.get(type(intent))
    if handler is None:
        raise TypeError(f"Unsupported intent {type(intent).__name__}")
    return handler(session, intent)


def _new(session: Session, intent: New) -> Transition:
    del intent
    return Transition(Session(theme=session.theme))


def _edit(session: Session, intent: Edit) -> Transition:
    if intent.content == session.content:
        return Transition(session)
    return Transition(
        replace(
            session,
            content=intent.content,
            history=session.history.record_edit(intent.content),
            dirty=True,
            error=None,
        )
    )


def _open(session: Session, intent: Open) -> Transition:
    del intent
    return Transition(session, (PickAndLoad(),))


def _file_opened(session: Session, intent: FileOpened) -> Transition:
    if intent.error is not None or intent.content is None:
        return Transition(replace(session, error=intent.error))
    return Transition(
        replace(
            session,
            path=intent.path,
            content=intent.content,
            history=UndoHistory.seeded(intent.content),
            saved_content=intent.content,
            dirty=False,
            error=None,
        )
    )


def _save(session: Session, intent: Save) -> Transition:
    del intent
    return Transition(session, (SaveFile(session.path, session.content),))


def _file_saved(session: Session, intent: FileSaved) -> Transition:
    if intent.error is not None or intent.content is None:
        return Transition(replace(session, error=intent.error))
    # Edits made while the write was in flight keep the buffer dirty.
    return Transition(
        replace(
            session,
            path=intent.path,
            saved_content=intent.content,
            dirty=session.content != intent.content,
            error=None,
        )
    )


def _restore(session: Session, step: HistoryStep) -> Transition:
    if step.content is None:
        return Transition(session)
    return Transition(
        replace(
            session,
            content=step.content,
            history=step.history,
            dirty=session.differs_from_disk(step.content),
        )
    )


def _undo(session: Session, intent: Undo) -> Transition:
    del intent
    return _restore(session, session.history.undo())


def _redo(session: Session, intent: Redo) -> Transition:
    del intent
    return _restore(session, session.history.redo())


def _theme_selected(session: Session, intent: ThemeSelected) -> Transition:
    return Transition(replace(session, theme=intent.theme))


_INTENT_HANDLERS: Dict[Type[Any], IntentHandler] = {
    New: _new,
    Edit: _edit,
    Open: _open,
    FileOpened: _file_opened,
    Save: _save,
    FileSaved: _file_saved,
    Undo: _undo,
    Redo: _redo,
    ThemeSelected: _theme_selected,
}


__all__ = ["initialize", "update"]
