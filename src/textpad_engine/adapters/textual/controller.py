"""Adapter that relays session updates to Textual-side callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from textpad_engine.session import (
    Edit,
    Intent,
    New,
    Open,
    Redo,
    Save,
    Session,
    SessionController,
    SessionMirror,
    ThemeSelected,
    Undo,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[SessionMirror], None]
    update_status: Callable[[str], None] = _noop
    show_error: Callable[[Optional[str]], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualSessionAdapter:
    """Turns widget events into intents and session changes into hook calls."""

    def __init__(self, controller: SessionController, hooks: TextualUIHooks) -> None:
        self.controller = controller
        self.hooks = hooks
        self._last_error: Optional[str] = None
        self._unsubscribe = controller.subscribe(self._on_session)
        self._on_session(controller.session)

    def close(self) -> None:
        self._unsubscribe()

    @property
    def mirror(self) -> SessionMirror:
        return SessionMirror.from_session(self.controller.session)

    def handle_text_changed(self, text: str) -> Session:
        """The text widget reports its full content after every change."""

        return self._send(Edit(text))

    def new_document(self) -> Session:
        return self._send(New())

    def open_document(self) -> Session:
        return self._send(Open())

    def save_document(self) -> Session:
        return self._send(Save())

    def undo(self) -> Session:
        return self._send(Undo())

    def redo(self) -> Session:
        return self._send(Redo())

    def cycle_theme(self) -> Session:
        return self._send(ThemeSelected(self.controller.session.theme.next()))

    def _send(self, intent: Intent) -> Session:
        self._log_state("intent ->", intent=type(intent).__name__)
        return self.controller.dispatch(intent)

    def _on_session(self, session: Session) -> None:
        mirror = SessionMirror.from_session(session)
        self.hooks.update_buffer(mirror)
        self.hooks.update_status(mirror.status_text())
        if mirror.error != self._last_error:
            self._last_error = mirror.error
            self.hooks.show_error(mirror.error)
        self._log_state("session <-", dirty=mirror.dirty, error=mirror.error)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.controller.session
        return {
            "path": str(session.path) if session.path else None,
            "chars": len(session.content),
            "undo": session.history.undo_depth,
            "redo": session.history.redo_depth,
            "pending": self.controller.pending,
        }


__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
