"""Host-side driver that feeds intents through ``update`` and runs effects."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, List, Optional, Set

from textpad_engine.config import EditorConfig
from textpad_engine.files import FileCoordinator
from textpad_engine.runtime import telemetry

from .effects import Effect, LoadFile, perform
from .intents import FileSaved, Intent
from .state import Session, Transition
from .update import initialize, update

Listener = Callable[[Session], None]


class SessionController:
    """Owns the current session and serializes every transition.

    ``dispatch`` never awaits: each transition is applied synchronously and its
    effects are scheduled as independent tasks on the running loop. A finished
    effect dispatches its result intent, so results land in completion order,
    not issue order. Two racing file operations (e.g. Open and Save) are not
    reconciled: the last result to arrive wins. A save that finishes after New
    (or after an Open replaced the document) still binds its path to whatever
    document is current; such a result is logged as a ``session.stale_save``
    warning so the mismatch is visible.

    Intents that produce effects (Open, Save, ``start``) need a running loop.
    """

    def __init__(
        self,
        files: Optional[FileCoordinator] = None,
        *,
        config: Optional[EditorConfig] = None,
        session: Optional[Session] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.files = files or FileCoordinator(encoding=self.config.encoding)
        self.session = session or Session(theme=self.config.theme)
        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def start(self, path: Optional[Path] = None) -> Session:
        """Reset to a cold-start session and load ``path`` (or the default file)."""

        transition = initialize(self.config)
        if path is not None:
            transition = Transition(transition.session, (LoadFile(Path(path)),))
        self._apply(transition)
        return self.session

    def dispatch(self, intent: Intent) -> Session:
        name = type(intent).__name__
        with telemetry.span(
            name=f"session::{name}",
            component=True,
            metadata={"intent": name, "pending": self.pending},
        ) as handle:
            if isinstance(intent, FileSaved):
                self._check_saved_lineage(intent)
            transition = update(self.session, intent)
            handle.add_metadata("effects", len(transition.effects))
        self._apply(transition)
        telemetry.record_event(
            "session.transition",
            level="debug",
            data={
                "intent": name,
                "dirty": self.session.dirty,
                "path": self.session.path,
                "undo_depth": self.session.history.undo_depth,
            },
        )
        return self.session

    async def wait_idle(self) -> None:
        """Wait until every scheduled effect, and any effect it triggered, is done."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _apply(self, transition: Transition) -> None:
        self.session = transition.session
        for effect in transition.effects:
            self._schedule(effect)
        for listener in list(self._listeners):
            listener(self.session)

    def _check_saved_lineage(self, result: FileSaved) -> None:
        if result.error is not None or result.content is None:
            return
        if self.session.history.holds(result.content):
            return
        telemetry.record_event(
            "session.stale_save",
            level="warning",
            data={"path": result.path, "current_path": self.session.path},
        )

    def _schedule(self, effect: Effect) -> None:
        if self._tasks:
            telemetry.record_event(
                "session.race",
                level="warning",
                data={"effect": type(effect).__name__, "in_flight": self.pending},
            )
        task = asyncio.get_running_loop().create_task(self._run(effect))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, effect: Effect) -> None:
        result = await perform(effect, self.files)
        self.dispatch(result)


__all__ = ["Listener", "SessionController"]
