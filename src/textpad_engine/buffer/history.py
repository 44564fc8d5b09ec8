"""Linear undo/redo history over full-content snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

Content = str


@dataclass(frozen=True, slots=True, eq=False)
class _Node:
    entry: Content
    below: Optional["_Node"]
    size: int


def _push(stack: Optional[_Node], entry: Content) -> _Node:
    return _Node(entry=entry, below=stack, size=_size(stack) + 1)


def _size(stack: Optional[_Node]) -> int:
    return stack.size if stack is not None else 0


def _walk(stack: Optional[_Node]) -> Iterator[Content]:
    while stack is not None:
        yield stack.entry
        stack = stack.below


class HistoryStep(NamedTuple):
    """Outcome of ``undo``/``redo``; ``content`` is None when nothing moved."""

    history: "UndoHistory"
    content: Optional[Content]


@dataclass(frozen=True, slots=True)
class UndoHistory:
    """Pair of snapshot stacks, never mutated in place.

    Both stacks are persistent linked lists, so every operation returns a new
    history in O(1) while sharing snapshots (and their strings) with the
    previous value. The top of the undo stack is the current content.
    """

    _undo: Optional[_Node] = None
    _redo: Optional[_Node] = None

    @classmethod
    def seeded(cls, content: Content = "") -> "UndoHistory":
        return cls(_undo=_push(None, content))

    @property
    def current(self) -> Optional[Content]:
        return self._undo.entry if self._undo is not None else None

    @property
    def undo_depth(self) -> int:
        return _size(self._undo)

    @property
    def redo_depth(self) -> int:
        return _size(self._redo)

    def can_undo(self) -> bool:
        return self.undo_depth >= 2

    def can_redo(self) -> bool:
        return self._redo is not None

    def record_edit(self, content: Content) -> "UndoHistory":
        """Push ``content`` and drop every redo entry."""

        return UndoHistory(_undo=_push(self._undo, content), _redo=None)

    def undo(self) -> HistoryStep:
        if not self.can_undo():
            return HistoryStep(self, None)
        assert self._undo is not None and self._undo.below is not None
        popped = self._undo
        restored = popped.below
        history = UndoHistory(_undo=restored, _redo=_push(self._redo, popped.entry))
        return HistoryStep(history, restored.entry)

    def redo(self) -> HistoryStep:
        if self._redo is None:
            return HistoryStep(self, None)
        entry = self._redo.entry
        history = UndoHistory(_undo=_push(self._undo, entry), _redo=self._redo.below)
        return HistoryStep(history, entry)

    def holds(self, content: Content) -> bool:
        """True when ``content`` is on either stack of this lineage."""

        return any(entry == content for entry in _walk(self._undo)) or any(
            entry == content for entry in _walk(self._redo)
        )

    def undo_entries(self) -> tuple[Content, ...]:
        """Undo stack, oldest first."""

        return tuple(reversed(tuple(_walk(self._undo))))

    def redo_entries(self) -> tuple[Content, ...]:
        """Redo stack, oldest first (the next redo is last)."""

        return tuple(reversed(tuple(_walk(self._redo))))


__all__ = ["Content", "HistoryStep", "UndoHistory"]
