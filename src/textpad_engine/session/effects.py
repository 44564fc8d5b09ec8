"""Pending asynchronous work requested by a transition."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from textpad_engine.files import FileCoordinator, FileError, IOErrorKind, IOFailed
from textpad_engine.runtime import telemetry

from .intents import FileOpened, FileSaved, Intent


@dataclass(frozen=True, slots=True)
class LoadFile:
    path: Path


@dataclass(frozen=True, slots=True)
class PickAndLoad:
    pass


@dataclass(frozen=True, slots=True)
class SaveFile:
    path: Optional[Path]
    content: str


Effect = Union[LoadFile, PickAndLoad, SaveFile]


async def _execute(effect: Effect, files: FileCoordinator) -> Intent:
    if isinstance(effect, SaveFile):
        written = await files.save(effect.path, effect.content)
        return FileSaved.success(written, effect.content)
    if isinstance(effect, LoadFile):
        path, content = await files.load(effect.path)
    else:
        path, content = await files.pick_and_load()
    return FileOpened.success(path, content)


async def perform(effect: Effect, files: FileCoordinator) -> Intent:
    """Run ``effect`` and wrap its outcome in the matching result intent.

    Nothing escapes: a ``FileError`` is returned inside the result so the
    session decides what the failure means, and any other exception (a broken
    picker, say) is logged and reported as ``IOFailed(OTHER)``.
    """

    if not isinstance(effect, (LoadFile, PickAndLoad, SaveFile)):
        raise TypeError(f"Unsupported effect {type(effect).__name__}")
    failed: Callable[[FileError], Intent] = (
        FileSaved.failure if isinstance(effect, SaveFile) else FileOpened.failure
    )
    try:
        return await _execute(effect, files)
    except FileError as exc:
        return failed(exc)
    except Exception as exc:
        telemetry.record_event(
            "effect.crash",
            level="error",
            data={"effect": type(effect).__name__, "error": repr(exc)},
        )
        failure = IOFailed(IOErrorKind.OTHER)
        failure.__cause__ = exc
        return failed(failure)


__all__ = ["Effect", "LoadFile", "PickAndLoad", "SaveFile", "perform"]
