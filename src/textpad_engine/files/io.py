"""Asynchronous document load/save.

Blocking filesystem calls run on a worker thread so the host event loop keeps
processing intents while a read or write is in flight. Every failure surfaces
as a ``FileError``; nothing here touches session state.
"""

from __future__ import annotations

import asyncio
import errno
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Tuple

from textpad_engine.runtime import telemetry

from .dialogs import FilePicker
from .errors import DialogClosed, IOFailed, classify

DEFAULT_ENCODING = "utf-8"


def _read_text(path: Path, encoding: str) -> str:
    # newline="" keeps line endings byte-for-byte so load(save(x)) == x.
    with open(path, "r", encoding=encoding, newline="") as handle:
        return handle.read()


def _write_text(path: Path, content: str, encoding: str) -> None:
    # Write through symlinks: the link stays, its target gets the new text.
    target = Path(os.path.realpath(path))
    data = content.encode(encoding)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
    except OSError as exc:
        # Read-only directory or a name too long for a temp sibling.
        if isinstance(exc, PermissionError) or exc.errno == errno.ENAMETOOLONG:
            _write_in_place(target, data)
            return
        raise
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
    except BaseException:
        _discard(tmp_name)
        raise


def _write_in_place(target: Path, data: bytes) -> None:
    with open(target, "wb") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())


def _discard(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass


async def load_file(
    path: Path, *, encoding: str = DEFAULT_ENCODING
) -> Tuple[Path, str]:
    """Read ``path`` in full. Raises ``IOFailed`` on any read/decoding failure."""

    path = Path(path)
    try:
        content = await asyncio.to_thread(_read_text, path, encoding)
    except (OSError, ValueError, LookupError) as exc:
        failure = IOFailed(classify(exc), path=str(path))
        telemetry.record_event(
            "file.error",
            level="warning",
            data={"op": "load", "path": str(path), "kind": failure.kind.value},
        )
        raise failure from exc
    telemetry.record_event(
        "file.load", data={"path": str(path), "chars": len(content)}
    )
    return path, content


async def pick_and_load(
    picker: FilePicker, *, encoding: str = DEFAULT_ENCODING
) -> Tuple[Path, str]:
    """Prompt for a file, then load it."""

    chosen = await picker.pick_open()
    if chosen is None:
        raise DialogClosed("open")
    return await load_file(chosen, encoding=encoding)


async def save_file(
    path: Optional[Path],
    content: str,
    picker: FilePicker,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Path:
    """Write ``content`` to ``path``, prompting for a location when it is None.

    The destination (after following symlinks) is replaced atomically: the
    text goes to a sibling temp file which is renamed over the target only
    after a successful fsync. When no sibling can be created there, the file
    is truncated and rewritten in place.
    Returns the path actually written.
    """

    if path is None:
        path = await picker.pick_save()
        if path is None:
            raise DialogClosed("save")
    path = Path(path)
    try:
        await asyncio.to_thread(_write_text, path, content, encoding)
    except (OSError, ValueError, LookupError) as exc:
        failure = IOFailed(classify(exc), path=str(path))
        telemetry.record_event(
            "file.error",
            level="warning",
            data={"op": "save", "path": str(path), "kind": failure.kind.value},
        )
        raise failure from exc
    telemetry.record_event(
        "file.save", data={"path": str(path), "chars": len(content)}
    )
    return path


__all__ = ["DEFAULT_ENCODING", "load_file", "pick_and_load", "save_file"]
