"""File I/O façade bound to one picker and one text encoding."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from .dialogs import FilePicker, NullPicker
from .io import DEFAULT_ENCODING, load_file, pick_and_load, save_file


class FileCoordinator:
    """The three asynchronous file operations the session issues.

    The coordinator holds no document state; callers get the loaded text or
    written path back, or a ``FileError``.
    """

    def __init__(
        self,
        picker: Optional[FilePicker] = None,
        *,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.picker: FilePicker = picker or NullPicker()
        self.encoding = encoding

    async def pick_and_load(self) -> Tuple[Path, str]:
        return await pick_and_load(self.picker, encoding=self.encoding)

    async def load(self, path: Path) -> Tuple[Path, str]:
        return await load_file(path, encoding=self.encoding)

    async def save(self, path: Optional[Path], content: str) -> Path:
        return await save_file(path, content, self.picker, encoding=self.encoding)


__all__ = ["FileCoordinator"]
