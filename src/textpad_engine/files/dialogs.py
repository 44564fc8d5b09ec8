"""Host-provided file prompts."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class FilePicker(Protocol):
    """Modal prompts the file layer awaits. ``None`` means the user cancelled."""

    async def pick_open(self) -> Optional[Path]:
        """Ask which file to open."""
        ...

    async def pick_save(self) -> Optional[Path]:
        """Ask where to write a document that has no path yet."""
        ...


class NullPicker:
    """Picker for headless hosts: every prompt is cancelled."""

    async def pick_open(self) -> Optional[Path]:
        return None

    async def pick_save(self) -> Optional[Path]:
        return None


__all__ = ["FilePicker", "NullPicker"]
