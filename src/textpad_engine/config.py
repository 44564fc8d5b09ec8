"""Editor configuration and constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class HighlightTheme(str, Enum):
    """Highlighter themes a host can offer. The session only stores the choice."""

    SOLARIZED_DARK = "solarized-dark"
    BASE16_MOCHA = "base16-mocha"
    BASE16_OCEAN = "base16-ocean"
    BASE16_EIGHTIES = "base16-eighties"
    INSPIRED_GITHUB = "inspired-github"

    def next(self) -> "HighlightTheme":
        members = list(HighlightTheme)
        return members[(members.index(self) + 1) % len(members)]


DEFAULT_THEME = HighlightTheme.SOLARIZED_DARK
DEFAULT_TITLE = "textpad"


def default_file() -> Path:
    """Document opened on cold start when the host names no other target."""

    return Path(__file__).resolve().with_name("__init__.py")


@dataclass(frozen=True, slots=True)
class EditorConfig:
    default_file: Optional[Path] = None
    encoding: str = "utf-8"
    theme: HighlightTheme = DEFAULT_THEME
    title: str = DEFAULT_TITLE

    def startup_file(self) -> Path:
        return self.default_file or default_file()


__all__ = [
    "DEFAULT_THEME",
    "DEFAULT_TITLE",
    "EditorConfig",
    "HighlightTheme",
    "default_file",
]
