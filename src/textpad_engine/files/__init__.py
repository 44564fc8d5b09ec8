"""Filesystem and file-prompt boundary."""

from .coordinator import FileCoordinator
from .dialogs import FilePicker, NullPicker
from .errors import DialogClosed, FileError, IOErrorKind, IOFailed, classify
from .io import DEFAULT_ENCODING, load_file, pick_and_load, save_file

__all__ = [
    "DEFAULT_ENCODING",
    "DialogClosed",
    "FileCoordinator",
    "FileError",
    "FilePicker",
    "IOErrorKind",
    "IOFailed",
    "NullPicker",
    "classify",
    "load_file",
    "pick_and_load",
    "save_file",
]
