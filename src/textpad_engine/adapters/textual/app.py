"""Executable Textual app that hosts the document session."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Vertical
    from textual.screen import ModalScreen
    from textual.widgets import Footer, Header, Input, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use textpad_engine.adapters.textual.app"
    ) from exc

from textpad_engine.config import EditorConfig
from textpad_engine.files import FileCoordinator
from textpad_engine.runtime import telemetry
from textpad_engine.session import SessionController, SessionMirror

from .controller import TextualSessionAdapter, TextualUIHooks


def _prompt_path(value: str) -> Optional[Path]:
    """Turn prompt input into a path; an unknown ``~user`` stays literal."""

    if not value:
        return None
    path = Path(value)
    try:
        return path.expanduser()
    except RuntimeError:
        return path


class PathPromptScreen(ModalScreen[Optional[Path]]):
    """Modal path entry; Escape cancels."""

    CSS = """
    PathPromptScreen {
        align: center middle;
    }
    #path-dialog {
        width: 70;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", priority=True)]

    def __init__(self, title: str, initial: str = "") -> None:
        super().__init__()
        self._title = title
        self._initial = initial

    def compose(self) -> ComposeResult:
        with Vertical(id="path-dialog"):
            yield Static(self._title)
            yield Input(value=self._initial, placeholder="path/to/file.txt")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(_prompt_path(event.value.strip()))

    def action_cancel(self) -> None:
        self.dismiss(None)


class TextualFilePicker:
    """``FilePicker`` backed by ``PathPromptScreen``."""

    def __init__(self, app: App[Any]) -> None:
        self.app = app

    async def pick_open(self) -> Optional[Path]:
        return await self._prompt("Choose a text file...")

    async def pick_save(self) -> Optional[Path]:
        return await self._prompt("Choose a file name...")

    async def _prompt(self, title: str) -> Optional[Path]:
        answer: asyncio.Future[Optional[Path]] = (
            asyncio.get_running_loop().create_future()
        )

        def _resolve(result: Optional[Path]) -> None:
            if not answer.done():
                answer.set_result(result)

        self.app.push_screen(PathPromptScreen(title), callback=_resolve)
        return await answer


class TextpadApp(App[None]):
    """Plain-text editor shell around ``SessionController``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+n", "new_document", "New", priority=True),
        Binding("ctrl+o", "open_document", "Open", priority=True),
        Binding("ctrl+s", "save_document", "Save", priority=True),
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("ctrl+t", "cycle_theme", "Theme", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        *,
        path: Optional[Path] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        super().__init__()
        self.config = config or EditorConfig()
        self.title = self.config.title
        self.controller: SessionController | None = None
        self.adapter: TextualSessionAdapter | None = None
        self._initial_path = path
        self._editor: TextArea | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._editor = TextArea("", id="editor")
        yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        files = FileCoordinator(TextualFilePicker(self), encoding=self.config.encoding)
        self.controller = SessionController(files, config=self.config)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_error=self._show_error,
            log=self._log_line,
        )
        self.adapter = TextualSessionAdapter(self.controller, hooks)
        self.controller.start(self._initial_path)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.handle_text_changed(event.text_area.text)

    def action_new_document(self) -> None:
        if self.adapter:
            self.adapter.new_document()

    def action_open_document(self) -> None:
        if self.adapter:
            self.adapter.open_document()

    def action_save_document(self) -> None:
        if self.adapter and self.adapter.mirror.can_save:
            self.adapter.save_document()

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def action_cycle_theme(self) -> None:
        if self.adapter:
            self.adapter.cycle_theme()

    def _update_buffer(self, mirror: SessionMirror) -> None:
        # Skipping identical text keeps the widget's echo from re-entering history.
        if self._editor is not None and self._editor.text != mirror.text:
            self._editor.load_text(mirror.text)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_error(self, message: Optional[str]) -> None:
        if message:
            self.notify(message, severity="error", timeout=4)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("ui.adapter", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the textpad editor.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Document to open (default: the bundled startup file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    TextpadApp(path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
