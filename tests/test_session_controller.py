from __future__ import annotations

import asyncio
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import pytest

from textpad_engine.config import EditorConfig
from textpad_engine.files import (
    DialogClosed,
    FileCoordinator,
    IOErrorKind,
    IOFailed,
    NullPicker,
)
from textpad_engine.runtime import telemetry
from textpad_engine.session import (
    Edit,
    New,
    Open,
    Redo,
    Save,
    Session,
    SessionController,
    Undo,
)


class QueuePicker:
    """Answers prompts in order; each answer can be held back behind a gate."""

    def __init__(self, answers: List[Optional[Path]]) -> None:
        self.answers = list(answers)
        self.gates: Dict[int, asyncio.Event] = {}
        self.calls = 0

    def hold(self, call_index: int) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[call_index] = gate
        return gate

    async def _next(self) -> Optional[Path]:
        index = self.calls
        self.calls += 1
        answer = self.answers[index] if index < len(self.answers) else None
        gate = self.gates.get(index)
        if gate is not None:
            await gate.wait()
        return answer

    async def pick_open(self) -> Optional[Path]:
        return await self._next()

    async def pick_save(self) -> Optional[Path]:
        return await self._next()


class BrokenPicker:
    """A picker whose dialog crashes instead of answering."""

    async def pick_open(self) -> Optional[Path]:
        raise RuntimeError("dialog backend crashed")

    async def pick_save(self) -> Optional[Path]:
        raise RuntimeError("dialog backend crashed")


def capture_events(monkeypatch: pytest.MonkeyPatch) -> List[str]:
    names: List[str] = []

    def _record(name: str, **_: Any) -> None:
        names.append(name)

    monkeypatch.setattr(telemetry, "record_event", _record)
    return names


def make_controller(
    tmp_path: Path, picker=None, *, default_name: str = "default.txt"
) -> SessionController:
    config = EditorConfig(default_file=tmp_path / default_name)
    return SessionController(FileCoordinator(picker or NullPicker()), config=config)


def test_start_loads_default_file(tmp_path: Path) -> None:
    (tmp_path / "default.txt").write_text("welcome", encoding="utf-8")
    controller = make_controller(tmp_path)

    async def scenario() -> Session:
        controller.start()
        assert controller.pending == 1
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert session.content == "welcome"
    assert session.path == tmp_path / "default.txt"
    assert session.dirty is False
    assert session.error is None


def test_start_with_missing_default_leaves_empty_usable_session(tmp_path: Path) -> None:
    controller = make_controller(tmp_path, default_name="absent.txt")

    async def scenario() -> Session:
        controller.start()
        await controller.wait_idle()
        controller.dispatch(Edit("still works"))
        return controller.session

    session = asyncio.run(scenario())

    assert session.content == "still works"
    assert session.path is None
    assert session.error is None
    assert controller.session.history.undo_entries() == ("", "still works")


def test_start_reports_missing_default_as_error(tmp_path: Path) -> None:
    controller = make_controller(tmp_path, default_name="absent.txt")

    async def scenario() -> Session:
        controller.start()
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert isinstance(session.error, IOFailed)
    assert session.error.kind is IOErrorKind.NOT_FOUND
    assert session.content == ""


def test_start_with_explicit_path_overrides_default(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit.txt"
    explicit.write_text("chosen", encoding="utf-8")
    controller = make_controller(tmp_path, default_name="absent.txt")

    async def scenario() -> Session:
        controller.start(explicit)
        await controller.wait_idle()
        return controller.session

    assert asyncio.run(scenario()).content == "chosen"


def test_cancelled_open_changes_nothing_but_error(tmp_path: Path) -> None:
    controller = make_controller(tmp_path)

    async def scenario() -> Session:
        controller.dispatch(Edit("typed"))
        before = controller.session
        controller.dispatch(Open())
        await controller.wait_idle()
        after = controller.session
        assert (after.path, after.content, after.dirty) == (
            before.path,
            before.content,
            before.dirty,
        )
        return after

    session = asyncio.run(scenario())

    assert session.error == DialogClosed("open")


def test_open_loads_picked_file(tmp_path: Path) -> None:
    target = tmp_path / "picked.txt"
    target.write_text("picked body", encoding="utf-8")
    controller = make_controller(tmp_path, QueuePicker([target]))

    async def scenario() -> Session:
        controller.dispatch(Edit("scratch"))
        controller.dispatch(Open())
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert session.path == target
    assert session.content == "picked body"
    assert session.dirty is False
    assert session.history.can_undo() is False


def test_new_edit_save_then_edit_again(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    picker = QueuePicker([target])
    controller = make_controller(tmp_path, picker)

    async def scenario() -> None:
        controller.dispatch(New())
        controller.dispatch(Edit("draft"))
        controller.dispatch(Save())
        await controller.wait_idle()
        assert controller.session.dirty is False
        assert controller.session.path == target
        assert target.read_text(encoding="utf-8") == "draft"

        controller.dispatch(Edit("draft!"))
        assert controller.session.dirty is True
        controller.dispatch(Save())
        await controller.wait_idle()

    asyncio.run(scenario())

    assert picker.calls == 1  # second save reused the bound path
    assert target.read_text(encoding="utf-8") == "draft!"
    assert controller.session.dirty is False


def test_failed_save_keeps_buffer_and_dirty(tmp_path: Path) -> None:
    picker = QueuePicker([tmp_path / "missing-dir" / "out.txt"])
    controller = make_controller(tmp_path, picker)

    async def scenario() -> Session:
        controller.dispatch(Edit("precious"))
        controller.dispatch(Save())
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert session.content == "precious"
    assert session.dirty is True
    assert session.path is None
    assert isinstance(session.error, IOFailed)


def test_intents_are_processed_while_dialog_is_open(tmp_path: Path) -> None:
    target = tmp_path / "slow.txt"
    target.write_text("from disk", encoding="utf-8")
    picker = QueuePicker([target])
    controller = make_controller(tmp_path, picker)

    async def scenario() -> None:
        gate = picker.hold(0)
        controller.dispatch(Open())
        await asyncio.sleep(0)
        controller.dispatch(Edit("a"))
        controller.dispatch(Edit("ab"))
        controller.dispatch(Undo())
        assert controller.session.content == "a"
        assert controller.pending == 1
        gate.set()
        await controller.wait_idle()

    asyncio.run(scenario())

    assert controller.session.content == "from disk"
    assert controller.pending == 0


def test_results_apply_in_completion_order(tmp_path: Path) -> None:
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    first.write_text("first", encoding="utf-8")
    second.write_text("second", encoding="utf-8")
    picker = QueuePicker([first, second])
    controller = make_controller(tmp_path, picker)
    seen: List[str] = []
    controller.subscribe(lambda session: seen.append(session.content))

    async def scenario() -> None:
        gate_first = picker.hold(0)
        gate_second = picker.hold(1)
        controller.dispatch(Open())
        controller.dispatch(Open())
        await asyncio.sleep(0)
        gate_second.set()
        while controller.session.content != "second":
            await asyncio.sleep(0)
        gate_first.set()
        await controller.wait_idle()

    asyncio.run(scenario())

    assert seen[-2:] == ["second", "first"]
    assert controller.session.path == first


def test_undo_redo_round_trip_through_controller(tmp_path: Path) -> None:
    controller = make_controller(tmp_path)

    async def scenario() -> None:
        for text in ("h", "he", "hel", "hell", "hello"):
            controller.dispatch(Edit(text))
        for _ in range(5):
            controller.dispatch(Undo())
        assert controller.session.content == ""
        controller.dispatch(Undo())
        assert controller.session.content == ""
        controller.dispatch(Redo())
        controller.dispatch(Redo())

    asyncio.run(scenario())

    assert controller.session.content == "he"


def test_subscribe_and_unsubscribe(tmp_path: Path) -> None:
    controller = make_controller(tmp_path)
    seen: List[str] = []
    unsubscribe = controller.subscribe(lambda session: seen.append(session.content))

    controller.dispatch(Edit("one"))
    unsubscribe()
    controller.dispatch(Edit("two"))

    assert seen == ["one"]


def test_crashing_picker_becomes_session_error(tmp_path: Path) -> None:
    controller = make_controller(tmp_path, BrokenPicker())

    async def scenario() -> Session:
        controller.dispatch(Edit("kept"))
        controller.dispatch(Open())
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert session.error == IOFailed(IOErrorKind.OTHER)
    assert isinstance(session.error.__cause__, RuntimeError)
    assert session.content == "kept"
    assert controller.pending == 0


def test_crashing_save_dialog_keeps_buffer_dirty(tmp_path: Path) -> None:
    controller = make_controller(tmp_path, BrokenPicker())

    async def scenario() -> Session:
        controller.dispatch(Edit("unsaved"))
        controller.dispatch(Save())
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert session.error == IOFailed(IOErrorKind.OTHER)
    assert session.dirty is True
    assert session.path is None


def test_start_with_unknown_encoding_reports_error(tmp_path: Path) -> None:
    (tmp_path / "default.txt").write_text("welcome", encoding="utf-8")
    config = EditorConfig(default_file=tmp_path / "default.txt", encoding="no-such-codec")
    controller = SessionController(config=config)

    async def scenario() -> Session:
        controller.start()
        await controller.wait_idle()
        return controller.session

    session = asyncio.run(scenario())

    assert isinstance(session.error, IOFailed)
    assert session.error.kind is IOErrorKind.OTHER
    assert session.content == ""
    assert controller.pending == 0


def test_save_landing_after_new_is_flagged(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "draft.txt"
    picker = QueuePicker([target])
    controller = make_controller(tmp_path, picker)
    events = capture_events(monkeypatch)

    async def scenario() -> None:
        gate = picker.hold(0)
        controller.dispatch(Edit("draft"))
        controller.dispatch(Save())
        await asyncio.sleep(0)
        controller.dispatch(New())
        gate.set()
        await controller.wait_idle()

    asyncio.run(scenario())

    assert target.read_text(encoding="utf-8") == "draft"
    assert controller.session.content == ""
    assert controller.session.path == target
    assert events.count("session.stale_save") == 1


def test_ordinary_save_is_not_flagged(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    picker = QueuePicker([tmp_path / "plain.txt"])
    controller = make_controller(tmp_path, picker)
    events = capture_events(monkeypatch)

    async def scenario() -> None:
        controller.dispatch(Edit("one"))
        controller.dispatch(Save())
        controller.dispatch(Edit("one two"))
        controller.dispatch(Undo())
        await controller.wait_idle()

    asyncio.run(scenario())

    assert "session.stale_save" not in events
    assert controller.session.dirty is False


def test_failing_listener_does_not_drop_effects(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    picker = QueuePicker([target])
    controller = make_controller(tmp_path, picker)

    def explode(session: Session) -> None:
        raise RuntimeError("listener broke")

    async def scenario() -> None:
        controller.dispatch(Edit("payload"))
        unsubscribe = controller.subscribe(explode)
        with pytest.raises(RuntimeError, match="listener broke"):
            controller.dispatch(Save())
        assert controller.pending == 1
        unsubscribe()
        await controller.wait_idle()

    asyncio.run(scenario())

    assert target.read_text(encoding="utf-8") == "payload"
    assert controller.session.dirty is False


def test_dispatch_span_carries_effect_count(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    handles: List[telemetry.SpanHandle] = []
    original = telemetry.span

    @contextmanager
    def capturing(*args: Any, **kwargs: Any) -> Iterator[telemetry.SpanHandle]:
        with original(*args, **kwargs) as handle:
            handles.append(handle)
            yield handle

    monkeypatch.setattr(telemetry, "span", capturing)
    controller = make_controller(tmp_path)

    async def scenario() -> None:
        controller.dispatch(Edit("text"))
        controller.dispatch(Save())
        await controller.wait_idle()

    asyncio.run(scenario())

    by_intent = {handle.metadata["intent"]: handle.metadata for handle in handles}
    assert by_intent["Edit"]["effects"] == "0"
    assert by_intent["Save"]["effects"] == "1"
    assert by_intent["FileSaved"]["effects"] == "0"
