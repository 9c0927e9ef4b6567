from __future__ import annotations

from typing import List

from ed_engine.adapters.textual import TextualEdAdapter, TextualUIHooks
from ed_engine.buffer import Buffer
from ed_engine.modes import ModeManager
from ed_engine.runtime.io import MemoryFileStore
from ed_engine.session import create_default_manager


def make_manager(*lines: str) -> ModeManager:
    return create_default_manager(
        buffer=Buffer.from_lines(lines), store=MemoryFileStore()
    )


def test_adapter_updates_buffer_and_status() -> None:
    manager = make_manager()
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualEdAdapter(manager, hooks)

    adapter.submit_line("a")
    assert statuses[-1] == "input | [no file] | 0/0"

    adapter.submit_line("hello")
    adapter.submit_line(".")

    assert updates[0] == ""
    assert updates[-1] == "hello"
    assert statuses[-1] == "command | [no file]* | 1/1"


def test_adapter_forwards_output_lines() -> None:
    manager = make_manager("one", "two")
    output: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        append_output=output.append,
    )
    adapter = TextualEdAdapter(manager, hooks)

    adapter.submit_line(",n")
    adapter.submit_line("7p")

    assert output == ["1\tone", "2\ttwo", "?"]


def test_adapter_relays_command_events() -> None:
    store = MemoryFileStore()
    manager = create_default_manager(
        buffer=Buffer.from_lines(["x"]), store=store
    )
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualEdAdapter(manager, hooks)

    adapter.submit_line("w out.txt")
    adapter.submit_line("bogus")

    assert ("command.submit", "w out.txt") in events
    written = next(payload for name, payload in events if name == "command.write")
    assert written == {"path": "out.txt", "bytes": 2}
    assert ("command.error", "Unknown command") in events


def test_adapter_reports_termination_on_quit() -> None:
    manager = make_manager("x")
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        update_status=statuses.append,
    )
    adapter = TextualEdAdapter(manager, hooks)

    result = adapter.submit_line("q")

    assert result.status == "command_quit"
    assert adapter.terminated is True
    assert statuses[-1].startswith("terminated | ")


def test_adapter_finish_commits_pending_text() -> None:
    manager = make_manager()
    updates: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: updates.append(mirror.text))
    adapter = TextualEdAdapter(manager, hooks)

    adapter.submit_line("a")
    adapter.submit_line("draft")
    adapter.finish()

    assert updates[-1] == "draft"
    assert adapter.terminated is True


def test_adapter_log_hook_receives_state_lines() -> None:
    manager = make_manager("x")
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append)
    adapter = TextualEdAdapter(manager, hooks)

    adapter.submit_line("p")

    assert logs[0].startswith("line ->")
    assert "line='p'" in logs[0]
    assert any(entry.startswith("event ->") for entry in logs)
    assert logs[-1].startswith("result <-")
    assert "status='command_print'" in logs[-1]


def test_adapter_close_commits_pending_text_once() -> None:
    manager = make_manager()
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)
    adapter = TextualEdAdapter(manager, hooks)

    adapter.submit_line("a")
    adapter.submit_line("typed before closing")
    adapter.close()
    adapter.close()

    assert list(manager.context.buffer.lines) == ["typed before closing"]
    assert adapter.terminated is True


def test_adapter_close_after_quit_is_a_no_op() -> None:
    manager = make_manager("x")
    results: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        update_status=results.append,
    )
    adapter = TextualEdAdapter(manager, hooks)
    adapter.submit_line("q")
    seen = len(results)

    adapter.close()

    assert len(results) == seen
