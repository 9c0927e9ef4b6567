from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ed_engine.buffer import Buffer
from ed_engine.cli import main
from ed_engine.runtime.io import IterableLineSource, MemoryFileStore
from ed_engine.session import Session, create_default_manager, load_initial_file


class InterruptingSource:
    """Raises KeyboardInterrupt once, then replays the given lines."""

    def __init__(self, lines: List[str]) -> None:
        self._lines = iter(lines)
        self._interrupted = False

    def next_line(self, prompt: str = "") -> Optional[str]:
        del prompt
        if not self._interrupted:
            self._interrupted = True
            raise KeyboardInterrupt
        return next(self._lines, None)


def run_session(lines: List[str], *, prompt: str = "", buffer: Buffer | None = None):
    output: List[str] = []
    manager = create_default_manager(
        buffer=buffer, store=MemoryFileStore(), prompt=prompt
    )
    source = IterableLineSource(lines)
    status = Session(manager, source, write=output.append).run()
    return status, output, manager, source


def test_session_runs_until_end_of_input() -> None:
    status, output, manager, _ = run_session(["a", "one", "two", ".", ",p"])

    assert status == 0
    assert output == ["one", "two"]
    assert manager.terminated is True


def test_session_commits_input_at_end_of_input() -> None:
    _, output, manager, _ = run_session(["a", "unterminated"])

    assert output == []
    assert list(manager.context.buffer.lines) == ["unterminated"]


def test_session_stops_at_quit() -> None:
    _, output, _, source = run_session(["q", "this is never read"])

    assert output == []
    assert len(source.prompts) == 1


def test_session_prompts_only_in_command_mode() -> None:
    _, _, _, source = run_session(["a", "text", ".", "p"], prompt="*")

    assert source.prompts == ["*", "", "", "*", "*"]


def test_session_errors_print_question_mark_and_continue() -> None:
    _, output, _, _ = run_session(["p", "a", "x", ".", "h"])

    assert output == ["?", "Invalid address"]


def test_keyboard_interrupt_prints_question_mark() -> None:
    output: List[str] = []
    manager = create_default_manager(buffer=Buffer.from_lines(["kept"]))
    session = Session(manager, InterruptingSource(["p"]), write=output.append)

    session.run()

    assert output == ["?", "kept"]


def test_load_initial_file_reports_size() -> None:
    manager = create_default_manager(store=MemoryFileStore({"f.txt": ["ab", "c"]}))

    size = load_initial_file(manager, "f.txt")

    assert size == 5
    assert manager.context.buffer.filename() == "f.txt"
    assert manager.context.buffer.modified is False


def test_load_missing_file_keeps_filename() -> None:
    manager = create_default_manager(store=MemoryFileStore())

    assert load_initial_file(manager, "new.txt") is None
    assert manager.context.buffer.is_empty()
    assert manager.context.buffer.filename() == "new.txt"
    assert manager.context.last_error == "new.txt: No such file or directory"


def test_cli_edits_file_on_disk(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("first\nsecond\n", encoding="utf-8")
    output: List[str] = []

    status = main(
        [str(target)],
        source=IterableLineSource(["1d", "$a", "third", ".", "w", "q"]),
        write=output.append,
    )

    assert status == 0
    assert output == ["13", "13"]
    assert target.read_text(encoding="utf-8") == "second\nthird\n"


def test_cli_creates_missing_file_on_write(tmp_path: Path) -> None:
    target = tmp_path / "fresh.txt"
    output: List[str] = []

    main(
        [str(target)],
        source=IterableLineSource(["a", "Hello World!", ".", "w"]),
        write=output.append,
    )

    assert output == ["13"]
    assert target.read_text(encoding="utf-8") == "Hello World!\n"


def test_cli_silent_flag_hides_counts(tmp_path: Path) -> None:
    target = tmp_path / "quiet.txt"
    target.write_text("x\n", encoding="utf-8")
    output: List[str] = []

    main(
        ["-s", str(target)],
        source=IterableLineSource(["w", "p"]),
        write=output.append,
    )

    assert output == ["x"]


def test_cli_prompt_flag_is_used() -> None:
    source = IterableLineSource(["q"])

    main(["-p", "> "], source=source, write=lambda line: None)

    assert source.prompts == ["> "]


def test_cli_existing_empty_file_prints_no_count(tmp_path: Path) -> None:
    target = tmp_path / "empty.txt"
    target.write_bytes(b"")
    output: List[str] = []

    main([str(target)], source=IterableLineSource(["h"]), write=output.append)

    assert output == []
