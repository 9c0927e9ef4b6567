"""Executable Textual app that hosts an ed_engine session."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Input, RichLog, Static

from ed_engine.buffer import BufferMirror
from ed_engine.modes import ModeManager
from ed_engine.runtime.io import DiskFileStore
from ed_engine.runtime.settings import EngineSettings
from ed_engine.session import create_default_manager, load_initial_file

from .controller import TextualEdAdapter, TextualUIHooks


@dataclass
class UIState:
    status_text: str = ""
    output: List[str] = field(default_factory=list)
    mirror: Optional[BufferMirror] = None


class EdEngineApp(App[None]):
    """Minimal Textual UI: scrolling output, status line, and a line input."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#output-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 3;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "close_session", "Quit"),
    ]

    def __init__(
        self,
        manager: Optional[ModeManager] = None,
        *,
        initial_output: Sequence[str] = (),
    ) -> None:
        super().__init__()
        self._state = UIState(output=list(initial_output))
        self.manager = manager or create_default_manager(store=DiskFileStore())
        self.adapter: TextualEdAdapter | None = None
        self._output_widget: RichLog | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._output_widget = RichLog(id="output-view", wrap=False, markup=False)
        yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder=self.manager.prompt or "command", id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            append_output=self._append_output,
            update_status=self._update_status,
        )
        for line in self._state.output:
            self._write(line)
        self.adapter = TextualEdAdapter(self.manager, hooks)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        event.input.value = ""
        self.adapter.submit_line(event.value)
        if self.adapter.terminated:
            self.exit()

    def action_close_session(self) -> None:
        if self.adapter:
            self.adapter.close()
        self.exit()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.mirror = mirror

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _append_output(self, line: str) -> None:
        self._state.output.append(line)
        self._write(line)

    def _write(self, line: str) -> None:
        if self._output_widget:
            self._output_widget.write(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = EngineSettings.from_env()
    parser = argparse.ArgumentParser(description="Run the ed_engine Textual host.")
    parser.add_argument("file", nargs="?", help="file to edit")
    parser.add_argument(
        "-p",
        "--prompt",
        default=settings.prompt,
        help="command-mode prompt (default: $ED_ENGINE_PROMPT)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    manager = create_default_manager(store=DiskFileStore(), prompt=args.prompt)
    initial: List[str] = []
    if args.file:
        size = load_initial_file(manager, args.file)
        if size:
            initial.append(str(size))
    app = EdEngineApp(manager, initial_output=initial)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
