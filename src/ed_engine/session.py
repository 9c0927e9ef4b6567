"""Session loop driving the mode manager from a line source."""

from __future__ import annotations

import sys
from typing import Callable, Iterable, Optional

from ed_engine.buffer import Buffer
from ed_engine.errors import IoError
from ed_engine.modes import (
    ERROR_MARKER,
    CommandMode,
    InputMode,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    TerminatedMode,
)
from ed_engine.runtime import telemetry
from ed_engine.runtime.io import FileStore, LineSource

Writer = Callable[[str], None]


def create_default_manager(
    *,
    buffer: Optional[Buffer] = None,
    store: Optional[FileStore] = None,
    prompt: str = "",
    silent: bool = False,
) -> ModeManager:
    """Build a ModeManager with the command, input, and terminated modes."""

    context = ModeContext(
        buffer=buffer or Buffer(),
        bus=ModeBus(),
        prompt=prompt,
        silent=silent,
    )
    if store is not None:
        context.store = store
    manager = ModeManager(context)
    manager.register_mode(CommandMode)
    manager.register_mode(InputMode)
    manager.register_mode(TerminatedMode)
    return manager


def load_initial_file(manager: ModeManager, path: str) -> Optional[int]:
    """Load ``path`` into the buffer and remember it as the filename.

    A file that cannot be read leaves an empty buffer that still remembers
    ``path``; the failure becomes the last error. Returns the byte count on
    success.
    """

    context = manager.context
    context.buffer.set_filename(path)
    try:
        lines = context.store.read(path)
    except IoError as exc:
        context.last_error = exc.message
        telemetry.record_event(
            "session.load_failed", level="warning", data={"path": path}
        )
        return None
    context.buffer.replace_all(lines)
    return context.buffer.data_size()


class Session:
    """Reads lines until quit or end-of-input, writing every output line."""

    def __init__(
        self,
        manager: ModeManager,
        source: LineSource,
        *,
        write: Optional[Writer] = None,
    ) -> None:
        self.manager = manager
        self.source = source
        self._write = write or _stdout_writer

    def emit(self, lines: Iterable[str]) -> None:
        for line in lines:
            self._write(line)

    def step(self) -> Optional[ModeResult]:
        """Process one input line; ``None`` once the session is over."""

        if self.manager.terminated:
            return None
        try:
            line = self.source.next_line(self.manager.prompt)
        except KeyboardInterrupt:
            self.emit((ERROR_MARKER,))
            return ModeResult(consumed=False, status="interrupted")
        if line is None:
            result = self.manager.finish()
        else:
            result = self.manager.handle_line(line)
        self.emit(result.output)
        return result

    def run(self) -> int:
        with telemetry.span("session::run", component="session"):
            while self.step() is not None:
                pass
        return 0


def _stdout_writer(line: str) -> None:
    sys.stdout.write(f"{line}\n")
    sys.stdout.flush()


__all__ = ["Session", "create_default_manager", "load_initial_file"]
