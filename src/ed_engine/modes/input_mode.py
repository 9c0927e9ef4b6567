"""Input mode entered by ``a``, ``i``, and ``c``."""

from __future__ import annotations

from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult, PendingInsert

TERMINATOR = "."


class InputMode(Mode):
    """Collects text lines verbatim until a lone ``.`` commits them.

    End-of-input while collecting commits what was gathered, exactly as if
    the terminator had been typed.
    """

    name = "input"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("ed_engine.modes.input")

    def on_enter(self, previous: str | None) -> None:
        del previous
        if self.context.pending is None:
            raise RuntimeError("input mode entered without a pending insert")

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.pending = None

    def handle_line(self, line: str) -> ModeResult:
        if line == TERMINATOR:
            return self._commit(status="input_commit")
        self._pending().lines.append(line)
        return ModeResult(consumed=True, status="input")

    def handle_end_of_input(self) -> ModeResult:
        result = self._commit(status="input_eof")
        result.switch_to = "terminated"
        return result

    def _pending(self) -> PendingInsert:
        pending = self.context.pending
        if pending is None:
            raise RuntimeError("no pending insert")
        return pending

    def _commit(self, *, status: str) -> ModeResult:
        pending = self._pending()
        buffer = self.context.buffer
        if pending.kind == "change":
            assert pending.start is not None and pending.end is not None
            buffer.replace_range(pending.start, pending.end, pending.lines)
        else:
            buffer.insert_after(pending.after, pending.lines)
        self.context.bus.emit(
            "input.commit", {"kind": pending.kind, "count": len(pending.lines)}
        )
        return ModeResult(
            consumed=True,
            switch_to="command",
            status=status,
            message=pending.kind,
        )
