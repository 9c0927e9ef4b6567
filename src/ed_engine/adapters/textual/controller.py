"""Textual adapter that wires ModeManager results and events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from ed_engine.buffer import BufferMirror
from ed_engine.modes import ModeManager, ModeResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    append_output: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEdAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_status()

    @property
    def terminated(self) -> bool:
        return self.manager.terminated

    def submit_line(self, line: str) -> ModeResult:
        """Feed one submitted input line to the active mode."""

        self._log_state("line ->", line=line)
        result = self.manager.handle_line(line)
        self._after_mode_result(result)
        return result

    def finish(self) -> ModeResult:
        """Treat the host closing as end-of-input."""

        result = self.manager.finish()
        self._after_mode_result(result)
        return result

    def close(self) -> None:
        """End the session if it is still running, committing pending input."""

        if not self.manager.terminated:
            self.finish()

    def _after_mode_result(self, result: ModeResult) -> None:
        for line in result.output:
            self.hooks.append_output(line)
        self._refresh_buffer()
        self._refresh_status()
        self._log_state(
            "result <-",
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "mode.switch",
            "input.commit",
            "command.submit",
            "command.error",
            "command.write",
            "command.edit",
            "command.read",
            "command.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        mirror = self.manager.context.buffer.mirror()
        self.hooks.update_buffer(mirror)

    def _refresh_status(self) -> None:
        buffer = self.manager.context.buffer
        mode = self.manager.active_mode
        name = mode.name if mode else "?"
        marker = "*" if buffer.modified else ""
        filename = buffer.filename() or "[no file]"
        self.hooks.update_status(
            f"{name} | {filename}{marker} | {buffer.dot}/{buffer.last}"
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.manager.context.buffer
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "dot": buffer.dot,
            "last": buffer.last,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEdAdapter", "TextualUIHooks"]
