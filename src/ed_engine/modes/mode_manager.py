"""Mode manager: owns the active mode and turns failures into ``?``."""

from __future__ import annotations

from typing import Dict, Optional, Type

from ed_engine.errors import EdError
from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult

ERROR_MARKER = "?"


class TerminatedMode(Mode):
    """Sink state reached by ``q`` or end-of-input; ignores further lines."""

    name = "terminated"

    def handle_line(self, line: str) -> ModeResult:
        del line
        return ModeResult(consumed=False, status="terminated")

    def handle_end_of_input(self) -> ModeResult:
        return ModeResult(consumed=False, status="terminated")


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches input lines."""

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("ed_engine.modes")
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def terminated(self) -> bool:
        return self._active == TerminatedMode.name

    @property
    def prompt(self) -> str:
        mode = self.active_mode
        return mode.prompt if mode else ""

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})
        self.context.bus.emit("mode.switch", name)

    def handle_line(self, line: str) -> ModeResult:
        mode = self._require_mode()
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"mode": mode.name, "dot": self.context.buffer.dot},
        ):
            try:
                result = mode.handle_line(line)
            except EdError as exc:
                return self._record_error(exc)
        return self._after_mode_result(result)

    def finish(self) -> ModeResult:
        """Handle end-of-input for the active mode and terminate."""

        mode = self._require_mode()
        try:
            result = mode.handle_end_of_input()
        except EdError as exc:
            result = self._record_error(exc)
            result.switch_to = TerminatedMode.name
        return self._after_mode_result(result)

    def _require_mode(self) -> Mode:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return mode

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def _record_error(self, exc: EdError) -> ModeResult:
        self.context.last_error = exc.message
        self.context.bus.emit("command.error", exc.message)
        telemetry.record_event(
            "command.error",
            level="warning",
            data={"error": type(exc).__name__, "message": exc.message},
        )
        return ModeResult(
            consumed=True,
            status="error",
            message=exc.message,
            output=(ERROR_MARKER,),
        )
