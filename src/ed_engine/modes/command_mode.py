"""Command mode: parse one line, bind it, and dispatch it."""

from __future__ import annotations

from ed_engine.actions import command as command_actions
from ed_engine.commands import parse_command
from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class CommandMode(Mode):
    name = "command"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("ed_engine.modes.command")

    @property
    def prompt(self) -> str:
        return self.context.prompt

    def handle_line(self, line: str) -> ModeResult:
        self.context.bus.emit("command.submit", line)
        command = parse_command(line, self.context.buffer)
        with telemetry.span(
            f"command::{command.name}",
            component="commands",
            metadata={"start": command.start, "end": command.end},
        ):
            return command_actions.execute_command(self.context, command)
