"""Handlers that execute bound commands against the buffer."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ed_engine.commands import Command
from ed_engine.errors import AddressOutOfRange, MissingArgument
from ed_engine.modes.base_mode import ModeContext, ModeResult, PendingInsert
from ed_engine.runtime.io import encoded_size

from .substitute import substitute_lines

CommandHandler = Callable[[ModeContext, Command], ModeResult]


def execute_command(context: ModeContext, command: Command) -> ModeResult:
    handler = _COMMAND_HANDLERS[command.name]
    return handler(context, command)


def _span(command: Command) -> tuple[int, int]:
    assert command.start is not None and command.end is not None
    return command.start, command.end


def _done(command: Command, *output: str) -> ModeResult:
    return ModeResult(
        consumed=True, status=f"command_{command.name}", output=tuple(output)
    )


def _handle_print(context: ModeContext, command: Command) -> ModeResult:
    start, end = _span(command)
    lines = context.buffer.get_range(start, end)
    context.buffer.set_dot(end)
    return _done(command, *(text for _, text in lines))


def _handle_number(context: ModeContext, command: Command) -> ModeResult:
    start, end = _span(command)
    lines = context.buffer.get_range(start, end)
    context.buffer.set_dot(end)
    return _done(command, *(f"{number}\t{text}" for number, text in lines))


def _handle_jump(context: ModeContext, command: Command) -> ModeResult:
    _, end = _span(command)
    context.buffer.set_dot(end)
    return _done(command, context.buffer.get_line(end))


def _handle_advance(context: ModeContext, command: Command) -> ModeResult:
    buffer = context.buffer
    target = buffer.dot + 1
    if target > buffer.last:
        raise AddressOutOfRange("Invalid address", start=target, end=target)
    buffer.set_dot(target)
    return _done(command, buffer.get_line(target))


def _handle_delete(context: ModeContext, command: Command) -> ModeResult:
    start, end = _span(command)
    context.buffer.delete_range(start, end)
    return _done(command)


def _handle_move(context: ModeContext, command: Command) -> ModeResult:
    start, end = _span(command)
    assert command.dest is not None
    context.buffer.move_range(start, end, command.dest)
    return _done(command)


def _enter_input(context: ModeContext, pending: PendingInsert) -> ModeResult:
    context.pending = pending
    return ModeResult(
        consumed=True,
        switch_to="input",
        status=f"command_{pending.kind}",
        message=f"enter_{pending.kind}",
    )


def _handle_append(context: ModeContext, command: Command) -> ModeResult:
    _, after = _span(command)
    return _enter_input(context, PendingInsert(kind="append", after=after))


def _handle_insert(context: ModeContext, command: Command) -> ModeResult:
    _, before = _span(command)
    return _enter_input(
        context, PendingInsert(kind="insert", after=max(before - 1, 0))
    )


def _handle_change(context: ModeContext, command: Command) -> ModeResult:
    start, end = _span(command)
    return _enter_input(
        context,
        PendingInsert(kind="change", after=start - 1, start=start, end=end),
    )


def _resolve_path(context: ModeContext, command: Command) -> str:
    path = command.argument or context.buffer.filename()
    if not path:
        raise MissingArgument("No current filename")
    return path


def _byte_count(context: ModeContext, command: Command, count: int) -> ModeResult:
    if context.silent:
        return _done(command)
    return _done(command, str(count))


def _handle_write(context: ModeContext, command: Command) -> ModeResult:
    buffer = context.buffer
    start, end = _span(command)
    path = _resolve_path(context, command)
    lines = [text for _, text in buffer.get_range(start, end)]
    written = context.store.write(path, lines)
    if buffer.filename() is None:
        buffer.set_filename(path)
    if (start, end) == (min(1, buffer.last), buffer.last):
        buffer.mark_clean()
    context.bus.emit("command.write", {"path": path, "bytes": written})
    return _byte_count(context, command, written)


def _handle_edit(context: ModeContext, command: Command) -> ModeResult:
    path = _resolve_path(context, command)
    lines = context.store.read(path)
    context.buffer.replace_all(lines)
    context.buffer.set_filename(path)
    context.bus.emit("command.edit", {"path": path, "lines": len(lines)})
    return _byte_count(context, command, encoded_size(lines))


def _handle_read(context: ModeContext, command: Command) -> ModeResult:
    buffer = context.buffer
    _, after = _span(command)
    path = _resolve_path(context, command)
    lines = context.store.read(path)
    buffer.insert_after(after, lines)
    if buffer.filename() is None:
        buffer.set_filename(path)
    context.bus.emit("command.read", {"path": path, "lines": len(lines)})
    return _byte_count(context, command, encoded_size(lines))


def _handle_substitute(context: ModeContext, command: Command) -> ModeResult:
    buffer = context.buffer
    start, end = _span(command)
    changes = substitute_lines(buffer.get_range(start, end), command.argument or "")
    # A newline in the result splits the line; later line numbers shift.
    shift = 0
    for number, text in changes:
        pieces = text.split("\n")
        buffer.replace_range(number + shift, number + shift, pieces)
        shift += len(pieces) - 1
    return _done(command, buffer.get_line(buffer.dot))


def _handle_help(context: ModeContext, command: Command) -> ModeResult:
    message: Optional[str] = context.last_error
    output: List[str] = [message] if message else []
    return _done(command, *output)


def _handle_quit(context: ModeContext, command: Command) -> ModeResult:
    context.bus.emit("command.quit", {"modified": context.buffer.modified})
    return ModeResult(
        consumed=True,
        switch_to="terminated",
        status="command_quit",
        message=command.letter,
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "print": _handle_print,
    "number": _handle_number,
    "jump": _handle_jump,
    "advance": _handle_advance,
    "delete": _handle_delete,
    "move": _handle_move,
    "append": _handle_append,
    "insert": _handle_insert,
    "change": _handle_change,
    "write": _handle_write,
    "edit": _handle_edit,
    "read": _handle_read,
    "substitute": _handle_substitute,
    "help": _handle_help,
    "quit": _handle_quit,
}


__all__ = ["execute_command"]
