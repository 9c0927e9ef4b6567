"""Command-line parsing and binding of commands to buffer line numbers."""

from __future__ import annotations

from typing import Optional, Tuple

from ed_engine.buffer import Buffer
from ed_engine.errors import (
    EmptyBufferError,
    MalformedAddress,
    MissingArgument,
    UnexpectedArgument,
    UnknownCommand,
)
from ed_engine.runtime.telemetry import span

from .address import (
    ADDRESS_CHARS,
    AddressParser,
    parse_address_text,
    resolve_address,
    resolve_range,
)
from .models import (
    ADVANCE,
    COMMAND_SPECS,
    JUMP,
    Command,
    CommandLine,
    CommandSpec,
    RangeExpr,
)


def parse_command_line(line: str) -> CommandLine:
    """Split ``line`` into address prefix, command letter, and raw suffix."""

    text = line.lstrip()
    parser = AddressParser(text)
    address = parser.parse_range()
    rest = parser.remainder.lstrip(" \t")
    if not rest:
        return CommandLine(address=address, letter="")
    letter = rest[0]
    if letter in ADDRESS_CHARS:
        raise MalformedAddress(text=text)
    return CommandLine(address=address, letter=letter, suffix=rest[1:])


def bind_command(line: CommandLine, buffer: Buffer) -> Command:
    """Validate ``line`` against its command spec and resolve its addresses."""

    spec = _lookup_spec(line)
    with span(
        "commands::bind",
        component="commands",
        metadata={"command": spec.name, "dot": buffer.dot, "last": buffer.last},
    ):
        argument = _bind_argument(spec, line.suffix)
        if spec.max_addresses == 0 and line.address is not None:
            raise MalformedAddress("Unexpected address")
        if spec.needs_lines and buffer.is_empty():
            raise EmptyBufferError()

        start, end = _bind_addresses(spec, line, buffer)
        dest = None
        if spec.argument == "address":
            dest = _bind_destination(argument, buffer)

        return Command(
            letter=spec.letter,
            name=spec.name,
            start=start,
            end=end,
            argument=argument,
            dest=dest,
        )


def parse_command(line: str, buffer: Buffer) -> Command:
    return bind_command(parse_command_line(line), buffer)


def _lookup_spec(line: CommandLine) -> CommandSpec:
    if not line.letter:
        return ADVANCE if line.address is None else JUMP
    spec = COMMAND_SPECS.get(line.letter)
    if spec is None:
        raise UnknownCommand(line.letter)
    return spec


def _bind_argument(spec: CommandSpec, suffix: str) -> Optional[str]:
    if spec.argument == "none":
        if suffix.strip():
            raise UnexpectedArgument(suffix.strip())
        return None
    if spec.argument == "path":
        if suffix and not suffix[0].isspace():
            raise UnexpectedArgument(suffix)
        return suffix.strip() or None
    if spec.argument == "address":
        target = suffix.strip()
        if not target:
            raise MissingArgument("Destination expected")
        return target
    if not suffix:
        raise MissingArgument("No previous substitution")
    return suffix


def _bind_addresses(
    spec: CommandSpec, line: CommandLine, buffer: Buffer
) -> Tuple[Optional[int], Optional[int]]:
    dot, last = buffer.dot, buffer.last
    if spec.default == "none" and line.address is None:
        return None, None

    if line.address is None:
        if spec.default == "whole":
            return min(1, last), last
        if spec.default == "last":
            return last, last
        return dot, dot

    start, end = resolve_range(
        line.address, dot=dot, last=last, allow_zero=spec.allows_zero
    )
    if spec.max_addresses == 1 and isinstance(line.address, RangeExpr):
        # Single-address commands use the last address given.
        return end, end
    return start, end


def _bind_destination(argument: Optional[str], buffer: Buffer) -> int:
    expr = parse_address_text(argument or "")
    if expr is None:
        raise MissingArgument("Destination expected")
    return resolve_address(expr, dot=buffer.dot, last=buffer.last, allow_zero=True)


__all__ = ["parse_command_line", "bind_command", "parse_command"]
