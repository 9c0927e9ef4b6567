"""Address grammar, command models, and the command-line parser."""

from .address import (
    AddressParser,
    evaluate,
    parse_address_text,
    resolve_address,
    resolve_range,
)
from .models import (
    COMMAND_SPECS,
    AddressExpr,
    AddressNode,
    Command,
    CommandLine,
    CommandSpec,
    CurrentLine,
    LastLine,
    Literal,
    RangeExpr,
    RelativeOffset,
    WholeBuffer,
)
from .parser import bind_command, parse_command, parse_command_line

__all__ = [
    "AddressParser",
    "evaluate",
    "parse_address_text",
    "resolve_address",
    "resolve_range",
    "COMMAND_SPECS",
    "AddressExpr",
    "AddressNode",
    "Command",
    "CommandLine",
    "CommandSpec",
    "CurrentLine",
    "LastLine",
    "Literal",
    "RangeExpr",
    "RelativeOffset",
    "WholeBuffer",
    "bind_command",
    "parse_command",
    "parse_command_line",
]
