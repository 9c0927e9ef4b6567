"""Dataclasses describing address expressions, command lines, and commands."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal as TypingLiteral
from typing import Mapping, Optional, Union


@dataclass(frozen=True, slots=True)
class Literal:
    """Absolute line number, e.g. ``12``."""

    value: int


@dataclass(frozen=True, slots=True)
class CurrentLine:
    """``.``"""


@dataclass(frozen=True, slots=True)
class LastLine:
    """``$``"""


@dataclass(frozen=True, slots=True)
class RelativeOffset:
    """``base`` shifted by ``delta`` lines, e.g. ``.+2`` or a bare ``-``."""

    base: "AddressExpr"
    delta: int


AddressExpr = Union[Literal, CurrentLine, LastLine, RelativeOffset]


@dataclass(frozen=True, slots=True)
class RangeExpr:
    """Two addresses joined by ``,`` or ``;``.

    With ``;`` the second address is resolved with dot temporarily set to
    the first one.
    """

    first: AddressExpr
    second: AddressExpr
    separator: str = ","

    def __post_init__(self) -> None:
        if self.separator not in {",", ";"}:
            raise ValueError(f"invalid range separator {self.separator!r}")


@dataclass(frozen=True, slots=True)
class WholeBuffer:
    """``1,$`` spelled as a lone ``,``."""


AddressNode = Union[AddressExpr, RangeExpr, WholeBuffer]


@dataclass(frozen=True, slots=True)
class CommandLine:
    """Syntax of one command line before it is bound to a buffer.

    ``letter`` is empty when the line carries only an address (or nothing);
    ``suffix`` is everything after the letter, untouched.
    """

    address: Optional[AddressNode]
    letter: str
    suffix: str = ""


DefaultAddress = TypingLiteral["dot", "dot_range", "whole", "last", "none"]
ArgumentKind = TypingLiteral["none", "path", "address", "pattern"]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Static grammar facts for one command letter."""

    letter: str
    name: str
    default: DefaultAddress
    argument: ArgumentKind = "none"
    max_addresses: int = 2
    allows_zero: bool = False
    needs_lines: bool = False


@dataclass(frozen=True, slots=True)
class Command:
    """A command bound to concrete line numbers, ready to execute."""

    letter: str
    name: str
    start: Optional[int] = None
    end: Optional[int] = None
    argument: Optional[str] = None
    dest: Optional[int] = None


_SPECS = (
    CommandSpec("p", "print", "dot_range", needs_lines=True),
    CommandSpec("n", "number", "dot_range", needs_lines=True),
    CommandSpec("d", "delete", "dot_range", needs_lines=True),
    CommandSpec("c", "change", "dot_range", needs_lines=True),
    CommandSpec("w", "write", "whole", argument="path"),
    CommandSpec("a", "append", "dot", max_addresses=1, allows_zero=True),
    CommandSpec("i", "insert", "dot", max_addresses=1, allows_zero=True),
    CommandSpec(
        "r", "read", "last", argument="path", max_addresses=1, allows_zero=True
    ),
    CommandSpec("m", "move", "dot_range", argument="address", needs_lines=True),
    CommandSpec("s", "substitute", "dot_range", argument="pattern", needs_lines=True),
    CommandSpec("e", "edit", "none", argument="path", max_addresses=0),
    CommandSpec("h", "help", "none", max_addresses=0),
    CommandSpec("q", "quit", "none", max_addresses=0),
    CommandSpec("Q", "quit", "none", max_addresses=0),
)

COMMAND_SPECS: Mapping[str, CommandSpec] = MappingProxyType(
    {spec.letter: spec for spec in _SPECS}
)

# Lines with no command letter: a bare address jumps, an empty line advances.
JUMP = CommandSpec("", "jump", "dot_range", max_addresses=2, needs_lines=True)
ADVANCE = CommandSpec("", "advance", "none", max_addresses=0, needs_lines=True)


__all__ = [
    "Literal",
    "CurrentLine",
    "LastLine",
    "RelativeOffset",
    "RangeExpr",
    "WholeBuffer",
    "AddressExpr",
    "AddressNode",
    "CommandLine",
    "CommandSpec",
    "Command",
    "COMMAND_SPECS",
    "JUMP",
    "ADVANCE",
]
