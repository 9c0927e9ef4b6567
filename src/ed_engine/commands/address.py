"""Address expression grammar and resolution.

Grammar, consumed left to right::

    range  := addr ( (',' | ';') addr )?
    addr   := base offset*
    base   := NUMBER | '.' | '$' | <empty, meaning '.'>
    offset := ('+' | '-') NUMBER?

Parsing is pure syntax; resolution maps an expression to line numbers for a
given ``dot`` and ``last`` and never mutates the buffer.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ed_engine.errors import AddressOutOfRange, MalformedAddress

from .models import (
    AddressExpr,
    AddressNode,
    CurrentLine,
    LastLine,
    Literal,
    RangeExpr,
    RelativeOffset,
    WholeBuffer,
)

SEPARATORS = ",;"
OFFSET_SIGNS = "+-"
ADDRESS_CHARS = "0123456789.$" + OFFSET_SIGNS + SEPARATORS


class AddressParser:
    """Cursor over a command line that consumes a leading address range."""

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def remainder(self) -> str:
        return self.text[self.pos :]

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _number(self) -> int:
        start = self.pos
        while self._peek().isdigit():
            self.pos += 1
        return int(self.text[start : self.pos])

    def parse_address(self) -> Optional[AddressExpr]:
        """Consume ``base offset*``; ``None`` when nothing was consumed."""

        node: Optional[AddressExpr] = None
        char = self._peek()
        if char.isdigit():
            node = Literal(self._number())
        elif char == ".":
            self.pos += 1
            node = CurrentLine()
        elif char == "$":
            self.pos += 1
            node = LastLine()

        while self._peek() and self._peek() in OFFSET_SIGNS:
            sign = -1 if self._peek() == "-" else 1
            self.pos += 1
            amount = self._number() if self._peek().isdigit() else 1
            node = RelativeOffset(node or CurrentLine(), sign * amount)

        return node

    def parse_range(self) -> Optional[AddressNode]:
        """Consume an optional ``addr [sep addr]`` prefix.

        Separator shorthands follow ed: a lone ``,`` is ``1,$``, a lone ``;``
        is ``.,$``, a missing first address is ``1`` (``,``) or ``.`` (``;``)
        and a missing second address repeats the first.
        """

        first = self.parse_address()
        separator = self._peek()
        if not separator or separator not in SEPARATORS:
            return first

        self.pos += 1
        second = self.parse_address()
        if first is None and second is None:
            if separator == ",":
                return WholeBuffer()
            return RangeExpr(CurrentLine(), LastLine(), separator)
        if first is None:
            first = Literal(1) if separator == "," else CurrentLine()
        if second is None:
            second = first
        return RangeExpr(first, second, separator)


def parse_address_text(text: str) -> Optional[AddressExpr]:
    """Parse ``text`` as exactly one address (no range, nothing left over)."""

    parser = AddressParser(text.strip())
    node = parser.parse_address()
    if parser.remainder:
        raise MalformedAddress(text=text)
    return node


def evaluate(expr: AddressExpr, *, dot: int, last: int) -> int:
    """Compute the raw line number of ``expr`` without bounds checks."""

    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, CurrentLine):
        return dot
    if isinstance(expr, LastLine):
        return last
    if isinstance(expr, RelativeOffset):
        return evaluate(expr.base, dot=dot, last=last) + expr.delta
    raise TypeError(f"not an address expression: {expr!r}")


def _check(value: int, *, last: int, allow_zero: bool) -> int:
    lowest = 0 if allow_zero else 1
    if value < lowest or value > last:
        raise AddressOutOfRange("Invalid address", start=value, end=value)
    return value


def resolve_address(
    expr: AddressExpr, *, dot: int, last: int, allow_zero: bool = False
) -> int:
    return _check(evaluate(expr, dot=dot, last=last), last=last, allow_zero=allow_zero)


def resolve_range(
    node: AddressNode, *, dot: int, last: int, allow_zero: bool = False
) -> Tuple[int, int]:
    """Resolve ``node`` to an inclusive ``(start, end)`` pair.

    A single address yields ``start == end``. For ``;`` ranges the first
    address becomes the dot of the second; that dot lives only in this call.
    """

    if isinstance(node, WholeBuffer):
        return min(1, last), last
    if isinstance(node, RangeExpr):
        start = resolve_address(node.first, dot=dot, last=last, allow_zero=allow_zero)
        local_dot = start if node.separator == ";" else dot
        end = resolve_address(
            node.second, dot=local_dot, last=last, allow_zero=allow_zero
        )
        if start > end:
            raise AddressOutOfRange("Invalid address", start=start, end=end)
        return start, end
    value = resolve_address(node, dot=dot, last=last, allow_zero=allow_zero)
    return value, value


__all__ = [
    "ADDRESS_CHARS",
    "AddressParser",
    "evaluate",
    "parse_address_text",
    "resolve_address",
    "resolve_range",
]
