from __future__ import annotations

import pytest

from ed_engine.commands import (
    AddressParser,
    CurrentLine,
    LastLine,
    Literal,
    RangeExpr,
    RelativeOffset,
    WholeBuffer,
    parse_address_text,
    resolve_address,
    resolve_range,
)
from ed_engine.errors import AddressOutOfRange, MalformedAddress


def parse(text: str):
    parser = AddressParser(text)
    node = parser.parse_range()
    return node, parser.remainder


def test_parses_address_bases() -> None:
    assert parse("12p") == (Literal(12), "p")
    assert parse(".n") == (CurrentLine(), "n")
    assert parse("$d") == (LastLine(), "d")
    assert parse("p") == (None, "p")


def test_parses_offsets_against_preceding_base() -> None:
    node, rest = parse(".+2-1p")

    assert node == RelativeOffset(RelativeOffset(CurrentLine(), 2), -1)
    assert rest == "p"


def test_bare_sign_means_one_line_from_dot() -> None:
    assert parse("+")[0] == RelativeOffset(CurrentLine(), 1)
    assert parse("--")[0] == RelativeOffset(RelativeOffset(CurrentLine(), -1), -1)
    assert parse("$-")[0] == RelativeOffset(LastLine(), -1)


def test_parses_ranges_with_both_separators() -> None:
    assert parse("1,$p")[0] == RangeExpr(Literal(1), LastLine(), ",")
    assert parse("2;+1p")[0] == RangeExpr(
        Literal(2), RelativeOffset(CurrentLine(), 1), ";"
    )


def test_separator_shorthands() -> None:
    assert parse(",p")[0] == WholeBuffer()
    assert parse(";p")[0] == RangeExpr(CurrentLine(), LastLine(), ";")
    assert parse(",3p")[0] == RangeExpr(Literal(1), Literal(3), ",")
    assert parse("2,p")[0] == RangeExpr(Literal(2), Literal(2), ",")


def test_chained_offsets_resolve_left_to_right() -> None:
    node, _ = parse(".+2-1")

    assert resolve_address(node, dot=5, last=10) == 6


def test_semicolon_moves_dot_for_second_address_only() -> None:
    comma, _ = parse("2,.+1")
    semicolon, _ = parse("2;.+1")

    assert resolve_range(comma, dot=5, last=10) == (2, 6)
    assert resolve_range(semicolon, dot=5, last=10) == (2, 3)


def test_single_address_resolves_to_degenerate_range() -> None:
    node, _ = parse("$")

    assert resolve_range(node, dot=1, last=7) == (7, 7)


def test_whole_buffer_resolves_to_first_and_last() -> None:
    assert resolve_range(WholeBuffer(), dot=2, last=4) == (1, 4)
    assert resolve_range(WholeBuffer(), dot=0, last=0) == (0, 0)


@pytest.mark.parametrize("text", ["5", "0", "$+1", ".-3"])
def test_out_of_range_addresses_fail(text: str) -> None:
    node, _ = parse(text)

    with pytest.raises(AddressOutOfRange):
        resolve_range(node, dot=2, last=3)


def test_zero_is_allowed_only_when_requested() -> None:
    node, _ = parse("0")

    assert resolve_range(node, dot=1, last=3, allow_zero=True) == (0, 0)
    with pytest.raises(AddressOutOfRange):
        resolve_range(node, dot=1, last=3)


def test_reversed_range_fails() -> None:
    node, _ = parse("3,1")

    with pytest.raises(AddressOutOfRange):
        resolve_range(node, dot=1, last=3)


def test_parse_address_text_requires_full_consumption() -> None:
    assert parse_address_text(" $ ") == LastLine()
    assert parse_address_text("") is None
    with pytest.raises(MalformedAddress):
        parse_address_text("2x")
