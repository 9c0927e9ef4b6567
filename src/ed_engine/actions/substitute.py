"""Parsing and application of ``s/pattern/replacement/flags``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ed_engine.errors import MalformedPattern, NoMatch, UnexpectedArgument


@dataclass(frozen=True, slots=True)
class Substitution:
    pattern: "re.Pattern[str]"
    template: str
    global_: bool = False

    def apply(self, text: str) -> str:
        try:
            return self.pattern.sub(self.template, text, count=0 if self.global_ else 1)
        except (re.error, IndexError) as exc:
            raise MalformedPattern(str(exc)) from exc


def _split_field(text: str, pos: int, delimiter: str) -> Tuple[str, int, bool]:
    """Read up to an unescaped ``delimiter``; ``\\<delimiter>`` becomes literal."""

    chars: List[str] = []
    while pos < len(text):
        char = text[pos]
        if char == "\\" and pos + 1 < len(text) and text[pos + 1] == delimiter:
            chars.append(delimiter)
            pos += 2
            continue
        if char == "\\" and pos + 1 < len(text):
            chars.append(text[pos : pos + 2])
            pos += 2
            continue
        if char == delimiter:
            return "".join(chars), pos + 1, True
        chars.append(char)
        pos += 1
    return "".join(chars), pos, False


def _to_template(replacement: str) -> str:
    """Translate ed's ``&`` / ``\\&`` into a ``re.sub`` template."""

    out: List[str] = []
    pos = 0
    while pos < len(replacement):
        char = replacement[pos]
        if char == "\\" and pos + 1 < len(replacement):
            nxt = replacement[pos + 1]
            out.append("&" if nxt == "&" else replacement[pos : pos + 2])
            pos += 2
            continue
        out.append(r"\g<0>" if char == "&" else char)
        pos += 1
    return "".join(out)


def parse_substitution(argument: str) -> Substitution:
    if not argument or argument[0].isspace() or argument[0] == "\\":
        raise MalformedPattern("Missing pattern delimiter")
    delimiter = argument[0]
    pattern, pos, closed = _split_field(argument, 1, delimiter)
    if not closed:
        raise MalformedPattern("Missing pattern delimiter")
    if not pattern:
        raise MalformedPattern("No previous pattern")
    replacement, pos, _ = _split_field(argument, pos, delimiter)
    flags = argument[pos:].strip()
    if flags not in {"", "g"}:
        raise UnexpectedArgument(flags)
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise MalformedPattern(f"Invalid pattern: {exc}") from exc
    return Substitution(compiled, _to_template(replacement), global_=flags == "g")


def substitute_lines(
    lines: Sequence[Tuple[int, str]], argument: str
) -> List[Tuple[int, str]]:
    """Return ``(number, new_text)`` for every line the substitution changes."""

    substitution = parse_substitution(argument)
    changes = []
    for number, text in lines:
        updated = substitution.apply(text)
        if updated != text:
            changes.append((number, updated))
    if not changes:
        raise NoMatch()
    return changes
