"""Core line storage for ed_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Contiguous list-of-lines storage addressed with 1-based line numbers.

    Line ``n`` lives at ``_lines[n - 1]``; line 0 is the virtual position
    before the first line and never holds text.
    """

    _lines: List[str] = field(default_factory=list)
    version: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, number: int) -> str:
        return self._lines[number - 1]

    def slice(self, start: int, end: int) -> List[str]:
        """Return lines ``start..end`` inclusive."""

        return self._lines[start - 1 : end]

    def splice(self, after: int, count: int, new_lines: Sequence[str]) -> None:
        """Drop ``count`` lines following line ``after`` and insert ``new_lines``."""

        self._lines[after : after + count] = new_lines
        self.version += 1

    def reset(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self.version += 1
