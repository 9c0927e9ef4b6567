"""Current-line, filename, and change tracking state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class BufferState:
    """Mutable position info tied to a BufferDocument version."""

    dot: int = 0
    filename: Optional[str] = None
    modified: bool = False
    last_change_tick: int = 0

    def set_dot(self, line: int) -> None:
        self.dot = line

    def mark_modified(self, tick: int) -> None:
        self.modified = True
        self.last_change_tick = tick

    def mark_clean(self) -> None:
        self.modified = False
