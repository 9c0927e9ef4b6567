"""Validation helpers shared across buffer services."""

from __future__ import annotations

from ed_engine.errors import RangeError

from .document import BufferDocument


def ensure_range(document: BufferDocument, start: int, end: int) -> tuple[int, int]:
    if start < 1 or end > document.line_count or start > end:
        raise RangeError("Invalid address", start=start, end=end)
    return start, end


def ensure_insertion_point(document: BufferDocument, index: int) -> int:
    if index < 0 or index > document.line_count:
        raise RangeError("Invalid address", start=index, end=index)
    return index
