"""High-level buffer façade combining document and position state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional, Sequence, Tuple

from ed_engine.errors import InvalidDestination, RangeError
from ed_engine.runtime import telemetry
from ed_engine.runtime.io import encoded_size

from .document import BufferDocument
from .state import BufferState
from .sync import BufferMirror
from .validation import ensure_insertion_point, ensure_range

NumberedLine = Tuple[int, str]


class Buffer:
    """Ordered text lines plus the current line, filename, and modified flag.

    Every mutation validates its indices before touching the document, so a
    failed call leaves both lines and ``dot`` exactly as they were.
    """

    def __init__(
        self,
        *,
        name: str = "main",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState(dot=self.document.line_count)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        filename: Optional[str] = None,
        name: str = "main",
    ) -> "Buffer":
        document = BufferDocument.from_lines(lines)
        state = BufferState(dot=document.line_count, filename=filename)
        return cls(name=name, document=document, state=state)

    # -- queries ---------------------------------------------------------

    def line_count(self) -> int:
        return self.document.line_count

    @property
    def last(self) -> int:
        return self.document.line_count

    @property
    def dot(self) -> int:
        return self.state.dot

    @property
    def modified(self) -> bool:
        return self.state.modified

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def is_empty(self) -> bool:
        return self.document.line_count == 0

    def filename(self) -> Optional[str]:
        return self.state.filename

    def set_filename(self, path: str) -> None:
        self.state.filename = path

    def get_line(self, number: int) -> str:
        ensure_range(self.document, number, number)
        return self.document.get_line(number)

    def get_range(self, start: int, end: int) -> List[NumberedLine]:
        if start == end == 0 and self.is_empty():
            return []
        ensure_range(self.document, start, end)
        return list(zip(range(start, end + 1), self.document.slice(start, end)))

    def data_size(self) -> int:
        """Bytes the whole buffer occupies on disk, newlines included."""

        return encoded_size(self.document.snapshot())

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            lines=tuple(self.document.snapshot()),
            dot=self.state.dot,
            filename=self.state.filename,
            modified=self.state.modified,
            attributes=dict(attributes or {}),
        )

    # -- mutations -------------------------------------------------------

    def set_dot(self, line: int) -> None:
        if self.is_empty() and line == 0:
            self.state.set_dot(0)
            return
        ensure_range(self.document, line, line)
        self.state.set_dot(line)

    def insert_after(self, index: int, texts: Sequence[str]) -> None:
        ensure_insertion_point(self.document, index)
        with Transaction(self, "insert_after") as tx:
            self.document.splice(index, 0, list(texts))
            if texts:
                self.state.set_dot(index + len(texts))
                tx.touch()
            else:
                # Nothing inserted: stay on the addressed line, never on 0.
                self.state.set_dot(max(index, min(1, self.document.line_count)))

    def delete_range(self, start: int, end: int) -> None:
        ensure_range(self.document, start, end)
        with Transaction(self, "delete_range") as tx:
            self.document.splice(start - 1, end - start + 1, [])
            self.state.set_dot(min(start, self.document.line_count))
            tx.touch()

    def replace_range(self, start: int, end: int, texts: Sequence[str]) -> None:
        ensure_range(self.document, start, end)
        with Transaction(self, "replace_range") as tx:
            self.document.splice(start - 1, end - start + 1, list(texts))
            if texts:
                self.state.set_dot(start - 1 + len(texts))
            elif start > 1:
                self.state.set_dot(start - 1)
            else:
                self.state.set_dot(min(1, self.document.line_count))
            tx.touch()

    def move_range(self, start: int, end: int, dest: int) -> None:
        ensure_range(self.document, start, end)
        if dest < 0 or dest > self.document.line_count:
            raise RangeError("Invalid address", start=dest, end=dest)
        if start <= dest <= end:
            raise InvalidDestination(dest)
        with Transaction(self, "move_range") as tx:
            block = self.document.slice(start, end)
            self.document.splice(start - 1, len(block), [])
            if dest > end:
                dest -= len(block)
            self.document.splice(dest, 0, block)
            self.state.set_dot(dest + len(block))
            tx.touch()

    def replace_all(self, texts: Iterable[str]) -> None:
        with Transaction(self, "replace_all"):
            self.document.reset(texts)
            self.state.set_dot(self.document.line_count)
            self.state.mark_clean()

    def mark_clean(self) -> None:
        self.state.mark_clean()


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single buffer mutation in a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._touched = False

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "dot": self.buffer.dot},
        )
        self._span_cm.__enter__()
        return self

    def touch(self) -> None:
        self._touched = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self._touched:
            self.buffer.state.mark_modified(self.buffer.document.version)
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
