"""Base classes and shared state for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Literal, Optional

from ed_engine.buffer import Buffer
from ed_engine.runtime.io import FileStore, MemoryFileStore

InsertKind = Literal["append", "insert", "change"]


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_line``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    output: tuple[str, ...] = ()


@dataclass(slots=True)
class PendingInsert:
    """Text being collected in input mode and where it will land.

    ``after`` is the insertion point for ``a``/``i``; ``start``/``end`` is
    the range a ``c`` block replaces when it is committed.
    """

    kind: InsertKind
    after: int
    start: Optional[int] = None
    end: Optional[int] = None
    lines: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    bus: "ModeBus"
    store: FileStore = field(default_factory=MemoryFileStore)
    prompt: str = ""
    silent: bool = False
    last_error: Optional[str] = None
    pending: Optional[PendingInsert] = None
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def prompt(self) -> str:
        return ""

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_line(
        self, line: str
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_end_of_input(self) -> ModeResult:
        """Invoked by the manager when the line source is exhausted."""

        return ModeResult(consumed=False, switch_to="terminated", status="eof")
