"""Line sources and file stores the session talks to."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Sequence

from ed_engine.errors import IoError

from . import telemetry

ENCODING = "utf-8"


class LineSource(Protocol):
    """Produces raw input lines without their trailing newline."""

    def next_line(self, prompt: str = "") -> Optional[str]:
        """Return the next line, or ``None`` at end-of-input."""
        ...


class FileStore(Protocol):
    """Reads and writes whole files as ordered sequences of lines."""

    def read(self, path: str) -> List[str]:
        ...

    def write(self, path: str, lines: Sequence[str]) -> int:
        """Persist ``lines`` and return the number of bytes written."""
        ...


def encoded_size(lines: Iterable[str]) -> int:
    return sum(len(line.encode(ENCODING)) + 1 for line in lines)


class StdinLineSource:
    """Interactive source backed by ``input()``."""

    def next_line(self, prompt: str = "") -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None


class IterableLineSource:
    """Feeds a prepared sequence of lines, e.g. a script or a test fixture."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self.prompts: List[str] = []

    def next_line(self, prompt: str = "") -> Optional[str]:
        self.prompts.append(prompt)
        line = next(self._lines, None)
        if line is None:
            return None
        return line.rstrip("\n")


class DiskFileStore:
    """UTF-8 text files on the local filesystem."""

    def __init__(self, *, encoding: str = ENCODING) -> None:
        self.encoding = encoding

    def read(self, path: str) -> List[str]:
        try:
            with open(path, "r", encoding=self.encoding, newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise IoError(path, _reason(exc)) from exc
        lines = _split_lines(text)
        telemetry.record_event(
            "io.read", level="debug", data={"path": path, "lines": len(lines)}
        )
        return lines

    def write(self, path: str, lines: Sequence[str]) -> int:
        payload = "".join(f"{line}\n" for line in lines).encode(self.encoding)
        try:
            with open(path, "wb") as handle:
                handle.write(payload)
        except OSError as exc:
            raise IoError(path, _reason(exc)) from exc
        telemetry.record_event(
            "io.write", level="debug", data={"path": path, "bytes": len(payload)}
        )
        return len(payload)


class MemoryFileStore:
    """Dict-backed store; handy for embedding hosts and tests."""

    def __init__(self, files: Optional[Dict[str, Sequence[str]]] = None) -> None:
        self.files: Dict[str, List[str]] = {
            path: list(lines) for path, lines in (files or {}).items()
        }

    def read(self, path: str) -> List[str]:
        try:
            return list(self.files[path])
        except KeyError as exc:
            raise IoError(path, "No such file or directory") from exc

    def write(self, path: str, lines: Sequence[str]) -> int:
        self.files[path] = list(lines)
        return encoded_size(lines)


def _split_lines(text: str) -> List[str]:
    """Split on ``\\n`` (or ``\\r\\n``) only; other separators stay in the line."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _reason(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


__all__ = [
    "LineSource",
    "FileStore",
    "StdinLineSource",
    "IterableLineSource",
    "DiskFileStore",
    "MemoryFileStore",
    "encoded_size",
]
