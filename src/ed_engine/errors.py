"""Error taxonomy shared by the buffer, the grammar, and the dispatcher."""

from __future__ import annotations

from typing import Optional


class EdError(RuntimeError):
    """Base class for every recoverable editor failure.

    The message is the short ed-style text surfaced by the ``h`` command.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RangeError(EdError):
    """Raised when a buffer operation receives indices outside the buffer."""

    def __init__(
        self,
        message: str = "Invalid address",
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


class AddressOutOfRange(RangeError):
    """An address expression resolved outside ``[0, $]`` or ``[1, $]``."""


class MalformedAddress(EdError):
    """The address grammar could not consume the input up to the command."""

    def __init__(self, message: str = "Invalid address", *, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class EmptyBufferError(EdError):
    def __init__(self, message: str = "Invalid address") -> None:
        super().__init__(message)


class UnknownCommand(EdError):
    def __init__(self, letter: str) -> None:
        super().__init__("Unknown command")
        self.letter = letter


class MissingArgument(EdError):
    pass


class UnexpectedArgument(EdError):
    def __init__(self, argument: str) -> None:
        super().__init__("Unexpected command suffix")
        self.argument = argument


class InvalidDestination(EdError):
    def __init__(self, dest: int) -> None:
        super().__init__("Invalid destination")
        self.dest = dest


class IoError(EdError):
    """Wraps an ``OSError`` raised while reading or writing ``path``."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedPattern(EdError):
    pass


class NoMatch(EdError):
    def __init__(self, message: str = "No match") -> None:
        super().__init__(message)


__all__ = [
    "EdError",
    "RangeError",
    "AddressOutOfRange",
    "MalformedAddress",
    "EmptyBufferError",
    "UnknownCommand",
    "MissingArgument",
    "UnexpectedArgument",
    "InvalidDestination",
    "IoError",
    "MalformedPattern",
    "NoMatch",
]
