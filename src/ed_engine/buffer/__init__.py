"""Line buffer model: storage, position state, and validation."""

from .buffer import Buffer, NumberedLine, Transaction
from .document import BufferDocument
from .state import BufferState
from .sync import BufferMirror
from .validation import ensure_insertion_point, ensure_range

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferState",
    "BufferMirror",
    "NumberedLine",
    "Transaction",
    "ensure_insertion_point",
    "ensure_range",
]
