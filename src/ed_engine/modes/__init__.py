"""Mode manager and the command/input/terminated state machine."""

from .base_mode import ModeBus, ModeContext, ModeResult, Mode, PendingInsert
from .command_mode import CommandMode
from .input_mode import InputMode
from .mode_manager import ERROR_MARKER, ModeManager, TerminatedMode

__all__ = [
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "PendingInsert",
    "CommandMode",
    "InputMode",
    "TerminatedMode",
    "ModeManager",
    "ERROR_MARKER",
]
