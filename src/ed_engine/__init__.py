"""UI-agnostic ed-style line editing engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "commands",
    "errors",
    "modes",
    "runtime",
    "session",
]

__version__ = "0.1.0"
