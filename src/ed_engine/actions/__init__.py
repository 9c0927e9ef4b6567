"""Command handlers dispatched from command mode."""

from .command import execute_command
from .substitute import Substitution, parse_substitution, substitute_lines

__all__ = [
    "execute_command",
    "Substitution",
    "parse_substitution",
    "substitute_lines",
]
