"""Environment-driven settings for the engine and its telemetry."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "ED_ENGINE_"

_TRUTHY = {"1", "true", "yes", "on"}


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(env, name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _lookup(env, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Snapshot of every ``ED_ENGINE_*`` knob.

    Console logging is off unless ``ED_ENGINE_LOG_CONSOLE`` is set: the
    editor speaks its protocol on stdout and log lines must not interleave
    with it.
    """

    logger_name: str = "ed_engine"
    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    log_console: bool = False
    colored: bool = True
    buffered: bool = False
    buffer_size: int = 2048
    prompt: str = ""

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        source = os.environ if env is None else env
        return cls(
            logger_name=_lookup(source, "LOGGER") or "ed_engine",
            log_level=(_lookup(source, "LOG_LEVEL") or "WARNING").upper(),
            log_file=_lookup(source, "LOG_FILE") or "",
            log_json=_flag(source, "LOG_JSON", False),
            log_console=_flag(source, "LOG_CONSOLE", False),
            colored=not _flag(source, "NO_COLOR", False),
            buffered=_flag(source, "LOG_BUFFERED", False),
            buffer_size=_int(source, "LOG_BUFFER_SIZE", 2048),
            prompt=_lookup(source, "PROMPT") or "",
        )


__all__ = ["ENV_PREFIX", "EngineSettings"]
