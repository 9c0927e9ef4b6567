"""Command-line entry point for the line editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ed_engine.runtime import telemetry
from ed_engine.runtime.io import DiskFileStore, LineSource, StdinLineSource
from ed_engine.runtime.settings import EngineSettings
from ed_engine.session import Session, Writer, create_default_manager, load_initial_file


def _parse_args(
    argv: Optional[Sequence[str]], settings: EngineSettings
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ed-engine", description="Line-oriented text editor in the style of ed."
    )
    parser.add_argument("file", nargs="?", help="file to edit")
    parser.add_argument(
        "-p",
        "--prompt",
        default=settings.prompt,
        help="use PROMPT as the command-mode prompt (default: $ED_ENGINE_PROMPT)",
    )
    parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        help="suppress byte counts printed by e, r, and w",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telemetry preset to use instead of the environment defaults",
    )
    return parser.parse_args(argv)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    source: Optional[LineSource] = None,
    write: Optional[Writer] = None,
) -> int:
    settings = EngineSettings.from_env()
    args = _parse_args(argv, settings)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset, settings=settings)

    manager = create_default_manager(
        store=DiskFileStore(), prompt=args.prompt, silent=args.silent
    )
    session = Session(manager, source or StdinLineSource(), write=write)
    if args.file:
        size = load_initial_file(manager, args.file)
        if size and not args.silent:
            session.emit((str(size),))
    return session.run()


if __name__ == "__main__":  # pragma: no cover - manual entry
    raise SystemExit(main())
