#!/usr/bin/env python3
"""php_reflection/__main__.py: replay a discovery-event file and summarise the model.

Usage
-----
    python -m php_reflection events.sexp
    python -m php_reflection events.sexp --internal-types types.sexp -vv

Prints one line per package: name, number of types, number of functions.

Exit codes
----------
    0   Success.
    1   The event stream could not be replayed.
    2   Infrastructure failure (missing file, unreadable table).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from php_reflection import __version__
from php_reflection.builder import DefaultBuilder
from php_reflection.config import BuilderConfig
from php_reflection.errors import EventReplayError, InternalTypesError
from php_reflection.events import replay_file

_log = logging.getLogger("php_reflection")

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


def configure_logging(verbosity: int) -> None:
    """Set up the ``php_reflection`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("php_reflection")
    root.setLevel(level)
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="php-reflection",
        description="Replay discovery events into a reflection model and list its packages.",
    )
    parser.add_argument("events", metavar="EVENTS_FILE", help="S-expression event stream.")
    parser.add_argument(
        "--internal-types",
        metavar="FILE",
        default=None,
        help="Alternate S-expression table of built-in types.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeatable).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def summarise(builder: DefaultBuilder, out: TextIO) -> None:
    for package in builder.get_packages():
        out.write(
            f"{package.name}\ttypes={len(package.types)}\tfunctions={len(package.functions)}\n"
        )


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    """Run the CLI.  Returns the exit code."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)
    out = out or sys.stdout

    events = Path(args.events).expanduser()
    if not events.exists():
        _log.error("events file not found: %s", events)
        return EXIT_INFRA

    config = BuilderConfig(
        internal_types_file=Path(args.internal_types) if args.internal_types else None,
    )
    try:
        builder = DefaultBuilder(config)
        replay_file(events, builder)
    except InternalTypesError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA
    except EventReplayError as exc:
        _log.error("%s", exc)
        return EXIT_ERROR

    summarise(builder, out)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
