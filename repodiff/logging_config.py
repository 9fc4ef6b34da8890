"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging
import sys

TRACE = 5

_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def level_for(verbosity: int) -> int:
    return _LEVELS.get(max(verbosity, 0), TRACE)


def configure_logging(verbosity: int = 0) -> None:
    """Send records to stdout as ``[LEVEL] message``; more ``-v`` means more detail."""
    logging.addLevelName(TRACE, "TRACE")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level_for(verbosity))

    # keep per-request client chatter out of -vv output
    logging.getLogger("httpx").setLevel(max(logging.WARNING, root.level))
    logging.getLogger("httpcore").setLevel(max(logging.WARNING, root.level))
