"""
Logging setup for the hook process.

The hook shares its terminal with the scripts it runs: they inherit
stdout and stderr, so a diagnostic line and a line of eslint output
land in the same stream. Every console line is therefore tagged with
``pre-commit [LEVEL]``, continuation lines of multi-line messages
included, and written to stderr only.

GUI git clients usually swallow hook stderr. ``PRECOMMIT_LOG_FILE``
names a file that receives the full DEBUG trace of every run,
whatever the console level is.

Console level precedence:
    CLI flag  >  PRECOMMIT_LOG_LEVEL  >  WARNING
"""

from __future__ import annotations

import logging
import sys

CONSOLE_TAG = "pre-commit"

_FILE_FORMAT = "%(asctime)s %(process)d %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class TaggedFormatter(logging.Formatter):
    """Prefix every line of a record, so it never reads as script output."""

    def __init__(self, show_origin: bool = False):
        super().__init__("%(message)s")
        self.show_origin = show_origin

    def format(self, record: logging.LogRecord) -> str:
        tag = f"{CONSOLE_TAG} [{record.levelname}]"
        if self.show_origin:
            tag += f" {record.name}:{record.lineno}"
        body = super().format(record)
        return "\n".join(f"{tag} {line}" for line in body.splitlines() or [""])


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure the root logger once, at CLI startup.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Optional path that receives every record at DEBUG.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(TaggedFormatter(show_origin=console_level <= logging.DEBUG))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    if log_file:
        # Appended, so consecutive commits build one trace
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)
        root.setLevel(logging.DEBUG)

    # A broken log sink must never fail a commit
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
