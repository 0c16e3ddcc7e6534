"""
Process executor — run one external command.

This is the most fundamental building block: every git call and every
hook script goes through ``ProcessExecutor.execute``.

Stream modes:
    inherit   child shares our stdin/stdout/stderr. Tools that check
              isatty() (colors, progress bars) see the real terminal.
    capture   stdout and stderr captured as text, stdin closed.
    quiet     stdout captured, stderr discarded, stdin closed.

Never pipe a script's output through a buffer in ``inherit``'s place:
the child would then see a pipe instead of a terminal and drop its
formatting.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path
from typing import Any, Sequence

from src.adapters.base import ProcessSpawnError
from src.core.models.process import ProcessResult, StreamMode

logger = logging.getLogger(__name__)


class ProcessExecutor:
    """Run commands synchronously and report their exit status.

    ``execute`` returns a ProcessResult for every exit code. It raises
    ProcessSpawnError only when the binary cannot be started.
    """

    def execute(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: Path | str | None = None,
        stream: StreamMode = "capture",
    ) -> ProcessResult:
        argv = [command, *args]
        logger.debug("Executing: %s (cwd=%s, stream=%s)", " ".join(argv), cwd, stream)
        start = time.monotonic()

        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                text=True,
                check=False,
                **_stream_kwargs(stream),
            )
        except OSError as e:
            # FileNotFoundError, PermissionError, NotADirectoryError (bad cwd), ...
            raise ProcessSpawnError(command, e) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug(
            "Exited %d after %dms: %s", completed.returncode, elapsed_ms, " ".join(argv)
        )

        return ProcessResult(
            command=command,
            args=list(args),
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration_ms=elapsed_ms,
        )


def _stream_kwargs(stream: StreamMode) -> dict[str, Any]:
    """Map a stream mode onto subprocess.run keyword arguments."""
    if stream == "inherit":
        # None = inherit the parent's file descriptors (keeps the TTY)
        return {"stdin": None, "stdout": None, "stderr": None}
    if stream == "quiet":
        return {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.PIPE,
            "stderr": subprocess.DEVNULL,
        }
    if stream == "capture":
        return {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.PIPE,
            "stderr": subprocess.PIPE,
        }
    raise ValueError(f"Unknown stream mode: {stream!r}")
