"""
ProcessResult model — the executor's I/O contract.

The executor runs a command and returns a ProcessResult for every
exit status, zero or not. Only a failure to spawn the binary at all
is raised as an exception.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

StreamMode = Literal["inherit", "capture", "quiet"]


class ProcessResult(BaseModel):
    """Outcome of one child process.

    In ``inherit`` mode the child writes straight to the parent's
    terminal, so ``stdout`` and ``stderr`` are empty here.
    """

    command: str
    args: list[str] = Field(default_factory=list)
    exit_code: int = 0

    stdout: str = ""
    stderr: str = ""

    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the process exited with status 0."""
        return self.exit_code == 0

    @property
    def command_line(self) -> str:
        """Human-readable command line, for logs and error messages."""
        return " ".join([self.command, *self.args])
