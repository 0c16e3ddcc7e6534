"""
Mock executor — universal test double for process execution.

Used in tests to drive git and script adapters without spawning
anything. Returns exit code 0 with empty output by default; responses
can be configured per command, either as a single result or as a
sequence consumed one call at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from src.adapters.base import ProcessSpawnError
from src.adapters.shell.command import ProcessExecutor
from src.core.models.process import ProcessResult, StreamMode


@dataclass
class ExecutedCall:
    """One recorded ``execute`` call."""

    command: str
    args: list[str]
    cwd: str | None
    stream: StreamMode

    @property
    def argline(self) -> str:
        return " ".join(self.args)


@dataclass
class _Response:
    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    spawn_error: bool = False


class MockExecutor(ProcessExecutor):
    """Record-and-reply executor.

    Responses are keyed by a prefix of the argument line, e.g.
    ``"stash save"`` or ``"run lint"``. The longest matching key wins.
    """

    def __init__(self) -> None:
        self._responses: dict[str, list[_Response]] = {}
        self._call_log: list[ExecutedCall] = []
        self._unspawnable: set[str] = set()

    @property
    def call_log(self) -> list[ExecutedCall]:
        """All calls this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_matching(self, prefix: str) -> list[ExecutedCall]:
        """Calls whose argument line starts with ``prefix``."""
        return [c for c in self._call_log if c.argline.startswith(prefix)]

    def set_response(
        self,
        prefix: str,
        exit_code: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Always answer calls matching ``prefix`` with this result."""
        self._responses[prefix] = [_Response(exit_code, stdout, stderr)]

    def set_sequence(self, prefix: str, stdouts: Sequence[str | None]) -> None:
        """Answer successive matching calls with successive outputs.

        ``None`` in the sequence means "exit 1, no output" (an object
        that does not exist, for rev-parse). The last entry repeats.
        """
        self._responses[prefix] = [
            _Response(exit_code=1) if out is None else _Response(stdout=out)
            for out in stdouts
        ]

    def set_failure(self, prefix: str, exit_code: int = 1, stderr: str = "mock failure") -> None:
        """Configure matching calls to exit non-zero."""
        self.set_response(prefix, exit_code=exit_code, stderr=stderr)

    def set_unspawnable(self, command: str) -> None:
        """Make every call to ``command`` fail to spawn."""
        self._unspawnable.add(command)

    def execute(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: Path | str | None = None,
        stream: StreamMode = "capture",
    ) -> ProcessResult:
        call = ExecutedCall(
            command=command,
            args=list(args),
            cwd=str(cwd) if cwd is not None else None,
            stream=stream,
        )
        self._call_log.append(call)

        if command in self._unspawnable:
            raise ProcessSpawnError(command, FileNotFoundError(2, "No such file", command))

        response = self._next_response(call.argline)
        return ProcessResult(
            command=command,
            args=list(args),
            exit_code=response.exit_code,
            stdout=response.stdout,
            stderr=response.stderr,
        )

    def reset(self) -> None:
        """Clear call log and configured responses."""
        self._call_log.clear()
        self._responses.clear()
        self._unspawnable.clear()

    def _next_response(self, argline: str) -> _Response:
        matches = [key for key in self._responses if argline.startswith(key)]
        if not matches:
            return _Response()
        queue = self._responses[max(matches, key=len)]
        return queue.pop(0) if len(queue) > 1 else queue[0]
