"""
Adapter base — the protocol contract between engine and tools.

This defines the abstract interface that every tool adapter (git,
script runner) implements. The engine only talks to external tools
through adapters, and adapters only start processes through the
executor, never by calling subprocess directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.adapters.shell.command import ProcessExecutor


class ProcessSpawnError(Exception):
    """The binary could not be started at all (missing, not executable).

    A child that starts and exits non-zero is NOT a spawn error; the
    executor reports that through ``ProcessResult.exit_code``.
    """

    def __init__(self, command: str, cause: OSError):
        self.command = command
        self.cause = cause
        super().__init__(f"Failed to spawn {command!r}: {cause}")


class Adapter(ABC):
    """Abstract base class for tool adapters.

    To create a new adapter:
        1. Subclass Adapter
        2. Implement ``name``
        3. Build command lines and hand them to ``self.executor``
    """

    def __init__(
        self,
        executor: ProcessExecutor,
        cwd: Path,
        binary: str | None = None,
    ):
        self.executor = executor
        self.cwd = cwd
        self._binary = binary

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier and default binary name (e.g. 'git')."""

    @property
    def binary(self) -> str:
        """Binary path used for invocations (falls back to the bare name)."""
        return self._binary or self.name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} binary={self.binary!r}>"
