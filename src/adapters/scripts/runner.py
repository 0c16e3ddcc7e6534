"""
Script runner adapter — run one package script by name.

Scripts are defined in the project manifest (``package.json``
``scripts``) and executed through the package manager:

    <runner> run <script> --silent

The runner defaults to npm; yarn and pnpm accept the same form.
"""

from __future__ import annotations

from pathlib import Path

from src.adapters.base import Adapter
from src.adapters.shell.command import ProcessExecutor
from src.core.models.config import DEFAULT_RUNNER
from src.core.models.process import ProcessResult


class ScriptRunnerAdapter(Adapter):
    """Run package scripts with the user's terminal attached."""

    def __init__(
        self,
        executor: ProcessExecutor,
        cwd: Path,
        binary: str | None = None,
        runner: str = DEFAULT_RUNNER,
    ):
        super().__init__(executor, cwd, binary)
        self._runner = runner

    @property
    def name(self) -> str:
        return self._runner

    def command_for(self, script: str) -> tuple[str, list[str]]:
        """The binary and arguments used to run ``script``."""
        return self.binary, ["run", script, "--silent"]

    def run_script(self, script: str) -> ProcessResult:
        """Run a script and return its result for any exit code.

        Raises ProcessSpawnError if the runner itself cannot start.
        """
        command, args = self.command_for(script)
        return self.executor.execute(command, args, cwd=self.cwd, stream="inherit")
