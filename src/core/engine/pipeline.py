"""
Script pipeline — run the configured scripts in order, fail fast.

Scripts run one at a time: a later script may depend on files an
earlier one generated, and interleaved output would be unreadable.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.adapters.base import ProcessSpawnError
from src.adapters.scripts.runner import ScriptRunnerAdapter

logger = logging.getLogger(__name__)


class ScriptFailedError(Exception):
    """A script exited non-zero (or its runner could not start)."""

    def __init__(self, script: str, exit_code: int, cause: str | None = None):
        self.script = script
        self.exit_code = exit_code
        self.cause = cause
        msg = f"Script '{script}' failed with exit code {exit_code}"
        if cause:
            msg += f" ({cause})"
        super().__init__(msg)


class ScriptPipeline:
    """Sequential, fail-fast script execution."""

    def __init__(self, runner: ScriptRunnerAdapter):
        self._runner = runner

    def run_all(self, scripts: Sequence[str]) -> None:
        """Run every script; raise ScriptFailedError at the first failure.

        Scripts after the failing one are never started.
        """
        for script in scripts:
            self.run_one(script)

    def run_one(self, script: str) -> None:
        logger.debug("Running script '%s'", script)
        try:
            result = self._runner.run_script(script)
        except ProcessSpawnError as e:
            logger.info("✗ %s → could not start %s", script, e.command)
            raise ScriptFailedError(script, 1, cause=str(e)) from e

        if not result.ok:
            logger.info("✗ %s → exit %d", script, result.exit_code)
            raise ScriptFailedError(script, result.exit_code)

        logger.info("✓ %s (%dms)", script, result.duration_ms)
