"""
Hook orchestrator — setup → scripts → cleanup, one run per commit.

State machine:

    IDLE ──(no scripts)──────────────────────────────▶ DONE(Success)
    IDLE ─▶ SETTING_UP ──(stash error)───────────────▶ DONE(SetupFailure)
            SETTING_UP ─▶ RUNNING ─▶ CLEANING_UP ───▶ DONE(script result)

Cleanup runs whenever setup succeeded, whether the scripts passed,
failed, or raised something unexpected. The outcome reflects the
scripts; cleanup failures are attached to it, never substituted for it.
"""

from __future__ import annotations

import enum
import logging
from contextlib import ExitStack

from src.adapters.base import ProcessSpawnError
from src.adapters.vcs.git import GitCommandError
from src.core.engine.pipeline import ScriptFailedError, ScriptPipeline
from src.core.engine.stash import StashController
from src.core.models.config import HookConfig
from src.core.models.outcome import HookOutcome, ScriptFailure, SetupFailure, Success

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    SETTING_UP = "setting_up"
    RUNNING = "running"
    CLEANING_UP = "cleaning_up"
    DONE = "done"


class HookOrchestrator:
    """Compose the stash controller and the script pipeline.

    One instance per hook invocation. Not reentrant: the working tree
    is a single shared resource and this object is its only writer
    while ``run`` is in progress.
    """

    def __init__(
        self,
        config: HookConfig,
        stash: StashController,
        pipeline: ScriptPipeline,
    ):
        self._config = config
        self._stash = stash
        self._pipeline = pipeline
        self.phase = Phase.IDLE
        self.outcome: HookOutcome | None = None

    def run(self) -> HookOutcome:
        """Execute the hook and return its outcome.

        GitCommandError / ProcessSpawnError during setup and
        ScriptFailedError from the pipeline become tagged outcomes.
        Anything else is a bug and propagates after cleanup has run.
        """
        if self.phase not in (Phase.IDLE, Phase.DONE):
            raise RuntimeError(f"Hook run already in progress (phase={self.phase.value})")

        self.phase = Phase.IDLE
        self.outcome = None
        try:
            return self._run()
        finally:
            # An unexpected error still ends the run
            self.phase = Phase.DONE

    def _run(self) -> HookOutcome:
        if not self._config.scripts:
            logger.debug("No scripts configured; nothing to isolate")
            return self._finish(Success())

        self.phase = Phase.SETTING_UP
        with ExitStack() as scope:
            try:
                isolation = scope.enter_context(self._stash.isolated())
            except (GitCommandError, ProcessSpawnError) as e:
                logger.info("Setup failed: %s", e)
                return self._finish(SetupFailure(cause=str(e)))

            self.phase = Phase.RUNNING
            try:
                self._pipeline.run_all(self._config.scripts)
            except ScriptFailedError as e:
                outcome: HookOutcome = ScriptFailure(
                    script=e.script,
                    script_exit_code=e.exit_code,
                    cause=e.cause,
                )
            else:
                outcome = Success()
            self.phase = Phase.CLEANING_UP

        outcome.cleanup_failures = list(isolation.cleanup_failures)
        return self._finish(outcome)

    def _finish(self, outcome: HookOutcome) -> HookOutcome:
        self.phase = Phase.DONE
        self.outcome = outcome
        logger.debug(
            "Hook finished: %s (exit %d, %d cleanup failure(s))",
            outcome.kind,
            outcome.exit_code,
            len(outcome.cleanup_failures),
        )
        return outcome
