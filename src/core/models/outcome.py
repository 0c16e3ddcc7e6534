"""
Hook outcomes — the terminal value of one pre-commit run.

Exactly one primary outcome per run:

    Success         every script passed (or there was nothing to run)
    Skipped         the hook bowed out before running anything
    ScriptFailure   a configured script exited non-zero
    SetupFailure    the stash step itself errored

Cleanup failures are not a primary outcome. They are appended to
whichever outcome the run produced and never change its exit code.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field


class CleanupFailure(BaseModel):
    """A restore step (reset, clean, unstash) that errored."""

    step: Literal["reset", "clean", "unstash"]
    cause: str


class _OutcomeBase(BaseModel):
    cleanup_failures: list[CleanupFailure] = Field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Success(_OutcomeBase):
    kind: Literal["success"] = "success"


class Skipped(_OutcomeBase):
    """Graceful skip: missing binary, no changes, nothing configured, ..."""

    kind: Literal["skipped"] = "skipped"
    reason: Literal[
        "binary",
        "status",
        "root",
        "config",
        "empty",
        "run",
    ]
    detail: str = ""


class ScriptFailure(_OutcomeBase):
    kind: Literal["script_failure"] = "script_failure"
    script: str
    script_exit_code: int
    cause: str | None = None

    @property
    def exit_code(self) -> int:
        """Code the hook exits with; never 0, so the commit is rejected.

        A script killed by signal N reports -N; shells report that as 128 + N.
        """
        if self.script_exit_code < 0:
            return 128 - self.script_exit_code
        return self.script_exit_code or 1


class SetupFailure(_OutcomeBase):
    """Preparing the tree failed; the commit is not blocked."""

    kind: Literal["setup_failure"] = "setup_failure"
    cause: str


HookOutcome = Union[Success, Skipped, ScriptFailure, SetupFailure]
