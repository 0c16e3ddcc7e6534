"""
Stash controller — isolate the staged state, then restore the tree.

While scripts run, the working tree must show only what is staged
for commit. Setup stashes everything else (``--keep-index``); cleanup
undoes script side effects and pops the stash.

Setup:
    before = hash(refs/stash) → stash save → after = hash(refs/stash)
    stashed = before != after

``git stash save`` on a tree with nothing to stash is a silent no-op,
so the hash comparison is the only reliable way to know whether a pop
is ours. Popping unconditionally would pop an unrelated, older entry.

Cleanup (each step gated, every step attempted):
    reset (if configured) → clean (if configured) → unstash (if stashed)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from src.adapters.base import ProcessSpawnError
from src.adapters.vcs.git import GitAdapter, GitCommandError
from src.core.models.config import HookConfig
from src.core.models.outcome import CleanupFailure

logger = logging.getLogger(__name__)

STASH_REF = "refs/stash"


@dataclass
class StashState:
    """Per-run record of what setup did. Never persisted."""

    stashed: bool = False
    ref_before: str | None = None
    ref_after: str | None = None


@dataclass
class IsolationHandle:
    """Yielded by ``StashController.isolated``.

    ``cleanup_failures`` is filled in when the ``with`` block exits.
    """

    state: StashState
    cleanup_failures: list[CleanupFailure] = field(default_factory=list)


class StashController:
    """Stash, clean, reset, unstash — each individually gated by config."""

    def __init__(self, git: GitAdapter, config: HookConfig):
        self._git = git
        self._config = config

    @property
    def enabled(self) -> bool:
        return self._config.stash_enabled

    # ── Primitive operations ────────────────────────────────────

    def get_object_hash(self, name: str) -> str | None:
        return self._git.rev_parse_verify(name)

    def stash(self) -> None:
        self._git.stash_save(
            include_all=self._config.include_all,
            include_untracked=self._config.include_untracked,
        )

    def unstash(self) -> None:
        self._git.stash_pop()

    def clean(self) -> None:
        self._git.clean(include_ignored=self._config.include_all)

    def reset(self) -> None:
        self._git.reset_hard()

    # ── Protocol ────────────────────────────────────────────────

    def setup(self) -> StashState:
        """Stash non-staged changes if configured.

        Raises GitCommandError / ProcessSpawnError if any step fails;
        in that case no stash is known to exist and cleanup must not run.
        """
        if not self.enabled:
            return StashState()

        before = self.get_object_hash(STASH_REF)
        self.stash()
        after = self.get_object_hash(STASH_REF)

        state = StashState(stashed=before != after, ref_before=before, ref_after=after)
        if state.stashed:
            logger.info("Stashed working tree changes as %s", after)
        else:
            logger.info("Nothing to stash; working tree already matches the index")
        return state

    def cleanup(self, state: StashState) -> list[CleanupFailure]:
        """Restore the working tree. Never raises for git/process errors.

        Returns one CleanupFailure per failed step, in execution order.
        """
        if not self.enabled:
            return []

        steps = []
        if self._config.reset_after:
            steps.append(("reset", self.reset))
        if self._config.clean_after:
            steps.append(("clean", self.clean))
        if state.stashed:
            steps.append(("unstash", self.unstash))

        failures: list[CleanupFailure] = []
        for step, operation in steps:
            try:
                operation()
            except (GitCommandError, ProcessSpawnError) as e:
                logger.info("Cleanup step '%s' failed: %s", step, e)
                failures.append(CleanupFailure(step=step, cause=str(e)))
            else:
                logger.debug("Cleanup step '%s' done", step)
        return failures

    @contextmanager
    def isolated(self) -> Iterator[IsolationHandle]:
        """Run the ``with`` body against the isolated tree.

        Setup errors propagate before the body starts and skip cleanup.
        Once setup succeeds, cleanup runs on every exit path, including
        an exception raised by the body.
        """
        handle = IsolationHandle(state=self.setup())
        try:
            yield handle
        finally:
            handle.cleanup_failures = self.cleanup(handle.state)
