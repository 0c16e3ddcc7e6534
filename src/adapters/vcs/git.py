"""
Git adapter — the version-control operations the hook needs.

Every method maps to exactly one git invocation. Commands whose output
the user should see verbatim (stash, pop, clean, reset) run with
inherited streams; commands we parse run captured.
"""

from __future__ import annotations

import logging
from typing import Sequence

from src.adapters.base import Adapter
from src.core.models.process import ProcessResult, StreamMode

logger = logging.getLogger(__name__)

# Label on our stash entries, so a human can tell them apart in `git stash list`
STASH_LABEL = "pre-commit stash"


class GitCommandError(Exception):
    """git ran but exited non-zero."""

    def __init__(self, args: Sequence[str], exit_code: int, stderr: str = ""):
        self.git_args = list(args)
        self.exit_code = exit_code
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(
            f"git {' '.join(self.git_args)} exited with code {exit_code}{detail}"
        )


class GitAdapter(Adapter):
    """Git operations bound to one repository directory."""

    @property
    def name(self) -> str:
        return "git"

    # ── Repository discovery ────────────────────────────────────

    def show_toplevel(self) -> str:
        """Absolute path of the working tree root."""
        return self._git(["rev-parse", "--show-toplevel"]).stdout.strip()

    def git_dir(self) -> str:
        """Path of the .git directory (may be relative to cwd)."""
        return self._git(["rev-parse", "--git-dir"]).stdout.strip()

    def status_porcelain(self) -> str:
        return self._git(["status", "--porcelain"]).stdout.strip()

    def rev_parse_verify(self, name: str) -> str | None:
        """Resolve an object name to its hash, or None if it does not exist.

        ``rev-parse --verify`` exits 1 for a missing name; any other
        non-zero exit is a real error and is raised.
        """
        args = ["rev-parse", "--quiet", "--verify", name]
        result = self._run(args, stream="quiet")
        if result.exit_code == 1:
            return None
        if not result.ok:
            raise GitCommandError(args, result.exit_code)
        return result.stdout.strip() or None

    # ── Working tree manipulation ───────────────────────────────

    def stash_save(self, include_all: bool = False, include_untracked: bool = False) -> None:
        """Stash unstaged changes, keeping the index in place."""
        args = ["stash", "save", "--quiet", "--keep-index"]
        if include_all:
            args.append("--all")
        if include_untracked:
            args.append("--include-untracked")
        args.append(STASH_LABEL)
        self._git(args, stream="inherit")

    def stash_pop(self) -> None:
        # Output is never suppressed: a failed pop must reach the user
        self._git(["stash", "pop", "--quiet"], stream="inherit")

    def clean(self, include_ignored: bool = False) -> None:
        args = ["clean", "-d", "--force", "--quiet"]
        if include_ignored:
            args.append("-x")
        self._git(args, stream="inherit")

    def reset_hard(self) -> None:
        self._git(["reset", "--hard", "--quiet"], stream="inherit")

    def set_commit_template(self, template: str) -> None:
        self._git(["config", "commit.template", template])

    # ── Helpers ─────────────────────────────────────────────────

    def _run(self, args: list[str], stream: StreamMode = "capture") -> ProcessResult:
        return self.executor.execute(self.binary, args, cwd=self.cwd, stream=stream)

    def _git(self, args: list[str], stream: StreamMode = "capture") -> ProcessResult:
        """Run a git command; raise GitCommandError on non-zero exit."""
        result = self._run(args, stream=stream)
        if not result.ok:
            raise GitCommandError(args, result.exit_code, result.stderr.strip())
        return result
