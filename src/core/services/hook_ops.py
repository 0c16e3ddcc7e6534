"""
Hook operations — channel-independent service for one pre-commit run.

Everything the hook does before and around the orchestrator:

    find git → repo root + status → load config → find script runner
      → "no changes?" → commit template → "anything to run?" → orchestrate

Every pre-run problem is a graceful skip (exit 0): a broken tool setup
must never block a commit. Only a failing script rejects one.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from src.adapters.base import ProcessSpawnError
from src.adapters.scripts.runner import ScriptRunnerAdapter
from src.adapters.shell.command import ProcessExecutor
from src.adapters.vcs.git import GitAdapter, GitCommandError
from src.core.config.loader import ConfigError, load_hook_config
from src.core.engine.orchestrator import HookOrchestrator
from src.core.engine.pipeline import ScriptPipeline
from src.core.engine.stash import StashController
from src.core.models.config import HookConfig
from src.core.models.outcome import HookOutcome, Skipped

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


@dataclass
class HookRun:
    """What the reporter needs: the outcome, and the config if we got that far."""

    outcome: HookOutcome
    config: HookConfig | None = None
    root: Path | None = None


def augment_path() -> None:
    """Append interpreter/launcher directories to PATH, once.

    GUI git clients often start hooks with a minimal PATH that lacks
    the directory npm was installed into.
    """
    extra = []
    launcher = os.environ.get("_")
    if launcher:
        extra.append(os.path.dirname(launcher))
    extra.append(os.path.dirname(sys.executable))

    current = os.environ.get("PATH", "").split(os.pathsep)
    additions = [d for d in extra if d and d not in current]
    if additions:
        os.environ["PATH"] = os.pathsep.join([*current, *additions])
        logger.debug("Augmented PATH with %s", additions)


def find_binary(name: str, which: Which = shutil.which) -> str | None:
    """Locate a binary, retrying once with an augmented PATH."""
    found = which(name)
    if found:
        return found
    augment_path()
    return which(name)


def run_hook(
    cwd: Path | None = None,
    *,
    executor: ProcessExecutor | None = None,
    ignore_status: bool = False,
    which: Which = shutil.which,
) -> HookRun:
    """Run the pre-commit hook for the repository containing ``cwd``.

    Args:
        cwd: Any directory inside the repository (default: cwd).
        executor: Process executor (tests pass a MockExecutor).
        ignore_status: Run even if ``git status`` reports no changes.
        which: Binary lookup function.

    Returns:
        HookRun with the outcome and, when loaded, the configuration.
    """
    executor = executor or ProcessExecutor()
    cwd = cwd or Path.cwd()

    git_bin = find_binary("git", which)
    if not git_bin:
        return HookRun(Skipped(reason="binary", detail="git"))

    probe = GitAdapter(executor, cwd, binary=git_bin)
    try:
        status = probe.status_porcelain()
    except (GitCommandError, ProcessSpawnError) as e:
        logger.debug("git status failed: %s", e)
        return HookRun(Skipped(reason="status", detail=str(e)))
    try:
        root = Path(probe.show_toplevel())
    except (GitCommandError, ProcessSpawnError) as e:
        logger.debug("git rev-parse --show-toplevel failed: %s", e)
        return HookRun(Skipped(reason="root", detail=str(e)))

    try:
        config = load_hook_config(root)
    except ConfigError as e:
        return HookRun(Skipped(reason="config", detail=str(e)), root=root)

    runner_bin = find_binary(config.runner, which)
    if not runner_bin:
        return HookRun(Skipped(reason="binary", detail=config.runner), config, root)

    if not status and not ignore_status:
        return HookRun(Skipped(reason="empty"), config, root)

    git = GitAdapter(executor, root, binary=git_bin)

    # Applied before the "nothing to run" check so it takes effect regardless
    if config.template:
        try:
            git.set_commit_template(config.template)
        except (GitCommandError, ProcessSpawnError) as e:
            logger.warning("Could not set commit.template: %s", e)

    if not config.scripts:
        return HookRun(Skipped(reason="run"), config, root)

    runner = ScriptRunnerAdapter(executor, root, binary=runner_bin, runner=config.runner)
    orchestrator = build_orchestrator(config, git, runner)
    return HookRun(orchestrator.run(), config, root)


def build_orchestrator(
    config: HookConfig,
    git: GitAdapter,
    runner: ScriptRunnerAdapter,
) -> HookOrchestrator:
    """Wire the stash controller and pipeline for one run."""
    return HookOrchestrator(
        config=config,
        stash=StashController(git, config),
        pipeline=ScriptPipeline(runner),
    )
