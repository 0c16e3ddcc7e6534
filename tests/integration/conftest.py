"""
Integration fixtures — real git repositories in tmp_path.

Every test in this directory is auto-marked ``integration`` and is
skipped when git is not installed.

Run ONLY integration tests:
    pytest tests/integration/ -m integration

Run ONLY unit tests:
    pytest -m "not integration"
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from src.adapters.shell.command import ProcessExecutor
from src.adapters.vcs.git import GitAdapter
from src.core.engine.orchestrator import HookOrchestrator
from src.core.models.config import HookConfig
from src.core.services.hook_ops import build_orchestrator
from tests.integration.git_repo import IGNORED, TRACKED, ShellScriptRunner, git_cmd


def pytest_collection_modifyitems(items):
    """Auto-apply the 'integration' marker to every test in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
            if shutil.which("git") is None:
                item.add_marker(pytest.mark.skip(reason="git is not installed"))


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository with one empty tracked file and an ignore rule."""
    path = tmp_path / "repo"
    path.mkdir()
    git_cmd(path, "init", "-q")
    git_cmd(path, "config", "user.name", "Test User")
    git_cmd(path, "config", "user.email", "test@example.com")
    git_cmd(path, "config", "commit.gpgsign", "false")
    (path / ".gitignore").write_text(f"{IGNORED}\n")
    (path / TRACKED).write_text("")
    git_cmd(path, "add", ".")
    git_cmd(path, "commit", "-q", "-m", "Initial Commit")
    return path


@pytest.fixture
def make_hook(repo: Path):
    """Build an orchestrator for ``repo`` from HookConfig keyword arguments.

    ``extra_scripts`` maps additional script names to shell snippets.
    """

    def _make(extra_scripts: dict[str, str] | None = None, **config) -> HookOrchestrator:
        cfg = HookConfig(**config)
        executor = ProcessExecutor()
        git = GitAdapter(executor, repo)
        runner = ShellScriptRunner(executor, repo, scripts=extra_scripts)
        return build_orchestrator(cfg, git, runner)

    return _make
