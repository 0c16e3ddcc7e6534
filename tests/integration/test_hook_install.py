"""
Integration tests for installing and removing the hook file in a real repository.
"""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path

import pytest

from src.adapters.vcs.git import GitCommandError
from src.core.services.hook_install import (
    HOOK_MARKER,
    install_hook,
    is_managed,
    uninstall_hook,
)
from tests.integration.git_repo import git_cmd

PROJECT_ROOT = Path(__file__).resolve().parents[2]

FOREIGN_HOOK = "#!/bin/sh\necho husky\n"


def _hook(repo: Path) -> Path:
    return repo / ".git" / "hooks" / "pre-commit"


class TestInstall:
    def test_install_writes_executable_hook(self, repo: Path):
        info = install_hook(repo)

        hook = _hook(repo)
        assert info["ok"] is True
        assert Path(info["path"]).resolve() == hook.resolve()
        assert info["backup"] is None
        assert HOOK_MARKER in hook.read_text()
        assert os.access(hook, os.X_OK)

    def test_install_from_subdirectory(self, repo: Path):
        sub = repo / "pkg"
        sub.mkdir()
        info = install_hook(sub)
        assert Path(info["path"]).resolve() == _hook(repo).resolve()

    def test_install_backs_up_foreign_hook(self, repo: Path):
        _hook(repo).parent.mkdir(parents=True, exist_ok=True)
        _hook(repo).write_text(FOREIGN_HOOK)

        info = install_hook(repo)

        backup = Path(info["backup"])
        assert backup.name == "pre-commit.old"
        assert backup.read_text() == FOREIGN_HOOK
        assert is_managed(_hook(repo))

    def test_reinstall_keeps_original_backup(self, repo: Path):
        _hook(repo).parent.mkdir(parents=True, exist_ok=True)
        _hook(repo).write_text(FOREIGN_HOOK)
        install_hook(repo)

        info = install_hook(repo)

        assert info["backup"] is None
        assert (_hook(repo).parent / "pre-commit.old").read_text() == FOREIGN_HOOK

    def test_install_outside_repository(self, tmp_path: Path):
        outside = tmp_path / "plain"
        outside.mkdir()
        with pytest.raises(GitCommandError):
            install_hook(outside)


class TestUninstall:
    def test_nothing_installed(self, repo: Path):
        info = uninstall_hook(repo)
        assert info["ok"] is True
        assert info["removed"] is False

    def test_removes_our_hook(self, repo: Path):
        install_hook(repo)
        info = uninstall_hook(repo)
        assert info == {"ok": True, "removed": True, "restored": False, "reason": ""}
        assert not _hook(repo).exists()

    def test_restores_backup(self, repo: Path):
        _hook(repo).parent.mkdir(parents=True, exist_ok=True)
        _hook(repo).write_text(FOREIGN_HOOK)
        install_hook(repo)

        info = uninstall_hook(repo)

        assert info["restored"] is True
        assert _hook(repo).read_text() == FOREIGN_HOOK
        assert not (_hook(repo).parent / "pre-commit.old").exists()
        assert os.access(_hook(repo), os.X_OK)

    def test_refuses_foreign_hook(self, repo: Path):
        _hook(repo).parent.mkdir(parents=True, exist_ok=True)
        _hook(repo).write_text(FOREIGN_HOOK)

        info = uninstall_hook(repo)

        assert info["ok"] is False
        assert "not installed by precommit-runner" in info["reason"]
        assert _hook(repo).read_text() == FOREIGN_HOOK


class TestInstalledHookCommits:
    """Drive the installed hook through ``git commit``."""

    RUNNER = "fake-runner"

    @pytest.fixture
    def project(self, repo: Path, tmp_path: Path) -> dict:
        # A JavaScript project that also ships its own Python ``src`` package
        (repo / "src").mkdir()
        (repo / "src" / "__init__.py").write_text('"""user package"""\n')
        (repo / "package.json").write_text(
            json.dumps({"pre-commit": {"run": ["lint"], "runner": self.RUNNER}})
        )

        bindir = tmp_path / "bin"
        bindir.mkdir()
        runner = bindir / self.RUNNER
        # Invoked as `fake-runner run <script> --silent`
        runner.write_text('#!/bin/sh\n[ "$2" = lint ] && exit 0\nexit 3\n')
        runner.chmod(0o755)

        env = dict(os.environ)
        env["PATH"] = os.pathsep.join([str(bindir), env.get("PATH", "")])
        env["PYTHONPATH"] = str(PROJECT_ROOT)
        install_hook(repo)
        return {"repo": repo, "env": env}

    def _commit(self, project: dict) -> subprocess.CompletedProcess:
        repo = project["repo"]
        git_cmd(repo, "add", ".")
        return subprocess.run(
            ["git", "commit", "-q", "-m", "change"],
            cwd=repo,
            env=project["env"],
            capture_output=True,
            text=True,
            stdin=subprocess.DEVNULL,
        )

    def test_commit_with_own_src_package(self, project: dict):
        result = self._commit(project)
        assert result.returncode == 0, result.stderr
        assert "ImportError" not in result.stderr
        assert git_cmd(project["repo"], "log", "--oneline").count("\n") == 1

    def test_failing_script_blocks_commit(self, project: dict):
        repo = project["repo"]
        (repo / "package.json").write_text(
            json.dumps({"pre-commit": {"run": ["broken"], "runner": self.RUNNER}})
        )
        result = self._commit(project)
        assert result.returncode != 0
        assert "exit code (3)" in result.stderr
        assert "`broken`" in result.stderr
        assert git_cmd(repo, "log", "--oneline").count("\n") == 0
