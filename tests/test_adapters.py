"""
Tests for the process executor, mock executor, git and script-runner adapters.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from src.adapters.base import ProcessSpawnError
from src.adapters.mock import MockExecutor
from src.adapters.scripts.runner import ScriptRunnerAdapter
from src.adapters.shell.command import ProcessExecutor
from src.adapters.vcs.git import STASH_LABEL, GitAdapter, GitCommandError

# ── Process Executor Tests ───────────────────────────────────────────


class TestProcessExecutor:
    def test_capture_stdout(self, tmp_path: Path):
        result = ProcessExecutor().execute(
            sys.executable, ["-c", "print('hello')"], cwd=tmp_path
        )
        assert result.ok
        assert result.stdout.strip() == "hello"

    def test_nonzero_exit_resolves(self, tmp_path: Path):
        result = ProcessExecutor().execute(
            sys.executable, ["-c", "import sys; sys.exit(3)"], cwd=tmp_path
        )
        assert result.exit_code == 3
        assert not result.ok

    def test_capture_stderr(self, tmp_path: Path):
        result = ProcessExecutor().execute(
            sys.executable,
            ["-c", "import sys; sys.stderr.write('oops')"],
            cwd=tmp_path,
        )
        assert result.stderr == "oops"

    def test_quiet_discards_stderr(self, tmp_path: Path):
        result = ProcessExecutor().execute(
            sys.executable,
            ["-c", "import sys; print('out'); sys.stderr.write('err')"],
            cwd=tmp_path,
            stream="quiet",
        )
        assert result.stdout.strip() == "out"
        assert result.stderr == ""

    def test_cwd_respected(self, tmp_path: Path):
        result = ProcessExecutor().execute(
            sys.executable, ["-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()

    def test_missing_binary_raises_spawn_error(self, tmp_path: Path):
        with pytest.raises(ProcessSpawnError) as exc:
            ProcessExecutor().execute("definitely-not-a-real-binary-xyz", cwd=tmp_path)
        assert exc.value.command == "definitely-not-a-real-binary-xyz"
        assert isinstance(exc.value.cause, FileNotFoundError)

    def test_inherit_passes_no_pipes(self, tmp_path: Path):
        with patch("src.adapters.shell.command.subprocess.run") as run:
            run.return_value.returncode = 0
            run.return_value.stdout = None
            run.return_value.stderr = None
            result = ProcessExecutor().execute("npm", ["run", "lint"], cwd=tmp_path, stream="inherit")

        kwargs = run.call_args.kwargs
        assert kwargs["stdout"] is None
        assert kwargs["stderr"] is None
        assert kwargs["stdin"] is None
        assert result.stdout == ""

    def test_unknown_stream_mode(self, tmp_path: Path):
        with pytest.raises(ValueError):
            ProcessExecutor().execute(sys.executable, cwd=tmp_path, stream="tee")


# ── Mock Executor Tests ──────────────────────────────────────────────


class TestMockExecutor:
    def test_default_success(self):
        mock = MockExecutor()
        result = mock.execute("git", ["status"])
        assert result.ok
        assert mock.call_count == 1

    def test_longest_prefix_wins(self):
        mock = MockExecutor()
        mock.set_response("stash", stdout="generic")
        mock.set_response("stash pop", exit_code=1)
        assert mock.execute("git", ["stash", "save"]).stdout == "generic"
        assert mock.execute("git", ["stash", "pop", "--quiet"]).exit_code == 1

    def test_sequence_then_repeat(self):
        mock = MockExecutor()
        mock.set_sequence("rev-parse", [None, "abc", "def"])
        assert mock.execute("git", ["rev-parse"]).exit_code == 1
        assert mock.execute("git", ["rev-parse"]).stdout == "abc"
        assert mock.execute("git", ["rev-parse"]).stdout == "def"
        assert mock.execute("git", ["rev-parse"]).stdout == "def"

    def test_unspawnable(self):
        mock = MockExecutor()
        mock.set_unspawnable("npm")
        with pytest.raises(ProcessSpawnError):
            mock.execute("npm", ["run", "x"])
        assert mock.call_count == 1

    def test_calls_matching_and_reset(self):
        mock = MockExecutor()
        mock.execute("git", ["stash", "save"])
        mock.execute("git", ["reset", "--hard"])
        assert len(mock.calls_matching("stash")) == 1
        mock.reset()
        assert mock.call_count == 0


# ── Git Adapter Tests ────────────────────────────────────────────────


class TestGitAdapter:
    def test_name_and_binary(self, executor: MockExecutor, tmp_path: Path):
        assert GitAdapter(executor, tmp_path).binary == "git"
        assert GitAdapter(executor, tmp_path, binary="/usr/bin/git").binary == "/usr/bin/git"

    def test_rev_parse_missing_returns_none(self, git: GitAdapter, executor: MockExecutor):
        executor.set_response("rev-parse --quiet --verify", exit_code=1)
        assert git.rev_parse_verify("refs/stash") is None
        assert executor.call_log[0].stream == "quiet"

    def test_rev_parse_hash(self, git: GitAdapter, executor: MockExecutor):
        executor.set_response("rev-parse --quiet --verify", stdout="abc123\n")
        assert git.rev_parse_verify("refs/stash") == "abc123"

    def test_rev_parse_other_error_raises(self, git: GitAdapter, executor: MockExecutor):
        executor.set_response("rev-parse --quiet --verify", exit_code=128)
        with pytest.raises(GitCommandError) as exc:
            git.rev_parse_verify("refs/stash")
        assert exc.value.exit_code == 128

    def test_stash_save_default_args(self, git: GitAdapter, executor: MockExecutor):
        git.stash_save()
        call = executor.call_log[0]
        assert call.args == ["stash", "save", "--quiet", "--keep-index", STASH_LABEL]
        assert call.stream == "inherit"

    def test_stash_save_all_flags(self, git: GitAdapter, executor: MockExecutor):
        git.stash_save(include_all=True, include_untracked=True)
        assert executor.call_log[0].args == [
            "stash", "save", "--quiet", "--keep-index",
            "--all", "--include-untracked", STASH_LABEL,
        ]

    def test_clean_args(self, git: GitAdapter, executor: MockExecutor):
        git.clean()
        git.clean(include_ignored=True)
        assert executor.call_log[0].args == ["clean", "-d", "--force", "--quiet"]
        assert executor.call_log[1].args == ["clean", "-d", "--force", "--quiet", "-x"]

    def test_reset_and_pop_args(self, git: GitAdapter, executor: MockExecutor):
        git.reset_hard()
        git.stash_pop()
        assert executor.call_log[0].args == ["reset", "--hard", "--quiet"]
        assert executor.call_log[1].args == ["stash", "pop", "--quiet"]
        assert all(c.stream == "inherit" for c in executor.call_log)

    def test_failure_raises_with_stderr(self, git: GitAdapter, executor: MockExecutor):
        executor.set_failure("stash pop", exit_code=1, stderr="CONFLICT")
        with pytest.raises(GitCommandError, match="CONFLICT"):
            git.stash_pop()

    def test_status_and_toplevel(self, git: GitAdapter, executor: MockExecutor):
        executor.set_response("status --porcelain", stdout=" M a.txt\n")
        executor.set_response("rev-parse --show-toplevel", stdout="/repo\n")
        assert git.status_porcelain() == "M a.txt"
        assert git.show_toplevel() == "/repo"

    def test_commit_template(self, git: GitAdapter, executor: MockExecutor):
        git.set_commit_template(".gitmessage")
        assert executor.call_log[0].args == ["config", "commit.template", ".gitmessage"]

    def test_cwd_is_repo(self, git: GitAdapter, executor: MockExecutor, tmp_path: Path):
        git.reset_hard()
        assert executor.call_log[0].cwd == str(tmp_path)


# ── Script Runner Tests ──────────────────────────────────────────────


class TestScriptRunnerAdapter:
    def test_command(self, runner: ScriptRunnerAdapter):
        assert runner.command_for("lint") == ("npm", ["run", "lint", "--silent"])

    def test_custom_runner(self, executor: MockExecutor, tmp_path: Path):
        yarn = ScriptRunnerAdapter(executor, tmp_path, runner="yarn")
        assert yarn.name == "yarn"
        assert yarn.command_for("lint")[0] == "yarn"

    def test_runs_with_inherited_terminal(self, runner: ScriptRunnerAdapter, executor: MockExecutor):
        executor.set_response("run lint", exit_code=4)
        result = runner.run_script("lint")
        assert result.exit_code == 4
        assert executor.call_log[0].stream == "inherit"
        assert executor.call_log[0].command == "npm"

