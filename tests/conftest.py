"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from src.adapters.mock import MockExecutor
from src.adapters.scripts.runner import ScriptRunnerAdapter
from src.adapters.vcs.git import GitAdapter


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def executor() -> MockExecutor:
    """A fresh record-and-reply executor."""
    return MockExecutor()


@pytest.fixture
def git(executor: MockExecutor, tmp_path: Path) -> GitAdapter:
    return GitAdapter(executor, tmp_path, binary="git")


@pytest.fixture
def runner(executor: MockExecutor, tmp_path: Path) -> ScriptRunnerAdapter:
    return ScriptRunnerAdapter(executor, tmp_path, binary="npm")
