"""Adapters — tool bindings for git and the package-script runner.

Public re-exports for convenient access.
"""

from src.adapters.base import Adapter, ProcessSpawnError
from src.adapters.mock import MockExecutor
from src.adapters.scripts.runner import ScriptRunnerAdapter
from src.adapters.shell.command import ProcessExecutor
from src.adapters.vcs.git import GitAdapter, GitCommandError

__all__ = [
    "Adapter",
    "GitAdapter",
    "GitCommandError",
    "MockExecutor",
    "ProcessExecutor",
    "ProcessSpawnError",
    "ScriptRunnerAdapter",
]
