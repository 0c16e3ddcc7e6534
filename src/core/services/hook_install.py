"""
Hook installation — write or remove ``.git/hooks/pre-commit``.

The installed hook is a small shell script that re-enters this
package's CLI. An existing hook we did not write is kept as
``pre-commit.old`` and restored on uninstall.
"""

from __future__ import annotations

import logging
import os
import shlex
import stat
import sys
from pathlib import Path

from src.adapters.shell.command import ProcessExecutor
from src.adapters.vcs.git import GitAdapter

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"
BACKUP_SUFFIX = ".old"

# Marks a hook file as ours
HOOK_MARKER = "# installed by precommit-runner"

# Registered in pyproject.toml [project.scripts]
CONSOLE_SCRIPT = "precommit-runner"


def hook_command(python: str | None = None) -> list[str]:
    """Command line the hook runs, pinned to the interpreter doing the install.

    Prefers the console script next to the interpreter. Otherwise the
    module is run with ``-P``: git starts hooks from the repository root,
    and a project with its own ``src`` package must not shadow ours.
    """
    interpreter = Path(python or sys.executable)
    script = interpreter.with_name(CONSOLE_SCRIPT)
    if script.is_file() and os.access(script, os.X_OK):
        return [str(script), "run"]
    return [str(interpreter), "-P", "-m", "src.main", "run"]


def hook_script(python: str | None = None) -> str:
    """Contents of the installed hook file."""
    command = " ".join(shlex.quote(part) for part in hook_command(python))
    return (
        "#!/bin/sh\n"
        f"{HOOK_MARKER}\n"
        f"exec {command} \"$@\"\n"
    )


def hooks_dir(project_root: Path, executor: ProcessExecutor | None = None) -> Path:
    """Resolve the hooks directory via ``git rev-parse --git-dir``."""
    git = GitAdapter(executor or ProcessExecutor(), project_root)
    git_dir = Path(git.git_dir())
    if not git_dir.is_absolute():
        git_dir = project_root / git_dir
    return git_dir / "hooks"


def is_managed(path: Path) -> bool:
    """Whether ``path`` is a hook file this package wrote."""
    try:
        return HOOK_MARKER in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hook(project_root: Path, executor: ProcessExecutor | None = None) -> dict:
    """Install the pre-commit hook.

    Returns:
        {"ok": True, "path": ..., "backup": path-or-None}

    Raises:
        GitCommandError: If ``project_root`` is not inside a git repository.
        OSError: If the hook file cannot be written.
    """
    directory = hooks_dir(project_root, executor)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / HOOK_NAME
    backup: Path | None = None

    if target.exists() and not target.is_symlink() and not is_managed(target):
        backup = target.with_name(HOOK_NAME + BACKUP_SUFFIX)
        backup.write_bytes(target.read_bytes())
        logger.info("Existing pre-commit hook backed up to %s", backup)

    if target.exists() or target.is_symlink():
        target.unlink()

    target.write_text(hook_script(), encoding="utf-8")
    mode = target.stat().st_mode
    target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    logger.info("Installed pre-commit hook at %s", target)

    return {"ok": True, "path": str(target), "backup": str(backup) if backup else None}


def uninstall_hook(project_root: Path, executor: ProcessExecutor | None = None) -> dict:
    """Remove our hook, restoring a backed-up one if present.

    A hook file we did not install is left untouched.

    Returns:
        {"ok": bool, "removed": bool, "restored": bool, "reason": str}
    """
    directory = hooks_dir(project_root, executor)
    target = directory / HOOK_NAME
    backup = target.with_name(HOOK_NAME + BACKUP_SUFFIX)

    if not target.exists() and not target.is_symlink():
        return {"ok": True, "removed": False, "restored": False, "reason": "no hook installed"}

    if not is_managed(target):
        return {
            "ok": False,
            "removed": False,
            "restored": False,
            "reason": f"{target} was not installed by precommit-runner",
        }

    target.unlink()
    restored = False
    if backup.exists():
        target.write_bytes(backup.read_bytes())
        target.chmod(0o755)
        backup.unlink()
        restored = True
        logger.info("Restored previous pre-commit hook from %s", backup)

    return {"ok": True, "removed": True, "restored": restored, "reason": ""}
