"""
pre-commit runner — CLI entrypoint.

Usage:
    precommit-runner --help
    precommit-runner run              (what the installed git hook calls)
    precommit-runner install
    precommit-runner uninstall
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from src.core.observability.logging_config import setup_logging

from src import __version__


@click.group()
@click.version_option(version=__version__, prog_name="precommit-runner")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(verbose: bool, quiet: bool, debug: bool) -> None:
    """Git pre-commit hook runner — isolate staged changes, run scripts, restore."""
    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PRECOMMIT_LOG_LEVEL", "WARNING")

    setup_logging(level=level, log_file=os.environ.get("PRECOMMIT_LOG_FILE"))


@cli.command()
@click.option(
    "--ignore-status",
    is_flag=True,
    help="Run even when `git status` reports no changes.",
)
@click.option(
    "--path",
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory inside the repository (default: cwd).",
)
def run(ignore_status: bool, path: Path | None) -> None:
    """Run the configured scripts against the staged changes."""
    from src.core.services.hook_ops import run_hook
    from src.ui.cli.reporter import Reporter

    result = run_hook(path, ignore_status=ignore_status)
    Reporter.for_config(result.config).report(result.outcome)
    sys.exit(result.outcome.exit_code)


@cli.command()
@click.option(
    "--path",
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory inside the repository (default: cwd).",
)
def install(path: Path | None) -> None:
    """Install the git pre-commit hook into this repository."""
    from src.adapters.vcs.git import GitCommandError
    from src.core.services.hook_install import install_hook

    root = path or Path.cwd()
    try:
        result = install_hook(root)
    except (GitCommandError, OSError) as e:
        click.secho(f"❌ The hook was not installed: {e}", fg="red", err=True)
        sys.exit(1)

    if result["backup"]:
        click.echo(f"   Existing hook backed up to {result['backup']}")
    click.secho(f"✅ Installed {result['path']}", fg="green")


@cli.command()
@click.option(
    "--path",
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory inside the repository (default: cwd).",
)
def uninstall(path: Path | None) -> None:
    """Remove the git pre-commit hook, restoring any previous one."""
    from src.adapters.vcs.git import GitCommandError
    from src.core.services.hook_install import uninstall_hook

    root = path or Path.cwd()
    try:
        result = uninstall_hook(root)
    except (GitCommandError, OSError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if not result["ok"]:
        click.secho(f"❌ {result['reason']}", fg="red", err=True)
        sys.exit(1)
    if not result["removed"]:
        click.echo(f"Nothing to do: {result['reason']}")
        return

    click.secho("✅ Removed pre-commit hook", fg="green")
    if result["restored"]:
        click.echo("   Previous hook restored from pre-commit.old")


if __name__ == "__main__":
    cli()
