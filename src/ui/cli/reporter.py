"""
Hook reporter — turn an outcome into the lines the committer reads.

Every line is prefixed with ``pre-commit:`` (colored when stdout is a
terminal and colors aren't disabled), with an empty prefixed line
above and below each message block.
"""

from __future__ import annotations

import sys
from typing import Callable, TextIO

import click

from src.core.models.config import HookConfig
from src.core.models.outcome import (
    CleanupFailure,
    HookOutcome,
    ScriptFailure,
    SetupFailure,
    Skipped,
)

PREFIX = "pre-commit:"
PREFIX_COLOR = 166  # xterm-256 orange

_SKIP = "Skipping the pre-commit hook."

MESSAGES = {
    "binary": (
        "Failed to locate the `{detail}` binary, make sure it's installed in your $PATH.\n"
        + _SKIP
    ),
    "status": "Failed to retrieve the `git status` from the project.\n" + _SKIP,
    "root": (
        "Failed to find the root of this git repository, cannot locate the project manifest.\n"
        + _SKIP
    ),
    "config": (
        "Received an error while parsing or locating the project manifest:\n"
        "\n"
        "  {detail}\n"
        "\n"
        + _SKIP
    ),
    "empty": "No changes detected.\n" + _SKIP,
    "run": (
        "We have no pre-commit hooks to run. Either you're missing the `scripts`\n"
        "in your `package.json` or have configured pre-commit to run nothing.\n"
        + _SKIP
    ),
    "setup": (
        "Error preparing repository for pre-commit hook scripts to run: {detail}\n"
        + _SKIP
    ),
    "cleanup": (
        "Unable to {step} while restoring the pre-commit stash: {detail}\n"
        "\n"
        "Please fix any errors printed by git then re-run `git stash pop` to\n"
        "restore the working directory to its previous state.\n"
        "If the stash was already applied, check `git stash list` for an entry\n"
        "labeled \"pre-commit stash\" before dropping anything."
    ),
    "failure": (
        "We've failed to pass the specified git pre-commit hooks as the `{script}`\n"
        "hook returned an exit code ({code}). If you're feeling adventurous you can\n"
        "skip the git pre-commit hooks by adding the following flags to your commit:\n"
        "\n"
        "  git commit -n (or --no-verify)\n"
        "\n"
        "This is ill-advised since the commit is broken."
    ),
}

_CLEANUP_VERBS = {
    "reset": "reset the working tree",
    "clean": "clean the working tree",
    "unstash": "re-apply the stash",
}


class Reporter:
    """Write prefixed hook messages.

    Args:
        silent: Suppress all output (lines are still returned).
        colors: True/False to force; None to follow the terminal.
        stdout/stderr: Streams, overridable for tests.
    """

    def __init__(
        self,
        silent: bool = False,
        colors: bool | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.silent = silent
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        if colors is None or colors:
            # An explicit True still needs a terminal to draw on
            colors = _isatty(self._stdout)
        self.colors = colors

    @classmethod
    def for_config(cls, config: HookConfig | None, **kwargs) -> Reporter:
        if config is None:
            return cls(**kwargs)
        return cls(silent=config.silent, colors=config.colors, **kwargs)

    @property
    def prefix(self) -> str:
        if self.colors:
            return click.style(PREFIX, fg=PREFIX_COLOR) + " "
        return PREFIX + " "

    def format(self, message: str) -> list[str]:
        """Prefix every line and pad the block with blank prefixed lines."""
        lines = ["", *message.split("\n"), ""]
        return [self.prefix + line for line in lines]

    def log(self, message: str, error: bool = True) -> list[str]:
        lines = self.format(message)
        if not self.silent:
            stream = self._stderr if error else self._stdout
            for line in lines:
                click.echo(line, file=stream, color=self.colors)
        return lines

    def report(self, outcome: HookOutcome) -> list[str]:
        """Render the outcome and any cleanup failures. Returns all lines."""
        written: list[str] = []

        # Cleanup problems first: they describe the state of the tree now
        for failure in outcome.cleanup_failures:
            written += self.log(_cleanup_message(failure), error=True)

        if isinstance(outcome, Skipped):
            message = MESSAGES[outcome.reason].format(detail=outcome.detail)
            written += self.log(message, error=False)
        elif isinstance(outcome, SetupFailure):
            written += self.log(MESSAGES["setup"].format(detail=outcome.cause), error=True)
        elif isinstance(outcome, ScriptFailure):
            message = MESSAGES["failure"].format(script=outcome.script, code=outcome.exit_code)
            if outcome.cause:
                message += f"\n\n{outcome.cause}"
            written += self.log(message, error=True)

        return written


def _cleanup_message(failure: CleanupFailure) -> str:
    return MESSAGES["cleanup"].format(
        step=_CLEANUP_VERBS[failure.step],
        detail=failure.cause,
    )


def _isatty(stream: TextIO) -> bool:
    isatty: Callable[[], bool] | None = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:  # closed stream
        return False
