"""
Hook configuration model — what to run and how to isolate it.

Produced once by the config loader and read-only afterwards.
The stash setting is a tagged union rather than a bool-or-mapping,
so the engine never has to type-test a raw value at runtime:

    stash:
      mode: disabled | enabled | enabled_with_cleanup
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RUNNER = "npm"


class StashDisabled(BaseModel):
    """No isolation: scripts see the working tree as-is."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["disabled"] = "disabled"


class StashEnabled(BaseModel):
    """Stash unstaged changes before running, pop them afterwards."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["enabled"] = "enabled"
    include_all: bool = False        # also stash ignored files (--all)
    include_untracked: bool = False  # also stash untracked files


class StashEnabledWithCleanup(BaseModel):
    """Stash, and undo script side effects before popping."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["enabled_with_cleanup"] = "enabled_with_cleanup"
    include_all: bool = False
    include_untracked: bool = False
    reset: bool = False   # git reset --hard before unstash
    clean: bool = False   # git clean -d --force before unstash


StashMode = Annotated[
    Union[StashDisabled, StashEnabled, StashEnabledWithCleanup],
    Field(discriminator="mode"),
]


class HookConfig(BaseModel):
    """Resolved pre-commit configuration.

    ``scripts`` is ordered: scripts run in exactly this sequence.
    """

    model_config = ConfigDict(frozen=True)

    scripts: tuple[str, ...] = ()
    stash: StashMode = Field(default_factory=StashDisabled)
    silent: bool = False
    colors: bool | None = None       # None = decide from the terminal
    template: str | None = None
    runner: str = DEFAULT_RUNNER

    @field_validator("scripts", mode="before")
    @classmethod
    def _drop_blank_scripts(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            # Non-strings are left in place so validation rejects them
            return tuple(
                s.strip() if isinstance(s, str) else s
                for s in value
                if not (isinstance(s, str) and not s.strip())
            )
        return value

    @property
    def stash_enabled(self) -> bool:
        return not isinstance(self.stash, StashDisabled)

    @property
    def include_all(self) -> bool:
        return getattr(self.stash, "include_all", False)

    @property
    def include_untracked(self) -> bool:
        return getattr(self.stash, "include_untracked", False)

    @property
    def reset_after(self) -> bool:
        return isinstance(self.stash, StashEnabledWithCleanup) and self.stash.reset

    @property
    def clean_after(self) -> bool:
        return isinstance(self.stash, StashEnabledWithCleanup) and self.stash.clean
