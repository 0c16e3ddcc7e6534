"""
Domain models — Pydantic types for the hook runner.

All models are re-exported here for convenient access:

    from src.core.models import HookConfig, StashEnabled, ScriptFailure
"""

from src.core.models.config import (
    HookConfig,
    StashDisabled,
    StashEnabled,
    StashEnabledWithCleanup,
    StashMode,
)
from src.core.models.outcome import (
    CleanupFailure,
    HookOutcome,
    ScriptFailure,
    SetupFailure,
    Skipped,
    Success,
)
from src.core.models.process import ProcessResult, StreamMode

__all__ = [
    # outcome.py
    "CleanupFailure",
    # config.py
    "HookConfig",
    "HookOutcome",
    # process.py
    "ProcessResult",
    "ScriptFailure",
    "SetupFailure",
    "Skipped",
    "StashDisabled",
    "StashEnabled",
    "StashEnabledWithCleanup",
    "StashMode",
    "StreamMode",
    "Success",
]
