"""
Configuration loader — reads the hook settings from the repo manifest.

Manifest discovery at the repository root, first found wins:

    precommit.yml / .precommit.yml   (YAML)
    package.json                     (JSON, under "pre-commit"/"precommit")

Each flag is resolved once, in precedence order:

    hook object ("pre-commit": {...})  >  "precommit.<flag>"  >  "pre-commit.<flag>"
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.core.models.config import (
    HookConfig,
    StashDisabled,
    StashEnabled,
    StashEnabledWithCleanup,
)

logger = logging.getLogger(__name__)

YAML_CONFIG_FILES = ("precommit.yml", ".precommit.yml")
PACKAGE_MANIFEST = "package.json"

# Keys under which the hook config may live, in lookup order
HOOK_KEYS = ("pre-commit", "precommit")

# Flags that may also be given as legacy top-level keys
FLAGS = ("silent", "colors", "template", "stash", "runner")
LEGACY_PREFIXES = ("precommit.", "pre-commit.")

# What `npm init` puts in scripts.test
NPM_PLACEHOLDER_TEST = 'echo "Error: no test specified" && exit 1'

_RUN_SPLIT = re.compile(r"[, ]+")


class ConfigError(Exception):
    """Raised when the hook configuration is unreadable or invalid."""


def find_config_file(root: Path) -> Path | None:
    """Return the manifest to read in ``root``, or None if there is none."""
    for name in (*YAML_CONFIG_FILES, PACKAGE_MANIFEST):
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_hook_config(root: Path) -> HookConfig:
    """Load and validate the hook configuration for a repository root.

    Raises:
        ConfigError: If no manifest exists or it cannot be parsed.
    """
    path = find_config_file(root)
    if path is None:
        raise ConfigError(
            f"No {PACKAGE_MANIFEST} or {YAML_CONFIG_FILES[0]} found in {root}"
        )

    logger.debug("Loading hook config from %s", path)
    data = _read_manifest(path)
    if path.name in YAML_CONFIG_FILES:
        data = _unwrap_yaml(data)

    config = parse_manifest(data)
    logger.info(
        "Loaded hook config from %s: %d script(s), stash=%s",
        path.name,
        len(config.scripts),
        config.stash.mode,
    )
    return config


def parse_manifest(data: dict[str, Any]) -> HookConfig:
    """Turn a manifest mapping into a HookConfig."""
    pre = _hook_value(data)
    hook_obj = pre if isinstance(pre, dict) else {}

    flags: dict[str, Any] = {}
    for flag in FLAGS:
        found, value = _lookup_flag(flag, hook_obj, data)
        if found:
            flags[flag] = value

    run = hook_obj.get("run")
    if not _is_set(run):
        run = pre
    scripts = _normalize_run(run)
    if scripts is None and _has_real_test_script(data):
        scripts = ["test"]

    kwargs: dict[str, Any] = {
        "scripts": scripts or [],
        "stash": _parse_stash(flags.get("stash")),
    }
    for flag in ("silent", "colors", "template", "runner"):
        if flag in flags and flags[flag] is not None:
            kwargs[flag] = flags[flag]

    try:
        return HookConfig.model_validate(kwargs)
    except ValidationError as e:
        raise ConfigError(f"Invalid pre-commit configuration: {e}") from e


# ── Helpers ─────────────────────────────────────────────────────


def _read_manifest(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def _unwrap_yaml(data: dict[str, Any]) -> dict[str, Any]:
    """A YAML file may hold the settings flat or under a hook key."""
    for key in HOOK_KEYS:
        if key in data:
            return data
    return {"pre-commit": data}


def _hook_value(data: dict[str, Any]) -> Any:
    for key in HOOK_KEYS:
        if _is_set(data.get(key)):
            return data[key]
    return None


def _is_set(value: Any) -> bool:
    """Empty strings, false and null count as unset; empty lists and mappings do not."""
    return isinstance(value, (list, dict)) or bool(value)


def _lookup_flag(flag: str, hook_obj: dict[str, Any], data: dict[str, Any]) -> tuple[bool, Any]:
    if flag in hook_obj:
        return True, hook_obj[flag]
    for prefix in LEGACY_PREFIXES:
        key = prefix + flag
        if key in data:
            return True, data[key]
    return False, None


def _normalize_run(run: Any) -> list[str] | None:
    if isinstance(run, str):
        return [s for s in _RUN_SPLIT.split(run) if s]
    if isinstance(run, list):
        return run
    return None


def _has_real_test_script(data: dict[str, Any]) -> bool:
    scripts = data.get("scripts")
    if not isinstance(scripts, dict):
        return False
    test = scripts.get("test")
    return bool(test) and test != NPM_PLACEHOLDER_TEST


def _parse_stash(value: Any):
    if value is None or value is False:
        return StashDisabled()
    if value is True:
        return StashEnabled()
    if not isinstance(value, dict):
        raise ConfigError(
            f"'stash' must be a boolean or a mapping, got {type(value).__name__}"
        )

    options = {
        "include_all": value.get("includeAll", value.get("include_all", False)),
        "include_untracked": value.get("includeUntracked", value.get("include_untracked", False)),
    }
    try:
        if value.get("reset") or value.get("clean"):
            return StashEnabledWithCleanup(
                **options,
                reset=value.get("reset", False),
                clean=value.get("clean", False),
            )
        return StashEnabled(**options)
    except ValidationError as e:
        raise ConfigError(f"Invalid 'stash' configuration: {e}") from e
