"""Configuration bootstrapping."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from core.settings import SwitcherSettings

CONFIG_ENV_VAR = "WINDECK_CONFIG"

logger = logging.getLogger("windeck.config")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def config_sources(root: Path, env: dict[str, str] | None = None) -> list[Path]:
    """Return config files in merge order, later files winning."""
    env = os.environ if env is None else env
    config_dir = root / "config"
    sources = [config_dir / "default.yaml", config_dir / "local.yaml"]
    override = env.get(CONFIG_ENV_VAR)
    if override:
        sources.append(Path(override).expanduser())
    return sources


def load_effective_config(root: Path, env: dict[str, str] | None = None) -> dict[str, Any]:
    """Load and merge all configuration files into one mapping."""
    merged: dict[str, Any] = {}
    for path in config_sources(root, env):
        data = load_yaml(path)
        if data:
            logger.debug("Loaded config from %s", path)
        merged = merge_dicts(merged, data)
    return merged


def load_settings(root: Path, env: dict[str, str] | None = None) -> SwitcherSettings:
    """Load, merge and validate settings."""
    return SwitcherSettings.model_validate(load_effective_config(root, env))
