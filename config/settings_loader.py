"""
YAML settings loader for the team optimizer.
Provides cached, dot-path access to base.yaml settings.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.exceptions import ConfigurationError


_settings_cache: Optional[Dict[str, Any]] = None


def get_config_path() -> Path:
    """Return path to base.yaml config file."""
    # Check environment variable first, then default to project config
    env_path = os.getenv("TEAMFORGE_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    # Default: relative to this module
    return Path(__file__).parent / "base.yaml"


def load_settings(path: Optional[str | Path] = None, force_reload: bool = False) -> Dict[str, Any]:
    """
    Load and cache settings from base.yaml.

    An explicit path is read as-is (it must exist) and never touches the cache.
    """
    global _settings_cache
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(
                "Settings file not found",
                context={"path": str(config_path)},
            )
        return _read_yaml(config_path)

    if _settings_cache is not None and not force_reload:
        return _settings_cache

    config_path = get_config_path()
    if not config_path.exists():
        _settings_cache = {}
        return _settings_cache

    _settings_cache = _read_yaml(config_path)
    return _settings_cache


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(
            "Cannot read settings file",
            context={"path": str(config_path)},
            cause=e,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Settings file is not valid YAML",
            context={"path": str(config_path)},
            cause=e,
        ) from e

    if not isinstance(loaded, dict):
        raise ConfigurationError(
            "Settings file must contain a mapping",
            context={"path": str(config_path)},
        )
    return loaded


def get_setting(path: str, default: Any = None) -> Any:
    """
    Get a nested setting by dot-notation path.
    Example: get_setting("optimizer.max_iterations", 40)
    """
    settings = load_settings()
    keys = path.split(".")
    value = settings
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


# Specific config accessors for clarity

def get_fitness_weights() -> Dict[str, float]:
    """Low/normal/high fitness weights."""
    return {
        "low": float(get_setting("fitness.low", 0.5)),
        "normal": float(get_setting("fitness.normal", 1.0)),
        "high": float(get_setting("fitness.high", 1.5)),
    }
