"""Helpers for resolving configuration files and run defaults."""

import json
import os
from typing import Any, Dict, Optional

from fetchmd import __version__

DEFAULT_CONFIG_NAME = "fetchmd.json"
CONFIG_ENV_VAR = "FETCHMD_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "output_dir": "ref-docs",
    "user_agent": f"fetchmd/{__version__}",
    "timeout": 30.0,
    "delay": 0.5,
}


class ConfigError(Exception):
    """Raised when runtime configuration cannot be loaded."""


def _resolve_config_path(path: Optional[str]) -> Optional[str]:
    """Return the absolute config path, or None when no file applies.

    Only the implicit default may be absent; an explicit path or an
    environment override that does not exist is an error.
    """
    env_override = os.environ.get(CONFIG_ENV_VAR)
    candidate = path or env_override or DEFAULT_CONFIG_NAME
    expanded = os.path.abspath(os.path.expanduser(candidate))
    if os.path.isfile(expanded):
        return expanded
    if path or env_override:
        raise ConfigError(f"Configuration file not found: {candidate}")
    return None


def _resolve_path(value: str, base_dir: str) -> str:
    """Resolve ``value`` into an absolute path relative to ``base_dir``."""
    expanded = os.path.expanduser(value)
    if os.path.isabs(expanded):
        return expanded
    return os.path.abspath(os.path.join(base_dir, expanded))


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON config file and normalize any directory values."""
    config_path = _resolve_config_path(path)
    if config_path is None:
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Unable to read {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")

    base_dir = os.path.dirname(config_path)
    resolved: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str) and key.endswith("_dir"):
            resolved[key] = _resolve_path(value, base_dir)
        else:
            resolved[key] = value

    return resolved


def resolve_settings(
    *,
    config_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
    delay: Optional[float] = None,
) -> Dict[str, Any]:
    """Combine built-in defaults, the config file and CLI overrides."""
    config = load_config(config_path)
    overrides = {
        "output_dir": output_dir,
        "user_agent": user_agent,
        "timeout": timeout,
        "delay": delay,
    }

    result: Dict[str, Any] = {}
    for key, default in DEFAULTS.items():
        override = overrides[key]
        result[key] = override if override is not None else config.get(
            key, default
        )

    try:
        result["timeout"] = float(result["timeout"])
        result["delay"] = float(result["delay"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc
    if result["timeout"] <= 0:
        raise ConfigError("timeout must be greater than zero.")
    if result["delay"] < 0:
        raise ConfigError("delay cannot be negative.")

    return result
