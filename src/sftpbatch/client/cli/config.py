"""Configuration utilities for the sftpbatch CLI.

This module provides the config file helpers shared by all commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Keys accepted by 'sftpbatch config set', with their value types
CONFIG_KEYS: dict[str, type] = {
    "host": str,
    "port": int,
    "username": str,
    "private_key_path": str,
    "batch_size": int,
    "timeout": float,
    "max_workers": int,
}


def get_config_dir() -> Path:
    """Get the configuration directory for sftpbatch.

    Returns:
        Path to ~/.sftpbatch or equivalent.
    """
    return Path.home() / ".sftpbatch"


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration from config file."""
    config_file = get_config_file()
    if config_file.exists():
        return dict(json.loads(config_file.read_text()))
    return {}


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def parse_config_value(key: str, value: str) -> Any:
    """Convert a command-line string to the type stored for key.

    Args:
        key: Config key, one of CONFIG_KEYS.
        value: Raw string value.

    Returns:
        The converted value.

    Raises:
        KeyError: If key is unknown.
        ValueError: If value cannot be converted.
    """
    return CONFIG_KEYS[key](value)
