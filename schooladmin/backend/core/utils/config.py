"""
Configuration Loading Utilities.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

REQUIRED_SECTIONS = ("storage", "listing", "api")

# Environment variable naming the config file the API app loads at startup
CONFIG_ENV = "SCHOOLADMIN_CONFIG"


def get_default_config() -> dict[str, Any]:
    """
    Get default configuration dictionary.

    Returns:
        Default configuration
    """
    return {
        "storage": {
            "backend": "local",
            "path": "data/school_data.json",
            "base_url": "http://localhost:8000/api",
            "timeout": 10.0,
        },
        "listing": {
            "page_size": 10,
            "page_window": 5,
        },
        "api": {
            "host": "127.0.0.1",
            "port": 8000,
            "cors_origins": ["http://localhost:4200", "http://localhost:3000"],
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
    }


def load_config(config_path: str | Path) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Sections missing from the file are filled in from
    :func:`get_default_config`, key by key.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    defaults = get_default_config()
    for section in REQUIRED_SECTIONS:
        merged = copy.deepcopy(defaults[section])
        merged.update(config.get(section) or {})
        config[section] = merged

    return config


def save_config(config: dict[str, Any], config_path: str | Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
