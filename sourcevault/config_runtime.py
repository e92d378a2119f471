"""Runtime configuration for sourcevault - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from sourcevault.utils.logging import logger

DEFAULTS = {
    "paths": {
        "db": "./.sourcevault/sources.db",
        "report_dir": "./.sourcevault/report",
    },
    "limits": {
        "max_file_size": 2 * 1024 * 1024,
        "blame_timeout": 30,
    },
    "scm": {
        "enabled": True,
    },
}

CONFIG_FILE = Path(".sourcevault") / "config.json"


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .sourcevault/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (SOURCEVAULT_<SECTION>_<KEY>)
    2. .sourcevault/config.json file
    3. Built-in defaults

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"SOURCEVAULT_{section.upper()}_{key.upper()}"
            if env_var not in os.environ:
                continue
            value = os.environ[env_var]
            default_value = cfg[section][key]
            try:
                if isinstance(default_value, bool):
                    cfg[section][key] = _parse_bool(value)
                elif isinstance(default_value, int):
                    cfg[section][key] = int(value)
                else:
                    cfg[section][key] = value
            except ValueError as e:
                logger.warning(f"Invalid value for environment variable {env_var}: '{value}' - {e}")
                logger.info(f"Using default value: {cfg[section][key]}")

    return cfg


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")
