"""
Settings Module for the Nonogram engine

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from nonogram.solver import Difficulty, get_strategy_names

logger = logging.getLogger(__name__)

# Difficulties a generated game can be saved with
PLAYABLE_DIFFICULTIES = tuple(d.value for d in Difficulty if d is not Difficulty.CUSTOM)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "difficulty": "medium",
    "rows": 5,
    "columns": 5,
    "solve_speed": 3,
    "strategy_name": "overlap",
    "threshold": 128,
    "max_rows": 15,
    "max_columns": 15,
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = path or SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            logger.warning(f"Settings file {settings_file} is not a JSON object, using defaults")
            return DEFAULT_SETTINGS.copy()

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        result = validate_settings(result)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    settings_file = path or SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _valid_value(key: str, value: Any) -> bool:
    """Check one known setting; unknown keys are left alone."""
    if key == "difficulty":
        return value in PLAYABLE_DIFFICULTIES
    if key == "strategy_name":
        return value in get_strategy_names()
    if key == "solve_speed":
        return _is_int(value) and 1 <= value <= 10
    if key == "threshold":
        return _is_int(value) and 0 <= value <= 255
    if key in ("rows", "columns", "max_rows", "max_columns"):
        return _is_int(value) and value > 0
    return True


def validate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace invalid values with their defaults.

    A hand-edited config.json may hold an unknown difficulty or
    strategy, or numbers out of range; each bad entry is logged and
    reset so callers can use the values directly.

    Args:
        settings: Settings merged over the defaults

    Returns:
        New settings dictionary
    """
    result = dict(settings)
    for key, default in DEFAULT_SETTINGS.items():
        if not _valid_value(key, result.get(key)):
            logger.warning(f"Invalid setting {key}={result.get(key)!r}, using {default!r}")
            result[key] = default
    return result
