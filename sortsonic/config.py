"""
Runtime configuration.

Defaults come from `settings`; a JSON file can override any of them, e.g.

    {"sort": {"default_size": 80}, "sound": {"enabled": false}}

Unknown sections or keys are rejected so typos do not pass silently.
"""
import copy
import json
import logging
from typing import Any, Dict, Optional

from . import settings
from .errors import ConfigError

logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Dict[str, Any]]:
    return {
        "window": {
            "width":  settings.WINDOW_WIDTH,
            "height": settings.WINDOW_HEIGHT,
            "panel_height": settings.PANEL_HEIGHT,
            "fps":    settings.FPS,
        },
        "sort": {
            "default_size":  settings.DEFAULT_SIZE,
            "default_speed": settings.DEFAULT_SPEED,
            "seed": None,
        },
        "sound": {
            "enabled":     settings.ENABLE_SOUND,
            "base_pitch":  settings.BASE_PITCH,
            "pitch_range": settings.PITCH_RANGE,
        },
        "logging": {
            "level": settings.LOG_LEVEL,
            "file":  settings.LOG_FILE,
        },
    }


def merge_config(base: Dict[str, Dict[str, Any]], overrides: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Return a copy of `base` with `overrides` applied section by section."""
    merged = copy.deepcopy(base)
    for section, values in overrides.items():
        if section not in merged:
            raise ConfigError(f"Unknown config section: {section!r}")
        if not isinstance(values, dict):
            raise ConfigError(f"Config section {section!r} must be an object")
        for key, value in values.items():
            if key not in merged[section]:
                raise ConfigError(f"Unknown config key: {section}.{key}")
            merged[section][key] = value
    return merged


def load_config(path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """Load the defaults, overridden by the JSON file at `path` if given."""
    config = default_config()
    if path is None:
        return config

    logger.info("Loading configuration from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(overrides, dict):
        raise ConfigError(f"Top level of {path} must be an object")
    return merge_config(config, overrides)
