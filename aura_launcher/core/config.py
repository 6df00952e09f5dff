"""Configuration loading and XDG file locations.

Configuration lives in $XDG_CONFIG_HOME/aura-launcher/config.json and
launch history in $XDG_DATA_HOME/aura-launcher/history.json.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from xdg import BaseDirectory

from ..models.config import LauncherConfig

logger = logging.getLogger(__name__)

APP_NAME = "aura-launcher"
CONFIG_FILENAME = "config.json"
HISTORY_FILENAME = "history.json"


def default_config_path() -> Path:
    """Get the per-user configuration file path."""
    return Path(BaseDirectory.xdg_config_home) / APP_NAME / CONFIG_FILENAME


def default_history_path() -> Path:
    """Get the per-user launch history file path."""
    return Path(BaseDirectory.xdg_data_home) / APP_NAME / HISTORY_FILENAME


def load_config(config_file: Optional[Path] = None) -> LauncherConfig:
    """Load launcher configuration from JSON file.

    A missing file yields the defaults. A malformed or invalid file is
    logged and also yields the defaults, so a bad config never prevents
    the launcher from starting.

    Args:
        config_file: Path to config.json (default: XDG config location)

    Returns:
        LauncherConfig instance
    """
    config_file = config_file or default_config_path()

    if not config_file.exists():
        logger.debug(f"No config at {config_file}, using defaults")
        return LauncherConfig()

    try:
        with open(config_file, encoding="utf-8") as f:
            data = json.load(f)

        config = LauncherConfig.model_validate(data)
        logger.debug(f"Loaded config from {config_file}")
        return config

    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, ValidationError) as e:
        logger.warning(f"Invalid config {config_file}, using defaults: {e}")
        return LauncherConfig()
    except OSError as e:
        logger.warning(f"Failed to read config {config_file}, using defaults: {e}")
        return LauncherConfig()
