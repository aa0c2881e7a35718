# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "routine"

# Points the CLI at an alternate config file (and through it, a data path)
CONFIG_PATH_ENV_VAR = "ROUTINE_CONFIG_PATH"

DEFAULT_DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)

HABITS_DIR_NAME = "habits"
TARGETS_DIR_NAME = "targets"
ENTRIES_DIR_NAME = "entries"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    log_level: str
    default_reminder_time: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "log_level": "WARNING",
        "default_reminder_time": "18:00",
    }


def get_app_config_path() -> Path:
    config_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if config_path:
        return Path(config_path)
    return platformdirs.user_config_path(APP_NAME) / "config.yaml"


def resolve_data_path(config: Configuration) -> Path:
    """Directory holding the habit, target and entry stores."""
    if config["data_path"] is not None:
        return Path(config["data_path"]).expanduser()
    return DEFAULT_DATA_PATH
