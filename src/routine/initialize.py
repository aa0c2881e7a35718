# SPDX-License-Identifier: MIT

from pathlib import Path

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from routine import configuration
from routine.repository.configuration import ConfigurationRepository


def initialize(config_repository: ConfigurationRepository) -> Path:
    """Create the config file and data directories on first run."""
    config_repository.path.parent.mkdir(parents=True, exist_ok=True)
    __ensure_config_file(config_repository.path)

    data_path = configuration.resolve_data_path(config_repository.get_config())
    __ensure_data_dirs(data_path)
    return data_path


def __ensure_config_file(path: Path) -> None:
    if not path.is_file():
        config = configuration.get_default_configuration()
        path.write_text(dump(config, Dumper=Dumper))


def __ensure_data_dirs(data_path: Path) -> None:
    for dir_name in (
        configuration.HABITS_DIR_NAME,
        configuration.TARGETS_DIR_NAME,
        configuration.ENTRIES_DIR_NAME,
    ):
        (data_path / dir_name).mkdir(parents=True, exist_ok=True)
