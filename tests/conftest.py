# SPDX-License-Identifier: MIT

"""Shared fixtures: stores on a temporary directory and a configured CLI."""

from pathlib import Path
from typing import Any, Callable, Optional

import pendulum
import pytest
from typer.testing import CliRunner
from yaml import dump

from routine import configuration
from routine.model.entry import Entry
from routine.model.habit import HabitTracker
from routine.model.target import TargetTracker
from routine.repository.store import Store
from routine.template.entry import get_entry_template
from routine.template.habit import get_habit_template
from routine.template.target import get_target_template


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def store(data_path: Path) -> Store:
    return Store(data_path)


@pytest.fixture
def make_habit() -> Callable[..., HabitTracker]:
    def _make_habit(**fields: Any) -> HabitTracker:
        habit = get_habit_template()
        habit["name"] = "Drink water"
        habit["start_date"] = pendulum.date(2024, 1, 1)
        habit.update(fields)  # type: ignore[typeddict-item]
        return habit

    return _make_habit


@pytest.fixture
def make_target() -> Callable[..., TargetTracker]:
    def _make_target(**fields: Any) -> TargetTracker:
        target = get_target_template()
        target["name"] = "Save money"
        target["start_value"] = 0.0
        target["goal_value"] = 100.0
        target["start_date"] = pendulum.date(2024, 1, 1)
        target["goal_date"] = pendulum.date(2024, 12, 31)
        target.update(fields)  # type: ignore[typeddict-item]
        return target

    return _make_target


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    def _make_entry(
        date: pendulum.DateTime,
        value: Optional[float] = None,
        done: Optional[bool] = None,
        tracker_id: int = 1,
        type: str = "target",
        id: Optional[int] = None,
    ) -> Entry:
        entry = get_entry_template()
        entry["id"] = id
        entry["tracker_id"] = tracker_id
        entry["type"] = type  # type: ignore[typeddict-item]
        entry["value"] = value
        entry["done"] = done
        entry["date"] = date
        return entry

    return _make_entry


@pytest.fixture
def config_path(tmp_path: Path, data_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config" / "config.yaml"
    path.parent.mkdir(parents=True)
    config = configuration.get_default_configuration()
    config["data_path"] = str(data_path)
    config["show_header"] = False
    path.write_text(dump(config))
    monkeypatch.setenv(configuration.CONFIG_PATH_ENV_VAR, str(path))
    return path


@pytest.fixture
def cli(config_path: Path) -> CliRunner:
    return CliRunner()
