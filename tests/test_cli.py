# SPDX-License-Identifier: MIT

import pendulum
from yaml import safe_load

from routine.repository.store import Store
from routine.terminal.app import app


def test_habit_lifecycle(cli, data_path):
    result = cli.invoke(
        app,
        ["habit", "add", "Read", "--goal", "2", "--period", "perWeek", "-s", "2024-01-01"],
    )
    assert result.exit_code == 0, result.output

    result = cli.invoke(app, ["h", "e", "1", "--date", "2024-01-02T08:00:00Z"])
    assert result.exit_code == 0, result.output
    result = cli.invoke(
        app, ["h", "e", "1", "--not-done", "--date", "2024-01-03T08:00:00Z"]
    )
    assert result.exit_code == 0, result.output

    store = Store(data_path)
    habit = store.get_habit(1)
    assert habit["name"] == "Read"
    assert habit["goal"] == 2.0
    assert habit["time_period"] == "perWeek"
    entries = store.entries.get_all_entries()
    assert [entry["done"] for entry in entries] == [False, True]
    assert entries[1]["date"] == pendulum.datetime(2024, 1, 2, 8, tz="UTC")

    result = cli.invoke(app, ["habit", "delete", "1"])
    assert result.exit_code == 0, result.output
    assert "Deleted habit 1 and 2 entries" in result.output

    store = Store(data_path)
    assert store.habits.get_all_habits() == []
    assert store.entries.get_all_entries() == []


def test_habit_modify_only_touches_given_options(cli, data_path):
    cli.invoke(
        app, ["habit", "add", "Snack", "--bad", "--goal-streak", "4", "-d", "monday"]
    )

    result = cli.invoke(
        app, ["habit", "modify", "1", "--name", "Sugar", "--remove-goal-streak"]
    )
    assert result.exit_code == 0, result.output

    habit = Store(data_path).get_habit(1)
    assert habit["name"] == "Sugar"
    assert habit["goal_streak"] is None
    assert habit["bad_habit"] is True
    assert habit["due"]["specific_days"] == ["monday"]


def test_invalid_habit_is_rejected(cli, data_path):
    result = cli.invoke(app, ["habit", "add", "Run", "--period", "perFortnight"])

    assert result.exit_code == 1
    assert "Invalid time period" in result.output
    assert Store(data_path).habits.get_all_habits() == []


def test_target_entries_and_dashboard(cli, data_path):
    result = cli.invoke(
        app,
        [
            "target", "add", "Weight",
            "--goal", "70",
            "--start-value", "80",
            "--start", "2024-01-01",
            "--goal-date", "2024-06-01",
        ],
    )
    assert result.exit_code == 0, result.output

    result = cli.invoke(app, ["t", "e", "1", "-v", "78", "--date", "2024-01-05"])
    assert result.exit_code == 0, result.output

    target = Store(data_path).get_target(1)
    assert target["start_value"] == 80.0
    assert target["goal_value"] == 70.0
    assert target["goal_date"] == pendulum.date(2024, 6, 1)

    result = cli.invoke(app, ["dashboard", "--date", "2024-01-08"])
    assert result.exit_code == 0, result.output
    assert "Weight" in result.output
    assert "78" in result.output

    result = cli.invoke(app, ["target", "show", "1"])
    assert result.exit_code == 0, result.output


def test_target_entry_requires_value(cli, data_path):
    cli.invoke(app, ["target", "add", "Savings", "--goal", "100"])

    result = cli.invoke(app, ["target", "entry", "1"])

    assert result.exit_code == 1
    assert "requires a value" in result.output
    assert Store(data_path).entries.get_all_entries() == []


def test_dashboard_with_nothing_due(cli):
    result = cli.invoke(app, ["d"])

    assert result.exit_code == 0, result.output
    assert "Nothing due." in result.output


def test_unknown_tracker_exits_with_error(cli):
    result = cli.invoke(app, ["habit", "show", "9"])

    assert result.exit_code == 1
    assert "Habit tracker 9 not found" in result.output


def test_delete_is_all_or_nothing(cli, data_path):
    cli.invoke(app, ["habit", "add", "Read"])

    result = cli.invoke(app, ["habit", "delete", "1,2"])

    assert result.exit_code == 1
    assert len(Store(data_path).habits.get_all_habits()) == 1


def test_entry_commands(cli, data_path):
    cli.invoke(app, ["target", "add", "Pages", "--goal", "300", "--add-to-total"])
    for value in ("10", "20", "30"):
        cli.invoke(app, ["target", "entry", "1", "-v", value])

    result = cli.invoke(app, ["entry", "modify", "2", "-v", "25", "--note", "evening"])
    assert result.exit_code == 0, result.output

    entry = Store(data_path).entries.get_entry(2)
    assert entry["value"] == 25.0
    assert entry["note"] == "evening"

    result = cli.invoke(app, ["entry", "modify", "2", "--done"])
    assert result.exit_code == 1

    result = cli.invoke(app, ["entry", "delete", "1-2"])
    assert result.exit_code == 0, result.output
    assert "Deleted 2 entries" in result.output
    assert [e["id"] for e in Store(data_path).entries.get_all_entries()] == [3]

    result = cli.invoke(app, ["entry", "list"])
    assert result.exit_code == 0, result.output


def test_config_set_and_show(cli, config_path):
    result = cli.invoke(
        app, ["config", "set", "--log-level", "info", "--default-reminder-time", "7:15"]
    )
    assert result.exit_code == 0, result.output

    config = safe_load(config_path.read_text())
    assert config["log_level"] == "INFO"
    assert config["default_reminder_time"] == "07:15"

    result = cli.invoke(app, ["config", "show"])
    assert result.exit_code == 0, result.output
    assert "Config file:" in result.output


def test_config_rejects_unknown_log_level(cli, config_path):
    result = cli.invoke(app, ["config", "set", "--log-level", "chatty"])

    assert result.exit_code != 0
    assert safe_load(config_path.read_text())["log_level"] == "WARNING"


def test_default_reminder_time_is_used(cli, data_path):
    cli.invoke(app, ["config", "set", "--default-reminder-time", "06:45"])

    result = cli.invoke(app, ["habit", "add", "Meditate", "--reminders"])
    assert result.exit_code == 0, result.output

    reminders = Store(data_path).get_habit(1)["reminders"]
    assert reminders == {"times": ["06:45"], "enabled": True}
