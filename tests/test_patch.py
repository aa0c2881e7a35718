# SPDX-License-Identifier: MIT

import pendulum
import pytest

from routine.model.patch import EntryPatch, HabitPatch, TargetPatch
from routine.service.entry import EntryValidationError, validate_entry_patch
from routine.service.patch import (
    apply_entry_patch,
    apply_habit_patch,
    apply_target_patch,
)


def test_absent_keys_leave_fields_untouched(make_habit):
    habit = make_habit(goal=3.0, bad_habit=True, goal_streak=5)

    patched = apply_habit_patch(habit, {"name": "Stretch"})

    assert patched["name"] == "Stretch"
    assert patched["goal"] == 3.0
    assert patched["bad_habit"] is True
    assert patched["goal_streak"] == 5


def test_present_falsy_values_are_applied(make_habit):
    habit = make_habit(bad_habit=True, goal_streak=5)
    patch: HabitPatch = {"bad_habit": False, "goal_streak": None, "goal": 0.0}

    patched = apply_habit_patch(habit, patch)

    assert patched["bad_habit"] is False
    assert patched["goal_streak"] is None
    assert patched["goal"] == 0.0


def test_original_is_not_mutated(make_target):
    target = make_target()
    patch: TargetPatch = {
        "add_to_total": True,
        "start_value": 0.0,
        "due": {
            "type": "specificDays",
            "specific_days": ["monday"],
            "interval_type": None,
            "interval_value": None,
        },
    }

    patched = apply_target_patch(target, patch)
    patch["due"]["specific_days"].append("friday")  # type: ignore[union-attr]

    assert target["add_to_total"] is False
    assert target["due"]["type"] == "interval"
    assert patched["due"]["specific_days"] == ["monday"]


def test_entry_note_can_be_cleared(make_entry):
    entry = make_entry(pendulum.datetime(2024, 1, 1, tz="UTC"), value=4.0)
    entry["note"] = "before breakfast"

    patched = apply_entry_patch(entry, {"note": None})

    assert patched["note"] is None
    assert patched["value"] == 4.0


class TestValidateEntryPatch:
    def test_habit_entry_cannot_hold_a_value(self, make_entry):
        entry = make_entry(pendulum.datetime(2024, 1, 1, tz="UTC"), type="habit")

        with pytest.raises(EntryValidationError):
            validate_entry_patch(entry, {"value": 3.0})

    def test_target_entry_cannot_be_done(self, make_entry):
        entry = make_entry(pendulum.datetime(2024, 1, 1, tz="UTC"), value=1.0)

        with pytest.raises(EntryValidationError):
            validate_entry_patch(entry, {"done": True})

    def test_target_entry_value_cannot_be_cleared(self, make_entry):
        entry = make_entry(pendulum.datetime(2024, 1, 1, tz="UTC"), value=1.0)

        with pytest.raises(EntryValidationError):
            validate_entry_patch(entry, {"value": None})

    def test_date_is_stored_in_utc(self, make_entry):
        entry = make_entry(pendulum.datetime(2024, 1, 1, tz="UTC"), value=1.0)
        patch: EntryPatch = {
            "date": pendulum.datetime(2024, 1, 2, 1, 0, tz="Europe/Berlin")
        }

        validated = validate_entry_patch(entry, patch)

        assert validated["date"].timezone_name == "UTC"
        assert validated["date"] == pendulum.datetime(2024, 1, 2, 0, 0, tz="UTC")
