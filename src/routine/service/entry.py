# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from routine.model.entry import Entry
from routine.model.habit import HabitTracker
from routine.model.patch import EntryPatch
from routine.model.target import TargetTracker
from routine.template.entry import get_entry_template
from routine.time import now_utc


class EntryValidationError(Exception):
    """Raised when entry validation fails."""

    pass


def create_habit_entry(
    habit: HabitTracker,
    done: Optional[bool] = None,
    date: Optional[pendulum.DateTime] = None,
    note: Optional[str] = None,
) -> Entry:
    """Build a habit entry; it counts as done unless told otherwise."""
    entry = get_entry_template()
    entry["tracker_id"] = habit["id"]  # type: ignore[typeddict-item]
    entry["type"] = "habit"
    entry["done"] = True if done is None else done
    entry["date"] = date.in_tz("UTC") if date is not None else now_utc()
    entry["note"] = note
    return entry


def create_target_entry(
    target: TargetTracker,
    value: Optional[float],
    date: Optional[pendulum.DateTime] = None,
    note: Optional[str] = None,
) -> Entry:
    if value is None:
        raise EntryValidationError(
            f"Target '{target['name']}' requires a value for each entry"
        )

    entry = get_entry_template()
    entry["tracker_id"] = target["id"]  # type: ignore[typeddict-item]
    entry["type"] = "target"
    entry["value"] = value
    entry["date"] = date.in_tz("UTC") if date is not None else now_utc()
    entry["note"] = note
    return entry


def validate_entry_patch(entry: Entry, patch: EntryPatch) -> EntryPatch:
    """
    Check that a patch only touches fields meaningful for the entry's type.

    Habit entries carry done, target entries carry a value.
    """
    if entry["type"] == "habit" and patch.get("value") is not None:
        raise EntryValidationError(
            f"Entry {entry['id']} belongs to a habit and cannot hold a value"
        )
    if entry["type"] == "target":
        if patch.get("done") is not None:
            raise EntryValidationError(
                f"Entry {entry['id']} belongs to a target and cannot be marked done"
            )
        if "value" in patch and patch["value"] is None:
            raise EntryValidationError(
                f"Entry {entry['id']} belongs to a target and needs a value"
            )
    if "date" in patch:
        patch["date"] = patch["date"].in_tz("UTC")
    return patch
