# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import cast

from routine.model.entry import Entry
from routine.model.habit import HabitTracker
from routine.model.patch import EntryPatch, HabitPatch, TargetPatch
from routine.model.target import TargetTracker


def apply_habit_patch(habit: HabitTracker, patch: HabitPatch) -> HabitTracker:
    """Return a copy of habit with every key present in patch replaced."""
    merged = deepcopy(habit)
    for key, value in patch.items():
        merged[key] = deepcopy(value)  # type: ignore[literal-required]
    return cast(HabitTracker, merged)


def apply_target_patch(target: TargetTracker, patch: TargetPatch) -> TargetTracker:
    merged = deepcopy(target)
    for key, value in patch.items():
        merged[key] = deepcopy(value)  # type: ignore[literal-required]
    return cast(TargetTracker, merged)


def apply_entry_patch(entry: Entry, patch: EntryPatch) -> Entry:
    merged = deepcopy(entry)
    for key, value in patch.items():
        merged[key] = deepcopy(value)  # type: ignore[literal-required]
    return cast(Entry, merged)
