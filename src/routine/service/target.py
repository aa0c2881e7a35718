# SPDX-License-Identifier: MIT

import datetime
import logging
from typing import TypedDict, cast

from routine.model.entry import Entry
from routine.model.target import TargetTracker
from routine.repository.error import StorageError
from routine.repository.store import Store
from routine.time import days_between, to_date

logger = logging.getLogger(__name__)


class TargetValues(TypedDict):
    current_value: float
    start_value: float  # adjusted when use_actual_bounds is set
    original_start_value: float


class TargetMetrics(TypedDict):
    progress_percentage: float
    display_percentage: float
    total_entries: int
    average_value: float
    days_until_goal: int
    days_active: int
    total_duration: int
    expected_progress: float
    ahead_pace: bool
    pace: float
    remaining_value: float
    daily_required: float
    projected_value_on_goal_date: float


def _entry_value(entry: Entry) -> float:
    value = entry["value"]
    return value if value is not None else 0.0


def current_value(tracker: TargetTracker, entries: list[Entry]) -> float:
    """
    Current value of a target tracker.

    Entries must already be restricted to the tracker's start date and ordered
    newest first. Additive trackers sum every entry onto the start value; all
    others take the value of the newest entry.
    """
    if tracker["add_to_total"]:
        return tracker["start_value"] + sum(_entry_value(entry) for entry in entries)

    if len(entries) > 0:
        return _entry_value(entries[0])
    return tracker["start_value"]


def get_progress_points(tracker: TargetTracker, entries: list[Entry]) -> list[float]:
    """Values the tracker has passed through, in chronological order."""
    chronological = list(reversed(entries))

    if not tracker["add_to_total"]:
        return [_entry_value(entry) for entry in chronological]

    points = []
    running_total = tracker["start_value"]
    for entry in chronological:
        running_total += _entry_value(entry)
        points.append(running_total)
    return points


def adjusted_start_value(tracker: TargetTracker, entries: list[Entry]) -> float:
    """
    Start value widened to the lowest (or highest) value actually reached.

    For a target that counts up, a dip below the start value moves the start
    down to the minimum; for one that counts down, a rise above it moves the
    start up to the maximum. Without use_actual_bounds the stored start value
    is returned unchanged.
    """
    start_value = tracker["start_value"]
    if not tracker["use_actual_bounds"] or len(entries) == 0:
        return start_value

    points = get_progress_points(tracker, entries)

    if start_value < tracker["goal_value"]:
        lowest = min(points)
        if lowest < start_value:
            return lowest
    else:
        highest = max(points)
        if highest > start_value:
            return highest

    return start_value


def load_target_entries(store: Store, tracker: TargetTracker) -> list[Entry]:
    return store.get_entries_since(
        cast(int, tracker["id"]), "target", tracker["start_date"]
    )


def resolve_target_values(store: Store, tracker: TargetTracker) -> TargetValues:
    """
    Derived values for a target as shown to the user.

    When its entries cannot be read, both the current and start value fall
    back to the stored start value.
    """
    original_start_value = tracker["start_value"]
    try:
        entries = load_target_entries(store, tracker)
    except StorageError as e:
        logger.warning(
            "Could not load entries for target %s, using its start value: %s",
            tracker["id"],
            e,
        )
        return {
            "current_value": original_start_value,
            "start_value": original_start_value,
            "original_start_value": original_start_value,
        }

    return {
        "current_value": current_value(tracker, entries),
        "start_value": adjusted_start_value(tracker, entries),
        "original_start_value": original_start_value,
    }


def calculate_progress_percentage(
    start_value: float, goal_value: float, value: float
) -> float:
    if goal_value == start_value:
        return 0.0
    return (value - start_value) / (goal_value - start_value) * 100


def calculate_target_metrics(
    tracker: TargetTracker,
    values: TargetValues,
    entries: list[Entry],
    today: datetime.date,
) -> TargetMetrics:
    today = to_date(today)
    start_value = values["start_value"]
    goal_value = tracker["goal_value"]
    current = values["current_value"]

    progress_percentage = calculate_progress_percentage(
        start_value, goal_value, current
    )
    display_percentage = min(max(progress_percentage, 0.0), 100.0)

    total_entries = len(entries)
    average_value = (
        sum(_entry_value(entry) for entry in entries) / total_entries
        if total_entries > 0
        else 0.0
    )

    days_until_goal = days_between(today, tracker["goal_date"])
    days_active = days_between(tracker["start_date"], today)
    total_duration = days_between(tracker["start_date"], tracker["goal_date"])
    days_passed = max(0, days_active)

    expected_progress = (
        min(days_passed / total_duration * 100, 100.0) if total_duration > 0 else 0.0
    )
    pace = (goal_value - start_value) * expected_progress / 100 + start_value

    remaining_value = goal_value - current
    if start_value > goal_value:
        remaining_value = -remaining_value
    remaining_value = max(0.0, remaining_value)
    daily_required = remaining_value / days_until_goal if days_until_goal > 0 else 0.0

    daily_rate = (current - start_value) / days_active if days_active > 0 else 0.0
    projected_value_on_goal_date = start_value + daily_rate * total_duration

    return {
        "progress_percentage": progress_percentage,
        "display_percentage": display_percentage,
        "total_entries": total_entries,
        "average_value": average_value,
        "days_until_goal": days_until_goal,
        "days_active": days_active,
        "total_duration": total_duration,
        "expected_progress": expected_progress,
        "ahead_pace": display_percentage >= expected_progress,
        "pace": pace,
        "remaining_value": remaining_value,
        "daily_required": daily_required,
        "projected_value_on_goal_date": projected_value_on_goal_date,
    }
