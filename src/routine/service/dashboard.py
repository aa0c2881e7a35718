# SPDX-License-Identifier: MIT

import datetime
import logging
from typing import TypedDict, cast

import pendulum

from routine.model.habit import HabitTracker
from routine.model.target import TargetTracker
from routine.repository.error import StorageError
from routine.repository.store import Store
from routine.service.due import is_due
from routine.service.habit import get_habit_periods, get_running_streak
from routine.service.target import TargetValues, resolve_target_values
from routine.time import datetime_to_utc_date, to_date, weekday_name

logger = logging.getLogger(__name__)


class HabitWithStatus(TypedDict):
    tracker: HabitTracker
    completed: int  # done entries on the dashboard date
    streak: int


class TargetWithValues(TypedDict):
    tracker: TargetTracker
    values: TargetValues


class Dashboard(TypedDict):
    date: pendulum.Date
    habits: list[HabitWithStatus]
    targets: list[TargetWithValues]


def with_values(store: Store, targets: list[TargetTracker]) -> list[TargetWithValues]:
    return [
        {"tracker": target, "values": resolve_target_values(store, target)}
        for target in targets
    ]


def with_status(
    store: Store, habits: list[HabitTracker], date: datetime.date
) -> list[HabitWithStatus]:
    date = to_date(date)
    result: list[HabitWithStatus] = []
    for habit in habits:
        try:
            entries = store.get_entries_since(
                cast(int, habit["id"]), "habit", habit["start_date"]
            )
        except StorageError as e:
            logger.warning("Could not load entries for habit %s: %s", habit["id"], e)
            entries = []

        completed = sum(
            1
            for entry in entries
            if entry["done"] and datetime_to_utc_date(entry["date"]) == date
        )
        periods = get_habit_periods(habit, entries, date)
        result.append(
            {
                "tracker": habit,
                "completed": completed,
                "streak": get_running_streak(habit, periods),
            }
        )
    return result


def build_dashboard(store: Store, date: datetime.date) -> Dashboard:
    """Habits and targets due on date, with their progress."""
    date = to_date(date)
    weekday = weekday_name(date)

    habits = [
        habit
        for habit in store.habits.get_all_habits()
        if is_due(habit["due"], habit["start_date"], date, weekday)
    ]
    targets = [
        target
        for target in store.targets.get_all_targets()
        if is_due(target["due"], target["start_date"], date, weekday)
    ]
    logger.debug(
        "Dashboard for %s: %d habit(s), %d target(s) due",
        date,
        len(habits),
        len(targets),
    )

    return {
        "date": date,
        "habits": with_status(store, habits, date),
        "targets": with_values(store, targets),
    }
