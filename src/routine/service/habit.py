# SPDX-License-Identifier: MIT

import datetime
from typing import TypedDict

import pendulum

from routine.model.entry import Entry
from routine.model.habit import HabitTracker, TimePeriod
from routine.time import datetime_to_utc_date, to_date


class HabitPeriod(TypedDict):
    start: pendulum.Date
    end: pendulum.Date  # inclusive
    count: int
    goal_met: bool
    is_current: bool


class Streaks(TypedDict):
    current: int  # negative for a run of missed periods
    best: int


class GoalProgress(TypedDict):
    percentage: int
    completed_periods: int
    total_periods: int


class HabitStats(TypedDict):
    total_entries: int
    completed_entries: int
    current_streak: int
    best_streak: int
    goal_progress: GoalProgress
    goal_streak_reached: bool


PERIOD_UNITS: dict[TimePeriod, str] = {
    "perDay": "day",
    "perWeek": "week",
    "perMonth": "month",
    "perYear": "year",
}


def get_period_boundaries(
    time_period: TimePeriod, reference: datetime.date
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    First and last calendar day of the period containing reference.

    Weeks start on Monday.
    """
    date = to_date(reference)
    match time_period:
        case "perWeek":
            return date.start_of("week"), date.end_of("week")
        case "perMonth":
            return date.start_of("month"), date.end_of("month")
        case "perYear":
            return date.start_of("year"), date.end_of("year")
        case _:
            return date, date


def is_goal_met(habit: HabitTracker, count: int) -> bool:
    # Bad habits treat the goal as a ceiling
    if habit["bad_habit"]:
        return count <= habit["goal"]
    return count >= habit["goal"]


def get_habit_periods(
    habit: HabitTracker, entries: list[Entry], today: datetime.date
) -> list[HabitPeriod]:
    """
    Every period from the one holding the habit's start date through the one
    holding today, oldest first, with the number of completed entries in each.
    """
    today = to_date(today)
    start_date = to_date(habit["start_date"])
    if start_date > today:
        return []

    done_dates = [
        datetime_to_utc_date(entry["date"]) for entry in entries if entry["done"]
    ]

    periods: list[HabitPeriod] = []
    period_start, period_end = get_period_boundaries(habit["time_period"], start_date)
    while period_start <= today:
        count = sum(1 for date in done_dates if period_start <= date <= period_end)
        periods.append(
            {
                "start": period_start,
                "end": period_end,
                "count": count,
                "goal_met": is_goal_met(habit, count),
                "is_current": period_start <= today <= period_end,
            }
        )
        period_start, period_end = get_period_boundaries(
            habit["time_period"], period_end.add(days=1)
        )

    return periods


def _counting_periods(periods: list[HabitPeriod]) -> list[HabitPeriod]:
    # The running period only counts once its goal is already met
    return [
        period for period in periods if not period["is_current"] or period["goal_met"]
    ]


def calculate_streaks(periods: list[HabitPeriod]) -> Streaks:
    current = 0
    positive = None
    for period in reversed(_counting_periods(periods)):
        if positive is None:
            positive = period["goal_met"]
            current = 1
        elif period["goal_met"] == positive:
            current += 1
        else:
            break

    best_met = 0
    best_missed = 0
    met_run = 0
    missed_run = 0
    for period in _counting_periods(periods):
        if period["goal_met"]:
            met_run += 1
            missed_run = 0
            best_met = max(best_met, met_run)
        else:
            missed_run += 1
            met_run = 0
            best_missed = max(best_missed, missed_run)

    return {
        "current": current if positive else -current,
        "best": best_met if best_met > 0 else -best_missed,
    }


def calculate_goal_progress(periods: list[HabitPeriod]) -> GoalProgress:
    counting = _counting_periods(periods)
    completed = sum(1 for period in counting if period["goal_met"])
    total = len(counting)
    return {
        "percentage": round(completed / total * 100) if total > 0 else 0,
        "completed_periods": completed,
        "total_periods": total,
    }


def get_running_streak(habit: HabitTracker, periods: list[HabitPeriod]) -> int:
    """
    Streak of met periods for at-a-glance display; never negative.

    A bad habit that has already gone over its limit in the running period
    (or was done at all today, for daily habits) has no streak.
    """
    if habit["bad_habit"] and len(periods) > 0 and periods[-1]["is_current"]:
        count = periods[-1]["count"]
        if habit["time_period"] == "perDay":
            if count > 0:
                return 0
        elif count > habit["goal"]:
            return 0

    return max(calculate_streaks(periods)["current"], 0)


def calculate_habit_stats(
    habit: HabitTracker, entries: list[Entry], today: datetime.date
) -> HabitStats:
    """Stats as of today; entries dated after today are left out."""
    today = to_date(today)
    entries = [
        entry for entry in entries if datetime_to_utc_date(entry["date"]) <= today
    ]
    periods = get_habit_periods(habit, entries, today)
    streaks = calculate_streaks(periods)
    goal_streak = habit["goal_streak"]

    return {
        "total_entries": len(entries),
        "completed_entries": sum(1 for entry in entries if entry["done"]),
        "current_streak": streaks["current"],
        "best_streak": streaks["best"],
        "goal_progress": calculate_goal_progress(periods),
        "goal_streak_reached": goal_streak is not None
        and streaks["current"] >= goal_streak,
    }
