# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast, get_args

from routine.model.due import Due, DueType, IntervalType, Reminder
from routine.model.habit import TimePeriod
from routine.model.target import TrendWeightType
from routine.template.due import get_due_template
from routine.time import WEEKDAY_NAMES

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class TrackerValidationError(Exception):
    """Raised when tracker settings are invalid."""

    pass


def validate_due(due: Due) -> Due:
    """
    Check the active branch of a due rule.

    The branch that does not match the rule's type is ignored.
    """
    if due["type"] not in get_args(DueType):
        raise TrackerValidationError(
            f"Invalid due type: {due['type']}. "
            f"Valid options: {', '.join(get_args(DueType))}"
        )

    if due["type"] == "specificDays":
        days = due["specific_days"] or []
        if len(days) == 0:
            raise TrackerValidationError("At least one weekday is required")
        for day in days:
            if day.lower() not in WEEKDAY_NAMES:
                raise TrackerValidationError(f"Invalid weekday: {day}")
        return due

    if due["interval_type"] not in get_args(IntervalType):
        raise TrackerValidationError(
            f"Invalid interval type: {due['interval_type']}. "
            f"Valid options: {', '.join(get_args(IntervalType))}"
        )
    if due["interval_value"] is None or due["interval_value"] < 1:
        raise TrackerValidationError("Interval value must be a positive integer")
    return due


def build_due(
    days: Optional[list[str]] = None,
    interval_type: Optional[str] = None,
    interval_value: Optional[int] = None,
) -> Due:
    """
    Due rule from command line options.

    Weekdays select a specific-days rule; otherwise an interval rule is built,
    defaulting to every day.
    """
    if days:
        if interval_type is not None or interval_value is not None:
            raise TrackerValidationError(
                "Weekdays cannot be combined with an interval"
            )
        return validate_due(
            {
                "type": "specificDays",
                "specific_days": [day.lower() for day in days],
                "interval_type": None,
                "interval_value": None,
            }
        )

    due = get_due_template()
    if interval_type is not None:
        due["interval_type"] = cast(IntervalType, interval_type)
    if interval_value is not None:
        due["interval_value"] = interval_value
    return validate_due(due)


def validate_reminder_times(times: list[str]) -> list[str]:
    for reminder_time in times:
        if not _TIME_PATTERN.match(reminder_time):
            raise TrackerValidationError(
                f"Reminder time must be in HH:mm format, got '{reminder_time}'"
            )
    return times


def build_reminder(
    times: Optional[list[str]], enabled: bool, default_time: str = "18:00"
) -> Reminder:
    reminder_times = validate_reminder_times(list(times or []))
    if enabled and len(reminder_times) == 0:
        reminder_times = [default_time]
    return {"times": reminder_times, "enabled": enabled}


def validate_time_period(time_period: str) -> TimePeriod:
    if time_period not in get_args(TimePeriod):
        raise TrackerValidationError(
            f"Invalid time period: {time_period}. "
            f"Valid options: {', '.join(get_args(TimePeriod))}"
        )
    return cast(TimePeriod, time_period)


def validate_trend_weight_type(trend_weight_type: str) -> TrendWeightType:
    if trend_weight_type not in get_args(TrendWeightType):
        raise TrackerValidationError(
            f"Invalid trend weight type: {trend_weight_type}. "
            f"Valid options: {', '.join(get_args(TrendWeightType))}"
        )
    return cast(TrendWeightType, trend_weight_type)


def validate_goal(goal: float) -> float:
    if goal < 0:
        raise TrackerValidationError("Goal cannot be negative")
    return goal


def validate_goal_streak(goal_streak: Optional[int]) -> Optional[int]:
    if goal_streak is not None and goal_streak < 1:
        raise TrackerValidationError("Goal streak must be a positive integer")
    return goal_streak
