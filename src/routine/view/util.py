# SPDX-License-Identifier: MIT

from typing import Optional

from routine.model.due import Due, Reminder
from routine.model.habit import HabitTracker
from routine.service.habit import PERIOD_UNITS


def format_number(value: Optional[float]) -> str:
    """Drop a trailing .0 so whole numbers read naturally."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_due(due: Due) -> str:
    if due["type"] == "specificDays":
        days = due["specific_days"] or []
        return ", ".join(day[:3] for day in days)

    value = due["interval_value"]
    unit = due["interval_type"] or ""
    if value == 1:
        return f"every {unit}"
    return f"every {value} {unit}s"


def format_reminders(reminders: Reminder) -> str:
    if not reminders["enabled"]:
        return "off"
    return ", ".join(reminders["times"])


def format_goal(habit: HabitTracker) -> str:
    limit = "at most" if habit["bad_habit"] else "at least"
    unit = PERIOD_UNITS[habit["time_period"]]
    return f"{limit} {format_number(habit['goal'])} per {unit}"


def format_streak(streak: int) -> str:
    if streak < 0:
        return f"[red]{streak}[/red]"
    if streak > 0:
        return f"[green]{streak}[/green]"
    return "0"


def format_percentage(percentage: float) -> str:
    return f"{percentage:.0f}%"


def format_done(done: Optional[bool]) -> str:
    if done is None:
        return ""
    return "X" if done else "-"
