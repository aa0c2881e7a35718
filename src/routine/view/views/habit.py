# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from routine.model.habit import HabitTracker
from routine.service.habit import HabitPeriod, HabitStats
from routine.time import (
    date_to_display_str,
    date_to_str,
    datetime_to_display_local_datetime_str,
)
from routine.view.util import (
    format_due,
    format_goal,
    format_percentage,
    format_reminders,
    format_streak,
)
from routine.view.views.header import header


def habits_view(
    report_name: str,
    habits: list[HabitTracker],
    columns: list[str] = ["id", "name", "goal", "due", "start_date"],
) -> None:
    """Display list of habits in a table."""
    header(report_name)

    habits_table = Table(box=box.SIMPLE)
    for column in columns:
        habits_table.add_column(column)

    for habit in habits:
        row = []
        for column in columns:
            column_value = ""
            if column == "goal":
                column_value = format_goal(habit)
            elif column == "due":
                column_value = format_due(habit["due"])
            elif column == "start_date":
                column_value = date_to_str(habit["start_date"])
            elif column == "reminders":
                column_value = format_reminders(habit["reminders"])
            elif habit.get(column) is not None:
                column_value = str(habit[column])  # type: ignore[literal-required]
            row.append(column_value)
        habits_table.add_row(*row)

    console = Console()
    console.print(habits_table)


def single_habit_view(habit: HabitTracker, stats: Optional[HabitStats] = None) -> None:
    """Display detailed view of a single habit."""
    header("habit")

    habit_table = Table(box=box.SIMPLE)
    habit_table.add_column("property")
    habit_table.add_column("value")

    habit_table.add_row("id", str(habit["id"]))
    habit_table.add_row("name", habit["name"])
    habit_table.add_row("goal", format_goal(habit))
    habit_table.add_row("start_date", date_to_display_str(habit["start_date"]))
    habit_table.add_row("due", format_due(habit["due"]))
    habit_table.add_row("reminders", format_reminders(habit["reminders"]))
    habit_table.add_row("bad_habit", "yes" if habit["bad_habit"] else "no")
    habit_table.add_row(
        "goal_streak",
        str(habit["goal_streak"]) if habit["goal_streak"] is not None else "",
    )
    if stats is not None:
        habit_table.add_row("current_streak", format_streak(stats["current_streak"]))
        habit_table.add_row("best_streak", format_streak(stats["best_streak"]))
        habit_table.add_row(
            "goal_progress",
            f"{format_percentage(stats['goal_progress']['percentage'])} "
            f"({stats['goal_progress']['completed_periods']}"
            f"/{stats['goal_progress']['total_periods']})",
        )
    habit_table.add_row(
        "created", datetime_to_display_local_datetime_str(habit["created"])
    )
    habit_table.add_row(
        "updated", datetime_to_display_local_datetime_str(habit["updated"])
    )

    console = Console()
    console.print(habit_table)


def habit_stats_view(
    habit: HabitTracker,
    stats: HabitStats,
    periods: list[HabitPeriod],
    limit: int = 14,
) -> None:
    """
    Display statistics and the most recent periods of a habit.

    Drink water - stats

    period        count   goal met
    ───────────────────────────────
    2024-01-14    8       X
    2024-01-13    5       -
    """
    header("habit-stats")

    console = Console()
    console.print(f"\n[bold]{habit['name']}[/bold] - {format_goal(habit)}")

    summary_table = Table(box=box.SIMPLE)
    summary_table.add_column("stat")
    summary_table.add_column("value")
    summary_table.add_row("entries", str(stats["total_entries"]))
    summary_table.add_row("completed", str(stats["completed_entries"]))
    summary_table.add_row("current_streak", format_streak(stats["current_streak"]))
    summary_table.add_row("best_streak", format_streak(stats["best_streak"]))
    summary_table.add_row(
        "goal_progress",
        f"{format_percentage(stats['goal_progress']['percentage'])} "
        f"({stats['goal_progress']['completed_periods']}"
        f"/{stats['goal_progress']['total_periods']})",
    )
    if habit["goal_streak"] is not None:
        reached = "reached" if stats["goal_streak_reached"] else "open"
        summary_table.add_row("goal_streak", f"{habit['goal_streak']} ({reached})")
    console.print(summary_table)

    periods_table = Table(box=box.SIMPLE)
    periods_table.add_column("period")
    periods_table.add_column("count")
    periods_table.add_column("goal met")

    # Newest first
    for period in list(reversed(periods))[:limit]:
        label = date_to_str(period["start"])
        if period["end"] != period["start"]:
            label += f" - {date_to_str(period['end'])}"
        if period["is_current"]:
            label += " *"
        periods_table.add_row(
            label,
            str(period["count"]),
            "X" if period["goal_met"] else "-",
        )
    console.print(periods_table)
