# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from routine.model.habit import HabitTracker
from routine.model.patch import HabitPatch
from routine.repository.error import StorageError, TrackerNotFoundError
from routine.service.entry import create_habit_entry
from routine.service.habit import calculate_habit_stats, get_habit_periods
from routine.service.patch import apply_habit_patch
from routine.service.tracker import (
    TrackerValidationError,
    build_due,
    build_reminder,
    validate_goal,
    validate_goal_streak,
    validate_time_period,
)
from routine.state import get_app_state, get_store
from routine.template.habit import get_habit_template
from routine.terminal.custom_typer import AliasedTyperGroup
from routine.terminal.parse import (
    parse_date,
    parse_entry_datetime,
    parse_id_list,
    parse_time,
)
from routine.time import today_local
from routine.view.views import entry as entry_report
from routine.view.views import habit as habit_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _load_habit(ctx: typer.Context, id: int) -> HabitTracker:
    try:
        return get_store(ctx).get_habit(id)
    except TrackerNotFoundError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


# ─────────────────────────────────────────────────────────────
# Habit Management
# ─────────────────────────────────────────────────────────────


@app.command("add, a", no_args_is_help=True)
def add(
    ctx: typer.Context,
    name: str,
    goal: Annotated[
        float, typer.Option("--goal", "-g", help="How many times per period")
    ] = 1.0,
    time_period: Annotated[
        str,
        typer.Option("--period", "-p", help="perDay, perWeek, perMonth, perYear"),
    ] = "perDay",
    start_date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start",
            "-s",
            parser=parse_date,
            help="Start date (default: today)",
        ),
    ] = None,
    days: Annotated[
        Optional[list[str]],
        typer.Option(
            "--day",
            "-d",
            help="Due on this weekday (repeatable), e.g. monday",
        ),
    ] = None,
    interval_type: Annotated[
        Optional[str],
        typer.Option("--interval-type", "-it", help="day, week, month, year"),
    ] = None,
    interval_value: Annotated[
        Optional[int],
        typer.Option("--interval", "-i", help="Due every N interval units"),
    ] = None,
    reminder_times: Annotated[
        Optional[list[str]],
        typer.Option(
            "--reminder-time",
            "-rt",
            parser=parse_time,
            help="Reminder time in HH:mm (repeatable)",
        ),
    ] = None,
    reminders: Annotated[
        bool, typer.Option("--reminders/--no-reminders", help="Enable reminders")
    ] = False,
    bad_habit: Annotated[
        bool,
        typer.Option("--bad", "-b", help="Treat the goal as an upper limit"),
    ] = False,
    goal_streak: Annotated[
        Optional[int],
        typer.Option("--goal-streak", "-gs", help="Streak length to aim for"),
    ] = None,
) -> None:
    """Create a new habit."""
    state = get_app_state(ctx)
    config = state["config_repository"].get_config()
    store = state["store"]

    habit = get_habit_template()
    try:
        habit["name"] = name
        habit["goal"] = validate_goal(goal)
        habit["time_period"] = validate_time_period(time_period)
        habit["due"] = build_due(days, interval_type, interval_value)
        habit["reminders"] = build_reminder(
            reminder_times, reminders, config["default_reminder_time"]
        )
        habit["goal_streak"] = validate_goal_streak(goal_streak)
    except TrackerValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)
    if start_date is not None:
        habit["start_date"] = start_date
    habit["bad_habit"] = bad_habit

    id = store.habits.save_new_habit(habit)

    habit_report.single_habit_view(store.get_habit(id))


@app.command("list, ls")
def list_habits(ctx: typer.Context) -> None:
    """List all habits."""
    habits = get_store(ctx).habits.get_all_habits()
    habit_report.habits_view("habits", habits)


@app.command("show, s", no_args_is_help=True)
def show(ctx: typer.Context, id: int) -> None:
    """Show a habit with its streaks and goal progress."""
    habit = _load_habit(ctx, id)
    try:
        entries = get_store(ctx).get_entries_since(id, "habit", habit["start_date"])
    except StorageError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    stats = calculate_habit_stats(habit, entries, today_local())
    habit_report.single_habit_view(habit, stats)


@app.command("modify, m", no_args_is_help=True)
def modify(
    ctx: typer.Context,
    id: int,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    goal: Annotated[Optional[float], typer.Option("--goal", "-g")] = None,
    time_period: Annotated[
        Optional[str],
        typer.Option("--period", "-p", help="perDay, perWeek, perMonth, perYear"),
    ] = None,
    start_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date),
    ] = None,
    days: Annotated[
        Optional[list[str]],
        typer.Option("--day", "-d", help="Replaces the due rule with weekdays"),
    ] = None,
    interval_type: Annotated[
        Optional[str],
        typer.Option("--interval-type", "-it", help="Replaces the due rule"),
    ] = None,
    interval_value: Annotated[
        Optional[int],
        typer.Option("--interval", "-i", help="Replaces the due rule"),
    ] = None,
    reminder_times: Annotated[
        Optional[list[str]],
        typer.Option("--reminder-time", "-rt", parser=parse_time),
    ] = None,
    reminders: Annotated[
        Optional[bool], typer.Option("--reminders/--no-reminders")
    ] = None,
    bad_habit: Annotated[Optional[bool], typer.Option("--bad/--good")] = None,
    goal_streak: Annotated[
        Optional[int], typer.Option("--goal-streak", "-gs")
    ] = None,
    remove_goal_streak: Annotated[
        bool, typer.Option("--remove-goal-streak", "-rgs")
    ] = False,
) -> None:
    """Modify a habit. Options that are not given stay unchanged."""
    state = get_app_state(ctx)
    config = state["config_repository"].get_config()
    store = state["store"]
    habit = _load_habit(ctx, id)

    patch: HabitPatch = {}
    try:
        if name is not None:
            patch["name"] = name
        if goal is not None:
            patch["goal"] = validate_goal(goal)
        if time_period is not None:
            patch["time_period"] = validate_time_period(time_period)
        if start_date is not None:
            patch["start_date"] = start_date
        if days or interval_type is not None or interval_value is not None:
            patch["due"] = build_due(days, interval_type, interval_value)
        if reminder_times or reminders is not None:
            patch["reminders"] = build_reminder(
                reminder_times or habit["reminders"]["times"],
                reminders if reminders is not None else habit["reminders"]["enabled"],
                config["default_reminder_time"],
            )
        if bad_habit is not None:
            patch["bad_habit"] = bad_habit
        if goal_streak is not None:
            patch["goal_streak"] = validate_goal_streak(goal_streak)
        if remove_goal_streak:
            patch["goal_streak"] = None
    except TrackerValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    store.habits.replace_habit(apply_habit_patch(habit, patch))

    habit_report.single_habit_view(store.get_habit(id))


@app.command("delete, d", no_args_is_help=True)
def delete(ctx: typer.Context, id: str) -> None:
    """Delete habits and all of their entries."""
    store = get_store(ctx)
    ids: list[int] = parse_id_list(id)
    for habit_id in ids:
        _load_habit(ctx, habit_id)

    for habit_id in ids:
        try:
            removed = store.delete_habit(habit_id)
        except StorageError as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(1)
        typer.echo(f"Deleted habit {habit_id} and {removed} entries")


# ─────────────────────────────────────────────────────────────
# Entry Management
# ─────────────────────────────────────────────────────────────


@app.command("entry, e", no_args_is_help=True)
def entry(
    ctx: typer.Context,
    habit_id: int,
    done: Annotated[
        Optional[bool],
        typer.Option(
            "--done/--not-done", help="Whether the habit was done (default: done)"
        ),
    ] = None,
    date: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--date",
            "-d",
            parser=parse_entry_datetime,
            help="YYYY-MM-DD or RFC 3339 (default: now)",
        ),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
) -> None:
    """Log an entry for a habit."""
    store = get_store(ctx)
    habit = _load_habit(ctx, habit_id)

    try:
        entry_id = store.entries.save_new_entry(
            create_habit_entry(habit, done, date, note)
        )
    except StorageError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    entry_report.single_entry_view(store.entries.get_entry(entry_id))


@app.command("entries, es", no_args_is_help=True)
def entries(ctx: typer.Context, habit_id: int) -> None:
    """List the entries of a habit since its start date, newest first."""
    habit = _load_habit(ctx, habit_id)
    try:
        habit_entries = get_store(ctx).get_entries_since(
            habit_id, "habit", habit["start_date"]
        )
    except StorageError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    entry_report.entries_view(f"entries for {habit['name']}", habit_entries)


@app.command("stats, st", no_args_is_help=True)
def stats(
    ctx: typer.Context,
    habit_id: int,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help="As of (default: today)"),
    ] = None,
    limit: Annotated[
        int, typer.Option("--limit", "-l", help="Number of periods to list")
    ] = 14,
) -> None:
    """Show per-period completion, streaks and goal progress of a habit."""
    habit = _load_habit(ctx, habit_id)
    today = date if date is not None else today_local()
    try:
        habit_entries = get_store(ctx).get_entries_since(
            habit_id, "habit", habit["start_date"]
        )
    except StorageError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    periods = get_habit_periods(habit, habit_entries, today)
    habit_report.habit_stats_view(
        habit,
        calculate_habit_stats(habit, habit_entries, today),
        periods,
        limit,
    )
