# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from routine.model.patch import TargetPatch
from routine.model.target import TargetTracker
from routine.repository.error import StorageError, TrackerNotFoundError
from routine.service.dashboard import with_values
from routine.service.entry import EntryValidationError, create_target_entry
from routine.service.patch import apply_target_patch
from routine.service.target import (
    calculate_target_metrics,
    load_target_entries,
    resolve_target_values,
)
from routine.service.tracker import (
    TrackerValidationError,
    build_due,
    build_reminder,
    validate_trend_weight_type,
)
from routine.state import get_app_state, get_store
from routine.template.target import get_target_template
from routine.terminal.custom_typer import AliasedTyperGroup
from routine.terminal.parse import (
    parse_date,
    parse_entry_datetime,
    parse_id_list,
    parse_time,
)
from routine.time import today_local
from routine.view.views import entry as entry_report
from routine.view.views import target as target_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _load_target(ctx: typer.Context, id: int) -> TargetTracker:
    try:
        return get_store(ctx).get_target(id)
    except TrackerNotFoundError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)


# ─────────────────────────────────────────────────────────────
# Target Management
# ─────────────────────────────────────────────────────────────


@app.command("add, a", no_args_is_help=True)
def add(
    ctx: typer.Context,
    name: str,
    goal_value: Annotated[
        float, typer.Option("--goal", "-g", help="Value to reach")
    ],
    start_value: Annotated[
        float, typer.Option("--start-value", "-sv", help="Value at the start date")
    ] = 0.0,
    start_date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--start",
            "-s",
            parser=parse_date,
            help="Start date (default: today)",
        ),
    ] = None,
    goal_date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--goal-date",
            "-gd",
            parser=parse_date,
            help="Date to reach the goal by (default: start date)",
        ),
    ] = None,
    add_to_total: Annotated[
        bool,
        typer.Option(
            "--add-to-total/--replace",
            help="Entries add up onto the start value instead of replacing it",
        ),
    ] = False,
    use_actual_bounds: Annotated[
        bool,
        typer.Option(
            "--actual-bounds/--no-actual-bounds",
            help="Widen the start value to the lowest/highest value reached",
        ),
    ] = False,
    trend_weight_type: Annotated[
        str,
        typer.Option(
            "--trend",
            help="none, linear, sqrt, quadratic, exponential_low",
        ),
    ] = "none",
    days: Annotated[
        Optional[list[str]],
        typer.Option("--day", "-d", help="Due on this weekday (repeatable)"),
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
        typer.Option("--reminder-time", "-rt", parser=parse_time),
    ] = None,
    reminders: Annotated[
        bool, typer.Option("--reminders/--no-reminders", help="Enable reminders")
    ] = False,
) -> None:
    """Create a new target."""
    state = get_app_state(ctx)
    config = state["config_repository"].get_config()
    store = state["store"]

    target = get_target_template()
    try:
        target["name"] = name
        target["trend_weight_type"] = validate_trend_weight_type(trend_weight_type)
        target["due"] = build_due(days, interval_type, interval_value)
        target["reminders"] = build_reminder(
            reminder_times, reminders, config["default_reminder_time"]
        )
    except TrackerValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)
    target["start_value"] = start_value
    target["goal_value"] = goal_value
    if start_date is not None:
        target["start_date"] = start_date
    target["goal_date"] = goal_date if goal_date is not None else target["start_date"]
    target["add_to_total"] = add_to_total
    target["use_actual_bounds"] = use_actual_bounds

    id = store.targets.save_new_target(target)

    new_target = store.get_target(id)
    target_report.single_target_view(
        new_target, resolve_target_values(store, new_target)
    )


@app.command("list, ls")
def list_targets(ctx: typer.Context) -> None:
    """List all targets with their current values."""
    store = get_store(ctx)
    target_report.targets_view(
        "targets", with_values(store, store.targets.get_all_targets())
    )


@app.command("show, s", no_args_is_help=True)
def show(ctx: typer.Context, id: int) -> None:
    """Show a target with its progress and pace."""
    store = get_store(ctx)
    target = _load_target(ctx, id)
    values = resolve_target_values(store, target)

    try:
        entries = load_target_entries(store, target)
    except StorageError:
        # Already reported while resolving values
        target_report.single_target_view(target, values)
        return

    metrics = calculate_target_metrics(target, values, entries, today_local())
    target_report.single_target_view(target, values, metrics)


@app.command("modify, m", no_args_is_help=True)
def modify(
    ctx: typer.Context,
    id: int,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    goal_value: Annotated[Optional[float], typer.Option("--goal", "-g")] = None,
    start_value: Annotated[
        Optional[float], typer.Option("--start-value", "-sv")
    ] = None,
    start_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date),
    ] = None,
    goal_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--goal-date", "-gd", parser=parse_date),
    ] = None,
    add_to_total: Annotated[
        Optional[bool], typer.Option("--add-to-total/--replace")
    ] = None,
    use_actual_bounds: Annotated[
        Optional[bool], typer.Option("--actual-bounds/--no-actual-bounds")
    ] = None,
    trend_weight_type: Annotated[Optional[str], typer.Option("--trend")] = None,
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
) -> None:
    """Modify a target. Options that are not given stay unchanged."""
    state = get_app_state(ctx)
    config = state["config_repository"].get_config()
    store = state["store"]
    target = _load_target(ctx, id)

    patch: TargetPatch = {}
    try:
        if name is not None:
            patch["name"] = name
        if goal_value is not None:
            patch["goal_value"] = goal_value
        if start_value is not None:
            patch["start_value"] = start_value
        if start_date is not None:
            patch["start_date"] = start_date
        if goal_date is not None:
            patch["goal_date"] = goal_date
        if add_to_total is not None:
            patch["add_to_total"] = add_to_total
        if use_actual_bounds is not None:
            patch["use_actual_bounds"] = use_actual_bounds
        if trend_weight_type is not None:
            patch["trend_weight_type"] = validate_trend_weight_type(trend_weight_type)
        if days or interval_type is not None or interval_value is not None:
            patch["due"] = build_due(days, interval_type, interval_value)
        if reminder_times or reminders is not None:
            patch["reminders"] = build_reminder(
                reminder_times or target["reminders"]["times"],
                reminders if reminders is not None else target["reminders"]["enabled"],
                config["default_reminder_time"],
            )
    except TrackerValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    store.targets.replace_target(apply_target_patch(target, patch))

    modified_target = store.get_target(id)
    target_report.single_target_view(
        modified_target, resolve_target_values(store, modified_target)
    )


@app.command("delete, d", no_args_is_help=True)
def delete(ctx: typer.Context, id: str) -> None:
    """Delete targets and all of their entries."""
    store = get_store(ctx)
    ids: list[int] = parse_id_list(id)
    for target_id in ids:
        _load_target(ctx, target_id)

    for target_id in ids:
        try:
            removed = store.delete_target(target_id)
        except StorageError as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(1)
        typer.echo(f"Deleted target {target_id} and {removed} entries")


# ─────────────────────────────────────────────────────────────
# Entry Management
# ─────────────────────────────────────────────────────────────


@app.command("entry, e", no_args_is_help=True)
def entry(
    ctx: typer.Context,
    target_id: int,
    value: Annotated[
        Optional[float],
        typer.Option("--value", "-v", help="Value reached (or amount to add)"),
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
    """Log a value for a target."""
    store = get_store(ctx)
    target = _load_target(ctx, target_id)

    try:
        new_entry = create_target_entry(target, value, date, note)
        entry_id = store.entries.save_new_entry(new_entry)
    except (EntryValidationError, StorageError) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    entry_report.single_entry_view(store.entries.get_entry(entry_id))


@app.command("entries, es", no_args_is_help=True)
def entries(ctx: typer.Context, target_id: int) -> None:
    """List the entries of a target since its start date, newest first."""
    store = get_store(ctx)
    target = _load_target(ctx, target_id)
    try:
        target_entries = load_target_entries(store, target)
    except StorageError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    entry_report.entries_view(f"entries for {target['name']}", target_entries)
