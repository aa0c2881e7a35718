# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from routine.model.target import TargetTracker
from routine.service.dashboard import TargetWithValues
from routine.service.target import (
    TargetMetrics,
    TargetValues,
    calculate_progress_percentage,
)
from routine.time import (
    date_to_display_str,
    date_to_str,
    datetime_to_display_local_datetime_str,
)
from routine.view.util import (
    format_due,
    format_number,
    format_percentage,
    format_reminders,
)
from routine.view.views.header import header


def format_progress(target: TargetTracker, values: TargetValues) -> str:
    percentage = calculate_progress_percentage(
        values["start_value"], target["goal_value"], values["current_value"]
    )
    return format_percentage(min(max(percentage, 0.0), 100.0))


def targets_view(
    report_name: str,
    targets: list[TargetWithValues],
    columns: list[str] = ["id", "name", "current", "goal", "progress", "goal_date"],
) -> None:
    """Display list of targets with their current values."""
    header(report_name)

    targets_table = Table(box=box.SIMPLE)
    for column in columns:
        targets_table.add_column(column)

    for item in targets:
        target = item["tracker"]
        values = item["values"]
        row = []
        for column in columns:
            column_value = ""
            if column == "current":
                column_value = format_number(values["current_value"])
            elif column == "start":
                column_value = format_number(values["start_value"])
            elif column == "goal":
                column_value = format_number(target["goal_value"])
            elif column == "progress":
                column_value = format_progress(target, values)
            elif column == "goal_date":
                column_value = date_to_str(target["goal_date"])
            elif column == "due":
                column_value = format_due(target["due"])
            elif target.get(column) is not None:
                column_value = str(target[column])  # type: ignore[literal-required]
            row.append(column_value)
        targets_table.add_row(*row)

    console = Console()
    console.print(targets_table)


def single_target_view(
    target: TargetTracker,
    values: TargetValues,
    metrics: Optional[TargetMetrics] = None,
) -> None:
    """Display detailed view of a single target."""
    header("target")

    target_table = Table(box=box.SIMPLE)
    target_table.add_column("property")
    target_table.add_column("value")

    target_table.add_row("id", str(target["id"]))
    target_table.add_row("name", target["name"])
    target_table.add_row("current_value", format_number(values["current_value"]))
    start_value = format_number(values["start_value"])
    if values["start_value"] != values["original_start_value"]:
        start_value += f" (set: {format_number(values['original_start_value'])})"
    target_table.add_row("start_value", start_value)
    target_table.add_row("goal_value", format_number(target["goal_value"]))
    target_table.add_row("start_date", date_to_display_str(target["start_date"]))
    target_table.add_row("goal_date", date_to_display_str(target["goal_date"]))
    target_table.add_row("mode", "add to total" if target["add_to_total"] else "replace")
    target_table.add_row(
        "use_actual_bounds", "yes" if target["use_actual_bounds"] else "no"
    )
    target_table.add_row("trend_weight_type", target["trend_weight_type"])
    target_table.add_row("due", format_due(target["due"]))
    target_table.add_row("reminders", format_reminders(target["reminders"]))

    if metrics is not None:
        target_table.add_row(
            "progress", format_percentage(metrics["display_percentage"])
        )
        target_table.add_row(
            "expected_progress", format_percentage(metrics["expected_progress"])
        )
        target_table.add_row(
            "pace",
            f"{format_number(metrics['pace'])} "
            f"({'ahead' if metrics['ahead_pace'] else 'behind'})",
        )
        target_table.add_row("entries", str(metrics["total_entries"]))
        target_table.add_row("average_value", format_number(metrics["average_value"]))
        target_table.add_row("remaining_value", format_number(metrics["remaining_value"]))
        target_table.add_row("days_until_goal", str(metrics["days_until_goal"]))
        target_table.add_row("daily_required", format_number(metrics["daily_required"]))
        target_table.add_row(
            "projected_on_goal_date",
            format_number(metrics["projected_value_on_goal_date"]),
        )

    target_table.add_row(
        "created", datetime_to_display_local_datetime_str(target["created"])
    )
    target_table.add_row(
        "updated", datetime_to_display_local_datetime_str(target["updated"])
    )

    console = Console()
    console.print(target_table)
