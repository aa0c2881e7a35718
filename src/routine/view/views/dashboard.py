# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from routine.service.dashboard import Dashboard
from routine.time import date_to_display_str
from routine.view.util import format_goal, format_number
from routine.view.views.header import header
from routine.view.views.target import format_progress


def dashboard_view(dashboard: Dashboard) -> None:
    """
    Display the trackers due on the dashboard date.

    id   habit          goal                 done    streak
    ──────────────────────────────────────────────────────
    1    Drink water    at least 8 per day   5       3
    """
    header(f"dashboard {date_to_display_str(dashboard['date'])}")

    console = Console()

    if len(dashboard["habits"]) == 0 and len(dashboard["targets"]) == 0:
        console.print("\n Nothing due.")
        return

    if len(dashboard["habits"]) > 0:
        habits_table = Table(box=box.SIMPLE)
        habits_table.add_column("id")
        habits_table.add_column("habit")
        habits_table.add_column("goal")
        habits_table.add_column("done")
        habits_table.add_column("streak")

        for item in dashboard["habits"]:
            habit = item["tracker"]
            habits_table.add_row(
                str(habit["id"]),
                habit["name"],
                format_goal(habit),
                str(item["completed"]),
                str(item["streak"]),
            )
        console.print(habits_table)

    if len(dashboard["targets"]) > 0:
        targets_table = Table(box=box.SIMPLE)
        targets_table.add_column("id")
        targets_table.add_column("target")
        targets_table.add_column("current")
        targets_table.add_column("goal")
        targets_table.add_column("progress")

        for target_item in dashboard["targets"]:
            target = target_item["tracker"]
            values = target_item["values"]
            targets_table.add_row(
                str(target["id"]),
                target["name"],
                format_number(values["current_value"]),
                format_number(target["goal_value"]),
                format_progress(target, values),
            )
        console.print(targets_table)
