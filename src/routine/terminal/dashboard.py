# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from routine.service.dashboard import build_dashboard, with_values
from routine.state import get_store
from routine.terminal.parse import parse_date
from routine.time import today_local
from routine.view.views import dashboard as dashboard_report
from routine.view.views import habit as habit_report
from routine.view.views import target as target_report


def dashboard(
    ctx: typer.Context,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--date",
            "-d",
            parser=parse_date,
            help="YYYY-MM-DD, a day offset, today, yesterday or tomorrow",
        ),
    ] = None,
) -> None:
    """Show the habits and targets due on a day (default: today)."""
    store = get_store(ctx)
    dashboard_report.dashboard_view(
        build_dashboard(store, date if date is not None else today_local())
    )


def trackers(ctx: typer.Context) -> None:
    """List every habit and target."""
    store = get_store(ctx)
    habit_report.habits_view("habits", store.habits.get_all_habits())
    target_report.targets_view(
        "targets", with_values(store, store.targets.get_all_targets())
    )
