# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from routine import configuration
from routine.state import get_app_state
from routine.terminal.custom_typer import AliasedTyperGroup
from routine.terminal.parse import parse_time

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _configuration_table(config: configuration.Configuration, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "data_path",
        str(configuration.resolve_data_path(config))
        + ("" if config["data_path"] else " (default)"),
    )
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("default_reminder_time", config["default_reminder_time"])
    return table


@app.command("show, v")
def show(ctx: typer.Context) -> None:
    """Display current configuration settings."""
    config_repository = get_app_state(ctx)["config_repository"]

    console = Console()
    console.print(
        _configuration_table(config_repository.get_config(), "Configuration")
    )
    console.print()
    console.print(f"Config file: {config_repository.path}")

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    ctx: typer.Context,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory holding habits, targets and entries"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Go back to the default data directory"),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Print report headers"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
    default_reminder_time: Annotated[
        Optional[str],
        typer.Option(
            "--default-reminder-time",
            parser=parse_time,
            help="Reminder time used when reminders are enabled without one",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None and log_level.upper() not in configuration.LOG_LEVELS:
        raise typer.BadParameter(
            f"Log level must be one of {', '.join(configuration.LOG_LEVELS)}",
            param_hint="--log-level",
        )

    config_repository = get_app_state(ctx)["config_repository"]
    config_repository.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        log_level=log_level,
        default_reminder_time=default_reminder_time,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(
        _configuration_table(
            config_repository.get_config(), "Updated Configuration"
        )
    )
