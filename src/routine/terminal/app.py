# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer

from routine import configuration
from routine.initialize import initialize
from routine.log import configure_logging
from routine.repository.configuration import ConfigurationRepository
from routine.repository.store import Store
from routine.state import AppState
from routine.terminal import configuration as configuration_terminal
from routine.terminal import entry, habit, target
from routine.terminal.custom_typer import OrderedAliasedTyperGroup
from routine.terminal.dashboard import dashboard, trackers
from routine.view.views.header import set_show_header

logger = logging.getLogger(__name__)

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Routine - Habit and target tracking in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration_terminal.app, name="config, c")
app.add_typer(habit.app, name="habit, h")
app.add_typer(target.app, name="target, t")
app.add_typer(entry.app, name="entry, e")
app.command(name="dashboard, d")(dashboard)
app.command(name="trackers, tr")(trackers)


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    Routine - Habit and target tracking in the CLI

    Global options that apply to all commands.
    """
    config_repository = ConfigurationRepository(configuration.get_app_config_path())
    data_path = initialize(config_repository)
    config = config_repository.get_config()

    configure_logging("DEBUG" if verbose else config["log_level"])
    set_show_header(config["show_header"] and not no_header)

    store = Store(data_path)
    state: AppState = {"config_repository": config_repository, "store": store}
    ctx.obj = state
    logger.debug("Using data directory %s", data_path)

    def flush() -> None:
        store.flush()
        config_repository.flush()

    ctx.call_on_close(flush)


def run() -> None:
    app()
