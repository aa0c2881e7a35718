# SPDX-License-Identifier: MIT

from typing import TypedDict, cast

import click

from routine.repository.configuration import ConfigurationRepository
from routine.repository.store import Store


class AppState(TypedDict):
    config_repository: ConfigurationRepository
    store: Store


def get_app_state(ctx: click.Context) -> AppState:
    return cast(AppState, ctx.find_root().obj)


def get_store(ctx: click.Context) -> Store:
    return get_app_state(ctx)["store"]
