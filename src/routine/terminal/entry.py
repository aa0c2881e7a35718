# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from routine.model.patch import EntryPatch
from routine.repository.error import EntryNotFoundError, StorageError
from routine.service.entry import EntryValidationError, validate_entry_patch
from routine.service.patch import apply_entry_patch
from routine.state import get_store
from routine.terminal.custom_typer import AliasedTyperGroup
from routine.terminal.parse import parse_entry_datetime, parse_id_list
from routine.view.views import entry as entry_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, ls")
def list_entries(
    ctx: typer.Context,
    limit: Annotated[
        Optional[int], typer.Option("--limit", "-l", help="Show only the newest N")
    ] = None,
) -> None:
    """List entries of every tracker, newest first."""
    try:
        entries = get_store(ctx).entries.get_all_entries()
    except StorageError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    if limit is not None:
        entries = entries[:limit]
    entry_report.entries_view("entries", entries)


@app.command("modify, m", no_args_is_help=True)
def modify(
    ctx: typer.Context,
    id: int,
    value: Annotated[Optional[float], typer.Option("--value", "-v")] = None,
    done: Annotated[Optional[bool], typer.Option("--done/--not-done")] = None,
    date: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--date",
            "-d",
            parser=parse_entry_datetime,
            help="YYYY-MM-DD or RFC 3339",
        ),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
    remove_note: Annotated[bool, typer.Option("--remove-note", "-rn")] = False,
) -> None:
    """Modify an entry. Options that are not given stay unchanged."""
    store = get_store(ctx)
    try:
        entry = store.entries.get_entry(id)
    except (EntryNotFoundError, StorageError) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    patch: EntryPatch = {}
    if value is not None:
        patch["value"] = value
    if done is not None:
        patch["done"] = done
    if date is not None:
        patch["date"] = date
    if note is not None:
        patch["note"] = note
    if remove_note:
        patch["note"] = None

    try:
        patch = validate_entry_patch(entry, patch)
    except EntryValidationError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    store.entries.replace_entry(apply_entry_patch(entry, patch))

    entry_report.single_entry_view(store.entries.get_entry(id))


@app.command("delete, d", no_args_is_help=True)
def delete(ctx: typer.Context, id: str) -> None:
    """Delete one or more entries, e.g. 4 or 1,3-5."""
    store = get_store(ctx)
    ids: list[int] = parse_id_list(id)

    try:
        store.entries.delete_entries(ids)
    except (EntryNotFoundError, StorageError) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)

    typer.echo(f"Deleted {len(ids)} entries")
