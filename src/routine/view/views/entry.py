# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from routine.model.entry import Entry
from routine.time import datetime_to_display_local_datetime_str
from routine.view.util import format_done, format_number
from routine.view.views.header import header


def entries_view(
    report_name: str,
    entries: list[Entry],
    columns: list[str] = ["id", "tracker", "date", "value", "done", "note"],
) -> None:
    """Display list of entries, newest first."""
    header(report_name)

    entries_table = Table(box=box.SIMPLE)
    for column in columns:
        entries_table.add_column(column)

    for entry in entries:
        row = []
        for column in columns:
            column_value = ""
            if column == "tracker":
                column_value = f"{entry['type']} {entry['tracker_id']}"
            elif column == "date":
                column_value = datetime_to_display_local_datetime_str(entry["date"])
            elif column == "value":
                column_value = format_number(entry["value"])
            elif column == "done":
                column_value = format_done(entry["done"])
            elif entry.get(column) is not None:
                column_value = str(entry[column])  # type: ignore[literal-required]
            row.append(column_value)
        entries_table.add_row(*row)

    console = Console()
    console.print(entries_table)


def single_entry_view(entry: Entry) -> None:
    """Display detailed view of a single entry."""
    header("entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", str(entry["id"]))
    entry_table.add_row("tracker", f"{entry['type']} {entry['tracker_id']}")
    entry_table.add_row("date", datetime_to_display_local_datetime_str(entry["date"]))
    if entry["type"] == "target":
        entry_table.add_row("value", format_number(entry["value"]))
    else:
        entry_table.add_row("done", format_done(entry["done"]))
    entry_table.add_row("note", entry["note"] or "")
    entry_table.add_row(
        "created", datetime_to_display_local_datetime_str(entry["created"])
    )

    console = Console()
    console.print(entry_table)
