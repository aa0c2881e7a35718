# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from routine import time


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a calendar date given on the command line.

    Accepts YYYY-MM-DD, a signed day offset from today ("-1", "7"), and the
    keywords today (t), yesterday (y) and tomorrow (o).
    """
    if date_param is None:
        return None

    date = str(date_param)

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return time.date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(str(e))

    # Relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return time.today_local().add(days=int(date))

    if date == "today" or date == "t":
        return time.today_local()
    if date == "yesterday" or date == "y":
        return time.today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return time.today_local().add(days=1)
    raise typer.BadParameter(
        f"Incorrect date format '{date}' (expected YYYY-MM-DD, a day offset, "
        "today, yesterday or tomorrow)"
    )


def parse_entry_datetime(
    datetime_param: Optional[str],
) -> Optional[pendulum.DateTime]:
    """Parse an entry date: YYYY-MM-DD, an RFC 3339 instant, or a keyword."""
    if datetime_param is None:
        return None

    if datetime_param == "now" or datetime_param == "n":
        return time.now_utc()

    try:
        return time.entry_datetime_from_str(datetime_param)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def parse_id_list(id_param: str) -> list[int]:
    """
    Parse the ids given to a delete command.

    Accepts a single id ("4"), a comma separated list ("1,2,3"), an inclusive
    range ("3-5") or a mix of them ("1,3-5,8"). Returns the ids sorted with
    duplicates removed.
    """
    ids: set[int] = set()
    for part in (part.strip() for part in id_param.split(",")):
        if not part:
            continue

        range_match = re.match(r"^(\d+)\s*-\s*(\d+)$", part)
        if range_match:
            start, end = int(range_match.group(1)), int(range_match.group(2))
            if start > end:
                raise typer.BadParameter(
                    f"Invalid range '{part}': start must not be after end"
                )
            ids.update(range(start, end + 1))
        elif re.match(r"^\d+$", part):
            ids.add(int(part))
        else:
            raise typer.BadParameter(
                f"Invalid id '{part}' (expected e.g. 4, 1,2 or 3-5)"
            )

    if len(ids) == 0:
        raise typer.BadParameter("No ids given")
    return sorted(ids)


def parse_time(time_str: str) -> str:
    """Validate an HH:mm reminder time, zero-padding the hour."""
    time_match = re.match(r"^(\d{1,2}):(\d{2})$", time_str)
    if not time_match:
        raise typer.BadParameter(
            f"Time must be in HH:mm format (e.g., 8:00 or 17:30), got '{time_str}'"
        )

    hour = int(time_match.group(1))
    minute = int(time_match.group(2))

    if hour < 0 or hour > 23:
        raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
    if minute < 0 or minute > 59:
        raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

    return f"{hour:02d}:{minute:02d}"
