# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Optional, cast

import pendulum

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def to_date(value: datetime.date) -> pendulum.Date:
    """Reduce a date or datetime to its calendar date, dropping any time of day."""
    return pendulum.date(value.year, value.month, value.day)


def weekday_name(date: datetime.date) -> str:
    """Lowercase English weekday name, independent of the process locale."""
    return WEEKDAY_NAMES[date.weekday()]


def days_between(start: datetime.date, end: datetime.date) -> int:
    return end.toordinal() - start.toordinal()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_utc_date(datetime: pendulum.DateTime) -> pendulum.Date:
    return datetime.in_tz("UTC").date()


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def date_to_str(date: pendulum.Date) -> str:
    """Format a calendar date as 'YYYY-MM-DD'."""
    return date.format("YYYY-MM-DD")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a strict 'YYYY-MM-DD' calendar date."""
    if not _DATE_PATTERN.match(date_str):
        raise ValueError(f"Expected a YYYY-MM-DD date, got '{date_str}'")
    return pendulum.from_format(date_str, "YYYY-MM-DD").date()


def entry_datetime_from_str(value: str) -> pendulum.DateTime:
    """
    Parse the date of an entry into a UTC instant.

    Accepts RFC 3339 instants (2024-01-01T15:30:00Z, 2024-01-01T15:30:00+02:00)
    and plain 'YYYY-MM-DD' dates. A plain date keeps the current local time of
    day on that date.
    """
    if _DATE_PATTERN.match(value):
        date = date_from_str(value)
        now = pendulum.now("local")
        local_date_time = pendulum.datetime(
            date.year,
            date.month,
            date.day,
            now.hour,
            now.minute,
            now.second,
            now.microsecond,
            tz="local",
        )
        return local_date_time.in_tz("UTC")

    if not _RFC3339_PATTERN.match(value):
        raise ValueError(
            f"Expected YYYY-MM-DD or RFC 3339 (2006-01-02T15:04:05Z07:00), got '{value}'"
        )
    return datetime_from_str(value).in_tz("UTC")
