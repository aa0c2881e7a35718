# SPDX-License-Identifier: MIT

import datetime

from routine.model.due import Due
from routine.time import days_between, to_date


def is_due(
    due: Due,
    start_date: datetime.date,
    candidate_date: datetime.date,
    candidate_weekday: str,
) -> bool:
    """
    Decide whether a tracker with the given due rule is due on candidate_date.

    Only calendar dates are compared; any time of day is dropped first. Nothing
    is due before its start date. A rule that cannot be evaluated (unknown type
    or unit, missing or non-positive interval) is never due.

    Week intervals count 7-day blocks from the start date rather than calendar
    weeks. Month and year intervals ignore the day of the month, so a monthly
    tracker started on the 31st is due on every day of each matching month.
    """
    start = to_date(start_date)
    candidate = to_date(candidate_date)

    if start > candidate:
        return False

    if due.get("type") == "specificDays":
        days = due.get("specific_days") or []
        weekday = candidate_weekday.lower()
        return any(day.lower() == weekday for day in days)

    if due.get("type") != "interval":
        return False

    interval_value = due.get("interval_value")
    if interval_value is None or interval_value < 1:
        return False

    days_since_start = days_between(start, candidate)

    match due.get("interval_type"):
        case "day":
            return days_since_start % interval_value == 0
        case "week":
            return (days_since_start // 7) % interval_value == 0
        case "month":
            months = (candidate.year - start.year) * 12 + (
                candidate.month - start.month
            )
            return months % interval_value == 0
        case "year":
            return (candidate.year - start.year) % interval_value == 0
        case _:
            return False
