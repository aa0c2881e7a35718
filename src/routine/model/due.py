# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

DueType = Literal["specificDays", "interval"]
IntervalType = Literal["day", "week", "month", "year"]


class Due(TypedDict):
    type: DueType
    specific_days: Optional[list[str]]  # e.g., ["sunday", "monday"]
    interval_type: Optional[IntervalType]
    interval_value: Optional[int]  # every N days/weeks/months/years


class Reminder(TypedDict):
    # Stored for the user; nothing schedules or delivers these.
    times: list[str]  # "HH:mm"
    enabled: bool
