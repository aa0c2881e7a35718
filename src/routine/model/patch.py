# SPDX-License-Identifier: MIT

"""
Partial updates.

A key that is absent from a patch leaves the stored field untouched. A key that
is present is applied as-is, including falsy values such as ``False``, ``0`` or
``None``.
"""

from typing import Optional, TypedDict

import pendulum

from routine.model.due import Due, Reminder
from routine.model.habit import TimePeriod
from routine.model.target import TrendWeightType


class HabitPatch(TypedDict, total=False):
    name: str
    goal: float
    time_period: TimePeriod
    start_date: pendulum.Date
    due: Due
    reminders: Reminder
    bad_habit: bool
    goal_streak: Optional[int]


class TargetPatch(TypedDict, total=False):
    name: str
    start_value: float
    goal_value: float
    start_date: pendulum.Date
    goal_date: pendulum.Date
    add_to_total: bool
    use_actual_bounds: bool
    trend_weight_type: TrendWeightType
    due: Due
    reminders: Reminder


class EntryPatch(TypedDict, total=False):
    value: Optional[float]
    done: Optional[bool]
    date: pendulum.DateTime
    note: Optional[str]
