# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from routine.model.due import Due, Reminder

TrendWeightType = Literal["none", "linear", "sqrt", "quadratic", "exponential_low"]


class TargetTracker(TypedDict):
    id: Optional[int]
    entity_type: str  # "target"
    name: str  # e.g., "Save money"
    start_value: float  # always the user-set value, never the adjusted one
    goal_value: float
    start_date: pendulum.Date
    goal_date: pendulum.Date
    add_to_total: bool  # entries accumulate instead of replacing
    use_actual_bounds: bool
    trend_weight_type: TrendWeightType
    due: Due
    reminders: Reminder
    created: pendulum.DateTime
    updated: pendulum.DateTime
