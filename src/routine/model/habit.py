# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from routine.model.due import Due, Reminder

TimePeriod = Literal["perDay", "perWeek", "perMonth", "perYear"]


class HabitTracker(TypedDict):
    id: Optional[int]
    entity_type: str  # "habit"
    name: str  # e.g., "Drink water"
    goal: float  # how many times per time_period
    time_period: TimePeriod
    start_date: pendulum.Date
    due: Due
    reminders: Reminder
    bad_habit: bool  # goal is an upper limit instead of a minimum
    goal_streak: Optional[int]
    created: pendulum.DateTime
    updated: pendulum.DateTime
