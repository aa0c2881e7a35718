# SPDX-License-Identifier: MIT

from routine.model.entity_type import EntityType
from routine.model.habit import HabitTracker
from routine.template.due import get_due_template, get_reminder_template
from routine.time import now_utc, today_local


def get_habit_template() -> HabitTracker:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.HABIT,
        "name": "",
        "goal": 1.0,
        "time_period": "perDay",
        "start_date": today_local(),
        "due": get_due_template(),
        "reminders": get_reminder_template(),
        "bad_habit": False,
        "goal_streak": None,
        "created": now,
        "updated": now,
    }
