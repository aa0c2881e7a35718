# SPDX-License-Identifier: MIT

from routine.model.entity_type import EntityType
from routine.model.target import TargetTracker
from routine.template.due import get_due_template, get_reminder_template
from routine.time import now_utc, today_local


def get_target_template() -> TargetTracker:
    now = now_utc()
    today = today_local()
    return {
        "id": None,
        "entity_type": EntityType.TARGET,
        "name": "",
        "start_value": 0.0,
        "goal_value": 0.0,
        "start_date": today,
        "goal_date": today,
        "add_to_total": False,
        "use_actual_bounds": False,
        "trend_weight_type": "none",
        "due": get_due_template(),
        "reminders": get_reminder_template(),
        "created": now,
        "updated": now,
    }
