# SPDX-License-Identifier: MIT

from routine.model.due import Due, Reminder


def get_due_template() -> Due:
    return {
        "type": "interval",
        "specific_days": None,
        "interval_type": "day",
        "interval_value": 1,
    }


def get_reminder_template() -> Reminder:
    return {
        "times": [],
        "enabled": False,
    }
