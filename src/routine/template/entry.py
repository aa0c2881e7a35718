# SPDX-License-Identifier: MIT

from routine.model.entity_type import EntityType
from routine.model.entry import Entry
from routine.time import now_utc


def get_entry_template() -> Entry:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.ENTRY,
        "tracker_id": 0,  # Must be set
        "type": "habit",
        "value": None,
        "done": None,
        "date": now,
        "note": None,
        "created": now,
    }
