# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

TrackerType = Literal["habit", "target"]


class Entry(TypedDict):
    id: Optional[int]
    entity_type: str  # "entry"
    tracker_id: int  # Reference to parent tracker
    type: TrackerType  # Which tracker table tracker_id points into

    # Only one is set, based on type
    value: Optional[float]  # target entries
    done: Optional[bool]  # habit entries

    date: pendulum.DateTime  # UTC instant the entry is recorded for
    note: Optional[str]
    created: pendulum.DateTime
