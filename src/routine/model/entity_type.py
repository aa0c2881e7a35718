# SPDX-License-Identifier: MIT


class EntityType:
    HABIT = "habit"
    TARGET = "target"
    ENTRY = "entry"
