# SPDX-License-Identifier: MIT

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pendulum

from routine import configuration
from routine.model.entry import Entry, TrackerType
from routine.model.habit import HabitTracker
from routine.model.target import TargetTracker
from routine.repository.entry import EntryRepository
from routine.repository.habit import HabitRepository
from routine.repository.target import TargetRepository

logger = logging.getLogger(__name__)


class Store:
    """
    Storage handle for one data directory.

    Holds the habit, target and entry repositories. Nothing reaches the disk
    until flush() is called.
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self.habits = HabitRepository(data_path / configuration.HABITS_DIR_NAME)
        self.targets = TargetRepository(data_path / configuration.TARGETS_DIR_NAME)
        self.entries = EntryRepository(data_path / configuration.ENTRIES_DIR_NAME)

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """Roll every repository back to its prior state if the block raises."""
        habits = self.habits.snapshot()
        targets = self.targets.snapshot()
        entries = self.entries.snapshot()
        try:
            yield self
        except BaseException:
            logger.debug("Rolling back store changes")
            self.habits.restore(habits)
            self.targets.restore(targets)
            self.entries.restore(entries)
            raise

    def get_habit(self, id: int) -> HabitTracker:
        return self.habits.get_habit(id)

    def get_target(self, id: int) -> TargetTracker:
        return self.targets.get_target(id)

    def get_entries_since(
        self, tracker_id: int, type: TrackerType, start_date: pendulum.Date
    ) -> list[Entry]:
        return self.entries.get_entries_since(tracker_id, type, start_date)

    def delete_habit(self, id: int) -> int:
        """Delete a habit and all of its entries, returning the entry count."""
        with self.transaction():
            self.habits.delete_habit(id)
            removed = self.entries.delete_entries_for_tracker(id, "habit")
        logger.debug("Deleted habit %d with %d entries", id, removed)
        return removed

    def delete_target(self, id: int) -> int:
        """Delete a target and all of its entries, returning the entry count."""
        with self.transaction():
            self.targets.delete_target(id)
            removed = self.entries.delete_entries_for_tracker(id, "target")
        logger.debug("Deleted target %d with %d entries", id, removed)
        return removed

    def flush(self) -> None:
        # Entries first so a tracker file never lands without its entries
        # having been written or removed.
        flushed = [
            self.entries.flush(),
            self.habits.flush(),
            self.targets.flush(),
        ]
        if any(flushed):
            logger.debug("Flushed store at %s", self.data_path)
