# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from routine import time
from routine.model.habit import HabitTracker
from routine.repository.error import TrackerNotFoundError

logger = logging.getLogger(__name__)


class HabitRepository:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._habits: Optional[list[HabitTracker]] = None
        self.is_dirty = False
        self._dirty_ids: set[int] = set()
        self._deleted_ids: set[int] = set()
        # Ids of files that failed to load stay reserved
        self._unreadable_ids: set[int] = set()

    @property
    def habits(self) -> list[HabitTracker]:
        if self._habits is None:
            self.__load_data()
        if self._habits is None:
            raise ValueError()
        return self._habits

    def __load_data(self) -> None:
        self._habits = []
        if not self._data_dir.is_dir():
            return
        for file_path in sorted(self._data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            # A tracker whose configuration cannot be read is left out
            # rather than failing every listing.
            try:
                raw_habit = load(file_path.read_text(), Loader=Loader)
                if raw_habit is not None:
                    self._habits.append(
                        self.__convert_habit_for_deserialization(raw_habit)
                    )
            except (OSError, YAMLError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable habit file %s: %s", file_path, e)
                if file_path.stem.isdigit():
                    self._unreadable_ids.add(int(file_path.stem))
        logger.debug("Loaded %d habit(s) from %s", len(self._habits), self._data_dir)

    def __save_data(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

        # Write dirty entities
        for habit in self.habits:
            if habit["id"] in self._dirty_ids:
                serializable_habit = self.__convert_habit_for_serialization(
                    deepcopy(habit)
                )
                file_path = self._data_dir / f"{habit['id']}.yaml"
                file_path.write_text(dump(serializable_habit, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = self._data_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        # Clear tracking sets
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._habits is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> tuple[list[HabitTracker], set[int], set[int], bool]:
        return (
            deepcopy(self.habits),
            set(self._dirty_ids),
            set(self._deleted_ids),
            self.is_dirty,
        )

    def restore(
        self, snapshot: tuple[list[HabitTracker], set[int], set[int], bool]
    ) -> None:
        habits, dirty_ids, deleted_ids, is_dirty = snapshot
        self._habits = habits
        self._dirty_ids = dirty_ids
        self._deleted_ids = deleted_ids
        self.is_dirty = is_dirty

    def __convert_habit_for_serialization(self, habit: HabitTracker) -> dict[str, Any]:
        serializable_habit = cast(dict[str, Any], habit)
        serializable_habit["start_date"] = time.date_to_str(
            serializable_habit["start_date"]
        )
        serializable_habit["created"] = time.datetime_to_iso_str(
            serializable_habit["created"]
        )
        serializable_habit["updated"] = time.datetime_to_iso_str(
            serializable_habit["updated"]
        )
        return serializable_habit

    def __convert_habit_for_deserialization(self, habit: dict[str, Any]) -> HabitTracker:
        deserializable_habit = habit
        deserializable_habit["id"] = int(deserializable_habit["id"])
        deserializable_habit["goal"] = float(deserializable_habit["goal"])
        deserializable_habit["start_date"] = time.date_from_str(
            str(deserializable_habit["start_date"])
        )
        deserializable_habit["created"] = time.datetime_from_str(
            deserializable_habit["created"]
        )
        deserializable_habit["updated"] = time.datetime_from_str(
            deserializable_habit["updated"]
        )
        return cast(HabitTracker, deserializable_habit)

    def __next_id(self) -> int:
        ids = [cast(int, habit["id"]) for habit in self.habits]
        return max([*ids, *self._unreadable_ids], default=0) + 1

    def __find(self, id: int) -> HabitTracker:
        for habit in self.habits:
            if habit["id"] == id:
                return habit
        raise TrackerNotFoundError("habit", id)

    def save_new_habit(self, habit: HabitTracker) -> int:
        self.is_dirty = True

        id = self.__next_id()
        habit["id"] = id

        self.habits.append(habit)
        self._dirty_ids.add(id)

        return id

    def replace_habit(self, habit: HabitTracker) -> None:
        """Persist a merged snapshot of an existing habit."""
        id = cast(int, habit["id"])
        current = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        replacement = deepcopy(habit)
        replacement["created"] = current["created"]
        replacement["updated"] = time.now_utc()
        self.habits[self.habits.index(current)] = replacement

    def delete_habit(self, id: int) -> None:
        habit = self.__find(id)

        self.is_dirty = True
        self.habits.remove(habit)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_habits(self) -> list[HabitTracker]:
        # Newest first
        return deepcopy(
            sorted(self.habits, key=lambda habit: cast(int, habit["id"]), reverse=True)
        )

    def get_habit(self, id: int) -> HabitTracker:
        return deepcopy(self.__find(id))
