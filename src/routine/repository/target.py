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
from routine.model.target import TargetTracker
from routine.repository.error import TrackerNotFoundError

logger = logging.getLogger(__name__)


class TargetRepository:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._targets: Optional[list[TargetTracker]] = None
        self.is_dirty = False
        self._dirty_ids: set[int] = set()
        self._deleted_ids: set[int] = set()
        # Ids of files that failed to load stay reserved
        self._unreadable_ids: set[int] = set()

    @property
    def targets(self) -> list[TargetTracker]:
        if self._targets is None:
            self.__load_data()
        if self._targets is None:
            raise ValueError()
        return self._targets

    def __load_data(self) -> None:
        self._targets = []
        if not self._data_dir.is_dir():
            return
        for file_path in sorted(self._data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            try:
                raw_target = load(file_path.read_text(), Loader=Loader)
                if raw_target is not None:
                    self._targets.append(
                        self.__convert_target_for_deserialization(raw_target)
                    )
            except (OSError, YAMLError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable target file %s: %s", file_path, e)
                if file_path.stem.isdigit():
                    self._unreadable_ids.add(int(file_path.stem))
        logger.debug(
            "Loaded %d target(s) from %s", len(self._targets), self._data_dir
        )

    def __save_data(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

        for target in self.targets:
            if target["id"] in self._dirty_ids:
                serializable_target = self.__convert_target_for_serialization(
                    deepcopy(target)
                )
                file_path = self._data_dir / f"{target['id']}.yaml"
                file_path.write_text(dump(serializable_target, Dumper=Dumper))

        for entity_id in self._deleted_ids:
            file_path = self._data_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._targets is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> tuple[list[TargetTracker], set[int], set[int], bool]:
        return (
            deepcopy(self.targets),
            set(self._dirty_ids),
            set(self._deleted_ids),
            self.is_dirty,
        )

    def restore(
        self, snapshot: tuple[list[TargetTracker], set[int], set[int], bool]
    ) -> None:
        targets, dirty_ids, deleted_ids, is_dirty = snapshot
        self._targets = targets
        self._dirty_ids = dirty_ids
        self._deleted_ids = deleted_ids
        self.is_dirty = is_dirty

    def __convert_target_for_serialization(
        self, target: TargetTracker
    ) -> dict[str, Any]:
        serializable_target = cast(dict[str, Any], target)
        serializable_target["start_date"] = time.date_to_str(
            serializable_target["start_date"]
        )
        serializable_target["goal_date"] = time.date_to_str(
            serializable_target["goal_date"]
        )
        serializable_target["created"] = time.datetime_to_iso_str(
            serializable_target["created"]
        )
        serializable_target["updated"] = time.datetime_to_iso_str(
            serializable_target["updated"]
        )
        return serializable_target

    def __convert_target_for_deserialization(
        self, target: dict[str, Any]
    ) -> TargetTracker:
        deserializable_target = target
        deserializable_target["id"] = int(deserializable_target["id"])
        deserializable_target["start_value"] = float(
            deserializable_target["start_value"]
        )
        deserializable_target["goal_value"] = float(deserializable_target["goal_value"])
        deserializable_target["start_date"] = time.date_from_str(
            str(deserializable_target["start_date"])
        )
        deserializable_target["goal_date"] = time.date_from_str(
            str(deserializable_target["goal_date"])
        )
        # Files written before the field existed
        deserializable_target.setdefault("trend_weight_type", "none")
        deserializable_target["created"] = time.datetime_from_str(
            deserializable_target["created"]
        )
        deserializable_target["updated"] = time.datetime_from_str(
            deserializable_target["updated"]
        )
        return cast(TargetTracker, deserializable_target)

    def __next_id(self) -> int:
        ids = [cast(int, target["id"]) for target in self.targets]
        return max([*ids, *self._unreadable_ids], default=0) + 1

    def __find(self, id: int) -> TargetTracker:
        for target in self.targets:
            if target["id"] == id:
                return target
        raise TrackerNotFoundError("target", id)

    def save_new_target(self, target: TargetTracker) -> int:
        self.is_dirty = True

        id = self.__next_id()
        target["id"] = id

        self.targets.append(target)
        self._dirty_ids.add(id)

        return id

    def replace_target(self, target: TargetTracker) -> None:
        """Persist a merged snapshot of an existing target."""
        id = cast(int, target["id"])
        current = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        replacement = deepcopy(target)
        replacement["created"] = current["created"]
        replacement["updated"] = time.now_utc()
        self.targets[self.targets.index(current)] = replacement

    def delete_target(self, id: int) -> None:
        target = self.__find(id)

        self.is_dirty = True
        self.targets.remove(target)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_targets(self) -> list[TargetTracker]:
        return deepcopy(
            sorted(
                self.targets, key=lambda target: cast(int, target["id"]), reverse=True
            )
        )

    def get_target(self, id: int) -> TargetTracker:
        return deepcopy(self.__find(id))
