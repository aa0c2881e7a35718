# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from routine import time
from routine.model.entry import Entry, TrackerType
from routine.repository.error import EntryNotFoundError, StorageError

logger = logging.getLogger(__name__)


def _newest_first(entries: list[Entry]) -> list[Entry]:
    return sorted(
        entries,
        key=lambda entry: (entry["date"], cast(int, entry["id"])),
        reverse=True,
    )


class EntryRepository:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._entries: Optional[list[Entry]] = None
        self.is_dirty = False
        self._dirty_ids: set[int] = set()
        self._deleted_ids: set[int] = set()

    @property
    def entries(self) -> list[Entry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        entries: list[Entry] = []
        if self._data_dir.is_dir():
            try:
                file_paths = sorted(self._data_dir.iterdir())
            except OSError as e:
                raise StorageError(f"Cannot list entries in {self._data_dir}") from e

            for file_path in file_paths:
                if file_path.suffix != ".yaml":
                    continue
                try:
                    raw_entry = load(file_path.read_text(), Loader=Loader)
                    if raw_entry is not None:
                        entries.append(
                            self.__convert_entry_for_deserialization(raw_entry)
                        )
                except (OSError, YAMLError, KeyError, TypeError, ValueError) as e:
                    raise StorageError(f"Cannot read entry file {file_path}") from e

        self._entries = entries
        logger.debug("Loaded %d entries from %s", len(entries), self._data_dir)

    def __save_data(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

        for entry in self.entries:
            if entry["id"] in self._dirty_ids:
                serializable_entry = self.__convert_entry_for_serialization(
                    deepcopy(entry)
                )
                file_path = self._data_dir / f"{entry['id']}.yaml"
                file_path.write_text(dump(serializable_entry, Dumper=Dumper))

        for entity_id in self._deleted_ids:
            file_path = self._data_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> tuple[list[Entry], set[int], set[int], bool]:
        return (
            deepcopy(self.entries),
            set(self._dirty_ids),
            set(self._deleted_ids),
            self.is_dirty,
        )

    def restore(self, snapshot: tuple[list[Entry], set[int], set[int], bool]) -> None:
        entries, dirty_ids, deleted_ids, is_dirty = snapshot
        self._entries = entries
        self._dirty_ids = dirty_ids
        self._deleted_ids = deleted_ids
        self.is_dirty = is_dirty

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["date"] = time.datetime_to_iso_str(
            serializable_entry["date"]
        )
        serializable_entry["created"] = time.datetime_to_iso_str(
            serializable_entry["created"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> Entry:
        deserializable_entry = entry
        deserializable_entry["id"] = int(deserializable_entry["id"])
        deserializable_entry["tracker_id"] = int(deserializable_entry["tracker_id"])
        if deserializable_entry.get("value") is not None:
            deserializable_entry["value"] = float(deserializable_entry["value"])
        deserializable_entry["date"] = time.datetime_from_str(
            str(deserializable_entry["date"])
        ).in_tz("UTC")
        deserializable_entry["created"] = time.datetime_from_str(
            str(deserializable_entry["created"])
        )
        return cast(Entry, deserializable_entry)

    def __next_id(self) -> int:
        return max((cast(int, entry["id"]) for entry in self.entries), default=0) + 1

    def __find(self, id: int) -> Entry:
        for entry in self.entries:
            if entry["id"] == id:
                return entry
        raise EntryNotFoundError(id)

    def save_new_entry(self, entry: Entry) -> int:
        self.is_dirty = True

        id = self.__next_id()
        entry["id"] = id

        self.entries.append(entry)
        self._dirty_ids.add(id)

        return id

    def replace_entry(self, entry: Entry) -> None:
        id = cast(int, entry["id"])
        current = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        replacement = deepcopy(entry)
        replacement["created"] = current["created"]
        self.entries[self.entries.index(current)] = replacement

    def delete_entry(self, id: int) -> None:
        entry = self.__find(id)

        self.is_dirty = True
        self.entries.remove(entry)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def delete_entries(self, ids: list[int]) -> list[int]:
        """
        Delete several entries at once.

        Every id is checked before anything is removed, so an unknown id leaves
        all entries in place.
        """
        for id in ids:
            self.__find(id)
        for id in ids:
            self.delete_entry(id)
        return ids

    def delete_entries_for_tracker(self, tracker_id: int, type: TrackerType) -> int:
        ids = [
            cast(int, entry["id"])
            for entry in self.entries
            if entry["tracker_id"] == tracker_id and entry["type"] == type
        ]
        for id in ids:
            self.delete_entry(id)
        return len(ids)

    def get_entry(self, id: int) -> Entry:
        return deepcopy(self.__find(id))

    def get_all_entries(self) -> list[Entry]:
        return deepcopy(_newest_first(self.entries))

    def get_entries_for_tracker(self, tracker_id: int, type: TrackerType) -> list[Entry]:
        return deepcopy(
            _newest_first(
                [
                    entry
                    for entry in self.entries
                    if entry["tracker_id"] == tracker_id and entry["type"] == type
                ]
            )
        )

    def get_entries_since(
        self, tracker_id: int, type: TrackerType, start_date: pendulum.Date
    ) -> list[Entry]:
        """Entries of one tracker recorded on or after start_date, newest first."""
        return [
            entry
            for entry in self.get_entries_for_tracker(tracker_id, type)
            if time.datetime_to_utc_date(entry["date"]) >= start_date
        ]
