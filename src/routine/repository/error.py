# SPDX-License-Identifier: MIT


class StorageError(Exception):
    """Raised when stored data cannot be read back."""

    pass


class TrackerNotFoundError(LookupError):
    def __init__(self, tracker_type: str, id: int) -> None:
        super().__init__(f"{tracker_type.capitalize()} tracker {id} not found")
        self.tracker_type = tracker_type
        self.id = id


class EntryNotFoundError(LookupError):
    def __init__(self, id: int) -> None:
        super().__init__(f"Entry {id} not found")
        self.id = id
