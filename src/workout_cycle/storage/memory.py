"""In-memory store implementations, used in tests and for ephemeral sessions."""

from typing import Dict, List, Optional

from ..models.history import (
    WorkoutHistoryEntry,
    WorkoutHistoryItem,
    sort_history_newest_first,
    to_history_item,
)


class InMemoryKeyValueStore:
    """Dictionary-backed KeyValueStore."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class InMemoryWorkoutHistoryStore:
    """List-backed WorkoutHistoryStore."""

    def __init__(self, entries: Optional[List[WorkoutHistoryEntry]] = None) -> None:
        self._entries: List[WorkoutHistoryEntry] = list(entries or [])

    async def get_history(self) -> List[WorkoutHistoryEntry]:
        return list(self._entries)

    async def get_history_for_list(self) -> List[WorkoutHistoryItem]:
        return [to_history_item(e) for e in sort_history_newest_first(self._entries)]

    async def save_workout(self, entry: WorkoutHistoryEntry) -> None:
        self._entries = [e for e in self._entries if e.id != entry.id]
        self._entries.append(entry)
