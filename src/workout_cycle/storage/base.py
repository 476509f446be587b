"""
Storage protocols.

Defines the interfaces the cycle engine depends on. The engine never
talks to a database directly; it only sees these protocols.
"""

from typing import List, Optional, Protocol, runtime_checkable

from ..models.history import WorkoutHistoryEntry, WorkoutHistoryItem


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Protocol for a persisted string key-value store.

    Implementations raise StorageReadError / StorageWriteError on failure.
    """

    async def get_item(self, key: str) -> Optional[str]:
        """Get a value, or None if the key is absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Set (overwrite) a value."""
        ...

    async def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        ...


@runtime_checkable
class WorkoutHistoryStore(Protocol):
    """Protocol for the workout history collaborator."""

    async def get_history(self) -> List[WorkoutHistoryEntry]:
        """Get every completed workout."""
        ...

    async def get_history_for_list(self) -> List[WorkoutHistoryItem]:
        """Get summarized history rows, newest first."""
        ...

    async def save_workout(self, entry: WorkoutHistoryEntry) -> None:
        """Store a completed workout."""
        ...
