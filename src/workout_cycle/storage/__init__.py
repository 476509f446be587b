"""Storage collaborators for cycle state and workout history."""

from .base import KeyValueStore, WorkoutHistoryStore
from .memory import InMemoryKeyValueStore, InMemoryWorkoutHistoryStore
from .sqlite import SQLiteKeyValueStore, SQLiteWorkoutHistoryRepository

__all__ = [
    "KeyValueStore",
    "WorkoutHistoryStore",
    "InMemoryKeyValueStore",
    "InMemoryWorkoutHistoryStore",
    "SQLiteKeyValueStore",
    "SQLiteWorkoutHistoryRepository",
]
