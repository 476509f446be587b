"""SQLite-backed stores for cycle state and workout history.

Both stores share one database file. Every sqlite3/OS failure is
wrapped in StorageReadError or StorageWriteError so the cycle engine
handles a single exception family.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import StorageReadError, StorageWriteError
from ..models.history import (
    WorkoutHistoryEntry,
    WorkoutHistoryItem,
    sort_history_newest_first,
    to_history_item,
)
from ..utils.dates import utc_now_iso

logger = logging.getLogger(__name__)


class _SQLiteStore:
    """Connection handling shared by the SQLite stores."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_table_exists()
        except (sqlite3.Error, OSError) as e:
            raise StorageWriteError(
                f"Could not initialize database at {self.db_path}",
                original_error=e,
            ) from e

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_table_exists(self) -> None:
        raise NotImplementedError


class SQLiteKeyValueStore(_SQLiteStore):
    """KeyValueStore persisted in a single SQLite table."""

    def _ensure_table_exists(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS key_value_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    async def get_item(self, key: str) -> Optional[str]:
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT value FROM key_value_store WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageReadError(key=key, original_error=e) from e
        return row["value"] if row else None

    async def set_item(self, key: str, value: str) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO key_value_store (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, utc_now_iso()),
                )
        except sqlite3.Error as e:
            raise StorageWriteError(key=key, original_error=e) from e

    async def remove_item(self, key: str) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute("DELETE FROM key_value_store WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageWriteError(key=key, original_error=e) from e


class SQLiteWorkoutHistoryRepository(_SQLiteStore):
    """
    WorkoutHistoryStore persisted in SQLite.

    Entries are stored as JSON documents; the resolved completion time is
    not indexed since the engine always loads the whole history.
    """

    def _ensure_table_exists(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS workout_history (
                    id TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

    async def get_history(self) -> List[WorkoutHistoryEntry]:
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    "SELECT id, payload FROM workout_history"
                ).fetchall()
        except sqlite3.Error as e:
            raise StorageReadError("Failed to read workout history", original_error=e) from e

        entries = []
        for row in rows:
            try:
                entries.append(WorkoutHistoryEntry.model_validate(json.loads(row["payload"])))
            except ValueError as e:
                # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
                logger.warning(
                    "Skipping malformed history entry %s: %s", row["id"], e
                )
        return entries

    async def get_history_for_list(self) -> List[WorkoutHistoryItem]:
        history = await self.get_history()
        return [to_history_item(e) for e in sort_history_newest_first(history)]

    async def save_workout(self, entry: WorkoutHistoryEntry) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO workout_history (id, payload, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (entry.id, entry.model_dump_json(by_alias=True), utc_now_iso()),
                )
        except sqlite3.Error as e:
            raise StorageWriteError(
                "Failed to save workout", key=entry.id, original_error=e
            ) from e
