"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from workout_cycle.config import Settings
from workout_cycle.cycle.state_store import CycleStateStore
from workout_cycle.models.cycle import CycleState
from workout_cycle.models.history import WorkoutFeedback, WorkoutHistoryEntry
from workout_cycle.storage.memory import InMemoryKeyValueStore, InMemoryWorkoutHistoryStore


class CountingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store that records how often it is touched."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.reads = 0
        self.writes = 0

    async def get_item(self, key):
        self.reads += 1
        return await super().get_item(key)

    async def set_item(self, key, value):
        self.writes += 1
        await super().set_item(key, value)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


def build_entry(
    entry_id: str,
    completed_at: Optional[datetime] = None,
    end_time: Optional[datetime] = None,
    workout_name: Optional[str] = None,
) -> WorkoutHistoryEntry:
    """Build a history entry with either timestamp field populated."""
    feedback = None
    if completed_at is not None:
        feedback = WorkoutFeedback(completed_at=completed_at.isoformat(), difficulty=3)
    return WorkoutHistoryEntry(
        id=entry_id,
        workout_name=workout_name,
        feedback=feedback,
        end_time=end_time.isoformat() if end_time is not None else None,
    )


def build_state(
    weekly_plan: List[str],
    current_day: int = 0,
    last_workout: Optional[datetime] = None,
    total: int = 1,
) -> CycleState:
    return CycleState(
        current_week_number=total // len(weekly_plan) + 1,
        current_day_in_week=current_day,
        last_workout_date=last_workout.isoformat() if last_workout else "",
        total_workouts_completed=total,
        program_start_date=datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat(),
        weekly_plan=weekly_plan,
    )


@pytest.fixture
def ppl_plan():
    return ["Push", "Pull", "Legs"]


@pytest.fixture
def kv_store():
    return CountingKeyValueStore()


@pytest.fixture
def history_store():
    return InMemoryWorkoutHistoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state_store(kv_store, history_store, clock):
    return CycleStateStore(kv_store, history_store, clock=clock)


@pytest.fixture
def sample_history():
    """Four workouts on consecutive days, newest three days ago."""
    base = datetime.now(timezone.utc) - timedelta(days=6)
    return [
        build_entry("w1", completed_at=base),
        build_entry("w2", end_time=base + timedelta(days=1)),
        build_entry("w3", completed_at=base + timedelta(days=3)),
        build_entry("w4", completed_at=base + timedelta(days=2)),
    ]


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest.fixture
def settings(temp_db_path):
    return Settings(db_path=temp_db_path, cache_ttl_seconds=5.0)


@pytest.fixture
def make_entry():
    """Factory for history entries."""
    return build_entry


@pytest.fixture
def make_state():
    """Factory for persisted cycle states."""
    return build_state
