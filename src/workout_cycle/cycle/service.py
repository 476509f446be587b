"""
Cycle service facade.

Wires the state store and recommendation engine for one user session and
exposes the operations the UI layer calls.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional

from ..config import Settings, get_settings
from ..exceptions import WorkoutCycleError
from ..models.cycle import CycleStatistics, Recommendation
from ..models.history import WorkoutHistoryEntry
from ..models.workouts import WorkoutStats
from ..stats.calculator import compute_workout_stats, round_half_up
from ..storage.base import KeyValueStore, WorkoutHistoryStore
from ..storage.sqlite import SQLiteKeyValueStore, SQLiteWorkoutHistoryRepository
from ..utils.dates import parse_timestamp
from .recommendation import RecommendationEngine
from .state_store import CycleStateStore

logger = logging.getLogger(__name__)


def calculate_consistency(total_workouts: int, days_in_program: int, plan_length: int) -> int:
    """
    Consistency score in percent.

    Expects a session every second day, capped at three sessions per
    two-day block for long splits. 100 when nothing is expected yet.
    """
    expected = (days_in_program // 2) * min(plan_length, 3)
    if expected <= 0:
        return 100
    consistency = round_half_up(total_workouts / expected * 100)
    return min(100, max(0, consistency))


class CycleService:
    """Session-scoped entry point for cycle progression and statistics."""

    def __init__(
        self,
        key_value_store: KeyValueStore,
        history_store: WorkoutHistoryStore,
        settings: Optional[Settings] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        settings = settings or get_settings()
        self.history_store = history_store
        self.state_store = CycleStateStore(
            key_value_store,
            history_store,
            state_key=settings.state_key,
            cache_ttl_seconds=settings.cache_ttl_seconds,
        )
        self.engine = RecommendationEngine(
            self.state_store,
            default_weekly_plan=settings.default_weekly_plan,
            now=now,
        )
        self._now = now

    async def get_next_workout_recommendation(
        self, weekly_plan: Optional[List[str]] = None
    ) -> Recommendation:
        return await self.engine.get_next_workout_recommendation(weekly_plan)

    async def update_workout_completed(self, workout_index: int) -> None:
        await self.state_store.update_workout_completed(workout_index)

    async def reset_workout_cycle(self) -> None:
        await self.state_store.reset()

    async def record_completed_workout(
        self,
        entry: WorkoutHistoryEntry,
        workout_index: int,
    ) -> None:
        """Save a finished workout to history, then advance the cycle."""
        try:
            await self.history_store.save_workout(entry)
        except WorkoutCycleError as e:
            logger.error(
                "Failed to save workout %s: %s",
                entry.id,
                e.message,
                extra={"error_code": e.code.value},
            )
        except Exception:
            logger.exception("Unexpected error saving workout %s", entry.id)
        await self.state_store.update_workout_completed(workout_index)

    async def get_cycle_statistics(self) -> CycleStatistics:
        """Summarize progress through the program. Never raises."""
        try:
            state = await self.state_store.get_current_cycle_state()
            start = parse_timestamp(state.program_start_date)
            days_in_program = 0
            if start is not None:
                elapsed = self._now_utc() - start
                days_in_program = max(0, elapsed.days)

            return CycleStatistics(
                current_week=state.current_week_number,
                total_workouts=state.total_workouts_completed,
                days_in_program=days_in_program,
                consistency=calculate_consistency(
                    state.total_workouts_completed,
                    days_in_program,
                    state.plan_length,
                ),
            )
        except Exception:
            logger.exception("Failed to calculate cycle statistics")
            return CycleStatistics()

    def _now_utc(self) -> datetime:
        current = self._now()
        if current.tzinfo is None:
            current = current.astimezone()
        return current.astimezone(timezone.utc)

    @staticmethod
    def compute_workout_stats(exercises: Optional[Iterable[Any]]) -> WorkoutStats:
        return compute_workout_stats(exercises)


def create_cycle_service(settings: Optional[Settings] = None) -> CycleService:
    """Build a CycleService backed by the SQLite database from settings."""
    settings = settings or get_settings()
    return CycleService(
        SQLiteKeyValueStore(settings.db_path),
        SQLiteWorkoutHistoryRepository(settings.db_path),
        settings=settings,
    )
