"""
Cycle state persistence.

Keeps the user's position within a repeating weekly split:
- Short-lived in-memory cache (5s by default) to absorb bursts of reads
- Single persisted JSON record in a key-value store
- Rebuild from full workout history when no compatible record exists

Public methods never raise. Failures are logged and replaced by a safe
default state; `load_cycle_state` additionally reports the suppressed
error to callers that want it.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import StateParseError, WorkoutCycleError
from ..models.cycle import CycleState
from ..models.history import resolve_completion_timestamp, sort_history_newest_first
from ..storage.base import KeyValueStore, WorkoutHistoryStore
from ..utils.dates import utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "workout_cycle_state"
DEFAULT_CACHE_TTL_SECONDS = 5.0


def week_number_for(total_completed: int, plan_length: int) -> int:
    """1-based week number derived from the completed workout count."""
    return total_completed // max(1, plan_length) + 1


def default_cycle_state(weekly_plan: Optional[List[str]] = None) -> CycleState:
    """Zeroed state used when storage cannot be read."""
    return CycleState(
        current_week_number=1,
        current_day_in_week=0,
        last_workout_date="",
        total_workouts_completed=0,
        program_start_date=utc_now_iso(),
        weekly_plan=list(weekly_plan or []),
    )


@dataclass
class CycleStateCache:
    """One cached CycleState with the monotonic time it was stored."""

    ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    clock: Callable[[], float] = time.monotonic
    state: Optional[CycleState] = field(default=None, init=False)
    stored_at: float = field(default=0.0, init=False)

    def get(self, weekly_plan: Optional[List[str]] = None) -> Optional[CycleState]:
        """Return the cached state if fresh and (when given) for the same plan."""
        if self.state is None:
            return None
        if self.clock() - self.stored_at >= self.ttl_seconds:
            return None
        if weekly_plan is not None and not self.state.matches_plan(weekly_plan):
            return None
        return self.state

    def put(self, state: CycleState) -> None:
        self.state = state
        self.stored_at = self.clock()

    def invalidate(self) -> None:
        self.state = None
        self.stored_at = 0.0


@dataclass
class CycleStateResult:
    """A cycle state plus the error that forced a fallback, if any."""

    state: CycleState
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CycleStateStore:
    """Produces and persists the CycleState for one user session."""

    def __init__(
        self,
        key_value_store: KeyValueStore,
        history_store: WorkoutHistoryStore,
        state_key: str = DEFAULT_STATE_KEY,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._kv = key_value_store
        self._history = history_store
        self.state_key = state_key
        self._cache = CycleStateCache(ttl_seconds=cache_ttl_seconds, clock=clock)

    @property
    def cache(self) -> CycleStateCache:
        return self._cache

    def invalidate_cache(self) -> None:
        self._cache.invalidate()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_current_cycle_state(
        self,
        weekly_plan: Optional[List[str]] = None,
    ) -> CycleState:
        """
        Get the current cycle state for a weekly plan.

        Args:
            weekly_plan: Plan the state must belong to. None accepts any
                persisted plan.

        Returns:
            The cached, persisted, or rebuilt state; the zeroed default if
            storage failed.
        """
        result = await self.load_cycle_state(weekly_plan)
        return result.state

    async def load_cycle_state(
        self,
        weekly_plan: Optional[List[str]] = None,
    ) -> CycleStateResult:
        """Like get_current_cycle_state, but also reports a suppressed error."""
        try:
            cached = self._cache.get(weekly_plan)
            if cached is not None:
                logger.debug("Using cached cycle state")
                return CycleStateResult(cached)

            try:
                persisted = await self._read_persisted()
            except StateParseError as e:
                # A corrupt record is replaced by the rebuild below
                logger.warning(
                    "Discarding malformed cycle state record: %s",
                    e.message,
                    extra=e.to_dict(),
                )
                persisted = None

            if persisted is not None and self._is_compatible(persisted, weekly_plan):
                logger.debug("Using persisted cycle state")
                self._cache.put(persisted)
                return CycleStateResult(persisted)

            if persisted is not None:
                logger.info(
                    "Weekly plan changed, rebuilding cycle state from history",
                    extra={"previous_plan": persisted.weekly_plan, "plan": weekly_plan},
                )

            state = await self._rebuild_from_history(list(weekly_plan or []))
            if state.weekly_plan:
                await self._kv.set_item(self.state_key, state.to_json())
            self._cache.put(state)
            return CycleStateResult(state)

        except WorkoutCycleError as e:
            logger.error(
                "Failed to load cycle state: %s",
                e.message,
                extra=e.to_dict(),
            )
            return CycleStateResult(default_cycle_state(weekly_plan), e)
        except Exception as e:
            logger.exception("Unexpected error loading cycle state")
            return CycleStateResult(default_cycle_state(weekly_plan), e)

    async def _read_persisted(self) -> Optional[CycleState]:
        raw = await self._kv.get_item(self.state_key)
        if not raw:
            return None
        try:
            return CycleState.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError, TypeError) as e:
            raise StateParseError(raw_value=raw, original_error=e) from e

    @staticmethod
    def _is_compatible(state: CycleState, weekly_plan: Optional[List[str]]) -> bool:
        if weekly_plan is not None and not state.matches_plan(weekly_plan):
            return False
        if state.weekly_plan and state.current_day_in_week >= state.plan_length:
            return False
        return True

    async def _rebuild_from_history(self, weekly_plan: List[str]) -> CycleState:
        history = sort_history_newest_first(await self._history.get_history())
        total = len(history)
        plan_length = max(1, len(weekly_plan))

        state = CycleState(
            current_week_number=week_number_for(total, plan_length),
            current_day_in_week=(total - 1) % plan_length if total > 0 else 0,
            last_workout_date=resolve_completion_timestamp(history[0]) if history else "",
            total_workouts_completed=total,
            program_start_date=utc_now_iso(),
            weekly_plan=weekly_plan,
        )
        logger.info(
            "Rebuilt cycle state from %d history entries",
            total,
            extra={"week": state.current_week_number, "day": state.current_day_in_week},
        )
        return state

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def update_workout_completed(self, workout_index: int) -> None:
        """
        Record that the workout at `workout_index` was completed.

        The index is wrapped into the plan length, so -1 means the last day.
        The cache is invalidated whether or not the write succeeds.
        """
        try:
            result = await self.load_cycle_state()
            if not result.ok:
                logger.warning(
                    "Cycle state unavailable, recording completion on the default state",
                    extra={"workout_index": workout_index},
                )

            current = result.state
            plan_length = max(1, current.plan_length)
            normalized_index = ((workout_index % plan_length) + plan_length) % plan_length
            total = current.total_workouts_completed + 1

            updated = current.model_copy(update={
                "current_day_in_week": normalized_index,
                "last_workout_date": utc_now_iso(),
                "total_workouts_completed": total,
                "current_week_number": week_number_for(total, plan_length),
            })
            await self._kv.set_item(self.state_key, updated.to_json())

            logger.info(
                "Workout cycle updated: week %d, total workouts %d",
                updated.current_week_number,
                updated.total_workouts_completed,
            )
        except WorkoutCycleError as e:
            logger.error(
                "Failed to update workout completion: %s",
                e.message,
                extra={"error_code": e.code.value, "workout_index": workout_index},
            )
        except Exception:
            logger.exception("Unexpected error updating workout completion")
        finally:
            self._cache.invalidate()

    async def reset(self) -> None:
        """Delete the persisted record so the next read rebuilds from history."""
        try:
            await self._kv.remove_item(self.state_key)
            logger.info("Workout cycle reset")
        except WorkoutCycleError as e:
            logger.error(
                "Failed to reset workout cycle: %s",
                e.message,
                extra={"error_code": e.code.value},
            )
        except Exception:
            logger.exception("Unexpected error resetting workout cycle")
        finally:
            self._cache.invalidate()
