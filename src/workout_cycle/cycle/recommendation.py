"""
Next Workout Recommendation Engine

Decides which day of the weekly split to train next based on:
- Position in the cycle (last completed day)
- Calendar days since the last session

The heuristics are intentionally simple:

    days since last   next day             progression   intensity
    ---------------   ------------------   -----------   ---------
    never trained     day 0                regular       normal
    0 (same day)      current day again    irregular     light
    1                 current + 1          regular       normal
    2-4               current + 1          regular       normal
    5-7               day 0                irregular     light
    8+                day 0                irregular     light
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..models.cycle import CycleState, Recommendation, SuggestedIntensity
from ..utils.dates import NEVER_TRAINED_DAYS, days_since_last_workout
from .state_store import CycleStateStore

logger = logging.getLogger(__name__)

DEFAULT_WEEKLY_PLAN: List[str] = ["Push", "Pull", "Legs"]

# Used when the plan has no entry at the chosen index
PLACEHOLDER_WORKOUT_NAME = "Workout"
PLACEHOLDER_REST_NAME = "Rest"

REASONS = {
    "welcome": "Welcome! Let's start your fitness journey",
    "same_day": "You already trained today! Rest is when muscles grow",
    "regular": "Great consistency! Time for the next workout in your plan",
    "short_break": "{days} rest days - let's pick up where you left off",
    "medium_break": "{days} days off - starting a fresh training week",
    "long_break": "Long break of {days} days - easing back in gradually",
    "fallback": "Let's get started!",
}


def _workout_name_at(plan: List[str], index: int, placeholder: str = PLACEHOLDER_WORKOUT_NAME) -> str:
    if 0 <= index < len(plan) and plan[index]:
        return plan[index]
    return placeholder


def _recommend(
    plan: List[str],
    index: int,
    reason: str,
    is_regular_progression: bool,
    days_since_last: int,
    intensity: SuggestedIntensity,
    placeholder: str = PLACEHOLDER_WORKOUT_NAME,
) -> Recommendation:
    recommendation = Recommendation(
        workout_name=_workout_name_at(plan, index, placeholder),
        workout_index=index,
        reason=reason,
        is_regular_progression=is_regular_progression,
        days_since_last_workout=days_since_last,
        suggested_intensity=intensity,
    )
    logger.debug(
        "Recommending %r (index %d, intensity %s)",
        recommendation.workout_name,
        index,
        intensity.value,
    )
    return recommendation


def welcome_recommendation(weekly_plan: List[str]) -> Recommendation:
    """Day 0 recommendation for brand new users."""
    return _recommend(weekly_plan, 0, REASONS["welcome"], True, 0, SuggestedIntensity.NORMAL)


def determine_next_workout(
    weekly_plan: List[str],
    cycle_state: CycleState,
    days_since_last: int,
) -> Recommendation:
    """
    Classify the situation and pick the next workout.

    Cases are checked in order and the first match wins.

    Args:
        weekly_plan: Non-empty ordered list of workout day names
        cycle_state: Current position in the cycle
        days_since_last: Calendar days since the last workout (999 = never)

    Returns:
        Recommendation with an index inside [0, len(weekly_plan))
    """
    plan_length = max(1, len(weekly_plan))
    current_day = cycle_state.current_day_in_week

    # New user
    if not cycle_state.last_workout_date or days_since_last >= NEVER_TRAINED_DAYS:
        return welcome_recommendation(weekly_plan)

    # Same day: repeat the day already done instead of advancing
    if days_since_last == 0:
        return _recommend(
            cycle_state.weekly_plan,
            current_day,
            REASONS["same_day"],
            False,
            days_since_last,
            SuggestedIntensity.LIGHT,
            placeholder=PLACEHOLDER_REST_NAME,
        )

    if days_since_last == 1:
        next_index = (current_day + 1) % plan_length
        return _recommend(
            weekly_plan,
            next_index,
            REASONS["regular"],
            True,
            days_since_last,
            SuggestedIntensity.NORMAL,
        )

    if 2 <= days_since_last <= 4:
        next_index = (current_day + 1) % plan_length
        return _recommend(
            weekly_plan,
            next_index,
            REASONS["short_break"].format(days=days_since_last),
            True,
            days_since_last,
            SuggestedIntensity.NORMAL,
        )

    if 5 <= days_since_last <= 7:
        return _recommend(
            weekly_plan,
            0,
            REASONS["medium_break"].format(days=days_since_last),
            False,
            days_since_last,
            SuggestedIntensity.LIGHT,
        )

    if days_since_last > 7:
        return _recommend(
            weekly_plan,
            0,
            REASONS["long_break"].format(days=days_since_last),
            False,
            days_since_last,
            SuggestedIntensity.LIGHT,
        )

    # Only reachable with a negative day count
    return _recommend(
        weekly_plan,
        0,
        REASONS["fallback"],
        True,
        days_since_last,
        SuggestedIntensity.NORMAL,
    )


class RecommendationEngine:
    """
    Async entry point used by the UI layer.

    All I/O goes through the CycleStateStore; classification itself is the
    pure `determine_next_workout`.
    """

    def __init__(
        self,
        state_store: CycleStateStore,
        default_weekly_plan: Optional[List[str]] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = state_store
        self.default_weekly_plan = list(default_weekly_plan or DEFAULT_WEEKLY_PLAN)
        self._now = now

    async def get_next_workout_recommendation(
        self,
        weekly_plan: Optional[List[str]] = None,
    ) -> Recommendation:
        """Recommend the next workout. Never raises."""
        plan = list(weekly_plan) if weekly_plan else []
        if not plan:
            logger.info("No weekly plan provided, using default split")
            plan = list(self.default_weekly_plan)

        try:
            cycle_state = await self._store.get_current_cycle_state(plan)
            days_since_last = days_since_last_workout(
                cycle_state.last_workout_date, now=self._now()
            )
            logger.debug(
                "Recommendation inputs: days=%d current=%d total=%d",
                days_since_last,
                cycle_state.current_day_in_week,
                cycle_state.total_workouts_completed,
            )
            return determine_next_workout(plan, cycle_state, days_since_last)
        except Exception:
            logger.exception("Failed to compute workout recommendation, using default")
            return welcome_recommendation(plan)

    async def update_workout_completed(self, workout_index: int) -> None:
        await self._store.update_workout_completed(workout_index)
