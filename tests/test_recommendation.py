"""Tests for the next-workout recommendation engine."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from workout_cycle.cycle.recommendation import (
    DEFAULT_WEEKLY_PLAN,
    PLACEHOLDER_WORKOUT_NAME,
    RecommendationEngine,
    determine_next_workout,
)
from workout_cycle.cycle.state_store import CycleStateStore
from workout_cycle.models.cycle import CycleState, SuggestedIntensity


NOW = datetime(2024, 6, 12, 9, 30)


class TestDetermineNextWorkout:
    """Test the pure classification rules."""

    def test_new_user(self, ppl_plan):
        """Scenario A: never trained starts at day 0."""
        state = CycleState(weekly_plan=ppl_plan)
        rec = determine_next_workout(ppl_plan, state, 999)

        assert rec.workout_index == 0
        assert rec.workout_name == "Push"
        assert rec.is_regular_progression is True
        assert rec.days_since_last_workout == 0
        assert rec.suggested_intensity == SuggestedIntensity.NORMAL

    def test_empty_last_date_is_new_user_regardless_of_days(self, ppl_plan):
        state = CycleState(weekly_plan=ppl_plan, current_day_in_week=2)
        rec = determine_next_workout(ppl_plan, state, 1)
        assert rec.workout_index == 0
        assert rec.days_since_last_workout == 0

    def test_same_day_repeats_current_day(self, ppl_plan, make_state):
        """Training twice in one day is discouraged, the current day is kept."""
        state = make_state(ppl_plan, current_day=1, last_workout=NOW)
        rec = determine_next_workout(ppl_plan, state, 0)

        assert rec.workout_index == 1
        assert rec.workout_name == "Pull"
        assert rec.is_regular_progression is False
        assert rec.suggested_intensity == SuggestedIntensity.LIGHT

    def test_one_day_advances(self, ppl_plan, make_state):
        """Scenario B: yesterday at day 0 moves to day 1."""
        state = make_state(ppl_plan, current_day=0, last_workout=NOW - timedelta(days=1))
        rec = determine_next_workout(ppl_plan, state, 1)

        assert rec.workout_index == 1
        assert rec.is_regular_progression is True
        assert rec.suggested_intensity == SuggestedIntensity.NORMAL
        assert rec.days_since_last_workout == 1

    def test_advance_wraps_around(self, ppl_plan, make_state):
        state = make_state(ppl_plan, current_day=2, last_workout=NOW)
        rec = determine_next_workout(ppl_plan, state, 1)
        assert rec.workout_index == 0
        assert rec.workout_name == "Push"

    @pytest.mark.parametrize("days", [2, 3, 4])
    def test_short_break_continues(self, ppl_plan, days, make_state):
        state = make_state(ppl_plan, current_day=0, last_workout=NOW)
        rec = determine_next_workout(ppl_plan, state, days)

        assert rec.workout_index == 1
        assert rec.is_regular_progression is True
        assert rec.suggested_intensity == SuggestedIntensity.NORMAL
        assert str(days) in rec.reason

    @pytest.mark.parametrize("days", [5, 6, 7])
    def test_medium_break_restarts_week(self, ppl_plan, days, make_state):
        state = make_state(ppl_plan, current_day=1, last_workout=NOW)
        rec = determine_next_workout(ppl_plan, state, days)

        assert rec.workout_index == 0
        assert rec.is_regular_progression is False
        assert rec.suggested_intensity == SuggestedIntensity.LIGHT

    @pytest.mark.parametrize("days", [8, 10, 45, 998])
    def test_long_break_restarts_light(self, ppl_plan, days, make_state):
        """Scenario C: ten days off restarts at day 0 with light intensity."""
        state = make_state(ppl_plan, current_day=1, last_workout=NOW)
        rec = determine_next_workout(ppl_plan, state, days)

        assert rec.workout_index == 0
        assert rec.is_regular_progression is False
        assert rec.suggested_intensity == SuggestedIntensity.LIGHT
        assert rec.days_since_last_workout == days

    def test_negative_days_fall_back(self, ppl_plan, make_state):
        state = make_state(ppl_plan, current_day=1, last_workout=NOW)
        rec = determine_next_workout(ppl_plan, state, -2)

        assert rec.workout_index == 0
        assert rec.is_regular_progression is True
        assert rec.suggested_intensity == SuggestedIntensity.NORMAL

    @pytest.mark.parametrize("plan_length", [1, 2, 3, 5, 7])
    @pytest.mark.parametrize("days", [0, 1, 2, 3, 4, 5, 6, 7, 8, 30, 999])
    def test_index_always_in_range(self, plan_length, days, make_state):
        plan = [f"Day {i}" for i in range(plan_length)]
        for current_day in range(plan_length):
            state = make_state(plan, current_day=current_day, last_workout=NOW)
            rec = determine_next_workout(plan, state, days)
            assert 0 <= rec.workout_index < plan_length

    def test_missing_plan_entry_uses_placeholder(self, make_state):
        state = make_state(["Upper", ""], current_day=0, last_workout=NOW)
        rec = determine_next_workout(["Upper", ""], state, 1)

        assert rec.workout_index == 1
        assert rec.workout_name == PLACEHOLDER_WORKOUT_NAME


class TestRecommendationEngine:
    """Test the async engine wired to a state store."""

    @pytest.mark.asyncio
    async def test_scenario_a_empty_history(self, state_store, ppl_plan):
        engine = RecommendationEngine(state_store, now=lambda: NOW)

        rec = await engine.get_next_workout_recommendation(ppl_plan)

        assert rec.workout_index == 0
        assert rec.workout_name == "Push"
        assert rec.is_regular_progression is True
        assert rec.days_since_last_workout == 0

    @pytest.mark.asyncio
    async def test_scenario_b_yesterday(self, kv_store, history_store, clock, ppl_plan, make_state):
        state = make_state(ppl_plan, current_day=0, last_workout=NOW - timedelta(days=1))
        await kv_store.set_item("workout_cycle_state", state.to_json())
        engine = RecommendationEngine(
            CycleStateStore(kv_store, history_store, clock=clock), now=lambda: NOW
        )

        rec = await engine.get_next_workout_recommendation(ppl_plan)

        assert rec.days_since_last_workout == 1
        assert rec.workout_index == 1
        assert rec.is_regular_progression is True

    @pytest.mark.asyncio
    async def test_scenario_c_ten_days(self, kv_store, history_store, clock, ppl_plan, make_state):
        state = make_state(ppl_plan, current_day=1, last_workout=NOW - timedelta(days=10))
        await kv_store.set_item("workout_cycle_state", state.to_json())
        engine = RecommendationEngine(
            CycleStateStore(kv_store, history_store, clock=clock), now=lambda: NOW
        )

        rec = await engine.get_next_workout_recommendation(ppl_plan)

        assert rec.workout_index == 0
        assert rec.is_regular_progression is False
        assert rec.suggested_intensity == SuggestedIntensity.LIGHT

    @pytest.mark.asyncio
    async def test_empty_plan_uses_default_split(self, state_store):
        engine = RecommendationEngine(state_store, now=lambda: NOW)

        rec = await engine.get_next_workout_recommendation([])

        assert rec.workout_name == DEFAULT_WEEKLY_PLAN[0]
        assert state_store.cache.state.weekly_plan == DEFAULT_WEEKLY_PLAN

    @pytest.mark.asyncio
    async def test_configured_default_split(self, state_store):
        engine = RecommendationEngine(state_store, default_weekly_plan=["Full Body"], now=lambda: NOW)

        rec = await engine.get_next_workout_recommendation(None)

        assert rec.workout_name == "Full Body"

    @pytest.mark.asyncio
    async def test_store_error_returns_welcome(self, ppl_plan):
        store = AsyncMock()
        store.get_current_cycle_state.side_effect = RuntimeError("boom")
        engine = RecommendationEngine(store, now=lambda: NOW)

        rec = await engine.get_next_workout_recommendation(ppl_plan)

        assert rec.workout_index == 0
        assert rec.workout_name == "Push"
        assert rec.is_regular_progression is True
        assert rec.suggested_intensity == SuggestedIntensity.NORMAL

    @pytest.mark.asyncio
    async def test_completion_then_next_day(self, state_store, ppl_plan):
        """Completing day 0 today recommends day 0 again today, day 1 tomorrow."""
        await state_store.get_current_cycle_state(ppl_plan)
        await state_store.update_workout_completed(0)

        today = RecommendationEngine(state_store, now=datetime.now)
        same_day = await today.get_next_workout_recommendation(ppl_plan)
        assert same_day.workout_index == 0
        assert same_day.suggested_intensity == SuggestedIntensity.LIGHT

        tomorrow = RecommendationEngine(
            state_store, now=lambda: datetime.now() + timedelta(days=1)
        )
        next_day = await tomorrow.get_next_workout_recommendation(ppl_plan)
        assert next_day.workout_index == 1

    @pytest.mark.asyncio
    async def test_update_delegates_to_store(self):
        store = AsyncMock()
        engine = RecommendationEngine(store)

        await engine.update_workout_completed(2)

        store.update_workout_completed.assert_awaited_once_with(2)
