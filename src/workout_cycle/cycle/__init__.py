"""Workout cycle progression: state persistence and next-workout logic."""

from .state_store import (
    CycleStateCache,
    CycleStateResult,
    CycleStateStore,
    default_cycle_state,
    week_number_for,
)
from .recommendation import (
    DEFAULT_WEEKLY_PLAN,
    PLACEHOLDER_WORKOUT_NAME,
    RecommendationEngine,
    determine_next_workout,
    welcome_recommendation,
)
from .service import CycleService, calculate_consistency, create_cycle_service

__all__ = [
    "CycleStateCache",
    "CycleStateResult",
    "CycleStateStore",
    "default_cycle_state",
    "week_number_for",
    "DEFAULT_WEEKLY_PLAN",
    "PLACEHOLDER_WORKOUT_NAME",
    "RecommendationEngine",
    "determine_next_workout",
    "welcome_recommendation",
    "CycleService",
    "calculate_consistency",
    "create_cycle_service",
]
