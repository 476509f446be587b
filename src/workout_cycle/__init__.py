"""Workout cycle progression engine and session statistics."""

from workout_cycle.cycle import (
    CycleService,
    CycleStateStore,
    RecommendationEngine,
    create_cycle_service,
    determine_next_workout,
)
from workout_cycle.models import (
    CycleState,
    CycleStatistics,
    Recommendation,
    SuggestedIntensity,
    WorkoutExercise,
    WorkoutHistoryEntry,
    WorkoutSet,
    WorkoutStats,
)
from workout_cycle.stats import compute_workout_stats
from workout_cycle.utils import days_since_last_workout

__version__ = "0.1.0"

__all__ = [
    "CycleService",
    "CycleStateStore",
    "RecommendationEngine",
    "create_cycle_service",
    "determine_next_workout",
    "CycleState",
    "CycleStatistics",
    "Recommendation",
    "SuggestedIntensity",
    "WorkoutExercise",
    "WorkoutHistoryEntry",
    "WorkoutSet",
    "WorkoutStats",
    "compute_workout_stats",
    "days_since_last_workout",
]
