"""Data models for cycle state, history and session statistics."""

from .cycle import (
    CycleState,
    CycleStatistics,
    Recommendation,
    SuggestedIntensity,
    to_camel,
)
from .history import (
    WorkoutFeedback,
    WorkoutHistoryEntry,
    WorkoutHistoryItem,
    WorkoutSummaryStats,
    completion_time,
    resolve_completion_timestamp,
    sort_history_newest_first,
    to_history_item,
)
from .workouts import (
    ExerciseStats,
    SetType,
    WorkoutExercise,
    WorkoutSet,
    WorkoutStats,
    to_number_safe,
)

__all__ = [
    "CycleState",
    "CycleStatistics",
    "Recommendation",
    "SuggestedIntensity",
    "to_camel",
    "WorkoutFeedback",
    "WorkoutHistoryEntry",
    "WorkoutHistoryItem",
    "WorkoutSummaryStats",
    "completion_time",
    "resolve_completion_timestamp",
    "sort_history_newest_first",
    "to_history_item",
    "ExerciseStats",
    "SetType",
    "WorkoutExercise",
    "WorkoutSet",
    "WorkoutStats",
    "to_number_safe",
]
