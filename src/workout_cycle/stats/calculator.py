"""Workout session statistics.

Pure reductions over exercises and their sets. Called on every set
change during an active session and again on summary screens, so nothing
here performs I/O or raises on bad numeric input.
"""

import logging
import math
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from ..models.workouts import (
    ExerciseStats,
    WorkoutExercise,
    WorkoutSet,
    WorkoutStats,
    to_number_safe,
)

logger = logging.getLogger(__name__)

__all__ = [
    "round_half_up",
    "to_number_safe",
    "calculate_exercise_stats",
    "compute_workout_stats",
    "calculate_progress",
    "calculate_total_volume",
    "calculate_workout_efficiency",
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _coerce_exercise(exercise: Any) -> Optional[WorkoutExercise]:
    if isinstance(exercise, WorkoutExercise):
        return exercise
    try:
        return WorkoutExercise.model_validate(exercise)
    except ValidationError as e:
        logger.warning("Ignoring malformed exercise in stats: %s", e.error_count())
        return None


def calculate_exercise_stats(sets: Optional[Iterable[WorkoutSet]]) -> ExerciseStats:
    """Reduce one exercise's sets. Only completed sets contribute."""
    stats = ExerciseStats()
    for workout_set in sets or []:
        if not workout_set.completed:
            continue
        stats.completed_sets += 1
        stats.total_volume += workout_set.volume
        stats.total_reps += workout_set.actual_reps
        stats.time_to_complete += workout_set.time_to_complete
        if workout_set.is_pr:
            stats.personal_records += 1
    return stats


def compute_workout_stats(exercises: Optional[Iterable[Any]]) -> WorkoutStats:
    """
    Calculate statistics for a whole workout.

    Args:
        exercises: WorkoutExercise objects, or dicts in the client's camelCase
            or snake_case shape

    Returns:
        WorkoutStats; all zeros for an empty or missing list.
    """
    parsed: List[WorkoutExercise] = []
    for exercise in exercises or []:
        coerced = _coerce_exercise(exercise)
        if coerced is not None:
            parsed.append(coerced)

    result = WorkoutStats(total_exercises=len(parsed))
    for exercise in parsed:
        if not exercise.sets:
            continue
        exercise_stats = calculate_exercise_stats(exercise.sets)

        result.total_sets += len(exercise.sets)
        result.completed_sets += exercise_stats.completed_sets
        result.total_volume += exercise_stats.total_volume
        result.total_reps += exercise_stats.total_reps
        result.personal_records += exercise_stats.personal_records
        result.time_to_complete += exercise_stats.time_to_complete
        if exercise.is_completed:
            result.completed_exercises += 1

    result.progress_percentage = calculate_progress(result.completed_sets, result.total_sets)
    if result.completed_sets > 0:
        result.average_volume_per_set = result.total_volume / result.completed_sets
        result.average_reps_per_set = result.total_reps / result.completed_sets
    return result


def calculate_progress(completed: float, total: float) -> int:
    """Completion percentage, 0 when there is nothing to complete."""
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def calculate_total_volume(weight: Any, reps: Any, sets: Any) -> float:
    """Planned volume: weight x reps x sets."""
    return to_number_safe(weight) * to_number_safe(reps) * to_number_safe(sets)


def calculate_workout_efficiency(
    completed_sets: float,
    planned_sets: float,
    duration: float,
    planned_duration: float,
) -> int:
    """
    Workout efficiency score from 1 to 10.

    70% completion rate, 30% time efficiency (planned / actual duration).
    A missing planned or actual value counts as zero for that component.
    """
    completion_rate = completed_sets / planned_sets if planned_sets > 0 else 0.0
    time_efficiency = planned_duration / duration if duration > 0 else 0.0
    efficiency = (completion_rate * 0.7 + time_efficiency * 0.3) * 10
    return round_half_up(max(1.0, min(10.0, efficiency)))
