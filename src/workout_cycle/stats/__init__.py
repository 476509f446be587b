"""Session statistics."""

from .calculator import (
    calculate_exercise_stats,
    calculate_progress,
    calculate_total_volume,
    calculate_workout_efficiency,
    compute_workout_stats,
    round_half_up,
    to_number_safe,
)

__all__ = [
    "calculate_exercise_stats",
    "calculate_progress",
    "calculate_total_volume",
    "calculate_workout_efficiency",
    "compute_workout_stats",
    "round_half_up",
    "to_number_safe",
]
