"""Exercise/set models for live and retrospective session statistics."""

import math
import re
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .cycle import to_camel


# Leading decimal literal, read the way a lenient float parser does ("10kg" -> 10)
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_rep_range(text: str) -> Optional[float]:
    """Midpoint of a "min-max" range, None if text is not one."""
    parts = text.split("-")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        return None
    try:
        return (float(parts[0]) + float(parts[1])) / 2
    except ValueError:
        return None


def to_number_safe(value: Any) -> float:
    """
    Coerce a loosely-typed numeric field to a non-negative float.

    Accepts numbers, rep ranges ("8-12" -> 10.0) and strings with a
    leading number ("42.5", "10kg", "1e-5"). Anything missing,
    unparseable, negative or non-finite becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        number = _parse_rep_range(text)
        if number is None:
            match = _LEADING_NUMBER.match(text)
            number = float(match.group(0)) if match else 0.0
    else:
        return 0.0

    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _to_flag(value: Any) -> bool:
    return bool(value) if value is not None else False


SafeNumber = Annotated[float, BeforeValidator(to_number_safe)]
Flag = Annotated[bool, BeforeValidator(_to_flag)]


class SetType(str, Enum):
    """Purpose of a set. Only informational for statistics."""
    WARMUP = "warmup"
    WORKING = "working"
    DROPSET = "dropset"
    FAILURE = "failure"


class WorkoutSet(BaseModel):
    """A single set inside an exercise."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: Optional[str] = None
    type: str = SetType.WORKING.value
    target_reps: SafeNumber = 0.0
    target_weight: SafeNumber = 0.0
    actual_reps: SafeNumber = 0.0
    actual_weight: SafeNumber = 0.0
    completed: Flag = False
    is_pr: Flag = Field(default=False, alias="isPR")
    rest_time: SafeNumber = 0.0
    rpe: SafeNumber = 0.0
    time_to_complete: SafeNumber = Field(default=0.0, description="Seconds spent on the set")

    @property
    def volume(self) -> float:
        return self.actual_weight * self.actual_reps


class WorkoutExercise(BaseModel):
    """An exercise in a session with its ordered sets."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: Optional[str] = None
    name: str = ""
    sets: List[WorkoutSet] = Field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return bool(self.sets) and all(s.completed for s in self.sets)


class ExerciseStats(BaseModel):
    """Per-exercise reduction of completed sets."""

    completed_sets: int = 0
    total_volume: float = 0.0
    total_reps: float = 0.0
    personal_records: int = 0
    time_to_complete: float = 0.0


class WorkoutStats(BaseModel):
    """Whole-session statistics shown on live and summary screens."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total_exercises: int = 0
    completed_exercises: int = 0
    total_sets: int = 0
    completed_sets: int = 0
    total_volume: float = 0.0
    total_reps: float = 0.0
    progress_percentage: int = 0
    personal_records: int = 0
    average_volume_per_set: float = 0.0
    average_reps_per_set: float = 0.0
    time_to_complete: float = 0.0
