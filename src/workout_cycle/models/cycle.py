"""Cycle state and recommendation models."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class SuggestedIntensity(str, Enum):
    """How hard the next session should be."""
    NORMAL = "normal"
    LIGHT = "light"
    CATCHUP = "catchup"


class CycleState(BaseModel):
    """Where the user currently stands in their repeating weekly split.

    Persisted as a single JSON record using camelCase keys, the same shape
    the mobile client writes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    current_week_number: int = Field(default=1, ge=1, description="Derived from total completed")
    current_day_in_week: int = Field(default=0, ge=0, description="Index of the last completed day")
    last_workout_date: str = Field(default="", description="ISO timestamp, empty if never trained")
    total_workouts_completed: int = Field(default=0, ge=0)
    program_start_date: str = Field(default="", description="ISO timestamp of first initialization")
    weekly_plan: List[str] = Field(default_factory=list)

    @property
    def plan_length(self) -> int:
        return len(self.weekly_plan)

    def matches_plan(self, weekly_plan: List[str]) -> bool:
        """Element-wise, ordered comparison against another plan."""
        return list(self.weekly_plan) == list(weekly_plan)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class Recommendation(BaseModel):
    """Next workout to perform, with rationale."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    workout_name: str
    workout_index: int
    reason: str
    is_regular_progression: bool
    days_since_last_workout: int = Field(..., description="999 means no prior session")
    suggested_intensity: SuggestedIntensity = SuggestedIntensity.NORMAL


class CycleStatistics(BaseModel):
    """Progress summary across the whole program."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    current_week: int = 1
    total_workouts: int = 0
    days_in_program: int = 0
    consistency: int = Field(default=100, ge=0, le=100, description="Percentage consistency score")
