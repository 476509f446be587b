"""Workout history models consumed from the history store."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .cycle import to_camel
from ..utils.dates import EPOCH, parse_timestamp


class WorkoutFeedback(BaseModel):
    """Post-workout feedback captured by the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    difficulty: Optional[int] = None
    feeling: Optional[str] = None
    ready_for_more: Optional[bool] = None
    completed_at: Optional[str] = None


class WorkoutSummaryStats(BaseModel):
    """Stats block stored alongside a finished workout."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    duration: float = 0
    total_sets: int = 0
    total_planned_sets: int = 0
    total_volume: float = 0
    personal_records: int = 0


class WorkoutHistoryEntry(BaseModel):
    """A completed workout as returned by the history store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    workout_name: Optional[str] = None
    feedback: Optional[WorkoutFeedback] = None
    stats: Optional[WorkoutSummaryStats] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class WorkoutHistoryItem(BaseModel):
    """Summarized history row for list screens."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    workout_name: Optional[str] = None
    completed_at: str = ""
    duration: float = 0
    total_volume: float = 0
    personal_records: int = 0


def resolve_completion_timestamp(entry: WorkoutHistoryEntry) -> str:
    """Return the authoritative completion timestamp of a history entry.

    Precedence:
        1. feedback.completed_at
        2. end_time (older records have no feedback block)
        3. "" (callers treat this as time zero)
    """
    if entry.feedback is not None and entry.feedback.completed_at:
        return entry.feedback.completed_at
    if entry.end_time:
        return entry.end_time
    return ""


def completion_time(entry: WorkoutHistoryEntry) -> datetime:
    """Resolved completion time as a datetime, the epoch if unknown."""
    return parse_timestamp(resolve_completion_timestamp(entry)) or EPOCH


def sort_history_newest_first(history: List[WorkoutHistoryEntry]) -> List[WorkoutHistoryEntry]:
    return sorted(history, key=completion_time, reverse=True)


def to_history_item(entry: WorkoutHistoryEntry) -> WorkoutHistoryItem:
    stats = entry.stats or WorkoutSummaryStats()
    return WorkoutHistoryItem(
        id=entry.id,
        workout_name=entry.workout_name,
        completed_at=resolve_completion_timestamp(entry),
        duration=stats.duration,
        total_volume=stats.total_volume,
        personal_records=stats.personal_records,
    )
