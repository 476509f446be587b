"""Utility helpers."""

from .dates import (
    EPOCH,
    NEVER_TRAINED_DAYS,
    days_since_last_workout,
    parse_timestamp,
    utc_now_iso,
)

__all__ = [
    "EPOCH",
    "NEVER_TRAINED_DAYS",
    "days_since_last_workout",
    "parse_timestamp",
    "utc_now_iso",
]
