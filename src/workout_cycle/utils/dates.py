"""Date helpers for cycle state timestamps.

Timestamps are stored as ISO-8601 strings. Parsed values are always
timezone-aware UTC so history entries written with and without an offset
can be sorted together; naive strings are taken as local time.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

# Sentinel returned when there is no usable last-workout date
NEVER_TRAINED_DAYS = 999

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed.astimezone(timezone.utc)


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def _local_date(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()


def days_since_last_workout(
    last_workout_date: Optional[str],
    now: Optional[datetime] = None,
) -> int:
    """
    Calendar days between the last workout and today.

    Counts local midnights crossed, not elapsed 24h periods, so a workout
    at 23:00 yesterday is one day ago at 07:00 today.

    Args:
        last_workout_date: ISO-8601 timestamp, or "" if never trained
        now: Reference time (defaults to the current local time)

    Returns:
        Non-negative day count, or NEVER_TRAINED_DAYS (999) when the date is
        missing or cannot be parsed.
    """
    if not last_workout_date:
        return NEVER_TRAINED_DAYS

    last = parse_timestamp(last_workout_date)
    if last is None:
        logger.warning(
            "Unparseable last workout date, treating as never trained",
            extra={"last_workout_date": last_workout_date},
        )
        return NEVER_TRAINED_DAYS

    today = _local_date(now or datetime.now())
    days = (today - _local_date(last)).days
    return max(0, days)
