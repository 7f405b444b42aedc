"""Reading streak module."""

from .engine import (
    StreakStatus,
    longest_run,
    reading_dates,
    recompute_streak,
    record_reading_date,
    streak_status,
)

__all__ = [
    "StreakStatus",
    "longest_run",
    "reading_dates",
    "recompute_streak",
    "record_reading_date",
    "streak_status",
]
