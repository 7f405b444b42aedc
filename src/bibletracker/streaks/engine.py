"""Daily reading streak calculation.

The streak is a fold over the distinct reading dates in the ledger.
``recompute_streak`` is the authoritative calculation and must be run after
every add, edit, or delete. ``record_reading_date`` is an incremental shortcut
for appending a single date; it has no inverse, so it is never used after an
edit that moves a date or after a delete.
"""

from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from ..db.schemas import ReadingEntry, StreakState

ONE_DAY = timedelta(days=1)


class StreakStatus(str, Enum):
    """Status of the current streak relative to today."""

    ACTIVE = "active"
    AT_RISK = "at_risk"  # Last read yesterday, nothing yet today
    ENDED = "ended"


def reading_dates(ledger: Iterable[ReadingEntry]) -> list[date]:
    """Distinct reading dates, most recent first."""
    return sorted({entry.reading_date for entry in ledger}, reverse=True)


def longest_run(ledger: Iterable[ReadingEntry]) -> int:
    """Length of the longest run of consecutive reading dates in the ledger."""
    dates = reading_dates(ledger)
    if not dates:
        return 0

    longest = run = 1
    for newer, older in zip(dates, dates[1:]):
        run = run + 1 if newer - older == ONE_DAY else 1
        longest = max(longest, run)
    return longest


def recompute_streak(
    ledger: Iterable[ReadingEntry],
    previous_longest: int = 0,
    today: Optional[date] = None,
) -> StreakState:
    """Rebuild the streak state from the full ledger.

    The current streak counts consecutive days ending at the most recent
    reading date, provided that date is today or yesterday. The longest
    streak never drops below ``previous_longest``.

    Args:
        ledger: All reading entries of one owner
        previous_longest: Longest streak recorded so far
        today: Reference day (default: today)

    Returns:
        The recomputed StreakState
    """
    if today is None:
        today = date.today()

    dates = reading_dates(ledger)
    if not dates:
        return StreakState(
            current_streak=0,
            longest_streak=previous_longest,
            last_reading_date=None,
        )

    most_recent = dates[0]
    current = 0
    if most_recent in (today, today - ONE_DAY):
        current = 1
        for newer, older in zip(dates, dates[1:]):
            if newer - older != ONE_DAY:
                break
            current += 1

    return StreakState(
        current_streak=current,
        longest_streak=max(previous_longest, current),
        last_reading_date=most_recent,
    )


def record_reading_date(state: StreakState, reading_date: date) -> StreakState:
    """Advance a streak state by one newly recorded reading date.

    Reading the day before the last recorded day (a backfill) leaves both
    the count and the last reading date untouched.
    """
    if state.last_reading_date is None:
        current = 1
    else:
        gap = (reading_date - state.last_reading_date).days
        if gap in (0, -1):
            return state
        current = state.current_streak + 1 if gap == 1 else 1

    return StreakState(
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        last_reading_date=reading_date,
    )


def streak_status(state: StreakState, today: Optional[date] = None) -> StreakStatus:
    """Whether the streak is alive today, needs a reading today, or is over."""
    if today is None:
        today = date.today()

    last = state.last_reading_date
    if last is None or state.current_streak == 0:
        return StreakStatus.ENDED
    if last >= today:
        return StreakStatus.ACTIVE
    if last == today - ONE_DAY:
        return StreakStatus.AT_RISK
    return StreakStatus.ENDED
