"""Pacing plan for finishing the canon by the end of the year."""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..db.schemas import ReadingEntry
from ..progress.calculator import chapters_remaining as remaining_in_ledger


@dataclass(frozen=True)
class PlanDay:
    """One day of the plan preview."""

    date: date
    is_today: bool
    has_reading: bool
    chapters_read: int
    suggested_target: int

    @property
    def target_met(self) -> bool:
        return self.has_reading and self.chapters_read >= self.suggested_target


@dataclass(frozen=True)
class PacingSummary:
    """Chapters left, days left, and the daily target that closes the gap."""

    chapters_remaining: int
    days_remaining: int
    daily_target: int


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def day_of_year(day: date) -> int:
    return day.timetuple().tm_yday


def days_remaining(today: Optional[date] = None) -> int:
    """Days left in the year after today (0 on December 31st)."""
    if today is None:
        today = date.today()
    return days_in_year(today.year) - day_of_year(today)


def daily_target(chapters_remaining: int, days_remaining: int) -> int:
    """Chapters per day needed to finish, rounded up. 0 when no days remain."""
    if days_remaining <= 0:
        return 0
    return -(-chapters_remaining // days_remaining)


def pacing_summary(
    ledger: Iterable[ReadingEntry], today: Optional[date] = None
) -> PacingSummary:
    """Pacing figures for a ledger as of today."""
    remaining = remaining_in_ledger(ledger)
    days = days_remaining(today)
    return PacingSummary(
        chapters_remaining=remaining,
        days_remaining=days,
        daily_target=daily_target(remaining, days),
    )


def chapters_by_date(ledger: Iterable[ReadingEntry]) -> dict[date, int]:
    """Raw chapter counts per reading date. Overlaps are not deduplicated."""
    totals: dict[date, int] = defaultdict(int)
    for entry in ledger:
        totals[entry.reading_date] += entry.chapters_count
    return dict(totals)


def plan_preview(
    ledger: Iterable[ReadingEntry],
    days: int = 30,
    today: Optional[date] = None,
) -> list[PlanDay]:
    """Day-by-day preview starting today.

    Every day carries the same suggested target, computed once from today's
    pacing; the target is not recomputed per day.

    Args:
        ledger: Reading entries
        days: Number of days to include
        today: First day of the preview (default: today)

    Returns:
        List of exactly ``days`` PlanDay entries
    """
    if today is None:
        today = date.today()

    entries = list(ledger)
    target = pacing_summary(entries, today).daily_target
    read_on = chapters_by_date(entries)

    plan = []
    for offset in range(days):
        day = today + timedelta(days=offset)
        chapters = read_on.get(day, 0)
        plan.append(PlanDay(
            date=day,
            is_today=offset == 0,
            has_reading=day in read_on,
            chapters_read=chapters,
            suggested_target=target,
        ))
    return plan
