"""Weekly reading histogram.

Two independent "this week" figures live here. ``weekly_histogram`` buckets
chapters into the last seven calendar days by exact date match.
``this_week_chapters`` sums entries in a rolling 168-hour window ending now.
Near midnight the two can disagree; both are kept as they are.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ..db.schemas import ReadingEntry
from .pacing import chapters_by_date

WEEKDAY_SHORT_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
ROLLING_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class DayBucket:
    """Chapters read on one calendar day."""

    label: str
    date: date
    chapters: int


def weekly_histogram(
    ledger: Iterable[ReadingEntry], today: Optional[date] = None
) -> list[DayBucket]:
    """Seven buckets for today-6 through today, oldest first.

    The last bucket is labelled ``"Today"``; the rest use weekday short names.
    """
    if today is None:
        today = date.today()

    read_on = chapters_by_date(ledger)
    buckets = []
    for days_ago in range(6, -1, -1):
        day = today - timedelta(days=days_ago)
        label = "Today" if days_ago == 0 else WEEKDAY_SHORT_NAMES[day.weekday()]
        buckets.append(DayBucket(label=label, date=day, chapters=read_on.get(day, 0)))
    return buckets


def this_week_chapters(
    ledger: Iterable[ReadingEntry], now: Optional[datetime] = None
) -> int:
    """Chapters from entries dated within the last 7x24 hours.

    A reading date counts as local midnight of that day, so the entry from
    exactly seven days ago only counts at the stroke of midnight.
    """
    if now is None:
        now = datetime.now()

    window_start = now - ROLLING_WINDOW
    return sum(
        entry.chapters_count
        for entry in ledger
        if datetime.combine(entry.reading_date, time.min) >= window_start
    )
