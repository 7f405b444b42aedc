"""Dashboard summary combining every derived view of a ledger."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from ..db.schemas import ReadingEntry, StreakState
from ..progress.calculator import ProgressSummary, summarize
from ..progress.coverage import BookProgress, top_progress
from ..streaks.engine import StreakStatus, streak_status
from .pacing import PacingSummary, daily_target, days_remaining
from .weekly import DayBucket, this_week_chapters, weekly_histogram


@dataclass
class Dashboard:
    """Everything the dashboard view shows."""

    progress: ProgressSummary
    streak: StreakState
    streak_status: StreakStatus
    pacing: PacingSummary
    weekly: list[DayBucket] = field(default_factory=list)
    this_week_chapters: int = 0
    top_books: list[BookProgress] = field(default_factory=list)
    recent_readings: list[ReadingEntry] = field(default_factory=list)

    @property
    def books_started(self) -> int:
        return self.progress.books_started

    @property
    def books_completed(self) -> int:
        return self.progress.books_completed


def recent_readings(ledger: Iterable[ReadingEntry], limit: int = 10) -> list[ReadingEntry]:
    """Most recent entries by reading date, then by creation time."""
    ordered = sorted(ledger, key=lambda e: (e.reading_date, e.created_at), reverse=True)
    return ordered[:limit]


def build_dashboard(
    ledger: Iterable[ReadingEntry],
    streak: StreakState,
    now: Optional[datetime] = None,
) -> Dashboard:
    """Build the full dashboard from a ledger snapshot and its streak state.

    Args:
        ledger: All reading entries of one owner
        streak: The owner's current streak state
        now: Reference instant (default: now)
    """
    if now is None:
        now = datetime.now()
    today = now.date()

    entries = list(ledger)
    progress = summarize(entries)
    days = days_remaining(today)

    return Dashboard(
        progress=progress,
        streak=streak,
        streak_status=streak_status(streak, today),
        pacing=PacingSummary(
            chapters_remaining=progress.chapters_remaining,
            days_remaining=days,
            daily_target=daily_target(progress.chapters_remaining, days),
        ),
        weekly=weekly_histogram(entries, today),
        this_week_chapters=this_week_chapters(entries, now),
        top_books=top_progress(entries, limit=10),
        recent_readings=recent_readings(entries),
    )
