"""Tests for the dashboard summary."""

from datetime import datetime, timedelta

from bibletracker.canon import TOTAL_CANON_CHAPTERS
from bibletracker.db.schemas import StreakState
from bibletracker.stats.dashboard import build_dashboard, recent_readings
from bibletracker.streaks.engine import StreakStatus


class TestBuildDashboard:
    """Tests for build_dashboard."""

    def test_empty(self):
        """Test a dashboard with no readings."""
        now = datetime(2025, 12, 21, 8, 0)
        dashboard = build_dashboard([], StreakState(), now=now)

        assert dashboard.progress.chapters_read == 0
        assert dashboard.pacing.chapters_remaining == TOTAL_CANON_CHAPTERS
        assert dashboard.pacing.days_remaining == 10
        assert dashboard.pacing.daily_target == 119
        assert dashboard.streak_status == StreakStatus.ENDED
        assert len(dashboard.weekly) == 7
        assert dashboard.top_books == []
        assert dashboard.recent_readings == []

    def test_populated(self, make_entry, today):
        """Test every section is filled from the ledger."""
        now = datetime(2025, 6, 15, 20, 0)
        ledger = [
            make_entry("Jude", 1, reading_date=today),
            make_entry("Genesis", 1, 10, reading_date=today - timedelta(days=1)),
            make_entry("Genesis", 5, 12, reading_date=today - timedelta(days=30)),
        ]
        streak = StreakState(current_streak=2, longest_streak=5, last_reading_date=today)
        dashboard = build_dashboard(ledger, streak, now=now)

        assert dashboard.progress.chapters_read == 13
        assert dashboard.streak_status == StreakStatus.ACTIVE
        assert dashboard.this_week_chapters == 11
        assert dashboard.weekly[-1].chapters == 1
        assert dashboard.weekly[-2].chapters == 10
        assert [b.name for b in dashboard.top_books] == ["Jude", "Genesis"]
        assert dashboard.books_started == 2
        assert dashboard.books_completed == 1
        assert dashboard.recent_readings[0].book_name == "Jude"


class TestRecentReadings:
    """Tests for recent readings ordering."""

    def test_limit_and_order(self, make_entry, today):
        """Test newest reading date first, capped at the limit."""
        ledger = [
            make_entry("Genesis", n, reading_date=today - timedelta(days=n)) for n in range(1, 15)
        ]
        recent = recent_readings(ledger)
        assert len(recent) == 10
        assert recent[0].start_chapter == 1
        assert recent[-1].start_chapter == 10
