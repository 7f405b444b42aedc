"""Tests for the streak engine."""

from datetime import date, timedelta

import pytest

from bibletracker.db.schemas import StreakState
from bibletracker.streaks.engine import (
    StreakStatus,
    longest_run,
    reading_dates,
    recompute_streak,
    record_reading_date,
    streak_status,
)


def days_ago(today: date, n: int) -> date:
    return today - timedelta(days=n)


@pytest.fixture
def ledger_for(make_entry, today):
    """Build a ledger with one Genesis 1 entry per 'days ago' offset."""

    def _build(*offsets: int):
        return [make_entry("Genesis", 1, reading_date=days_ago(today, n)) for n in offsets]

    return _build


class TestRecomputeStreak:
    """Tests for the full streak recompute."""

    def test_empty_ledger(self, today):
        """Test no readings gives a zero streak but keeps the longest."""
        state = recompute_streak([], previous_longest=7, today=today)
        assert state == StreakState(current_streak=0, longest_streak=7, last_reading_date=None)

    def test_three_consecutive_days(self, ledger_for, today):
        """Test today, yesterday, and the day before."""
        state = recompute_streak(ledger_for(2, 1, 0), today=today)
        assert state.current_streak == 3
        assert state.longest_streak == 3
        assert state.last_reading_date == today

    def test_gap_breaks_streak(self, ledger_for, today):
        """Test a gap leaves only today."""
        state = recompute_streak(ledger_for(5, 0), today=today)
        assert state.current_streak == 1

    def test_yesterday_only_still_alive(self, ledger_for, today):
        """Test reading yesterday keeps the streak alive."""
        state = recompute_streak(ledger_for(1), today=today)
        assert state.current_streak == 1
        assert state.last_reading_date == days_ago(today, 1)

    def test_two_days_ago_is_broken(self, ledger_for, today):
        """Test nothing today or yesterday means no current streak."""
        state = recompute_streak(ledger_for(2), today=today)
        assert state.current_streak == 0
        assert state.last_reading_date == days_ago(today, 2)

    def test_run_ending_yesterday(self, ledger_for, today):
        """Test a run ending yesterday counts in full."""
        state = recompute_streak(ledger_for(1, 2, 3, 4, 6), today=today)
        assert state.current_streak == 4

    def test_duplicate_dates_count_once(self, make_entry, today):
        """Test several entries on the same day are one day."""
        ledger = [
            make_entry("Genesis", 1, reading_date=today),
            make_entry("Exodus", 1, reading_date=today),
            make_entry("Mark", 1, reading_date=days_ago(today, 1)),
        ]
        assert recompute_streak(ledger, today=today).current_streak == 2

    def test_longest_is_high_water_mark(self, ledger_for, today):
        """Test longest never drops below the previous value."""
        state = recompute_streak(ledger_for(0, 1), previous_longest=10, today=today)
        assert state.current_streak == 2
        assert state.longest_streak == 10

    def test_longest_raised_by_current(self, ledger_for, today):
        """Test longest follows a longer current streak."""
        state = recompute_streak(ledger_for(0, 1, 2, 3), previous_longest=2, today=today)
        assert state.longest_streak == 4

    def test_idempotent(self, ledger_for, today):
        """Test recomputing with the result's longest gives the same state."""
        ledger = ledger_for(0, 1, 3)
        first = recompute_streak(ledger, today=today)
        second = recompute_streak(ledger, previous_longest=first.longest_streak, today=today)
        assert first == second

    def test_order_independent(self, ledger_for, today):
        """Test ledger order does not matter."""
        ledger = ledger_for(3, 0, 2, 1, 9)
        assert recompute_streak(ledger, today=today) == recompute_streak(
            list(reversed(ledger)), today=today
        )

    def test_future_dated_entry(self, ledger_for, today):
        """Test a reading dated after today does not count as today."""
        tomorrow = -1
        state = recompute_streak(ledger_for(tomorrow, 0), today=today)
        assert state.current_streak == 0
        assert state.last_reading_date == today + timedelta(days=1)

    def test_defaults_to_real_today(self, make_entry):
        """Test today defaults to the system date."""
        ledger = [make_entry("Genesis", 1, reading_date=date.today())]
        assert recompute_streak(ledger).current_streak == 1

    def test_reading_dates_sorted_descending(self, ledger_for, today):
        """Test distinct dates come back newest first."""
        dates = reading_dates(ledger_for(2, 0, 2, 1))
        assert dates == [today, days_ago(today, 1), days_ago(today, 2)]


class TestLongestRun:
    """Tests for the longest run across the whole ledger."""

    def test_empty(self):
        """Test an empty ledger has no run."""
        assert longest_run([]) == 0

    def test_old_run_beats_current(self, ledger_for):
        """Test a finished run longer than the current one."""
        assert longest_run(ledger_for(0, 1, 10, 11, 12, 13)) == 4

    def test_duplicates_and_order(self, ledger_for):
        """Test repeated dates count once and order does not matter."""
        assert longest_run(ledger_for(3, 1, 2, 2, 1)) == 3

    def test_matches_recompute_for_live_run(self, ledger_for, today):
        """Test the live run is also the longest when nothing older beats it."""
        ledger = ledger_for(0, 1, 2, 5)
        state = recompute_streak(ledger, previous_longest=longest_run(ledger), today=today)
        assert state.current_streak == 3
        assert state.longest_streak == 3


class TestRecordReadingDate:
    """Tests for the incremental streak transition."""

    def test_first_reading(self, today):
        """Test the first reading starts a streak."""
        state = record_reading_date(StreakState(), today)
        assert state.current_streak == 1
        assert state.longest_streak == 1
        assert state.last_reading_date == today

    def test_same_day_unchanged(self, today):
        """Test a second reading on the same day."""
        state = StreakState(current_streak=3, longest_streak=5, last_reading_date=today)
        assert record_reading_date(state, today) == state

    def test_next_day_extends(self, today):
        """Test reading the following day."""
        state = StreakState(current_streak=3, longest_streak=3, last_reading_date=days_ago(today, 1))
        new = record_reading_date(state, today)
        assert new.current_streak == 4
        assert new.longest_streak == 4
        assert new.last_reading_date == today

    def test_backfill_previous_day(self, today):
        """Test backfilling the day before keeps count and marker."""
        state = StreakState(current_streak=2, longest_streak=2, last_reading_date=today)
        new = record_reading_date(state, days_ago(today, 1))
        assert new == state

    def test_gap_restarts(self, today):
        """Test a gap restarts the streak at 1."""
        state = StreakState(current_streak=6, longest_streak=6, last_reading_date=days_ago(today, 3))
        new = record_reading_date(state, today)
        assert new.current_streak == 1
        assert new.longest_streak == 6
        assert new.last_reading_date == today

    def test_agrees_with_recompute_for_appends(self, make_entry, today):
        """Test folding dates in order matches the full recompute."""
        offsets = [9, 8, 7, 4, 3, 2, 1, 0]
        ledger = []
        state = StreakState()
        for n in offsets:
            reading_date = days_ago(today, n)
            ledger.append(make_entry("Genesis", 1, reading_date=reading_date))
            state = record_reading_date(state, reading_date)

        assert state == recompute_streak(ledger, today=today)


class TestStreakStatus:
    """Tests for streak status."""

    def test_active(self, today):
        """Test reading today is active."""
        state = StreakState(current_streak=2, longest_streak=2, last_reading_date=today)
        assert streak_status(state, today) == StreakStatus.ACTIVE

    def test_at_risk(self, today):
        """Test last reading yesterday is at risk."""
        state = StreakState(current_streak=2, longest_streak=2, last_reading_date=days_ago(today, 1))
        assert streak_status(state, today) == StreakStatus.AT_RISK

    def test_ended(self, today):
        """Test an older last reading has ended."""
        state = StreakState(current_streak=0, longest_streak=4, last_reading_date=days_ago(today, 2))
        assert streak_status(state, today) == StreakStatus.ENDED

    def test_no_readings(self, today):
        """Test no readings is ended."""
        assert streak_status(StreakState(), today) == StreakStatus.ENDED


class TestStreakState:
    """Tests for the StreakState invariant."""

    def test_longest_below_current_rejected(self):
        """Test longest must be at least current."""
        with pytest.raises(ValueError):
            StreakState(current_streak=3, longest_streak=2)

    def test_negative_rejected(self):
        """Test counts cannot be negative."""
        with pytest.raises(ValueError):
            StreakState(current_streak=-1, longest_streak=0)
