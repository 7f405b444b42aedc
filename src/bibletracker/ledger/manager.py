"""Ledger manager: reading entry operations for one owner.

Every mutation validates against the canon first, writes through the
database repository, and then rebuilds the streak from the full ledger and
stores it. The streak is never patched in place.
"""

import logging
from datetime import date
from typing import Optional

from ..canon import validate_range
from ..db.schemas import ReadingEntry, ReadingEntryCreate, StreakState
from ..db.sqlite import Database, get_db
from ..errors import EntryNotFound
from ..streaks.engine import longest_run, recompute_streak

logger = logging.getLogger(__name__)


class LedgerManager:
    """Manages one owner's reading entries and derived streak."""

    def __init__(self, owner_id: str, db: Optional[Database] = None):
        """Initialize ledger manager.

        Args:
            owner_id: Owner whose ledger this manager operates on
            db: Database instance
        """
        self.owner_id = owner_id
        self.db = db or get_db()

    # -------------------------------------------------------------------------
    # Entry Management
    # -------------------------------------------------------------------------

    def add_reading(
        self,
        book_name: str,
        start_chapter: int,
        end_chapter: Optional[int] = None,
        reading_date: Optional[date] = None,
        start_verse: Optional[int] = None,
        end_verse: Optional[int] = None,
    ) -> ReadingEntry:
        """Log a reading.

        Args:
            book_name: Canonical book name
            start_chapter: First chapter read
            end_chapter: Last chapter read (default: start_chapter)
            reading_date: Day of the reading (default: today)
            start_verse: Optional first verse
            end_verse: Optional last verse

        Returns:
            The stored entry

        Raises:
            UnknownBook, InvalidRange, ChapterOutOfBounds
        """
        data = self._build_entry(
            book_name, start_chapter, end_chapter, reading_date, start_verse, end_verse
        )
        entry = self.db.create_entry(self.owner_id, data)
        logger.info("Added %s on %s", entry.reference, entry.reading_date)

        self.refresh_streak()
        return entry

    def edit_reading(
        self,
        entry_id: str,
        book_name: str,
        start_chapter: int,
        end_chapter: Optional[int] = None,
        reading_date: Optional[date] = None,
        start_verse: Optional[int] = None,
        end_verse: Optional[int] = None,
    ) -> ReadingEntry:
        """Replace an existing reading wholesale.

        ``reading_date`` defaults to the entry's current date rather than
        today.

        Raises:
            EntryNotFound: No such entry for this owner
            UnknownBook, InvalidRange, ChapterOutOfBounds
        """
        if reading_date is None:
            existing = self.get_reading(entry_id)
            reading_date = existing.reading_date

        data = self._build_entry(
            book_name, start_chapter, end_chapter, reading_date, start_verse, end_verse
        )
        entry = self.db.update_entry(self.owner_id, entry_id, data)
        if entry is None:
            raise EntryNotFound(entry_id)
        logger.info("Edited entry %s: %s on %s", entry_id, entry.reference, entry.reading_date)

        self.refresh_streak()
        return entry

    def delete_reading(self, entry_id: str) -> None:
        """Delete a reading and rebuild the streak.

        Raises:
            EntryNotFound: No such entry for this owner
        """
        if not self.db.delete_entry(self.owner_id, entry_id):
            raise EntryNotFound(entry_id)
        logger.info("Deleted entry %s", entry_id)

        self.refresh_streak()

    def get_reading(self, entry_id: str) -> ReadingEntry:
        """Get a single reading.

        Raises:
            EntryNotFound: No such entry for this owner
        """
        entry = self.db.get_entry(self.owner_id, entry_id)
        if entry is None:
            raise EntryNotFound(entry_id)
        return entry

    def ledger(self) -> list[ReadingEntry]:
        """Snapshot of every entry, most recent reading date first."""
        return self.db.list_entries(self.owner_id)

    # -------------------------------------------------------------------------
    # Streak
    # -------------------------------------------------------------------------

    def streak(self) -> StreakState:
        """The stored streak state."""
        return self.db.get_streak(self.owner_id)

    def refresh_streak(self, today: Optional[date] = None) -> StreakState:
        """Rebuild the streak from the full ledger and store it.

        The longest streak is taken from the ledger's history, not from the
        stored value, so deleting a reading can lower it.

        Args:
            today: Reference day (default: today)

        Returns:
            The new streak state
        """
        entries = self.ledger()
        state = recompute_streak(
            entries,
            previous_longest=longest_run(entries),
            today=today,
        )
        self.db.upsert_streak(self.owner_id, state)
        logger.debug(
            "Streak for %s: current=%d longest=%d last=%s",
            self.owner_id,
            state.current_streak,
            state.longest_streak,
            state.last_reading_date,
        )
        return state

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_entry(
        book_name: str,
        start_chapter: int,
        end_chapter: Optional[int],
        reading_date: Optional[date],
        start_verse: Optional[int],
        end_verse: Optional[int],
    ) -> ReadingEntryCreate:
        if end_chapter is None:
            end_chapter = start_chapter
        book = validate_range(book_name, start_chapter, end_chapter)

        return ReadingEntryCreate(
            reading_date=reading_date or date.today(),
            book_name=book.name,
            start_chapter=start_chapter,
            end_chapter=end_chapter,
            start_verse=start_verse,
            end_verse=end_verse,
        )
