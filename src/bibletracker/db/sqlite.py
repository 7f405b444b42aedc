"""SQLite database operations.

Handles database connection, session management, and the reading entry,
streak, and note repositories. Every read returns pydantic snapshots so
callers never hold on to ORM objects.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base, ReadingEntryRecord, ReadingNoteRecord, StreakRecord, utc_now
from .schemas import (
    ReadingEntry,
    ReadingEntryCreate,
    ReadingNote,
    ReadingNoteCreate,
    StreakState,
)

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".bibletracker" / "readings.db"


class Database:
    """Database connection and repository operations."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     BIBLETRACKER_DB_PATH env var or default location.
        """
        if db_path is None:
            db_path = os.environ.get("BIBLETRACKER_DB_PATH", str(DEFAULT_DB_PATH))

        self.db_path = Path(db_path).expanduser()
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # In-memory databases share a single connection so every session
        # sees the same data
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Reading Entry Operations
    # ========================================================================

    def create_entry(self, owner_id: str, data: ReadingEntryCreate) -> ReadingEntry:
        """Insert a new reading entry for an owner."""
        with self.get_session() as session:
            record = ReadingEntryRecord(
                owner_id=owner_id,
                reading_date=data.reading_date.isoformat(),
                book_name=data.book_name,
                start_chapter=data.start_chapter,
                end_chapter=data.end_chapter,
                start_verse=data.start_verse,
                end_verse=data.end_verse,
                chapters_count=data.chapters_count,
            )
            session.add(record)
            session.flush()
            entry = ReadingEntry.model_validate(record)

        logger.debug("Created entry %s for owner %s", entry.id, owner_id)
        return entry

    def get_entry(self, owner_id: str, entry_id: str) -> Optional[ReadingEntry]:
        """Get one reading entry, or None if it does not belong to the owner."""
        with self.get_session() as session:
            record = self._get_entry_record(session, owner_id, entry_id)
            return ReadingEntry.model_validate(record) if record else None

    def update_entry(
        self, owner_id: str, entry_id: str, data: ReadingEntryCreate
    ) -> Optional[ReadingEntry]:
        """Replace a reading entry wholesale.

        Returns:
            The updated entry, or None if it was not found
        """
        with self.get_session() as session:
            record = self._get_entry_record(session, owner_id, entry_id)
            if record is None:
                return None

            record.reading_date = data.reading_date.isoformat()
            record.book_name = data.book_name
            record.start_chapter = data.start_chapter
            record.end_chapter = data.end_chapter
            record.start_verse = data.start_verse
            record.end_verse = data.end_verse
            record.chapters_count = data.chapters_count
            session.flush()
            return ReadingEntry.model_validate(record)

    def delete_entry(self, owner_id: str, entry_id: str) -> bool:
        """Delete a reading entry. Notes linked to it are kept but unlinked.

        Returns:
            True if a row was deleted
        """
        with self.get_session() as session:
            record = self._get_entry_record(session, owner_id, entry_id)
            if record is None:
                return False

            notes = session.execute(
                select(ReadingNoteRecord).where(ReadingNoteRecord.reading_entry_id == entry_id)
            ).scalars()
            for note in notes:
                note.reading_entry_id = None

            session.delete(record)
            return True

    def list_entries(self, owner_id: str) -> list[ReadingEntry]:
        """All entries for an owner, most recent reading date first."""
        with self.get_session() as session:
            stmt = (
                select(ReadingEntryRecord)
                .where(ReadingEntryRecord.owner_id == owner_id)
                .order_by(
                    ReadingEntryRecord.reading_date.desc(),
                    ReadingEntryRecord.created_at.desc(),
                )
            )
            records = session.execute(stmt).scalars().all()
            return [ReadingEntry.model_validate(r) for r in records]

    def _get_entry_record(
        self, session: Session, owner_id: str, entry_id: str
    ) -> Optional[ReadingEntryRecord]:
        stmt = select(ReadingEntryRecord).where(
            ReadingEntryRecord.id == entry_id,
            ReadingEntryRecord.owner_id == owner_id,
        )
        return session.execute(stmt).scalar_one_or_none()

    # ========================================================================
    # Streak Operations
    # ========================================================================

    def get_streak(self, owner_id: str) -> StreakState:
        """Get the stored streak state, or an empty state if none exists."""
        with self.get_session() as session:
            record = session.get(StreakRecord, owner_id)
            if record is None:
                return StreakState()
            return StreakState.model_validate(record)

    def upsert_streak(self, owner_id: str, state: StreakState) -> StreakState:
        """Insert or replace the streak state for an owner."""
        with self.get_session() as session:
            record = session.get(StreakRecord, owner_id)
            if record is None:
                record = StreakRecord(owner_id=owner_id)
                session.add(record)

            record.current_streak = state.current_streak
            record.longest_streak = state.longest_streak
            record.last_reading_date = (
                state.last_reading_date.isoformat() if state.last_reading_date else None
            )
        return state

    # ========================================================================
    # Note Operations
    # ========================================================================

    def create_note(self, owner_id: str, data: ReadingNoteCreate) -> ReadingNote:
        """Insert a new note."""
        with self.get_session() as session:
            record = ReadingNoteRecord(
                owner_id=owner_id,
                content=data.content,
                book_name=data.book_name,
                chapter=data.chapter,
                reading_entry_id=data.reading_entry_id,
            )
            session.add(record)
            session.flush()
            return ReadingNote.model_validate(record)

    def get_note(self, owner_id: str, note_id: str) -> Optional[ReadingNote]:
        """Get one note, or None if it does not belong to the owner."""
        with self.get_session() as session:
            record = self._get_note_record(session, owner_id, note_id)
            return ReadingNote.model_validate(record) if record else None

    def update_note(self, owner_id: str, note_id: str, content: str) -> Optional[ReadingNote]:
        """Replace a note's content."""
        with self.get_session() as session:
            record = self._get_note_record(session, owner_id, note_id)
            if record is None:
                return None
            record.content = content
            record.updated_at = utc_now()
            session.flush()
            return ReadingNote.model_validate(record)

    def delete_note(self, owner_id: str, note_id: str) -> bool:
        """Delete a note. Returns True if a row was deleted."""
        with self.get_session() as session:
            record = self._get_note_record(session, owner_id, note_id)
            if record is None:
                return False
            session.delete(record)
            return True

    def list_notes(
        self,
        owner_id: str,
        book_name: Optional[str] = None,
        chapter: Optional[int] = None,
        reading_entry_id: Optional[str] = None,
    ) -> list[ReadingNote]:
        """List notes for an owner, newest first, with optional filters."""
        with self.get_session() as session:
            stmt = select(ReadingNoteRecord).where(ReadingNoteRecord.owner_id == owner_id)

            if book_name:
                stmt = stmt.where(ReadingNoteRecord.book_name == book_name)
            if chapter is not None:
                stmt = stmt.where(ReadingNoteRecord.chapter == chapter)
            if reading_entry_id:
                stmt = stmt.where(ReadingNoteRecord.reading_entry_id == reading_entry_id)

            stmt = stmt.order_by(ReadingNoteRecord.created_at.desc())
            records = session.execute(stmt).scalars().all()
            return [ReadingNote.model_validate(r) for r in records]

    def _get_note_record(
        self, session: Session, owner_id: str, note_id: str
    ) -> Optional[ReadingNoteRecord]:
        stmt = select(ReadingNoteRecord).where(
            ReadingNoteRecord.id == note_id,
            ReadingNoteRecord.owner_id == owner_id,
        )
        return session.execute(stmt).scalar_one_or_none()


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
