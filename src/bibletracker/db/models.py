"""SQLAlchemy ORM models for the local SQLite database.

Tables:
- reading_entries: Logged chapter ranges, one row per reading
- user_streaks: Cached streak state, one row per owner
- reading_notes: Free-form notes on a book, chapter, or reading
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ReadingEntryRecord(Base):
    """A logged reading: one book, one contiguous chapter range, one day."""

    __tablename__ = "reading_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    reading_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # ISO date
    book_name: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    start_chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    end_chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    start_verse: Mapped[Optional[int]] = mapped_column(Integer)
    end_verse: Mapped[Optional[int]] = mapped_column(Integer)
    chapters_count: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)

    def __repr__(self) -> str:
        return (
            f"<ReadingEntryRecord(id={self.id}, book={self.book_name}, "
            f"chapters={self.start_chapter}-{self.end_chapter}, date={self.reading_date})>"
        )


class StreakRecord(Base):
    """Persisted streak state for one owner."""

    __tablename__ = "user_streaks"

    owner_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    current_streak: Mapped[int] = mapped_column(Integer, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0)
    last_reading_date: Mapped[Optional[str]] = mapped_column(String(10))  # ISO date

    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return (
            f"<StreakRecord(owner={self.owner_id}, current={self.current_streak}, "
            f"longest={self.longest_streak})>"
        )


class ReadingNoteRecord(Base):
    """A note on a book, a chapter, or a specific reading entry."""

    __tablename__ = "reading_notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    reading_entry_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("reading_entries.id", ondelete="SET NULL"), index=True
    )
    book_name: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    chapter: Mapped[Optional[int]] = mapped_column(Integer)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<ReadingNoteRecord(id={self.id}, book={self.book_name}, chapter={self.chapter})>"
