"""Pydantic schemas for reading entries, streaks, and notes.

The ``ReadingEntry`` and ``StreakState`` models are the immutable snapshots
handed to the analytics functions; they never point back at a live session.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ..canon import validate_range


# ============================================================================
# Reading Entry Schemas
# ============================================================================


class ReadingEntryBase(BaseModel):
    """Base reading entry fields."""

    reading_date: date
    book_name: str = Field(..., min_length=1)
    start_chapter: int
    end_chapter: int
    start_verse: Optional[int] = Field(None, ge=1)
    end_verse: Optional[int] = Field(None, ge=1)


class ReadingEntryCreate(ReadingEntryBase):
    """Schema for creating or replacing a reading entry.

    The chapter range is checked against the canon on construction, so the
    repository never stores an unknown book or an impossible range. The
    ledger manager runs the same check first to raise ``LedgerError``
    subclasses instead of pydantic's ``ValidationError``.
    """

    @model_validator(mode="after")
    def check_canon_range(self) -> "ReadingEntryCreate":
        validate_range(self.book_name, self.start_chapter, self.end_chapter)
        return self

    @property
    def chapters_count(self) -> int:
        return self.end_chapter - self.start_chapter + 1


class ReadingEntry(ReadingEntryBase):
    """Read-only snapshot of a stored reading entry."""

    id: str
    owner_id: str
    chapters_count: int
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def reference(self) -> str:
        """Human readable reference, e.g. ``John 3`` or ``John 3-5``."""
        if self.start_chapter == self.end_chapter:
            return f"{self.book_name} {self.start_chapter}"
        return f"{self.book_name} {self.start_chapter}-{self.end_chapter}"


# ============================================================================
# Streak Schemas
# ============================================================================


class StreakState(BaseModel):
    """Derived streak cache for one owner."""

    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    last_reading_date: Optional[date] = None

    model_config = {"from_attributes": True, "frozen": True}

    @model_validator(mode="after")
    def check_longest(self) -> "StreakState":
        if self.longest_streak < self.current_streak:
            raise ValueError("longest_streak cannot be less than current_streak")
        return self


# ============================================================================
# Note Schemas
# ============================================================================


class ReadingNoteCreate(BaseModel):
    """Schema for creating a reading note."""

    content: str = Field(..., min_length=1)
    book_name: Optional[str] = None
    chapter: Optional[int] = Field(None, ge=1)
    reading_entry_id: Optional[str] = None


class ReadingNoteUpdate(BaseModel):
    """Schema for updating a reading note."""

    content: str = Field(..., min_length=1)


class ReadingNote(BaseModel):
    """Read-only snapshot of a stored note."""

    id: str
    owner_id: str
    content: str
    book_name: Optional[str]
    chapter: Optional[int]
    reading_entry_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "frozen": True}
