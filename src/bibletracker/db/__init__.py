"""Database module for local SQLite storage."""

from .models import ReadingEntryRecord, ReadingNoteRecord, StreakRecord
from .schemas import (
    ReadingEntry,
    ReadingEntryCreate,
    ReadingNote,
    ReadingNoteCreate,
    ReadingNoteUpdate,
    StreakState,
)
from .sqlite import Database, get_db, reset_db

__all__ = [
    "ReadingEntryRecord",
    "ReadingNoteRecord",
    "StreakRecord",
    "ReadingEntry",
    "ReadingEntryCreate",
    "ReadingNote",
    "ReadingNoteCreate",
    "ReadingNoteUpdate",
    "StreakState",
    "Database",
    "get_db",
    "reset_db",
]
