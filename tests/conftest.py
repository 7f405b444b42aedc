"""Pytest configuration and shared fixtures.

This module provides fixtures for testing bibletracker, including an
in-memory database and a factory for reading entry snapshots.
"""

import os
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Generator, Optional
from uuid import uuid4

import pytest

from bibletracker.config import reset_config
from bibletracker.db.schemas import ReadingEntry
from bibletracker.db.sqlite import Database, reset_db

OWNER = "test-owner"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Point the global database and config at a temporary file."""
    reset_db()
    reset_config()

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    os.environ["BIBLETRACKER_DB_PATH"] = str(db_path)
    os.environ["BIBLETRACKER_OWNER"] = OWNER

    yield db_path

    # Cleanup
    reset_db()
    reset_config()
    os.environ.pop("BIBLETRACKER_DB_PATH", None)
    os.environ.pop("BIBLETRACKER_OWNER", None)
    if db_path.exists():
        db_path.unlink()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def today() -> date:
    """A fixed mid-year reference day."""
    return date(2025, 6, 15)


@pytest.fixture
def make_entry() -> Callable[..., ReadingEntry]:
    """Factory for reading entry snapshots that never touch a database."""

    def _make(
        book_name: str,
        start_chapter: int,
        end_chapter: Optional[int] = None,
        reading_date: Optional[date] = None,
    ) -> ReadingEntry:
        end_chapter = end_chapter or start_chapter
        return ReadingEntry(
            id=str(uuid4()),
            owner_id=OWNER,
            reading_date=reading_date or date(2025, 6, 15),
            book_name=book_name,
            start_chapter=start_chapter,
            end_chapter=end_chapter,
            chapters_count=end_chapter - start_chapter + 1,
            created_at=datetime.now(timezone.utc),
        )

    return _make


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_app():
    """Get the CLI app for testing."""
    from bibletracker.cli import app
    return app
