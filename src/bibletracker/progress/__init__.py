"""Chapter coverage and reading progress."""

from .calculator import (
    ProgressSummary,
    TestamentProgress,
    chapters_remaining,
    progress_percentage,
    summarize,
    testament_progress,
    total_chapters_read,
)
from .coverage import (
    BookProgress,
    all_book_progress,
    book_progress,
    completed_books,
    coverage,
    format_ranges,
    in_progress_books,
    started_books,
    top_progress,
)

__all__ = [
    "ProgressSummary",
    "TestamentProgress",
    "chapters_remaining",
    "progress_percentage",
    "summarize",
    "testament_progress",
    "total_chapters_read",
    "BookProgress",
    "all_book_progress",
    "book_progress",
    "completed_books",
    "coverage",
    "format_ranges",
    "in_progress_books",
    "started_books",
    "top_progress",
]
