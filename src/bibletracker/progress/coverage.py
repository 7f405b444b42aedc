"""Per-book chapter coverage.

Coverage is the set of chapters of each book touched by at least one
reading entry. Entries that overlap are absorbed by the set union, so a
chapter read twice still counts once.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional

from ..canon import BIBLE_BOOKS, BookDefinition, Testament
from ..db.schemas import ReadingEntry


@dataclass(frozen=True)
class BookProgress:
    """Reading progress for a single book."""

    name: str
    chapters: int
    read: int
    percentage: int
    testament: Testament
    position: int
    chapter_ranges: str = ""

    @property
    def completed(self) -> bool:
        return self.percentage == 100

    @property
    def in_progress(self) -> bool:
        return 0 < self.percentage < 100

    @property
    def started(self) -> bool:
        return self.read > 0


def rounded_percentage(part: int, whole: int) -> int:
    """Integer percentage of part/whole, rounding halves away from zero."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def coverage(ledger: Iterable[ReadingEntry]) -> dict[str, set[int]]:
    """Map each book name to the set of chapters read in it."""
    chapters_by_book: dict[str, set[int]] = defaultdict(set)
    for entry in ledger:
        chapters_by_book[entry.book_name].update(
            range(entry.start_chapter, entry.end_chapter + 1)
        )
    return dict(chapters_by_book)


def format_ranges(chapters: Iterable[int]) -> str:
    """Render chapter numbers as merged runs.

    Example:
        >>> format_ranges({8, 1, 2, 3, 5, 7})
        '1-3, 5, 7-8'
    """
    ordered = sorted(set(chapters))
    if not ordered:
        return ""

    runs = []
    start = end = ordered[0]
    for chapter in ordered[1:]:
        if chapter == end + 1:
            end = chapter
            continue
        runs.append((start, end))
        start = end = chapter
    runs.append((start, end))

    return ", ".join(str(a) if a == b else f"{a}-{b}" for a, b in runs)


def book_progress(book: BookDefinition, covered: Optional[set[int]] = None) -> BookProgress:
    """Progress for one book given its covered chapter set."""
    covered = covered or set()
    read = len(covered)
    return BookProgress(
        name=book.name,
        chapters=book.chapters,
        read=read,
        percentage=rounded_percentage(read, book.chapters),
        testament=book.testament,
        position=book.position,
        chapter_ranges=format_ranges(covered),
    )


def all_book_progress(ledger: Iterable[ReadingEntry]) -> list[BookProgress]:
    """Progress for every book of the canon, in canonical order."""
    covered = coverage(ledger)
    return [book_progress(book, covered.get(book.name)) for book in BIBLE_BOOKS]


def started_books(ledger: Iterable[ReadingEntry]) -> list[BookProgress]:
    """Books with at least one chapter read, in canonical order."""
    return [p for p in all_book_progress(ledger) if p.started]


def top_progress(ledger: Iterable[ReadingEntry], limit: Optional[int] = 10) -> list[BookProgress]:
    """Started books by percentage descending, ties in canonical order."""
    ranked = sorted(started_books(ledger), key=lambda p: (-p.percentage, p.position))
    return ranked if limit is None else ranked[:limit]


def completed_books(ledger: Iterable[ReadingEntry]) -> list[BookProgress]:
    """Fully read books, always in canonical order."""
    return [p for p in all_book_progress(ledger) if p.completed]


def in_progress_books(ledger: Iterable[ReadingEntry]) -> list[BookProgress]:
    """Partially read books by percentage descending."""
    partial = [p for p in all_book_progress(ledger) if p.in_progress]
    return sorted(partial, key=lambda p: p.percentage, reverse=True)
