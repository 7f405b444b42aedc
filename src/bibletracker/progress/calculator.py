"""Overall and per-testament reading progress.

Totals are always taken from the unioned per-book coverage. Summing each
entry's ``chapters_count`` would double-count overlapping readings.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..canon import TOTAL_CANON_CHAPTERS, Testament, books_in, find_book, testament_chapters
from ..db.schemas import ReadingEntry
from .coverage import book_progress, coverage, rounded_percentage


@dataclass(frozen=True)
class TestamentProgress:
    """Chapter and book completion for one testament."""

    testament: Testament
    chapters_read: int
    chapters_total: int
    percentage: int
    books_total: int
    books_started: int
    books_completed: int

    @property
    def chapters_remaining(self) -> int:
        return self.chapters_total - self.chapters_read


@dataclass(frozen=True)
class ProgressSummary:
    """Whole-canon progress plus the two testament breakdowns."""

    chapters_read: int
    chapters_total: int
    percentage: int
    chapters_remaining: int
    old_testament: TestamentProgress
    new_testament: TestamentProgress

    @property
    def books_completed(self) -> int:
        return self.old_testament.books_completed + self.new_testament.books_completed

    @property
    def books_started(self) -> int:
        return self.old_testament.books_started + self.new_testament.books_started


def _chapters_read(covered: dict[str, set[int]], testament: Optional[Testament] = None) -> int:
    total = 0
    for name, chapters in covered.items():
        book = find_book(name)
        if book is None:
            continue
        if testament is None or book.testament == testament:
            total += len(chapters)
    return total


def total_chapters_read(ledger: Iterable[ReadingEntry]) -> int:
    """Distinct chapters read across the whole canon."""
    return _chapters_read(coverage(ledger))


def progress_percentage(ledger: Iterable[ReadingEntry]) -> int:
    """Whole-canon progress as a rounded percentage."""
    return rounded_percentage(total_chapters_read(ledger), TOTAL_CANON_CHAPTERS)


def chapters_remaining(ledger: Iterable[ReadingEntry]) -> int:
    """Chapters of the canon not yet read."""
    return TOTAL_CANON_CHAPTERS - total_chapters_read(ledger)


def testament_progress(
    ledger: Iterable[ReadingEntry],
    testament: Testament,
    covered: Optional[dict[str, set[int]]] = None,
) -> TestamentProgress:
    """Progress restricted to the books of one testament.

    Args:
        ledger: Reading entries
        testament: Which testament to summarize
        covered: Precomputed coverage, to avoid recomputing it per testament
    """
    if covered is None:
        covered = coverage(ledger)

    books = [book_progress(book, covered.get(book.name)) for book in books_in(testament)]
    chapters_total = testament_chapters(testament)
    chapters_read = _chapters_read(covered, testament)

    return TestamentProgress(
        testament=testament,
        chapters_read=chapters_read,
        chapters_total=chapters_total,
        percentage=rounded_percentage(chapters_read, chapters_total),
        books_total=len(books),
        books_started=sum(1 for b in books if b.started),
        books_completed=sum(1 for b in books if b.completed),
    )


def summarize(ledger: Iterable[ReadingEntry]) -> ProgressSummary:
    """Compute overall progress and both testament breakdowns in one pass."""
    entries = list(ledger)
    covered = coverage(entries)
    chapters_read = _chapters_read(covered)

    return ProgressSummary(
        chapters_read=chapters_read,
        chapters_total=TOTAL_CANON_CHAPTERS,
        percentage=rounded_percentage(chapters_read, TOTAL_CANON_CHAPTERS),
        chapters_remaining=TOTAL_CANON_CHAPTERS - chapters_read,
        old_testament=testament_progress(entries, Testament.OLD, covered),
        new_testament=testament_progress(entries, Testament.NEW, covered),
    )
