"""Exceptions raised by the reading ledger.

All validation errors subclass ``LedgerError`` (itself a ``ValueError``) so
callers can catch the whole family in one place.
"""


class LedgerError(ValueError):
    """Base exception for ledger validation and lookup errors."""

    pass


class UnknownBook(LedgerError):
    """Raised when a book name is not part of the canon."""

    def __init__(self, book_name: str):
        self.book_name = book_name
        super().__init__(f"Unknown book: {book_name}")


class InvalidRange(LedgerError):
    """Raised when the end chapter comes before the start chapter."""

    def __init__(self, start_chapter: int, end_chapter: int):
        self.start_chapter = start_chapter
        self.end_chapter = end_chapter
        super().__init__(
            f"Start chapter {start_chapter} cannot be greater than end chapter {end_chapter}"
        )


class ChapterOutOfBounds(LedgerError):
    """Raised when a chapter falls outside the book's chapter count."""

    def __init__(self, book_name: str, chapter: int, max_chapter: int):
        self.book_name = book_name
        self.chapter = chapter
        self.max_chapter = max_chapter
        super().__init__(f"{book_name} has chapters 1-{max_chapter} (got {chapter})")


class EntryNotFound(LedgerError):
    """Raised when a reading entry does not exist for the owner."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Reading entry not found: {entry_id}")


class NoteNotFound(LedgerError):
    """Raised when a reading note does not exist for the owner."""

    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(f"Reading note not found: {note_id}")
