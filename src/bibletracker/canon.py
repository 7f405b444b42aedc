"""Canon reference data.

The 66 books of the Protestant canon in canonical order, with chapter
counts and testament grouping. Everything that needs to know how many
chapters a book has, or which testament it belongs to, reads it from here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ChapterOutOfBounds, InvalidRange, UnknownBook


class Testament(str, Enum):
    """Testament grouping of a book."""

    OLD = "old"
    NEW = "new"


@dataclass(frozen=True)
class BookDefinition:
    """A single book of the canon."""

    name: str
    chapters: int
    testament: Testament
    position: int  # 0-based canonical order

    @property
    def is_old_testament(self) -> bool:
        return self.testament == Testament.OLD


_OLD_TESTAMENT = [
    ("Genesis", 50),
    ("Exodus", 40),
    ("Leviticus", 27),
    ("Numbers", 36),
    ("Deuteronomy", 34),
    ("Joshua", 24),
    ("Judges", 21),
    ("Ruth", 4),
    ("1 Samuel", 31),
    ("2 Samuel", 24),
    ("1 Kings", 22),
    ("2 Kings", 25),
    ("1 Chronicles", 29),
    ("2 Chronicles", 36),
    ("Ezra", 10),
    ("Nehemiah", 13),
    ("Esther", 10),
    ("Job", 42),
    ("Psalms", 150),
    ("Proverbs", 31),
    ("Ecclesiastes", 12),
    ("Song of Solomon", 8),
    ("Isaiah", 66),
    ("Jeremiah", 52),
    ("Lamentations", 5),
    ("Ezekiel", 48),
    ("Daniel", 12),
    ("Hosea", 14),
    ("Joel", 3),
    ("Amos", 9),
    ("Obadiah", 1),
    ("Jonah", 4),
    ("Micah", 7),
    ("Nahum", 3),
    ("Habakkuk", 3),
    ("Zephaniah", 3),
    ("Haggai", 2),
    ("Zechariah", 14),
    ("Malachi", 4),
]

_NEW_TESTAMENT = [
    ("Matthew", 28),
    ("Mark", 16),
    ("Luke", 24),
    ("John", 21),
    ("Acts", 28),
    ("Romans", 16),
    ("1 Corinthians", 16),
    ("2 Corinthians", 13),
    ("Galatians", 6),
    ("Ephesians", 6),
    ("Philippians", 4),
    ("Colossians", 4),
    ("1 Thessalonians", 5),
    ("2 Thessalonians", 3),
    ("1 Timothy", 6),
    ("2 Timothy", 4),
    ("Titus", 3),
    ("Philemon", 1),
    ("Hebrews", 13),
    ("James", 5),
    ("1 Peter", 5),
    ("2 Peter", 3),
    ("1 John", 5),
    ("2 John", 1),
    ("3 John", 1),
    ("Jude", 1),
    ("Revelation", 22),
]

BIBLE_BOOKS: tuple[BookDefinition, ...] = tuple(
    BookDefinition(name=name, chapters=chapters, testament=testament, position=i)
    for i, (name, chapters, testament) in enumerate(
        [(n, c, Testament.OLD) for n, c in _OLD_TESTAMENT]
        + [(n, c, Testament.NEW) for n, c in _NEW_TESTAMENT]
    )
)

_BOOKS_BY_NAME = {book.name: book for book in BIBLE_BOOKS}

TOTAL_CANON_CHAPTERS: int = sum(book.chapters for book in BIBLE_BOOKS)


def books_in(testament: Testament) -> list[BookDefinition]:
    """Books of one testament, in canonical order."""
    return [book for book in BIBLE_BOOKS if book.testament == testament]


def testament_chapters(testament: Testament) -> int:
    """Total chapter count of one testament."""
    return sum(book.chapters for book in books_in(testament))


def find_book(name: str) -> Optional[BookDefinition]:
    """Look up a book by exact name. Returns None when unknown."""
    return _BOOKS_BY_NAME.get(name)


def get_book(name: str) -> BookDefinition:
    """Look up a book by exact name.

    Raises:
        UnknownBook: If the name is not in the canon
    """
    book = _BOOKS_BY_NAME.get(name)
    if book is None:
        raise UnknownBook(name)
    return book


def resolve_book_name(name: str) -> str:
    """Resolve user input to a canonical book name.

    Accepts the exact name, a case-insensitive match, or the unambiguous
    case-insensitive prefix of a name (``"gen"`` -> ``"Genesis"``).

    Raises:
        UnknownBook: If nothing (or more than one book) matches
    """
    if name in _BOOKS_BY_NAME:
        return name

    needle = " ".join(name.split()).lower()
    for book in BIBLE_BOOKS:
        if book.name.lower() == needle:
            return book.name

    matches = [book.name for book in BIBLE_BOOKS if book.name.lower().startswith(needle)]
    if needle and len(matches) == 1:
        return matches[0]
    raise UnknownBook(name)


def validate_range(book_name: str, start_chapter: int, end_chapter: int) -> BookDefinition:
    """Validate a chapter range against the canon.

    Checks, in order: the book exists, the range is not reversed, and both
    ends lie within ``[1, book.chapters]``.

    Returns:
        The matching BookDefinition

    Raises:
        UnknownBook: Book not in the canon
        InvalidRange: end_chapter < start_chapter
        ChapterOutOfBounds: A chapter is outside the book
    """
    book = get_book(book_name)
    if end_chapter < start_chapter:
        raise InvalidRange(start_chapter, end_chapter)
    for chapter in (start_chapter, end_chapter):
        if chapter < 1 or chapter > book.chapters:
            raise ChapterOutOfBounds(book.name, chapter, book.chapters)
    return book
