"""Notes manager for reading notes."""

import logging
from typing import Optional

from ..canon import get_book
from ..db.schemas import ReadingNote, ReadingNoteCreate
from ..db.sqlite import Database, get_db
from ..errors import ChapterOutOfBounds, EntryNotFound, NoteNotFound

logger = logging.getLogger(__name__)


class NotesManager:
    """Manages one owner's reading notes."""

    def __init__(self, owner_id: str, db: Optional[Database] = None):
        """Initialize notes manager.

        Args:
            owner_id: Owner whose notes this manager operates on
            db: Database instance
        """
        self.owner_id = owner_id
        self.db = db or get_db()

    def add_note(
        self,
        content: str,
        book_name: Optional[str] = None,
        chapter: Optional[int] = None,
        reading_entry_id: Optional[str] = None,
    ) -> ReadingNote:
        """Create a note, optionally tied to a book, chapter, or reading.

        A note linked to a reading inherits that reading's book when no book
        is given.

        Raises:
            EntryNotFound: The linked reading does not exist
            UnknownBook: The book is not in the canon
            ChapterOutOfBounds: The chapter is outside the book
        """
        if reading_entry_id is not None:
            entry = self.db.get_entry(self.owner_id, reading_entry_id)
            if entry is None:
                raise EntryNotFound(reading_entry_id)
            book_name = book_name or entry.book_name

        if book_name is not None:
            book = get_book(book_name)
            if chapter is not None and not 1 <= chapter <= book.chapters:
                raise ChapterOutOfBounds(book.name, chapter, book.chapters)

        note = self.db.create_note(
            self.owner_id,
            ReadingNoteCreate(
                content=content,
                book_name=book_name,
                chapter=chapter,
                reading_entry_id=reading_entry_id,
            ),
        )
        logger.info("Added note %s", note.id)
        return note

    def update_note(self, note_id: str, content: str) -> ReadingNote:
        """Replace a note's content.

        Raises:
            NoteNotFound: No such note for this owner
        """
        note = self.db.update_note(self.owner_id, note_id, content)
        if note is None:
            raise NoteNotFound(note_id)
        return note

    def delete_note(self, note_id: str) -> None:
        """Delete a note.

        Raises:
            NoteNotFound: No such note for this owner
        """
        if not self.db.delete_note(self.owner_id, note_id):
            raise NoteNotFound(note_id)
        logger.info("Deleted note %s", note_id)

    def get_note(self, note_id: str) -> ReadingNote:
        note = self.db.get_note(self.owner_id, note_id)
        if note is None:
            raise NoteNotFound(note_id)
        return note

    def list_notes(
        self,
        book_name: Optional[str] = None,
        chapter: Optional[int] = None,
        reading_entry_id: Optional[str] = None,
    ) -> list[ReadingNote]:
        """List notes, newest first."""
        return self.db.list_notes(
            self.owner_id,
            book_name=book_name,
            chapter=chapter,
            reading_entry_id=reading_entry_id,
        )
