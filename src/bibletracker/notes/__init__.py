"""Reading notes module."""

from .manager import NotesManager

__all__ = ["NotesManager"]
