"""Repository layer for data access."""

from .base import INoteStore
from .note_repository import NoteRepository

__all__ = [
    "INoteStore",
    "NoteRepository",
]
