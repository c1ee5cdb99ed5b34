"""
Database models for the Diaryx backend.

Models included:
    - Note: raw markdown documents keyed by (owner, id)
    - VisibilityTerm: per-owner sharing groups and their email lists
"""

from .base import BaseModel
from .note import Note
from .visibility_term import VisibilityTerm

__all__ = [
    "BaseModel",
    "Note",
    "VisibilityTerm",
]
