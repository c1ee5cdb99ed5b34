"""
Service layer interfaces and implementations.
"""

from .interfaces import (
    INoteService,
    ISharingService,
    IHealthService
)

from .note_service import NoteService
from .sharing_service import SharingService
from .health_service import HealthService

__all__ = [
    # Interfaces
    "INoteService",
    "ISharingService",
    "IHealthService",

    # Implementations
    "NoteService",
    "SharingService",
    "HealthService",
]
