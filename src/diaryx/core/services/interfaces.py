"""
Service interfaces for the Diaryx backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable

from ..schemas.common import HealthCheckResponse
from ..schemas.notes import (
    NoteInput, NotesResponse, SharedNotesResponse, StatusResponse, SyncRequest
)


class INoteService(ABC):
    """Owner-side note sync."""

    @abstractmethod
    async def list_notes(self, owner: str) -> NotesResponse:
        """List owner's notes and visibility terms."""
        pass

    @abstractmethod
    async def upsert_notes(self, owner: str, notes: Iterable[NoteInput]) -> None:
        """Apply notes with last-writer-wins."""
        pass

    @abstractmethod
    async def sync_notes(self, owner: str, request: SyncRequest) -> NotesResponse:
        """Validate and apply a sync request."""
        pass

    @abstractmethod
    async def delete_note(self, owner: str, note_id: str) -> StatusResponse:
        """Delete one note."""
        pass

    @abstractmethod
    async def clear_notes(self, owner: str) -> StatusResponse:
        """Delete all notes and terms of the owner."""
        pass


class ISharingService(ABC):
    """Viewer-side shared note discovery."""

    @abstractmethod
    async def list_shared_notes(self, viewer_email: str) -> SharedNotesResponse:
        """Notes other users shared with this email."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
