"""
Pydantic schemas for note records and API requests/responses.
"""

from .auth import CurrentUser
from .common import ErrorDetail, ErrorResponse, HealthCheckResponse
from .notes import (
    NoteInput,
    NoteMetadata,
    NoteRecord,
    NotesResponse,
    SharedNotesResponse,
    StatusResponse,
    StoredNote,
    SyncRequest,
    VisibilityTermInput,
    VisibilityTermItem,
)

__all__ = [
    # Auth schemas
    "CurrentUser",
    # Note schemas
    "NoteMetadata",
    "NoteRecord",
    "NoteInput",
    "StoredNote",
    "VisibilityTermInput",
    "VisibilityTermItem",
    "SyncRequest",
    "NotesResponse",
    "SharedNotesResponse",
    "StatusResponse",
    # Common schemas
    "ErrorDetail",
    "ErrorResponse",
    "HealthCheckResponse",
]
