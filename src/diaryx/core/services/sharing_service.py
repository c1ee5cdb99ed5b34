"""Sharing service implementation."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.note_repository import NoteRepository
from ..schemas.notes import SharedNotesResponse
from ..visibility import find_shared_with
from .interfaces import ISharingService

logger = logging.getLogger(__name__)


class SharingService(ISharingService):
    """Finds notes of other users whose visibility terms list the viewer."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def list_shared_notes(self, viewer_email: str) -> SharedNotesResponse:
        """Notes shared with ``viewer_email``, newest first.

        The store scan only narrows candidates by substring; every
        candidate is parsed and checked against its visibility terms.
        """
        email = (viewer_email or "").strip().lower()
        if not email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="EMAIL_REQUIRED")

        rows = await self.note_repo.scan_candidates(email)
        notes = find_shared_with(email, rows)
        logger.debug(f"{len(notes)} of {len(rows)} candidate notes shared with viewer")
        return SharedNotesResponse(notes=notes)
