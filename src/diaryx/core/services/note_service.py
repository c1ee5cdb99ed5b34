"""Note sync service implementation."""

import logging
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.note_repository import NoteRepository
from ..schemas.notes import (
    NoteInput,
    NotesResponse,
    StatusResponse,
    StoredNote,
    SyncRequest,
    VisibilityTermInput,
    VisibilityTermItem,
)
from ..timestamps import resolve_last_modified
from .interfaces import INoteService

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note sync service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def list_notes(self, owner: str) -> NotesResponse:
        """List owner's notes and visibility terms."""
        rows = await self.note_repo.list_by_owner(owner)
        terms = await self.note_repo.list_visibility_terms(owner)
        return NotesResponse(
            notes=[
                StoredNote(
                    id=row.id,
                    markdown=row.markdown,
                    source_name=row.source_name,
                    last_modified=resolve_last_modified(row.last_modified),
                )
                for row in rows
            ],
            visibility_terms=[VisibilityTermItem.model_validate(term) for term in terms],
        )

    async def upsert_notes(self, owner: str, notes: Iterable[NoteInput]) -> None:
        """Apply notes with last-writer-wins per (owner, id)."""
        await self.note_repo.upsert_notes(owner, notes)

    async def sync_notes(self, owner: str, request: SyncRequest) -> NotesResponse:
        """Apply a sync request and return the owner's resulting state.

        Invalid note or term items are dropped. Terms are only touched when
        the request carries ``visibilityTerms``; an empty list clears them.
        """
        notes = self._valid_notes(request.notes)
        if notes:
            await self.upsert_notes(owner, notes)

        if request.visibility_terms is not None:
            terms = self._valid_terms(request.visibility_terms)
            await self.note_repo.replace_visibility_terms(owner, terms)

        return await self.list_notes(owner)

    async def delete_note(self, owner: str, note_id: str) -> StatusResponse:
        """Delete one note; deleting a missing note is not an error."""
        deleted = await self.note_repo.delete_note(owner, note_id)
        if not deleted:
            logger.info(f"Note {note_id} not found for user {owner}")
        return StatusResponse(status="deleted")

    async def clear_notes(self, owner: str) -> StatusResponse:
        """Delete all notes and visibility terms of the owner."""
        await self.note_repo.delete_all_for_owner(owner)
        return StatusResponse(status="deleted")

    def _valid_notes(self, items: List[Any]) -> List[NoteInput]:
        notes = []
        for item in items:
            try:
                notes.append(NoteInput.model_validate(item))
            except ValidationError:
                logger.debug("Dropping invalid note item in sync request")
        return notes

    def _valid_terms(self, items: List[Any]) -> Dict[str, List[str]]:
        terms: Dict[str, List[str]] = {}
        for item in items:
            try:
                term = VisibilityTermInput.model_validate(item)
            except ValidationError:
                logger.debug("Dropping invalid visibility term in sync request")
                continue
            # a repeated term replaces the earlier one
            terms[term.term] = term.emails
        return terms
