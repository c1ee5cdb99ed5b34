"""Notes API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import CurrentUser
from ..core.schemas.common import ErrorResponse
from ..core.schemas.notes import NotesResponse, StatusResponse, SyncRequest
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


@router.get("", response_model=NotesResponse)
async def list_notes(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes and visibility terms."""
    note_service = NoteService(session)
    return await note_service.list_notes(current_user.id)


@router.post("", response_model=NotesResponse)
async def sync_notes(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Sync notes (last writer wins) and optionally replace visibility terms."""
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="INVALID_JSON")

    sync_request = SyncRequest.model_validate(payload if isinstance(payload, dict) else {})
    note_service = NoteService(session)
    return await note_service.sync_notes(current_user.id, sync_request)


@router.delete("", response_model=StatusResponse)
async def clear_notes(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete all of the caller's notes and visibility terms."""
    note_service = NoteService(session)
    return await note_service.clear_notes(current_user.id)


@router.delete("/{note_id}", response_model=StatusResponse)
async def delete_note(
    note_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    return await note_service.delete_note(current_user.id, note_id)
