"""Shared notes API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import CurrentUser
from ..core.schemas.common import ErrorResponse
from ..core.schemas.notes import SharedNotesResponse
from ..core.services import SharingService
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(
    prefix="/shared-notes",
    tags=["sharing"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


@router.get("", response_model=SharedNotesResponse)
async def list_shared_notes(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Notes other users shared with the caller's email."""
    sharing_service = SharingService(session)
    return await sharing_service.list_shared_notes(current_user.email or "")
