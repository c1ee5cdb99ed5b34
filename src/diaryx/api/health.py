"""Health check endpoints under /api/health."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import HealthCheckResponse
from ..core.services import HealthService
from ..database import get_db_session

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthCheckResponse)
async def health_check(response: Response, session: AsyncSession = Depends(get_db_session)):
    """Overall status; 503 while the database is unreachable."""
    result = await HealthService(session).get_health_status()
    if result.status != "healthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result


@router.get("/database", response_model=Dict[str, Any])
async def database_health(response: Response, session: AsyncSession = Depends(get_db_session)):
    result = await HealthService(session).check_database_health()
    if not result["connected"]:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
