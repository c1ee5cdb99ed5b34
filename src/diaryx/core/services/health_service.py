"""Health checks for the sync API."""

import logging
import time
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService

logger = logging.getLogger(__name__)


class HealthService(IHealthService):
    """Reports whether the note store is reachable."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_health_status(self) -> HealthCheckResponse:
        database = await self.check_database_health()
        return HealthCheckResponse(
            status="healthy" if database["connected"] else "unhealthy",
            version=get_settings().app_version,
            checks={"database": database},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Round-trip a trivial query and time it."""
        started = time.perf_counter()
        try:
            await self.session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError, RuntimeError) as e:
            logger.warning(f"Database health check failed: {e}")
            return {"connected": False, "status": "unhealthy", "error": str(e)}

        return {
            "connected": True,
            "status": "healthy",
            "dialect": self.session.get_bind().dialect.name,
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }
