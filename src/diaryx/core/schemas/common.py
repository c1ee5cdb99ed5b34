"""
Shared response schemas - errors, health
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error envelope: a code string or a detail object with a message."""

    error: Any = Field(description="Error code or detail object")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"error": "UNAUTHORIZED"},
                {"error": {"message": "Unexpected error while syncing notes."}},
            ]
        }
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {
                        "status": "healthy",
                        "response_time_ms": 15
                    }
                }
            }
        }
    )
