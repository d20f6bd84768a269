"""
Scribe - API Models
===================

Response models for the transcript API.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error_code: str
    message: str
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str = "Scribe"
    connected: bool = False
    guilds: int = Field(default=0, ge=0)
    template: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


__all__ = ["ErrorResponse", "HealthResponse"]
