"""
Base schemas shared by all API endpoints.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Error type or code")
    detail: str = Field(..., description="Human-readable error description")
    timestamp: datetime = Field(default_factory=_utcnow)


class CreatedResponse(BaseModel):
    id: str = Field(..., description="Identifier assigned to the new resource")


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    storage: str
