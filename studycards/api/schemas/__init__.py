"""API schemas exports."""

from .base import CreatedResponse, ErrorResponse, HealthResponse
from .deck_io import (
    CreateCardRequest,
    CreateDeckRequest,
    SetCardLearnedRequest,
    UpdateDeckRequest,
)
from .progress_io import UpdateProgressRequest

__all__ = [
    "CreateCardRequest",
    "CreateDeckRequest",
    "CreatedResponse",
    "ErrorResponse",
    "HealthResponse",
    "SetCardLearnedRequest",
    "UpdateDeckRequest",
    "UpdateProgressRequest",
]
