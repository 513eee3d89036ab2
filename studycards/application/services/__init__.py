"""Application services exports."""

from .deck_service import DeckService
from .progress_service import ProgressService
from .study_session_service import StudySessionService

__all__ = ["DeckService", "ProgressService", "StudySessionService"]
