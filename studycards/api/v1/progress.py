"""
User progress endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from studycards.api.schemas import UpdateProgressRequest
from studycards.application.services import ProgressService, StudySessionService
from studycards.domain.entities import StudySession, UserProgress
from studycards.infra.config.dependencies import (
    get_progress_service,
    get_study_session_service,
)
from studycards.infra.config.logging_config import bind_context

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/{user_id}/{deck_id}", response_model=UserProgress)
async def get_progress(
    user_id: str,
    deck_id: str,
    progress: ProgressService = Depends(get_progress_service),
) -> UserProgress:
    record = await progress.get(user_id, deck_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No progress recorded"
        )
    return record


@router.patch("/{user_id}/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_progress(
    user_id: str,
    deck_id: str,
    request: UpdateProgressRequest,
    progress: ProgressService = Depends(get_progress_service),
) -> Response:
    bind_context(user_id=user_id, deck_id=deck_id)
    await progress.update(user_id, deck_id, request.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/{deck_id}/sessions", response_model=UserProgress)
async def finish_session(
    user_id: str,
    deck_id: str,
    session: StudySession,
    sessions: StudySessionService = Depends(get_study_session_service),
) -> UserProgress:
    """Record a finished study session held by the client."""
    if session.deck_id != deck_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Session belongs to a different deck",
        )
    bind_context(user_id=user_id, deck_id=deck_id)
    return await sessions.finish(user_id, session)
