"""
Progress input schemas for API requests.
"""

from typing import List, Optional

from pydantic import Field

from studycards.domain.entities.base import CamelModel


class UpdateProgressRequest(CamelModel):
    cards_learned: Optional[List[str]] = None
    total_study_sessions: Optional[int] = Field(None, ge=0)
