"""
Per-user study progress and study session entities.

Progress records are keyed by ``(user_id, deck_id)`` and live apart from
deck content, so they may outlive a deleted deck.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from studycards.domain.entities.base import CamelModel


def _unique(ids: List[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class UserProgress(CamelModel):
    deck_id: str
    cards_learned: List[str] = Field(default_factory=list)
    last_studied: int
    total_study_sessions: int = Field(0, ge=0)

    @field_validator("cards_learned")
    @classmethod
    def _dedupe_cards_learned(cls, value: List[str]) -> List[str]:
        return _unique(value)


class StudySession(CamelModel):
    deck_id: str
    start_time: int
    end_time: Optional[int] = None
    cards_studied: List[str] = Field(default_factory=list)
    cards_learned: List[str] = Field(default_factory=list)

    def mark_studied(self, card_id: str) -> None:
        if card_id not in self.cards_studied:
            self.cards_studied.append(card_id)

    def set_learned(self, card_id: str, learned: bool) -> None:
        if learned and card_id not in self.cards_learned:
            self.cards_learned.append(card_id)
        elif not learned and card_id in self.cards_learned:
            self.cards_learned.remove(card_id)

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None
