"""Domain entities exports."""

from .card import Card, CardDraft
from .deck import Deck, DeckDraft, DeckProgressSummary
from .progress import StudySession, UserProgress

__all__ = [
    "Card",
    "CardDraft",
    "Deck",
    "DeckDraft",
    "DeckProgressSummary",
    "StudySession",
    "UserProgress",
]
