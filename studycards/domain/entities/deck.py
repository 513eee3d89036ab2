"""
Deck entity with its owned cards.
"""

from typing import List, Optional

from pydantic import Field

from studycards.domain.entities.base import CamelModel
from studycards.domain.entities.card import Card
from studycards.domain.value_objects.category import Category


class DeckDraft(CamelModel):
    """Deck fields supplied by the caller on creation."""

    title: str
    description: str
    category: Category = Category.OTHER
    cards: List[Card] = Field(default_factory=list)
    is_featured: Optional[bool] = None


class Deck(CamelModel):
    id: str
    title: str
    description: str
    category: Category
    cards: List[Card] = Field(default_factory=list)
    card_count: int = 0
    created_at: int
    updated_at: int
    is_featured: Optional[bool] = None

    def get_card(self, card_id: str) -> Optional[Card]:
        """Find an owned card by id."""
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def learned_count(self) -> int:
        """Number of cards currently flagged as learned."""
        return sum(1 for card in self.cards if card.learned)

    @property
    def progress_percent(self) -> int:
        """Learned share of the deck, rounded to a whole percent."""
        if self.is_empty:
            return 0
        return round(self.learned_count * 100 / len(self.cards))


class DeckProgressSummary(CamelModel):
    deck_id: str
    total_cards: int
    learned_cards: int
    percent: int
    completed: bool

    @classmethod
    def from_deck(cls, deck: Deck) -> "DeckProgressSummary":
        return cls(
            deck_id=deck.id,
            total_cards=len(deck.cards),
            learned_cards=deck.learned_count,
            percent=deck.progress_percent,
            completed=not deck.is_empty and deck.learned_count == len(deck.cards),
        )
