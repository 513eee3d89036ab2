"""
Domain validators for deck and card content rules.
"""

from typing import Any, Dict, Iterable, List

from studycards.domain.entities.card import Card, CardDraft
from studycards.domain.value_objects.category import Category

IMMUTABLE_DECK_FIELDS = {"id", "created_at"}


class DeckValidators:
    @staticmethod
    def validate_title(title: str) -> None:
        if not title or not title.strip():
            raise ValueError("Deck title cannot be empty")

    @staticmethod
    def validate_description(description: str) -> None:
        if not description or not description.strip():
            raise ValueError("Deck description cannot be empty")

    @staticmethod
    def validate_category(category: str) -> None:
        valid = [c.value for c in Category]
        if category not in valid:
            raise ValueError(f"Category must be one of: {valid}")

    @staticmethod
    def validate_card(card: CardDraft) -> None:
        """Both sides of a card must carry text once trimmed."""
        if not card.front or not card.front.strip():
            raise ValueError("Card front cannot be empty")
        if not card.back or not card.back.strip():
            raise ValueError("Card back cannot be empty")

    @staticmethod
    def validate_card_ids(cards: Iterable[Card]) -> None:
        """Card ids must be unique within one deck."""
        seen = set()
        for card in cards:
            if card.id in seen:
                raise ValueError(f"Duplicate card id in deck: {card.id}")
            seen.add(card.id)

    @staticmethod
    def validate_update_fields(fields: Dict[str, Any], known: Iterable[str]) -> None:
        """Reject updates to immutable or unknown deck fields."""
        blocked = IMMUTABLE_DECK_FIELDS & set(fields)
        if blocked:
            raise ValueError(f"Deck fields cannot be changed: {sorted(blocked)}")

        unknown = set(fields) - set(known)
        if unknown:
            raise ValueError(f"Unknown deck fields: {sorted(unknown)}")

    @staticmethod
    def usable_cards(cards: Iterable[CardDraft]) -> List[CardDraft]:
        """Trim card text and drop cards missing either side.

        Raises:
            ValueError: if no card has both a front and a back.
        """
        kept = [
            CardDraft(
                front=card.front.strip(),
                back=card.back.strip(),
                image_url=card.image_url,
            )
            for card in cards
            if card.front.strip() and card.back.strip()
        ]
        if not kept:
            raise ValueError(
                "Deck needs at least one card with both front and back content"
            )
        return kept
