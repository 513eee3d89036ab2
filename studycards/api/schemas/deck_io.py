"""
Deck input schemas for API requests.
"""

from typing import List, Optional

from pydantic import Field

from studycards.domain.entities import CardDraft
from studycards.domain.entities.base import CamelModel
from studycards.domain.value_objects import Category


class CreateCardRequest(CardDraft):
    """A card typed into a form; both sides are required."""


class CreateDeckRequest(CamelModel):
    """Deck manager form: deck details plus the cards typed so far."""

    title: str = Field(..., max_length=200)
    description: str = Field(..., max_length=2000)
    category: Category = Category.OTHER
    is_featured: bool = False
    cards: List[CreateCardRequest] = Field(default_factory=list)


class UpdateDeckRequest(CamelModel):
    """Partial deck update; omitted fields are left as they are."""

    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[Category] = None
    is_featured: Optional[bool] = None


class SetCardLearnedRequest(CamelModel):
    learned: bool
