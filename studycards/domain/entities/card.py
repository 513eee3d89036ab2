"""Card entity: a front/back pair owned by exactly one deck."""

from typing import Optional

from studycards.domain.entities.base import CamelModel


class CardDraft(CamelModel):
    """Card fields supplied by the caller; id and timestamps are assigned."""

    front: str
    back: str
    image_url: Optional[str] = None


class Card(CamelModel):
    id: str
    front: str
    back: str
    image_url: Optional[str] = None
    learned: bool = False
    created_at: int
