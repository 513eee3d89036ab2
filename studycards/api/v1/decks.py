"""
Deck endpoints: browsing, deck manager and card learned toggles.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from studycards.api.schemas import (
    CreateCardRequest,
    CreateDeckRequest,
    CreatedResponse,
    SetCardLearnedRequest,
    UpdateDeckRequest,
)
from studycards.application.services import DeckService, StudySessionService
from studycards.domain.entities import Deck, DeckDraft, DeckProgressSummary
from studycards.domain.value_objects import Category
from studycards.infra.config.dependencies import get_deck_service
from studycards.infra.config.logging_config import bind_context, get_logger

router = APIRouter(prefix="/decks", tags=["decks"])
log = get_logger("api.decks")


@router.get("", response_model=List[Deck])
async def list_decks(
    category: Optional[Category] = None,
    decks: DeckService = Depends(get_deck_service),
) -> List[Deck]:
    """List all decks, optionally only those of one category."""
    if category is None:
        return await decks.list_all()
    return await decks.list_by_category(category.value)


@router.get("/featured", response_model=List[Deck])
async def list_featured_decks(
    decks: DeckService = Depends(get_deck_service),
) -> List[Deck]:
    return await decks.list_featured()


@router.get("/categories", response_model=List[str])
async def list_categories(decks: DeckService = Depends(get_deck_service)) -> List[str]:
    return await decks.list_categories()


@router.get("/{deck_id}", response_model=Deck)
async def get_deck(deck_id: str, decks: DeckService = Depends(get_deck_service)) -> Deck:
    deck = await decks.get_by_id(deck_id)
    if deck is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Deck not found")
    return deck


@router.get("/{deck_id}/summary", response_model=DeckProgressSummary)
async def get_deck_summary(
    deck_id: str, decks: DeckService = Depends(get_deck_service)
) -> DeckProgressSummary:
    """Learned/total counts shown above the study view."""
    deck = await decks.get_by_id(deck_id)
    if deck is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Deck not found")
    return StudySessionService.summarize(deck)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    request: CreateDeckRequest, decks: DeckService = Depends(get_deck_service)
) -> CreatedResponse:
    """Create a deck together with its cards.

    Cards missing a front or a back are dropped; at least one complete
    card is required.
    """
    draft = DeckDraft(
        title=request.title,
        description=request.description,
        category=request.category,
        is_featured=request.is_featured,
    )
    deck_id = await decks.create_with_cards(draft, request.cards)
    bind_context(deck_id=deck_id)
    log.info("deck.create.success", cards=len(request.cards))
    return CreatedResponse(id=deck_id)


@router.patch("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_deck(
    deck_id: str,
    request: UpdateDeckRequest,
    decks: DeckService = Depends(get_deck_service),
) -> Response:
    changes = request.model_dump(exclude_unset=True)
    await decks.update(deck_id, changes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deck(
    deck_id: str, decks: DeckService = Depends(get_deck_service)
) -> Response:
    await decks.remove(deck_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{deck_id}/cards",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_card(
    deck_id: str,
    request: CreateCardRequest,
    decks: DeckService = Depends(get_deck_service),
) -> CreatedResponse:
    card_id = await decks.add_card(deck_id, request)
    return CreatedResponse(id=card_id)


@router.put("/{deck_id}/cards/{card_id}/learned", status_code=status.HTTP_204_NO_CONTENT)
async def set_card_learned(
    deck_id: str,
    card_id: str,
    request: SetCardLearnedRequest,
    decks: DeckService = Depends(get_deck_service),
) -> Response:
    await decks.set_card_learned(deck_id, card_id, request.learned)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
