"""
Deck service: create/read/update/delete over decks and their cards.

The whole deck collection lives under a single storage key. Every
mutation is a read-modify-write of that collection, serialized by an
``asyncio.Lock`` so overlapping calls on one service never drop each
other's changes.
"""

import asyncio
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from studycards.application.ports import StoragePort
from studycards.application.seed_data import seed_decks
from studycards.application.services._fields import normalize_fields
from studycards.domain.entities import Card, CardDraft, Deck, DeckDraft
from studycards.domain.exceptions import DeckNotFoundException
from studycards.domain.identifiers import Clock, IdFactory, new_id, now_ms, unique_id
from studycards.domain.validators.deck_validators import DeckValidators
from studycards.infra.config.logging_config import get_logger

DEFAULT_DECKS_KEY = "study-cards-decks"


class DeckService:
    def __init__(
        self,
        storage: StoragePort,
        decks_key: str = DEFAULT_DECKS_KEY,
        clock: Clock = now_ms,
        id_factory: IdFactory = new_id,
        seed: Callable[[], List[Deck]] = seed_decks,
    ) -> None:
        self._storage = storage
        self._key = decks_key
        self._clock = clock
        self._id_factory = id_factory
        self._seed = seed
        self._lock = asyncio.Lock()
        self._log = get_logger("service.deck")

    # ---------- persistence ----------

    async def _load(self) -> List[Deck]:
        data = await self._storage.read(self._key)
        if not data:
            return []
        return [Deck.model_validate(item) for item in data]

    async def _persist(self, decks: List[Deck]) -> None:
        await self._storage.write(self._key, [deck.to_storage() for deck in decks])

    def _revise(self, deck: Deck, changes: Mapping[str, Any]) -> Deck:
        """Apply changes to a deck; the only place card_count is derived."""
        data = {**deck.model_dump(), **changes}
        data["card_count"] = len(data["cards"])
        data["updated_at"] = self._clock()
        return Deck.model_validate(data)

    @staticmethod
    def _index_of(decks: List[Deck], deck_id: str) -> Optional[int]:
        for index, deck in enumerate(decks):
            if deck.id == deck_id:
                return index
        return None

    def _require(self, decks: List[Deck], deck_id: str) -> int:
        index = self._index_of(decks, deck_id)
        if index is None:
            self._log.info("deck.not_found", deck_id=deck_id)
            raise DeckNotFoundException(deck_id)
        return index

    async def _update_locked(
        self, decks: List[Deck], deck_id: str, changes: Mapping[str, Any]
    ) -> Deck:
        index = self._require(decks, deck_id)
        decks[index] = self._revise(decks[index], changes)
        await self._persist(decks)
        return decks[index]

    # ---------- seeding ----------

    async def initialize(self) -> bool:
        """Write the seed catalog if no deck data exists yet.

        Returns:
            bool: True when the catalog was written, False otherwise.
        """
        if not self._storage.available:
            self._log.warning("deck.seed.skipped", reason="storage unavailable")
            return False

        async with self._lock:
            existing = await self._storage.read(self._key)
            if existing is not None:
                return False

            decks = self._seed()
            await self._persist(decks)

        self._log.info("deck.seed", count=len(decks))
        return True

    # ---------- queries ----------

    async def list_all(self) -> List[Deck]:
        return await self._load()

    async def get_by_id(self, deck_id: str) -> Optional[Deck]:
        decks = await self._load()
        index = self._index_of(decks, deck_id)
        return decks[index] if index is not None else None

    async def list_featured(self) -> List[Deck]:
        return [deck for deck in await self._load() if deck.is_featured is True]

    async def list_by_category(self, category: str) -> List[Deck]:
        DeckValidators.validate_category(category)
        return [deck for deck in await self._load() if deck.category == category]

    async def list_categories(self) -> List[str]:
        """Distinct categories in first-appearance order."""
        decks = await self._load()
        return list(dict.fromkeys(deck.category for deck in decks))

    # ---------- commands ----------

    async def create(self, draft: Union[DeckDraft, Mapping[str, Any]]) -> str:
        """Store a new deck and return its id."""
        if not isinstance(draft, DeckDraft):
            draft = DeckDraft.model_validate(draft)
        DeckValidators.validate_title(draft.title)
        DeckValidators.validate_description(draft.description)
        DeckValidators.validate_card_ids(draft.cards)

        async with self._lock:
            decks = await self._load()
            deck_id = unique_id("deck", {d.id for d in decks}, self._id_factory)
            now = self._clock()
            deck = Deck(
                id=deck_id,
                title=draft.title,
                description=draft.description,
                category=draft.category,
                cards=draft.cards,
                card_count=len(draft.cards),
                created_at=now,
                updated_at=now,
                is_featured=draft.is_featured,
            )
            decks.append(deck)
            await self._persist(decks)

        self._log.info("deck.create", deck_id=deck_id, cards=len(deck.cards))
        return deck_id

    async def create_with_cards(
        self,
        draft: Union[DeckDraft, Mapping[str, Any]],
        cards: Iterable[Union[CardDraft, Mapping[str, Any]]],
    ) -> str:
        """Create a deck from the deck-manager form in a single write.

        Text is trimmed and cards lacking a front or a back are dropped.
        """
        if not isinstance(draft, DeckDraft):
            draft = DeckDraft.model_validate(draft)
        drafts = [
            c if isinstance(c, CardDraft) else CardDraft.model_validate(c)
            for c in cards
        ]
        DeckValidators.validate_title(draft.title)
        DeckValidators.validate_description(draft.description)
        usable = DeckValidators.usable_cards(drafts)

        now = self._clock()
        built: List[Card] = []
        for card in usable:
            card_id = unique_id("card", {c.id for c in built}, self._id_factory)
            built.append(
                Card(
                    id=card_id,
                    front=card.front,
                    back=card.back,
                    image_url=card.image_url,
                    learned=False,
                    created_at=now,
                )
            )

        return await self.create(
            draft.model_copy(
                update={
                    "title": draft.title.strip(),
                    "description": draft.description.strip(),
                    "cards": built,
                }
            )
        )

    async def update(self, deck_id: str, fields: Mapping[str, Any]) -> None:
        """Shallow-merge ``fields`` into a deck and refresh ``updated_at``."""
        changes = normalize_fields(Deck, fields)
        DeckValidators.validate_update_fields(changes, Deck.model_fields)
        if "title" in changes:
            DeckValidators.validate_title(changes["title"])
        if "description" in changes:
            DeckValidators.validate_description(changes["description"])
        if "cards" in changes:
            changes["cards"] = [
                c if isinstance(c, Card) else Card.model_validate(c)
                for c in changes["cards"]
            ]
            DeckValidators.validate_card_ids(changes["cards"])

        async with self._lock:
            decks = await self._load()
            await self._update_locked(decks, deck_id, changes)

        self._log.info("deck.update", deck_id=deck_id, fields=sorted(changes))

    async def remove(self, deck_id: str) -> None:
        """Delete a deck with its cards; unknown ids are ignored."""
        async with self._lock:
            decks = await self._load()
            remaining = [deck for deck in decks if deck.id != deck_id]
            if len(remaining) == len(decks):
                self._log.info("deck.delete", deck_id=deck_id, deleted=False)
                return
            await self._persist(remaining)

        self._log.info("deck.delete", deck_id=deck_id, deleted=True)

    async def add_card(
        self, deck_id: str, draft: Union[CardDraft, Mapping[str, Any]]
    ) -> str:
        """Append a new, not-yet-learned card to a deck and return its id."""
        if not isinstance(draft, CardDraft):
            draft = CardDraft.model_validate(draft)
        DeckValidators.validate_card(draft)

        async with self._lock:
            decks = await self._load()
            deck = decks[self._require(decks, deck_id)]
            card = Card(
                id=unique_id("card", {c.id for c in deck.cards}, self._id_factory),
                front=draft.front.strip(),
                back=draft.back.strip(),
                image_url=draft.image_url,
                learned=False,
                created_at=self._clock(),
            )
            await self._update_locked(decks, deck_id, {"cards": [*deck.cards, card]})

        self._log.info("deck.card.add", deck_id=deck_id, card_id=card.id)
        return card.id

    async def set_card_learned(self, deck_id: str, card_id: str, learned: bool) -> None:
        """Set one card's learned flag; unknown card ids change nothing."""
        async with self._lock:
            decks = await self._load()
            deck = decks[self._require(decks, deck_id)]
            if deck.get_card(card_id) is None:
                self._log.debug("deck.card.not_found", deck_id=deck_id, card_id=card_id)
                return

            cards = [
                card.model_copy(update={"learned": learned}) if card.id == card_id else card
                for card in deck.cards
            ]
            await self._update_locked(decks, deck_id, {"cards": cards})

        self._log.info(
            "deck.card.learned", deck_id=deck_id, card_id=card_id, learned=learned
        )

    async def toggle_card_learned(self, deck_id: str, card_id: str) -> Optional[bool]:
        """Flip one card's learned flag and return its new state.

        Returns None, without writing, when the deck has no such card.
        """
        async with self._lock:
            decks = await self._load()
            deck = decks[self._require(decks, deck_id)]
            card = deck.get_card(card_id)
            if card is None:
                self._log.debug("deck.card.not_found", deck_id=deck_id, card_id=card_id)
                return None

            learned = not card.learned
            cards = [
                c.model_copy(update={"learned": learned}) if c.id == card_id else c
                for c in deck.cards
            ]
            await self._update_locked(decks, deck_id, {"cards": cards})

        self._log.info(
            "deck.card.learned", deck_id=deck_id, card_id=card_id, learned=learned
        )
        return learned
