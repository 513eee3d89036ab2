"""
Unit tests for DeckService over in-memory storage.
"""

import asyncio

import pytest

from studycards.application.seed_data import seed_decks
from studycards.application.services import DeckService
from studycards.data.storage import DetachedStorage
from studycards.domain.entities import Card, CardDraft, DeckDraft
from studycards.domain.exceptions import (
    DeckNotFoundException,
    StorageUnavailableException,
)
from tests._helpers.fakes import SlowStorage


class TestInitialize:
    @pytest.mark.asyncio
    async def test_initialize_seeds_empty_storage(self, deck_service, storage):
        assert await deck_service.initialize() is True

        decks = await deck_service.list_all()
        assert [d.id for d in decks] == [d.id for d in seed_decks()]
        assert storage.write_count == 1

    @pytest.mark.asyncio
    async def test_initialize_twice_seeds_once(self, deck_service, storage):
        assert await deck_service.initialize() is True
        before = storage.raw("study-cards-decks")

        assert await deck_service.initialize() is False
        assert storage.write_count == 1
        assert storage.raw("study-cards-decks") == before

    @pytest.mark.asyncio
    async def test_initialize_keeps_empty_collection(self, deck_service, storage):
        """An emptied collection is data, not absence."""
        await storage.write("study-cards-decks", [])

        assert await deck_service.initialize() is False
        assert await deck_service.list_all() == []

    @pytest.mark.asyncio
    async def test_initialize_without_storage_environment(self):
        service = DeckService(DetachedStorage())

        assert await service.initialize() is False
        assert await service.list_all() == []


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_all_empty(self, deck_service):
        assert await deck_service.list_all() == []

    @pytest.mark.asyncio
    async def test_get_by_id_missing_returns_none(self, deck_service):
        await deck_service.initialize()
        assert await deck_service.get_by_id("deck-missing") is None

    @pytest.mark.asyncio
    async def test_list_featured_filters_and_keeps_order(self, deck_service):
        await deck_service.initialize()
        await deck_service.update("deck-numbers", {"isFeatured": True})

        all_decks = await deck_service.list_all()
        featured = await deck_service.list_featured()

        expected = [d.id for d in all_decks if d.is_featured is True]
        assert [d.id for d in featured] == expected
        assert "deck-numbers" in expected
        assert "deck-shapes" not in expected

    @pytest.mark.asyncio
    async def test_list_by_category(self, deck_service, spanish_draft):
        await deck_service.initialize()
        deck_id = await deck_service.create(spanish_draft)

        other = await deck_service.list_by_category("other")
        animals = await deck_service.list_by_category("animals")

        assert [d.id for d in other] == [deck_id]
        assert [d.id for d in animals] == ["deck-animals"]

    @pytest.mark.asyncio
    async def test_list_by_unknown_category_raises(self, deck_service):
        with pytest.raises(ValueError, match="Category must be one of"):
            await deck_service.list_by_category("planets")

    @pytest.mark.asyncio
    async def test_list_categories_first_appearance_order(
        self, deck_service, spanish_draft
    ):
        await deck_service.create(spanish_draft)
        await deck_service.create(
            DeckDraft(title="Pets", description="Furry", category="animals")
        )
        await deck_service.create(
            DeckDraft(title="More", description="Misc", category="other")
        )

        assert await deck_service.list_categories() == ["other", "animals"]


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_round_trip(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        deck = await deck_service.get_by_id(deck_id)
        assert deck is not None
        assert deck.id == deck_id
        assert deck.title == "Spanish Vocab"
        assert deck.description == "basics"
        assert deck.category == "other"
        assert deck.cards == []
        assert deck.card_count == 0
        assert deck.created_at == deck.updated_at

    @pytest.mark.asyncio
    async def test_create_accepts_camel_case_mapping(self, deck_service):
        deck_id = await deck_service.create(
            {
                "title": "Shapes",
                "description": "Basic shapes",
                "category": "shapes",
                "isFeatured": True,
            }
        )

        deck = await deck_service.get_by_id(deck_id)
        assert deck.is_featured is True
        assert deck.category == "shapes"

    @pytest.mark.asyncio
    async def test_create_appends_in_insertion_order(self, deck_service, spanish_draft):
        first = await deck_service.create(spanish_draft)
        second = await deck_service.create(spanish_draft)

        assert first != second
        assert [d.id for d in await deck_service.list_all()] == [first, second]

    @pytest.mark.asyncio
    async def test_create_ids_do_not_collide(self, storage, clock, spanish_draft):
        ids = iter(["deck-1", "deck-1", "deck-2"])
        service = DeckService(storage, clock=clock, id_factory=lambda prefix: next(ids))

        first = await service.create(spanish_draft)
        second = await service.create(spanish_draft)

        assert (first, second) == ("deck-1", "deck-2")

    @pytest.mark.asyncio
    async def test_create_with_blank_title_raises(self, deck_service):
        with pytest.raises(ValueError, match="title cannot be empty"):
            await deck_service.create(
                DeckDraft(title="   ", description="x", category="other")
            )

    @pytest.mark.asyncio
    async def test_create_without_storage_environment_raises(self, spanish_draft):
        service = DeckService(DetachedStorage())

        with pytest.raises(StorageUnavailableException):
            await service.create(spanish_draft)

    @pytest.mark.asyncio
    async def test_create_keeps_card_count_in_sync(self, deck_service, clock):
        cards = [
            Card(id="c1", front="1", back="one", created_at=clock()),
            Card(id="c2", front="2", back="two", created_at=clock()),
        ]
        deck_id = await deck_service.create(
            DeckDraft(title="N", description="n", category="numbers", cards=cards)
        )

        deck = await deck_service.get_by_id(deck_id)
        assert deck.card_count == len(deck.cards) == 2

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_card_ids(self, deck_service, clock):
        cards = [
            Card(id="c1", front="1", back="one", created_at=clock()),
            Card(id="c1", front="2", back="two", created_at=clock()),
        ]
        with pytest.raises(ValueError, match="Duplicate card id"):
            await deck_service.create(
                DeckDraft(title="N", description="n", category="numbers", cards=cards)
            )


class TestCreateWithCards:
    @pytest.mark.asyncio
    async def test_drops_blank_cards_and_trims(self, deck_service, storage):
        deck_id = await deck_service.create_with_cards(
            DeckDraft(title="  Fruit ", description=" Yummy ", category="other"),
            [
                CardDraft(front=" 🍎 ", back=" Apple "),
                CardDraft(front="🍌", back="   "),
                {"front": "🍇", "back": "Grapes"},
            ],
        )

        deck = await deck_service.get_by_id(deck_id)
        assert deck.title == "Fruit"
        assert deck.description == "Yummy"
        assert [(c.front, c.back) for c in deck.cards] == [
            ("🍎", "Apple"),
            ("🍇", "Grapes"),
        ]
        assert deck.card_count == 2
        assert all(c.learned is False for c in deck.cards)
        assert len({c.id for c in deck.cards}) == 2
        assert storage.write_count == 1

    @pytest.mark.asyncio
    async def test_all_blank_cards_rejected(self, deck_service):
        with pytest.raises(ValueError, match="at least one card"):
            await deck_service.create_with_cards(
                DeckDraft(title="Empty", description="none", category="other"),
                [CardDraft(front="", back=""), CardDraft(front="x", back=" ")],
            )
        assert await deck_service.list_all() == []

    @pytest.mark.asyncio
    async def test_blank_description_rejected(self, deck_service):
        with pytest.raises(ValueError, match="description cannot be empty"):
            await deck_service.create_with_cards(
                DeckDraft(title="T", description=" ", category="other"),
                [CardDraft(front="a", back="b")],
            )


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_merges_and_refreshes_updated_at(
        self, deck_service, spanish_draft
    ):
        deck_id = await deck_service.create(spanish_draft)
        before = await deck_service.get_by_id(deck_id)

        await deck_service.update(deck_id, {"title": "Spanish 101"})

        after = await deck_service.get_by_id(deck_id)
        assert after.title == "Spanish 101"
        assert after.description == before.description
        assert after.created_at == before.created_at
        assert after.updated_at > before.updated_at

    @pytest.mark.asyncio
    async def test_update_missing_deck_raises(self, deck_service):
        with pytest.raises(DeckNotFoundException) as exc:
            await deck_service.update("deck-missing", {"title": "x"})
        assert exc.value.deck_id == "deck-missing"

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        with pytest.raises(ValueError, match="cannot be changed"):
            await deck_service.update(deck_id, {"id": "deck-other"})
        with pytest.raises(ValueError, match="cannot be changed"):
            await deck_service.update(deck_id, {"createdAt": 1})

    @pytest.mark.asyncio
    async def test_update_unknown_field_raises(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        with pytest.raises(ValueError, match="Unknown deck fields"):
            await deck_service.update(deck_id, {"colour": "red"})

    @pytest.mark.asyncio
    async def test_update_recomputes_card_count(self, deck_service, spanish_draft, clock):
        deck_id = await deck_service.create(spanish_draft)

        await deck_service.update(
            deck_id,
            {
                "cards": [{"id": "c1", "front": "a", "back": "b", "createdAt": clock()}],
                "cardCount": 99,
            },
        )

        deck = await deck_service.get_by_id(deck_id)
        assert deck.card_count == 1

    @pytest.mark.asyncio
    async def test_update_rejects_bad_category(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        with pytest.raises(ValueError):
            await deck_service.update(deck_id, {"category": "planets"})
        assert (await deck_service.get_by_id(deck_id)).category == "other"

    @pytest.mark.asyncio
    async def test_concurrent_updates_keep_both_changes(
        self, clock, id_factory, spanish_draft
    ):
        deck_service = DeckService(SlowStorage(), clock=clock, id_factory=id_factory)
        first = await deck_service.create(spanish_draft)
        second = await deck_service.create(spanish_draft)

        await asyncio.gather(
            deck_service.update(first, {"title": "First"}),
            deck_service.update(second, {"description": "Second"}),
            deck_service.add_card(first, CardDraft(front="a", back="b")),
        )

        one = await deck_service.get_by_id(first)
        two = await deck_service.get_by_id(second)
        assert one.title == "First"
        assert one.card_count == 1
        assert two.description == "Second"


class TestRemove:
    @pytest.mark.asyncio
    async def test_remove_deletes_deck(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        await deck_service.remove(deck_id)

        assert await deck_service.get_by_id(deck_id) is None

    @pytest.mark.asyncio
    async def test_remove_missing_is_silent_and_unchanged(
        self, deck_service, storage
    ):
        await deck_service.initialize()
        before = storage.raw("study-cards-decks")
        writes = storage.write_count

        await deck_service.remove("deck-missing")

        assert storage.raw("study-cards-decks") == before
        assert storage.write_count == writes


class TestCards:
    @pytest.mark.asyncio
    async def test_add_card(self, deck_service, spanish_draft, hola_card):
        deck_id = await deck_service.create(spanish_draft)

        card_id = await deck_service.add_card(deck_id, hola_card)

        deck = await deck_service.get_by_id(deck_id)
        assert [c.id for c in deck.cards] == [card_id]
        assert deck.card_count == len(deck.cards) == 1
        assert deck.cards[0].learned is False
        assert deck.cards[0].created_at > 0

    @pytest.mark.asyncio
    async def test_add_card_keeps_insertion_order(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        ids = [
            await deck_service.add_card(deck_id, CardDraft(front=f, back=b))
            for f, b in [("Hola", "Hello"), ("Adiós", "Bye"), ("Gracias", "Thanks")]
        ]

        deck = await deck_service.get_by_id(deck_id)
        assert [c.id for c in deck.cards] == ids
        assert deck.card_count == 3

    @pytest.mark.asyncio
    async def test_add_card_missing_deck_raises(self, deck_service, hola_card):
        with pytest.raises(DeckNotFoundException):
            await deck_service.add_card("deck-missing", hola_card)

    @pytest.mark.asyncio
    async def test_add_card_blank_side_raises(self, deck_service, spanish_draft):
        deck_id = await deck_service.create(spanish_draft)

        with pytest.raises(ValueError, match="Card back cannot be empty"):
            await deck_service.add_card(deck_id, {"front": "Hola", "back": "  "})

    @pytest.mark.asyncio
    async def test_set_card_learned_only_touches_target(self, deck_service):
        await deck_service.initialize()
        before = await deck_service.get_by_id("deck-colors")

        await deck_service.set_card_learned("deck-colors", "deck-colors-card-2", True)

        after = await deck_service.get_by_id("deck-colors")
        assert after.get_card("deck-colors-card-2").learned is True
        others_before = [c for c in before.cards if c.id != "deck-colors-card-2"]
        others_after = [c for c in after.cards if c.id != "deck-colors-card-2"]
        assert others_after == others_before
        assert after.updated_at > before.updated_at

    @pytest.mark.asyncio
    async def test_set_card_learned_unknown_card_is_noop(self, deck_service, storage):
        await deck_service.initialize()
        before = await deck_service.get_by_id("deck-animals")
        writes = storage.write_count

        await deck_service.set_card_learned("deck-animals", "nonexistent", True)

        after = await deck_service.get_by_id("deck-animals")
        assert after.cards == before.cards
        assert storage.write_count == writes

    @pytest.mark.asyncio
    async def test_set_card_learned_missing_deck_raises(self, deck_service):
        with pytest.raises(DeckNotFoundException):
            await deck_service.set_card_learned("deck-missing", "card-1", True)

    @pytest.mark.asyncio
    async def test_toggle_card_learned_flips_state(self, deck_service):
        await deck_service.initialize()

        toggle = deck_service.toggle_card_learned
        assert await toggle("deck-numbers", "deck-numbers-card-1") is True
        assert await toggle("deck-numbers", "deck-numbers-card-1") is False

        deck = await deck_service.get_by_id("deck-numbers")
        assert deck.get_card("deck-numbers-card-1").learned is False

    @pytest.mark.asyncio
    async def test_toggle_unknown_card_returns_none(self, deck_service, storage):
        await deck_service.initialize()
        writes = storage.write_count

        result = await deck_service.toggle_card_learned("deck-numbers", "nonexistent")

        assert result is None
        assert storage.write_count == writes

    @pytest.mark.asyncio
    async def test_concurrent_toggles_on_one_deck_all_apply(self, clock, id_factory):
        deck_service = DeckService(SlowStorage(), clock=clock, id_factory=id_factory)
        await deck_service.initialize()
        card_ids = [f"deck-shapes-card-{n}" for n in range(1, 5)]

        results = await asyncio.gather(
            *(deck_service.toggle_card_learned("deck-shapes", c) for c in card_ids)
        )

        deck = await deck_service.get_by_id("deck-shapes")
        assert results == [True] * 4
        assert deck.learned_count == 4


class TestScenario:
    @pytest.mark.asyncio
    async def test_spanish_vocab_walkthrough(self, deck_service, spanish_draft, hola_card):
        deck_id = await deck_service.create(spanish_draft)
        card_id = await deck_service.add_card(deck_id, hola_card)

        deck = await deck_service.get_by_id(deck_id)
        assert len(deck.cards) == 1
        assert deck.card_count == 1

        await deck_service.set_card_learned(deck_id, card_id, True)
        assert (await deck_service.get_by_id(deck_id)).cards[0].learned is True

        await deck_service.remove(deck_id)
        assert await deck_service.get_by_id(deck_id) is None
