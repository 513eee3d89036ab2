"""
Initial deck catalog written to empty storage.
"""

from typing import List, Sequence, Tuple

from studycards.domain.entities import Card, Deck
from studycards.domain.value_objects import Category

SEED_TIMESTAMP = 1704067200000  # 2024-01-01T00:00:00Z


def _deck(
    deck_id: str,
    title: str,
    description: str,
    category: Category,
    pairs: Sequence[Tuple[str, str]],
    featured: bool = False,
) -> Deck:
    cards = [
        Card(
            id=f"{deck_id}-card-{index}",
            front=front,
            back=back,
            learned=False,
            created_at=SEED_TIMESTAMP,
        )
        for index, (front, back) in enumerate(pairs, start=1)
    ]
    return Deck(
        id=deck_id,
        title=title,
        description=description,
        category=category,
        cards=cards,
        card_count=len(cards),
        created_at=SEED_TIMESTAMP,
        updated_at=SEED_TIMESTAMP,
        is_featured=featured,
    )


def seed_decks() -> List[Deck]:
    """Fresh copies of the seed catalog."""
    return [
        _deck(
            "deck-animals",
            "Animal Friends",
            "Meet the animals and learn their names",
            Category.ANIMALS,
            [
                ("🐶", "Dog"),
                ("🐱", "Cat"),
                ("🐮", "Cow"),
                ("🐷", "Pig"),
                ("🐸", "Frog"),
                ("🦁", "Lion"),
                ("🐘", "Elephant"),
                ("🐵", "Monkey"),
            ],
            featured=True,
        ),
        _deck(
            "deck-colors",
            "Rainbow Colors",
            "Learn the colors all around you",
            Category.COLORS,
            [
                ("🔴", "Red"),
                ("🟠", "Orange"),
                ("🟡", "Yellow"),
                ("🟢", "Green"),
                ("🔵", "Blue"),
                ("🟣", "Purple"),
                ("⚫", "Black"),
                ("⚪", "White"),
            ],
            featured=True,
        ),
        _deck(
            "deck-alphabet",
            "ABC Letters",
            "Letters of the alphabet with a word for each",
            Category.ALPHABET,
            [
                ("A", "🍎 Apple"),
                ("B", "🐝 Bee"),
                ("C", "🐈 Cat"),
                ("D", "🐕 Dog"),
                ("E", "🥚 Egg"),
                ("F", "🐟 Fish"),
            ],
            featured=True,
        ),
        _deck(
            "deck-numbers",
            "Counting 1 to 10",
            "Count from one to ten",
            Category.NUMBERS,
            [
                ("1️⃣", "One"),
                ("2️⃣", "Two"),
                ("3️⃣", "Three"),
                ("4️⃣", "Four"),
                ("5️⃣", "Five"),
                ("6️⃣", "Six"),
                ("7️⃣", "Seven"),
                ("8️⃣", "Eight"),
                ("9️⃣", "Nine"),
                ("🔟", "Ten"),
            ],
        ),
        _deck(
            "deck-shapes",
            "Shape Explorer",
            "Circles, squares and more",
            Category.SHAPES,
            [
                ("⚪", "Circle"),
                ("🟥", "Square"),
                ("🔺", "Triangle"),
                ("⭐", "Star"),
                ("❤️", "Heart"),
                ("🔷", "Diamond"),
            ],
        ),
    ]
