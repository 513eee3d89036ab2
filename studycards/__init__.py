"""Study Cards: flashcard decks, cards and per-user study progress."""

__version__ = "1.0.0"
