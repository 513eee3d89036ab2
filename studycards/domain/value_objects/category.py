"""
Deck category value object.
"""

from enum import Enum


class Category(str, Enum):
    ANIMALS = "animals"
    COLORS = "colors"
    ALPHABET = "alphabet"
    NUMBERS = "numbers"
    SHAPES = "shapes"
    OTHER = "other"
