"""Domain value objects exports."""

from .category import Category

__all__ = ["Category"]
