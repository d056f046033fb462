"""Domain entities package."""

from .line_item import Cart, LineItem

__all__ = [
    "Cart",
    "LineItem",
]
