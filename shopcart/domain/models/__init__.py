"""Validated input models for the cart boundary."""

from .item_selection import ItemSelection

__all__ = ["ItemSelection"]
