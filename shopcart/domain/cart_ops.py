"""Line-item operations.

Each operation is pure: it takes a cart and returns a new one, leaving
persistence and re-rendering to the caller.
"""
from __future__ import annotations

from shopcart.domain.entities import Cart, LineItem


def add_one(cart: Cart, candidate: LineItem) -> Cart:
    """Add one unit of ``candidate``.

    An existing entry keeps its first-seen name, price and image; only its
    quantity grows. A new entry is appended with quantity 1.
    """
    items = list(cart.items)
    for idx, item in enumerate(items):
        if item.id == candidate.id:
            items[idx] = item.with_quantity(item.quantity + 1)
            return Cart(tuple(items))

    items.append(candidate.with_quantity(1))
    return Cart(tuple(items))


def remove_one(cart: Cart, item_id: str) -> Cart:
    """Remove one unit of ``item_id``; the entry goes away at quantity 1.

    Unknown ids leave the cart unchanged.
    """
    items = list(cart.items)
    for idx, item in enumerate(items):
        if item.id != item_id:
            continue
        if item.quantity > 1:
            items[idx] = item.with_quantity(item.quantity - 1)
        else:
            del items[idx]
        return Cart(tuple(items))
    return cart


def clear_all() -> Cart:
    return Cart()
