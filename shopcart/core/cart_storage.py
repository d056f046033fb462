"""Cart store contract and the factory shared by the service and the API."""
from __future__ import annotations

from typing import Protocol

from shopcart.core.config import Settings
from shopcart.domain.entities import Cart
from shopcart.integrations.redis_cart import MemoryCartStore, RedisCartStore


class CartStore(Protocol):
    """Durable, whole-document persistence of the cart."""

    def load(self) -> Cart:
        """Return the persisted cart; absent or corrupt records load as empty."""
        ...

    def save(self, cart: Cart) -> None:
        """Overwrite the persisted cart."""
        ...

    def clear(self) -> None:
        """Delete the persisted record."""
        ...


def build_cart_store(settings: Settings) -> CartStore:
    if settings.redis_url:
        return RedisCartStore(
            settings.redis_url,
            settings.cart_storage_key,
            ttl_seconds=settings.cart_ttl_seconds,
        )
    return MemoryCartStore(settings.cart_storage_key)


__all__ = ["CartStore", "MemoryCartStore", "RedisCartStore", "build_cart_store"]
