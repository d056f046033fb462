"""Cart service: the entry point UI events call into.

The store is injected and is the only source of truth for cart contents;
each operation reads the whole cart, applies a pure line-item operation and
writes it back. The membership flag is UI-local state and is never
persisted.
"""
from __future__ import annotations

from collections.abc import Iterable

from shopcart.core.cart_storage import CartStore
from shopcart.core.constants import CURRENCY_SYMBOL
from shopcart.domain import cart_ops
from shopcart.domain.entities import Cart, LineItem
from shopcart.domain.models import ItemSelection
from shopcart.domain.pricing import DecisionCallback, PricingEngine
from shopcart.logging_config import logger
from shopcart.services.cart_view import CartView, badge_text, build_badges, build_cart_view


class CartService:
    def __init__(
        self,
        store: CartStore,
        engine: PricingEngine | None = None,
        currency_symbol: str = CURRENCY_SYMBOL,
    ) -> None:
        self.store = store
        self.engine = engine or PricingEngine()
        self.currency_symbol = currency_symbol
        self.is_member = False

    def get_cart(self) -> Cart:
        return self.store.load()

    def add_item(self, selection: ItemSelection | LineItem) -> Cart:
        """Handle 'item selected': add one unit and persist the cart."""
        candidate = selection.to_line_item() if isinstance(selection, ItemSelection) else selection
        cart = cart_ops.add_one(self.store.load(), candidate)
        self.store.save(cart)
        logger.info("Added item %s (qty=%s)", candidate.id, cart.quantity_of(candidate.id))
        return cart

    def remove_item(self, item_id: str) -> Cart:
        """Handle 'remove': drop one unit of ``item_id``; unknown ids are ignored."""
        before = self.store.load()
        cart = cart_ops.remove_one(before, item_id)
        if cart is before:
            logger.debug("Remove ignored, item %s not in cart", item_id)
        else:
            logger.info("Removed one of item %s (qty=%s)", item_id, cart.quantity_of(item_id))
        # Rewritten even on a no-op so a corrupt record is replaced by a clean one.
        self.store.save(cart)
        return cart

    def clear(self) -> Cart:
        """Handle 'clear': delete the record and reset the membership flag."""
        self.store.clear()
        self.is_member = False
        logger.info("Cart cleared")
        return cart_ops.clear_all()

    def set_membership(self, is_member: bool) -> None:
        """Handle 'membership toggled'; the cart itself is untouched."""
        self.is_member = bool(is_member)

    def render(
        self,
        decide: DecisionCallback | None = None,
        *,
        wait_for_decision: bool = False,
    ) -> CartView:
        return build_cart_view(
            self.store.load(),
            self.is_member,
            self.engine,
            decide,
            wait_for_decision=wait_for_decision,
            symbol=self.currency_symbol,
        )

    def badge(self, item_id: str) -> str:
        return badge_text(self.store.load(), item_id)

    def badges(self, item_ids: Iterable[str]) -> dict[str, str]:
        """Badge text for every catalog id, read fresh from the store."""
        return build_badges(self.store.load(), item_ids)

    def item_count(self) -> int:
        return self.store.load().item_count
