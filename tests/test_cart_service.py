from __future__ import annotations

import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from shopcart.domain.entities import Cart
from shopcart.domain.models import ItemSelection
from shopcart.integrations.redis_cart import MemoryCartStore
from shopcart.services.cart_service import CartService


def _selection(item_id: str, price: str = "30", name: str = "Poster") -> ItemSelection:
    return ItemSelection(id=item_id, name=name, price=price)


def test_add_item_persists_cart(service: CartService, store: MemoryCartStore) -> None:
    returned = service.add_item(_selection("poster"))
    service.add_item(_selection("poster"))

    assert returned.quantity_of("poster") == 1
    assert store.load().quantity_of("poster") == 2


def test_remove_item_persists_cart(service: CartService, store: MemoryCartStore, make_item) -> None:
    store.save(Cart.of([make_item("a", qty=2), make_item("b")]))

    service.remove_item("a")
    service.remove_item("b")
    service.remove_item("unknown")

    cart = store.load()
    assert cart.quantity_of("a") == 1
    assert cart.find("b") is None


def test_operations_read_store_every_time(service: CartService, store: MemoryCartStore, make_item) -> None:
    service.add_item(_selection("a"))
    # Another writer replaces the record behind the service's back.
    store.save(Cart.of([make_item("z", qty=4)]))

    cart = service.add_item(_selection("a"))

    assert [item.id for item in cart] == ["z", "a"]
    assert service.badge("z") == "Qty: 4"


def test_clear_resets_membership(service: CartService, store: MemoryCartStore) -> None:
    service.add_item(_selection("a"))
    service.set_membership(True)

    cart = service.clear()

    assert len(cart) == 0
    assert service.is_member is False
    assert store.raw() is None
    assert service.render().is_empty


def test_membership_toggle_does_not_touch_cart(service: CartService, store: MemoryCartStore) -> None:
    service.add_item(_selection("a"))
    before = store.raw()

    service.set_membership(True)

    assert store.raw() == before


def test_render_uses_membership_flag(service: CartService) -> None:
    service.add_item(_selection("a", price="40"))

    assert service.render().invoice.member_discount == 0
    service.set_membership(True)
    assert service.render().invoice.member_discount == Decimal("6.00")


def test_render_with_decision_callback(service: CartService) -> None:
    service.add_item(_selection("a", price="60"))
    service.set_membership(True)
    asked = []

    def decide(decision):
        asked.append(decision)
        return "V"

    view = service.render(decide)

    assert len(asked) == 1
    assert view.invoice.volume_discount == Decimal("3.00")


def test_badges_follow_store_after_mutation(service: CartService) -> None:
    service.add_item(_selection("a"))
    service.add_item(_selection("a"))
    service.add_item(_selection("b"))
    service.remove_item("b")

    assert service.badges(["a", "b"]) == {"a": "Qty: 2", "b": ""}
    assert service.item_count() == 2


def test_corrupt_store_is_forgiven(service: CartService, store: MemoryCartStore) -> None:
    store.write_raw("garbage")

    assert service.render().is_empty
    cart = service.add_item(_selection("a"))
    assert cart.quantity_of("a") == 1


@pytest.mark.parametrize("price", ["abc", "", "nan", "-5", "1e30", None])
def test_selection_rejects_invalid_price(price) -> None:
    with pytest.raises(ValidationError):
        ItemSelection(id="a", name="A", price=price)


def test_selection_parses_price_once() -> None:
    selection = ItemSelection(id=" a ", name="A", price="19,99", image="")

    item = selection.to_line_item()
    assert item.id == "a"
    assert item.unit_price == Decimal("19.99")
    assert item.image is None


def test_most_expensive_accepted_item_renders(service: CartService) -> None:
    for _ in range(3):
        service.add_item(_selection("a", price="1000000000"))

    view = service.render(lambda _d: "none")

    assert view.summary.item_subtotal == "$3000000000.00"
    assert view.invoice.applied_discount.value == "volume"


def test_mutations_are_logged(service: CartService, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="shopcart"):
        service.add_item(_selection("a"))
        service.clear()

    messages = [record.getMessage() for record in caplog.records if record.name == "shopcart"]
    assert "Added item a (qty=1)" in messages
    assert "Cart cleared" in messages
