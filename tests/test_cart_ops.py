from __future__ import annotations

from decimal import Decimal

import pytest

from shopcart.domain.cart_ops import add_one, clear_all, remove_one
from shopcart.domain.entities import Cart, LineItem


def test_add_one_appends_new_item_with_quantity_one(make_item) -> None:
    cart = add_one(Cart(), make_item("vase", "30", qty=5))

    assert len(cart) == 1
    assert cart.quantity_of("vase") == 1


def test_add_same_id_twice_keeps_first_seen_metadata() -> None:
    first = LineItem(id="print", name="Star Print", unit_price=Decimal("12.50"), image="star.jpg")
    second = LineItem(id="print", name="Renamed", unit_price=Decimal("99"), image="other.jpg")

    cart = add_one(add_one(Cart(), first), second)

    item = cart.find("print")
    assert item is not None
    assert item.quantity == 2
    assert item.name == "Star Print"
    assert item.unit_price == Decimal("12.50")
    assert item.image == "star.jpg"


def test_add_one_does_not_mutate_input(make_item) -> None:
    original = Cart.of([make_item("mug", qty=1)])

    updated = add_one(original, make_item("mug"))

    assert original.quantity_of("mug") == 1
    assert updated.quantity_of("mug") == 2


def test_add_preserves_insertion_order(make_item) -> None:
    cart = Cart()
    for item_id in ("a", "b", "c", "a"):
        cart = add_one(cart, make_item(item_id))

    assert [item.id for item in cart] == ["a", "b", "c"]


def test_remove_one_decrements_quantity(make_item) -> None:
    cart = remove_one(Cart.of([make_item("mug", qty=3)]), "mug")
    assert cart.quantity_of("mug") == 2


def test_remove_one_deletes_item_at_quantity_one(make_item) -> None:
    cart = remove_one(Cart.of([make_item("mug"), make_item("vase")]), "mug")

    assert cart.find("mug") is None
    assert [item.id for item in cart] == ["vase"]


def test_remove_unknown_id_is_noop(make_item) -> None:
    cart = Cart.of([make_item("mug", qty=2)])
    assert remove_one(cart, "missing") == cart


@pytest.mark.parametrize("start_qty", [1, 2, 7])
def test_remove_after_add_restores_quantity(make_item, start_qty: int) -> None:
    cart = Cart.of([make_item("mug", qty=start_qty), make_item("vase", qty=2)])

    restored = remove_one(add_one(cart, make_item("mug")), "mug")

    assert restored.quantity_of("mug") == start_qty
    assert restored == cart


def test_remove_after_add_on_absent_item_restores_cart(make_item) -> None:
    cart = Cart.of([make_item("vase")])
    assert remove_one(add_one(cart, make_item("mug")), "mug") == cart


def test_clear_all_returns_empty_cart() -> None:
    assert len(clear_all()) == 0


def test_cart_rejects_duplicate_ids(make_item) -> None:
    with pytest.raises(ValueError):
        Cart.of([make_item("mug"), make_item("mug")])
