"""Line item and cart entities."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from shopcart.core.constants import MAX_QUANTITY
from shopcart.core.money import to_decimal


def _parse_quantity(value: Any) -> int:
    """Stored quantities must be whole numbers between 1 and ``MAX_QUANTITY``."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, int):
        quantity = value
    elif isinstance(value, float) and value.is_integer():
        quantity = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        quantity = int(value.strip())
    else:
        raise ValueError(f"Invalid quantity: {value!r}")
    if not 1 <= quantity <= MAX_QUANTITY:
        raise ValueError(f"Quantity out of range: {quantity}")
    return quantity


@dataclass(frozen=True)
class LineItem:
    """One catalog product plus the quantity selected."""

    id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    image: str | None = None

    def __post_init__(self) -> None:
        # Fail fast on a price that slipped past the input boundary.
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def is_eligible(self) -> bool:
        """Only positive quantities at a positive price take part in pricing."""
        return self.quantity > 0 and self.unit_price > 0

    def with_quantity(self, quantity: int) -> LineItem:
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.unit_price),
            "image": self.image,
            "qty": int(self.quantity),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineItem:
        image = data.get("image")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            unit_price=to_decimal(data["price"]),
            quantity=_parse_quantity(data.get("qty", 1)),
            image=str(image) if image else None,
        )


@dataclass(frozen=True)
class Cart:
    """Ordered collection of line items, at most one per id."""

    items: tuple[LineItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"Duplicate line item id: {item.id}")
            seen.add(item.id)

    @classmethod
    def of(cls, items: Iterable[LineItem]) -> Cart:
        return cls(tuple(items))

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    def find(self, item_id: str) -> LineItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def quantity_of(self, item_id: str) -> int:
        item = self.find(item_id)
        return item.quantity if item else 0

    def eligible(self) -> Cart:
        return Cart(tuple(item for item in self.items if item.is_eligible))

    @property
    def item_subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_list(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self.items]
