"""'Item selected' event payload with type-safe fields."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shopcart.core.exceptions import InvalidPriceException
from shopcart.core.money import to_decimal
from shopcart.domain.entities import LineItem


class ItemSelection(BaseModel):
    """A catalog entry the shopper asked to add to the cart."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(..., min_length=1, max_length=200, description="Stable catalog key")
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    price: Decimal = Field(..., description="Unit price in the shop currency")
    image: Optional[str] = Field(None, max_length=500, description="Image reference")

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Decimal:
        """Parse the price once, rejecting anything non-numeric."""
        try:
            return to_decimal(v)
        except InvalidPriceException as exc:
            raise ValueError(exc.message) from exc

    @field_validator("image")
    @classmethod
    def blank_image_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_line_item(self) -> LineItem:
        return LineItem(id=self.id, name=self.name, unit_price=self.price, image=self.image)
