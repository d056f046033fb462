from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from pydantic import BaseModel

from shopcart.core.constants import DISCOUNT_PROMPT
from shopcart.core.money import format_money, round_money
from shopcart.domain.entities import Cart, LineItem
from shopcart.domain.pricing import DiscountKind
from shopcart.services.cart_service import CartService
from shopcart.services.cart_view import CartRow, CartView

logger = logging.getLogger(__name__)

_cart_service: CartService | None = None


def set_cart_service(service: CartService | None) -> None:
    global _cart_service
    _cart_service = service


def get_cart_service() -> CartService:
    if _cart_service is None:
        raise HTTPException(status_code=503, detail="Cart service is not configured")
    return _cart_service


# =============================================================================
# Response models
# =============================================================================


class LineItemResponse(BaseModel):
    id: str
    name: str
    price: Decimal
    quantity: int
    image: Optional[str] = None

    @classmethod
    def from_item(cls, item: LineItem) -> "LineItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            price=item.unit_price,
            quantity=item.quantity,
            image=item.image,
        )


class CartStateResponse(BaseModel):
    """Cart contents after a mutation; rendering is a separate request."""

    items: list[LineItemResponse]
    item_count: int
    is_member: bool
    badge: Optional[str] = None

    @classmethod
    def build(cls, cart: Cart, is_member: bool, badge: Optional[str] = None) -> "CartStateResponse":
        return cls(
            items=[LineItemResponse.from_item(item) for item in cart],
            item_count=cart.item_count,
            is_member=is_member,
            badge=badge,
        )


class CartRowResponse(BaseModel):
    id: str
    name: str
    quantity: int
    line_total: str
    text: str
    image: Optional[str] = None

    @classmethod
    def from_row(cls, row: CartRow) -> "CartRowResponse":
        return cls(
            id=row.id,
            name=row.name,
            quantity=row.quantity,
            line_total=row.line_total_text,
            text=row.text,
            image=row.image,
        )


class SummaryLine(BaseModel):
    label: str
    value: str


class InvoiceResponse(BaseModel):
    item_subtotal: Decimal
    volume_discount: Decimal
    member_discount: Decimal
    shipping: Decimal
    taxable_subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    applied_discount: DiscountKind
    lines: list[SummaryLine]
    text: str


class DecisionResponse(BaseModel):
    prompt: str = DISCOUNT_PROMPT
    options: list[DiscountKind] = [DiscountKind.MEMBER, DiscountKind.VOLUME]
    member_amount: str
    volume_amount: str


class CartResponse(BaseModel):
    is_empty: bool
    message: Optional[str] = None
    is_member: bool
    rows: list[CartRowResponse]
    invoice: Optional[InvoiceResponse] = None
    decision: Optional[DecisionResponse] = None


class MembershipRequest(BaseModel):
    member: bool


class BadgesResponse(BaseModel):
    badges: dict[str, str]


def cart_response(view: CartView, symbol: str) -> CartResponse:
    invoice = None
    if view.invoice is not None and view.summary is not None:
        inv = view.invoice
        invoice = InvoiceResponse(
            item_subtotal=round_money(inv.item_subtotal),
            volume_discount=round_money(inv.volume_discount),
            member_discount=round_money(inv.member_discount),
            shipping=round_money(inv.shipping),
            taxable_subtotal=round_money(inv.taxable_subtotal),
            tax_amount=round_money(inv.tax_amount),
            total=round_money(inv.total),
            applied_discount=inv.applied_discount,
            lines=[SummaryLine(label=label, value=value) for label, value in view.summary.lines()],
            text=view.summary.text,
        )

    decision = None
    if view.awaiting_decision and view.decision is not None:
        decision = DecisionResponse(
            member_amount=format_money(view.decision.member_amount, symbol),
            volume_amount=format_money(view.decision.volume_amount, symbol),
        )

    return CartResponse(
        is_empty=view.is_empty,
        message=view.message,
        is_member=view.is_member,
        rows=[CartRowResponse.from_row(row) for row in view.rows],
        invoice=invoice,
        decision=decision,
    )
