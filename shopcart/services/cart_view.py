"""Projection of cart state into a renderable display model.

Everything here is a pure function of (cart, membership flag): the caller
decides when to re-derive the view after a mutation.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from shopcart.core.constants import BADGE_TEMPLATE, CURRENCY_SYMBOL, EMPTY_CART_MESSAGE
from shopcart.core.money import format_money, format_rate
from shopcart.domain.entities import Cart, LineItem
from shopcart.domain.pricing import (
    DecisionCallback,
    DiscountDecision,
    DiscountKind,
    Invoice,
    PricingEngine,
)


@dataclass(frozen=True)
class CartRow:
    id: str
    name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    line_total_text: str
    image: str | None = None

    @property
    def text(self) -> str:
        return f"{self.quantity} × {self.name} — {self.line_total_text}"


@dataclass(frozen=True)
class InvoiceSummary:
    """Invoice amounts formatted for display."""

    item_subtotal: str
    volume_discount: str
    member_discount: str
    shipping: str
    taxable_subtotal: str
    tax_rate: str
    tax_amount: str
    total: str
    applied_discount: DiscountKind

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Subtotal of Items", self.item_subtotal),
            ("Volume Discount", self.volume_discount),
            ("Member Discount", self.member_discount),
            ("Shipping", self.shipping),
            ("Subtotal (Taxable)", self.taxable_subtotal),
            ("Tax Rate", self.tax_rate),
            ("Tax Amount", self.tax_amount),
            ("Invoice Total", self.total),
        ]

    @property
    def text(self) -> str:
        return "\n".join(f"{label + ':':<21}{value}" for label, value in self.lines())


@dataclass(frozen=True)
class CartView:
    is_member: bool
    rows: tuple[CartRow, ...] = ()
    invoice: Invoice | None = None
    summary: InvoiceSummary | None = None
    decision: DiscountDecision | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def message(self) -> str | None:
        return EMPTY_CART_MESSAGE if self.is_empty else None

    @property
    def awaiting_decision(self) -> bool:
        return self.decision is not None and self.invoice is None


def format_summary(invoice: Invoice, symbol: str = CURRENCY_SYMBOL) -> InvoiceSummary:
    # Discounts are shown as deductions, hence the sign flip.
    return InvoiceSummary(
        item_subtotal=format_money(invoice.item_subtotal, symbol),
        volume_discount=format_money(-invoice.volume_discount, symbol),
        member_discount=format_money(-invoice.member_discount, symbol),
        shipping=format_money(invoice.shipping, symbol),
        taxable_subtotal=format_money(invoice.taxable_subtotal, symbol),
        tax_rate=format_rate(invoice.tax_rate),
        tax_amount=format_money(invoice.tax_amount, symbol),
        total=format_money(invoice.total, symbol),
        applied_discount=invoice.applied_discount,
    )


def build_row(item: LineItem, symbol: str = CURRENCY_SYMBOL) -> CartRow:
    return CartRow(
        id=item.id,
        name=item.name,
        quantity=item.quantity,
        unit_price=item.unit_price,
        line_total=item.line_total,
        line_total_text=format_money(item.line_total, symbol),
        image=item.image,
    )


def build_cart_view(
    cart: Cart,
    is_member: bool,
    engine: PricingEngine,
    decide: DecisionCallback | None = None,
    *,
    wait_for_decision: bool = False,
    symbol: str = CURRENCY_SYMBOL,
) -> CartView:
    """Build the display model for ``cart``.

    Ineligible entries are dropped before anything is shown; an empty result
    short-circuits to the empty state without pricing. With
    ``wait_for_decision`` and no ``decide`` callback, a cart where both
    discounts qualify comes back with ``decision`` set and no invoice.
    """
    eligible = cart.eligible()
    if not eligible:
        return CartView(is_member=is_member)

    rows = tuple(build_row(item, symbol) for item in eligible)

    if wait_for_decision and decide is None:
        quote = engine.quote(eligible, is_member)
        if quote.pending:
            return CartView(is_member=is_member, rows=rows, decision=quote.decision)
        invoice = quote.resolve()
    else:
        invoice = engine.price(eligible, is_member, decide)

    return CartView(
        is_member=is_member,
        rows=rows,
        invoice=invoice,
        summary=format_summary(invoice, symbol),
    )


def badge_text(cart: Cart, item_id: str) -> str:
    """Badge for a catalog entry: ``"Qty: n"`` when in the cart, else empty."""
    quantity = cart.quantity_of(item_id)
    if quantity <= 0:
        return ""
    return BADGE_TEMPLATE.format(qty=quantity)


def build_badges(cart: Cart, item_ids: Iterable[str]) -> dict[str, str]:
    return {item_id: badge_text(cart, item_id) for item_id in item_ids}
