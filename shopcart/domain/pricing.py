"""Cart pricing rules: volume tiers, discount arbitration, tax and shipping.

At most one discount applies to an invoice. When both the volume and the
member discount are positive the shopper has to pick one; the engine models
that as a pending :class:`Quote` so the arithmetic stays pure and the UI
supplies the answer.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from shopcart.core.config import DEFAULT_VOLUME_TIERS, PricingConfig, VolumeTier
from shopcart.core.exceptions import DecisionDismissed, EmptyCartException
from shopcart.domain.entities import Cart

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class DiscountKind(str, Enum):
    NONE = "none"
    VOLUME = "volume"
    MEMBER = "member"


def tier_lookup(subtotal: Decimal, tiers: Sequence[VolumeTier] = DEFAULT_VOLUME_TIERS) -> Decimal:
    """Return the rate of the first tier whose closed interval holds ``subtotal``."""
    for tier in tiers:
        if tier.contains(subtotal):
            return tier.rate
    # Amounts falling between tier bounds (e.g. 49.995) get no volume discount.
    return ZERO


def parse_choice(answer: Any) -> DiscountKind:
    """Map a prompt answer to a discount; anything unrecognised means none."""
    if isinstance(answer, DiscountKind):
        return answer
    if not isinstance(answer, str):
        return DiscountKind.NONE
    text = answer.strip().lower()
    if text in ("m", "member"):
        return DiscountKind.MEMBER
    if text in ("v", "volume"):
        return DiscountKind.VOLUME
    return DiscountKind.NONE


@dataclass(frozen=True)
class Invoice:
    """Immutable price breakdown. Amounts are unrounded."""

    item_subtotal: Decimal
    volume_discount: Decimal
    member_discount: Decimal
    shipping: Decimal
    taxable_subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    applied_discount: DiscountKind = DiscountKind.NONE

    @property
    def discount_amount(self) -> Decimal:
        return self.volume_discount + self.member_discount


@dataclass(frozen=True)
class DiscountDecision:
    """Both discounts qualify; one of them has to be chosen."""

    volume_amount: Decimal
    member_amount: Decimal


def build_invoice(
    item_subtotal: Decimal,
    applied: DiscountKind,
    amount: Decimal,
    config: PricingConfig,
) -> Invoice:
    volume = amount if applied is DiscountKind.VOLUME else ZERO
    member = amount if applied is DiscountKind.MEMBER else ZERO
    taxable = item_subtotal - volume - member + config.shipping_flat_rate
    tax = taxable * config.tax_rate
    return Invoice(
        item_subtotal=item_subtotal,
        volume_discount=volume,
        member_discount=member,
        shipping=config.shipping_flat_rate,
        taxable_subtotal=taxable,
        tax_rate=config.tax_rate,
        tax_amount=tax,
        total=taxable + tax,
        applied_discount=applied if amount > 0 else DiscountKind.NONE,
    )


@dataclass(frozen=True)
class Quote:
    """Pricing result that may still wait for a discount decision."""

    item_subtotal: Decimal
    volume_amount: Decimal
    member_amount: Decimal
    config: PricingConfig

    @property
    def pending(self) -> bool:
        return self.volume_amount > 0 and self.member_amount > 0

    @property
    def decision(self) -> DiscountDecision | None:
        if not self.pending:
            return None
        return DiscountDecision(self.volume_amount, self.member_amount)

    @property
    def invoice(self) -> Invoice | None:
        """The settled invoice, or None while a decision is outstanding."""
        if self.pending:
            return None
        if self.member_amount > 0:
            return build_invoice(self.item_subtotal, DiscountKind.MEMBER, self.member_amount, self.config)
        if self.volume_amount > 0:
            return build_invoice(self.item_subtotal, DiscountKind.VOLUME, self.volume_amount, self.config)
        return build_invoice(self.item_subtotal, DiscountKind.NONE, ZERO, self.config)

    def resolve(self, choice: Any = None) -> Invoice:
        """Settle the quote. ``choice`` only matters while the quote is pending."""
        settled = self.invoice
        if settled is not None:
            return settled

        kind = parse_choice(choice)
        if kind is DiscountKind.MEMBER:
            amount = self.member_amount
        elif kind is DiscountKind.VOLUME:
            amount = self.volume_amount
        else:
            amount = ZERO
        logger.info("Discount decision resolved: %s", kind.value)
        return build_invoice(self.item_subtotal, kind, amount, self.config)


DecisionCallback = Callable[[DiscountDecision], Any]


class PricingEngine:
    """Turns an eligible cart and the membership flag into an invoice."""

    def __init__(self, config: PricingConfig | None = None) -> None:
        self.config = config or PricingConfig()

    def volume_rate(self, subtotal: Decimal) -> Decimal:
        return tier_lookup(subtotal, self.config.volume_tiers)

    def quote(self, cart: Cart, is_member: bool) -> Quote:
        eligible = cart.eligible()
        if not eligible:
            raise EmptyCartException()

        subtotal = eligible.item_subtotal
        volume_amount = subtotal * self.volume_rate(subtotal)
        member_amount = subtotal * self.config.member_discount_rate if is_member else ZERO
        logger.debug(
            "Quote subtotal=%s volume=%s member=%s", subtotal, volume_amount, member_amount
        )
        return Quote(subtotal, volume_amount, member_amount, self.config)

    def price(self, cart: Cart, is_member: bool, decide: DecisionCallback | None = None) -> Invoice:
        """Price ``cart``, asking ``decide`` synchronously when both discounts qualify.

        A missing callback, a dismissed prompt or an unrecognised answer
        applies no discount.
        """
        quote = self.quote(cart, is_member)
        decision = quote.decision
        if decision is None:
            return quote.resolve()

        answer: Any = None
        if decide is not None:
            try:
                answer = decide(decision)
            except DecisionDismissed:
                logger.info("Discount prompt dismissed; no discount applied")
        return quote.resolve(answer)
