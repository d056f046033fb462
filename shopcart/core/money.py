"""Helpers for parsing prices and formatting currency amounts."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from shopcart.core.constants import CURRENCY_SYMBOL, MAX_PRICE, MONEY_PLACES
from shopcart.core.exceptions import InvalidPriceException


def to_decimal(value: Any) -> Decimal:
    """Convert a price-like value to Decimal, failing fast on bad input.

    Floats go through ``str`` so ``29.99`` stays ``Decimal("29.99")``.
    Booleans, NaN, infinities, negative values and amounts above
    ``MAX_PRICE`` are rejected.
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        raise InvalidPriceException(value)
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        raw = value.strip().replace(",", ".")
        try:
            amount = Decimal(raw)
        except InvalidOperation as exc:
            raise InvalidPriceException(value) from exc
    else:
        raise InvalidPriceException(value)

    if not amount.is_finite() or amount < 0 or amount > MAX_PRICE:
        raise InvalidPriceException(value)
    return amount


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal | int | float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format an amount as currency text, wrapping negatives in parentheses.

    >>> format_money(Decimal("-3.5"))
    '($3.50)'
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    text = f"{symbol}{round_money(abs(value))}"
    if value < 0:
        return f"({text})"
    return text


def format_rate(rate: Decimal) -> str:
    """Render a fractional rate as a one-decimal percentage (``0.102`` -> ``10.2%``)."""
    percent = (rate * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{percent}%"
