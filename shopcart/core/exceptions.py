"""Custom exceptions for the cart engine."""
from __future__ import annotations

from typing import Any


class ShopCartException(Exception):
    """Base exception for all cart engine errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationException(ShopCartException):
    """Input validation errors."""

    pass


class InvalidPriceException(ValidationException):
    """Price is not a finite, non-negative number."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid price: {value!r}")
        self.value = value


class EmptyCartException(ShopCartException):
    """Pricing was requested for a cart without eligible items."""

    def __init__(self) -> None:
        super().__init__("Cart has no eligible items to price")


class DecisionDismissed(ShopCartException):
    """The discount choice prompt was closed without an answer."""

    def __init__(self) -> None:
        super().__init__("Discount decision dismissed")


class ConfigurationException(ShopCartException):
    """Configuration errors."""

    pass
