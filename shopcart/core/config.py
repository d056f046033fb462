"""Environment-driven configuration objects for the cart engine."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from shopcart.core import constants
from shopcart.core.exceptions import ConfigurationException


def _get_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ConfigurationException(f"{name} must be a number, got {raw!r}") from exc
    if not value.is_finite() or value < 0:
        raise ConfigurationException(f"{name} must be a finite non-negative number")
    return value


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationException(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True, frozen=True)
class VolumeTier:
    """Closed subtotal interval mapped to a discount rate."""

    minimum: Decimal
    maximum: Decimal | None
    rate: Decimal

    def contains(self, amount: Decimal) -> bool:
        if amount < self.minimum:
            return False
        return self.maximum is None or amount <= self.maximum


DEFAULT_VOLUME_TIERS: tuple[VolumeTier, ...] = tuple(
    VolumeTier(minimum, maximum, rate) for minimum, maximum, rate in constants.VOLUME_TIERS
)


@dataclass(slots=True, frozen=True)
class PricingConfig:
    tax_rate: Decimal = constants.TAX_RATE
    member_discount_rate: Decimal = constants.MEMBER_DISCOUNT_RATE
    shipping_flat_rate: Decimal = constants.SHIPPING_FLAT_RATE
    volume_tiers: tuple[VolumeTier, ...] = DEFAULT_VOLUME_TIERS


@dataclass(slots=True)
class Settings:
    cart_storage_key: str = constants.CART_STORAGE_KEY
    cart_ttl_seconds: int = constants.CART_TTL_SECONDS
    redis_url: str | None = None
    currency_symbol: str = constants.CURRENCY_SYMBOL
    log_level: str = "INFO"
    environment: str = "production"
    sentry_dsn: str | None = None
    cors_allowed_origins: list[str] = field(default_factory=list)
    pricing: PricingConfig = field(default_factory=PricingConfig)

    @property
    def is_dev(self) -> bool:
        return self.environment in ("development", "dev", "local", "test")


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    pricing = PricingConfig(
        tax_rate=_get_decimal("TAX_RATE", constants.TAX_RATE),
        member_discount_rate=_get_decimal("MEMBER_DISCOUNT_RATE", constants.MEMBER_DISCOUNT_RATE),
        shipping_flat_rate=_get_decimal("SHIPPING_FLAT_RATE", constants.SHIPPING_FLAT_RATE),
    )

    ttl = _get_int("CART_TTL_SECONDS", constants.CART_TTL_SECONDS)
    if ttl < 0:
        raise ConfigurationException("CART_TTL_SECONDS must be >= 0")

    origins = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    return Settings(
        cart_storage_key=os.getenv("CART_STORAGE_KEY") or constants.CART_STORAGE_KEY,
        cart_ttl_seconds=ttl,
        redis_url=os.getenv("REDIS_URL") or None,
        currency_symbol=os.getenv("CURRENCY_SYMBOL") or constants.CURRENCY_SYMBOL,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        environment=os.getenv("ENVIRONMENT", "production").lower(),
        sentry_dsn=os.getenv("SENTRY_DSN") or None,
        cors_allowed_origins=origins,
        pricing=pricing,
    )
