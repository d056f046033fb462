from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from shopcart.core.config import load_settings
from shopcart.core.exceptions import ConfigurationException
from shopcart.core.sentry_integration import init_sentry
from shopcart.logging_config import setup_logging


def test_defaults() -> None:
    settings = load_settings()

    assert settings.cart_storage_key == "shopcart:cart:v1"
    assert settings.redis_url is None
    assert settings.cart_ttl_seconds == 0
    assert settings.pricing.tax_rate == Decimal("0.102")
    assert settings.pricing.member_discount_rate == Decimal("0.15")
    assert settings.pricing.shipping_flat_rate == Decimal("25.00")
    assert len(settings.pricing.volume_tiers) == 4


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CART_STORAGE_KEY", "museum:cart:v2")
    monkeypatch.setenv("TAX_RATE", "0.08")
    monkeypatch.setenv("CART_TTL_SECONDS", "600")
    monkeypatch.setenv("ENVIRONMENT", "Dev")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://shop.example, ,https://museum.example")

    settings = load_settings()

    assert settings.cart_storage_key == "museum:cart:v2"
    assert settings.pricing.tax_rate == Decimal("0.08")
    assert settings.cart_ttl_seconds == 600
    assert settings.is_dev
    assert settings.cors_allowed_origins == ["https://shop.example", "https://museum.example"]


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("TAX_RATE", "ten percent"),
        ("SHIPPING_FLAT_RATE", "-1"),
        ("CART_TTL_SECONDS", "soon"),
        ("CART_TTL_SECONDS", "-5"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationException):
        load_settings()


def test_setup_logging_accepts_level_names() -> None:
    assert setup_logging("debug").level == logging.DEBUG
    assert setup_logging("not-a-level").level == logging.INFO


def test_sentry_stays_off_without_dsn() -> None:
    assert init_sentry(None) is False
