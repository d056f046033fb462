"""Shared pytest fixtures for cart tests."""
from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shopcart.api.api_server import create_app
from shopcart.api.webapp import set_cart_service
from shopcart.core.config import Settings
from shopcart.core.constants import CART_STORAGE_KEY
from shopcart.domain.entities import LineItem
from shopcart.integrations.redis_cart import MemoryCartStore
from shopcart.services.cart_service import CartService

_CONFIG_ENV_VARS = (
    "CART_STORAGE_KEY",
    "CART_TTL_SECONDS",
    "REDIS_URL",
    "TAX_RATE",
    "MEMBER_DISCOUNT_RATE",
    "SHIPPING_FLAT_RATE",
    "CURRENCY_SYMBOL",
    "LOG_LEVEL",
    "ENVIRONMENT",
    "SENTRY_DSN",
    "CORS_ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings-driven tests."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _make_item(item_id: str, price: str | int = "10", qty: int = 1, name: str | None = None) -> LineItem:
    return LineItem(id=item_id, name=name or item_id.title(), unit_price=Decimal(str(price)), quantity=qty)


@pytest.fixture()
def make_item():
    """Factory for line items with sensible defaults."""
    return _make_item


class RecordingStore(MemoryCartStore):
    """Memory store that exposes the serialized record to assertions."""

    def raw(self) -> str | None:
        return self._records.get(self.key)

    def write_raw(self, value: str) -> None:
        self._records[self.key] = value


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore(CART_STORAGE_KEY)


@pytest.fixture()
def service(store: MemoryCartStore) -> CartService:
    return CartService(store)


@pytest.fixture()
def client(service: CartService) -> Iterator[TestClient]:
    app = create_app(Settings(environment="test"), service=service)
    with TestClient(app) as test_client:
        yield test_client
    set_cart_service(None)
