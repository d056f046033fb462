"""Cart record persistence: Redis-backed store with an in-memory fallback.

The whole cart lives in one JSON document under a versioned key. Every
call re-reads or rewrites that document; nothing is cached between calls,
so concurrent writers simply overwrite each other (last write wins).
"""
from __future__ import annotations

import json
import logging
from typing import Any

import redis

from shopcart.core.exceptions import ShopCartException
from shopcart.domain.entities import Cart, LineItem

logger = logging.getLogger(__name__)


def decode_cart(raw: str | bytes | None) -> Cart:
    """Decode a persisted cart document, forgiving any corruption.

    Absent or unparsable documents decode to an empty cart. Inside a valid
    array, unreadable entries and repeated ids are skipped individually.
    """
    if not raw:
        return Cart()
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Discarding unreadable cart record: %s", exc)
        return Cart()
    if not isinstance(payload, list):
        logger.warning("Discarding cart record of type %s", type(payload).__name__)
        return Cart()

    items: list[LineItem] = []
    seen: set[str] = set()
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        try:
            item = LineItem.from_dict(entry)
        except (KeyError, TypeError, ValueError, ShopCartException) as exc:
            logger.debug("Skipping malformed cart entry %r: %s", entry, exc)
            continue
        if item.id in seen:
            continue
        seen.add(item.id)
        items.append(item)
    return Cart(tuple(items))


def encode_cart(cart: Cart) -> str:
    return json.dumps(cart.to_list(), ensure_ascii=False)


class MemoryCartStore:
    """Cart store kept in process memory.

    Holds the serialized document, not live objects, so it behaves like the
    durable backends and doubles as the test fake.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self._records: dict[str, str] = {}

    def load(self) -> Cart:
        return decode_cart(self._records.get(self.key))

    def save(self, cart: Cart) -> None:
        self._records[self.key] = encode_cart(cart)

    def clear(self) -> None:
        self._records.pop(self.key, None)


class RedisCartStore:
    """Cart store persisted in Redis; falls back to memory if Redis fails."""

    def __init__(self, redis_url: str, key: str, ttl_seconds: int = 0) -> None:
        self.key = key
        self.ttl_seconds = ttl_seconds
        self._redis_url = redis_url
        self._memory = MemoryCartStore(key)
        self._client: Any = self._init_client()

    @property
    def is_redis(self) -> bool:
        return self._client is not None

    def _init_client(self) -> Any:
        try:
            client = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
            logger.info("Redis cart storage enabled")
            return client
        except (redis.RedisError, ValueError) as exc:
            logger.warning("Redis cart init failed, fallback to in-memory: %s", exc)
            return None

    def _switch_to_memory_fallback(self, reason: Exception | str) -> None:
        logger.warning("Redis cart fallback to memory mode: %s", reason)
        self._client = None

    def load(self) -> Cart:
        if not self._client:
            return self._memory.load()
        try:
            raw = self._client.get(self.key)
        except redis.RedisError as exc:
            self._switch_to_memory_fallback(exc)
            return self._memory.load()
        return decode_cart(raw)

    def save(self, cart: Cart) -> None:
        if self._client:
            serialized = encode_cart(cart)
            try:
                if self.ttl_seconds > 0:
                    self._client.setex(self.key, self.ttl_seconds, serialized)
                else:
                    self._client.set(self.key, serialized)
                return
            except redis.RedisError as exc:
                self._switch_to_memory_fallback(exc)
        self._memory.save(cart)

    def clear(self) -> None:
        if self._client:
            try:
                self._client.delete(self.key)
                return
            except redis.RedisError as exc:
                self._switch_to_memory_fallback(exc)
        self._memory.clear()
