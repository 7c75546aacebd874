"""Fail-open JSON cache over the shared key-value store.

The cache is advisory: a store outage, or a payload that no longer decodes,
is logged and treated as a miss or a no-op write. Callers always have the
system of record to fall back on.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from eventsnap.domain.errors import StoreUnavailable
from eventsnap.domain.ports.cache import CachePort
from eventsnap.domain.ports.kv_store import KVStorePort

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=64)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


class CacheService(CachePort):
    def __init__(self, kv: KVStorePort) -> None:
        self._kv = kv

    async def get(self, key: str, type_: Any = None) -> Any | None:
        """Return the cached value (validated as type_ when given) or None.

        None covers a miss, an unreachable store and an undecodable payload.
        """
        try:
            raw = await self._kv.get(key)
        except StoreUnavailable as e:
            logger.warning("cache get failed", extra={"key": key, "error": str(e)})
            return None
        if raw is None:
            logger.debug("cache miss", extra={"key": key})
            return None
        try:
            if type_ is None:
                return json.loads(raw)
            return _adapter(type_).validate_json(raw)
        except (ValueError, ValidationError):
            logger.exception("cache payload could not be decoded", extra={"key": key})
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Best-effort write. ttl=None stores the entry without expiry."""
        try:
            serialized = to_json(value).decode("utf-8")
        except PydanticSerializationError:
            logger.exception("cache value is not serializable", extra={"key": key})
            return
        try:
            await self._kv.set(key, serialized, ttl)
        except StoreUnavailable as e:
            logger.warning("cache set failed", extra={"key": key, "error": str(e)})

    async def delete(self, key: str) -> None:
        try:
            await self._kv.delete(key)
        except StoreUnavailable as e:
            logger.warning("cache delete failed", extra={"key": key, "error": str(e)})

    async def delete_by_pattern(self, pattern: str) -> int:
        """Bulk invalidation of a family of derived keys. Returns the deleted count."""
        try:
            deleted = await self._kv.delete_pattern(pattern)
        except StoreUnavailable as e:
            logger.warning(
                "cache delete_by_pattern failed",
                extra={"pattern": pattern, "error": str(e)},
            )
            return 0
        if deleted > 0:
            logger.info(
                "cache invalidated", extra={"pattern": pattern, "deleted": deleted}
            )
        return deleted

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: int | None = None,
        type_: Any = None,
    ) -> T:
        """
        Read-through helper. Not atomic: concurrent misses may each run the
        factory and the last write wins, which is fine as long as factories
        are idempotent reads of the system of record.
        Factory errors propagate; a None result is returned but not cached.
        """
        cached = await self.get(key, type_)
        if cached is not None:
            return cached

        value = await factory()
        if value is not None:
            await self.set(key, value, ttl)
        return value

    async def exists(self, key: str) -> bool:
        try:
            return await self._kv.exists(key)
        except StoreUnavailable as e:
            logger.warning("cache exists failed", extra={"key": key, "error": str(e)})
            return False

    async def ttl(self, key: str) -> int:
        try:
            return await self._kv.ttl(key)
        except StoreUnavailable as e:
            logger.warning("cache ttl failed", extra={"key": key, "error": str(e)})
            return -1

    async def increment(self, key: str, ttl: int | None = None) -> int:
        """Post-increment value, 0 when the store is unreachable.

        With a positive ttl the first increment opens a window of ttl seconds
        that later increments do not extend. Without one the counter never expires.
        """
        try:
            if ttl is not None and ttl > 0:
                return await self._kv.increment_window(key, ttl)
            return await self._kv.increment(key)
        except StoreUnavailable as e:
            logger.warning(
                "cache increment failed", extra={"key": key, "error": str(e)}
            )
            return 0
