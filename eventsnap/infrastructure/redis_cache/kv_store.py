from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from redis.asyncio import Redis
from redis.exceptions import RedisError

from eventsnap.domain.errors import StoreUnavailable
from eventsnap.domain.ports.kv_store import KVStorePort


COMPARE_AND_DELETE_LUA = """
-- KEYS[1]: key holding the secret
-- ARGV[1]: expected value
local cur = redis.call('GET', KEYS[1])
if not cur then
  return 0
end
if cur ~= ARGV[1] then
  return 0
end
redis.call('DEL', KEYS[1])
return 1
"""


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except RedisError as e:
        raise StoreUnavailable(str(e)) from e


class RedisKVStore(KVStorePort):
    """
    Thin handle over a shared redis.asyncio client.

    NOTE:
    - The client is injected; this class never opens or closes it.
    - No retries here: any Redis failure surfaces as StoreUnavailable.
    """

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def get(self, key: str) -> str | None:
        with _store_errors():
            return await self._redis.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        with _store_errors():
            if ttl_seconds and ttl_seconds > 0:
                await self._redis.set(key, value, ex=ttl_seconds)
            else:
                await self._redis.set(key, value)

    async def delete(self, key: str) -> int:
        with _store_errors():
            return int(await self._redis.delete(key))

    async def delete_pattern(self, pattern: str) -> int:
        with _store_errors():
            # SCAN instead of KEYS so a large keyspace does not block the server
            keys = [key async for key in self._redis.scan_iter(match=pattern)]
            if not keys:
                return 0
            return int(await self._redis.delete(*keys))

    async def increment(self, key: str) -> int:
        with _store_errors():
            return int(await self._redis.incr(key))

    async def increment_window(self, key: str, window_seconds: int) -> int:
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        with _store_errors():
            # SET NX only succeeds for the call that opens the window, so the
            # expiry is attached exactly once; INCR keeps the existing TTL.
            pipe = self._redis.pipeline(transaction=True)
            pipe.set(key, 0, ex=window_seconds, nx=True)
            pipe.incr(key)
            _, value = await pipe.execute()
            return int(value)

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        with _store_errors():
            return bool(await self._redis.expire(key, ttl_seconds))

    async def exists(self, key: str) -> bool:
        with _store_errors():
            return int(await self._redis.exists(key)) == 1

    async def ttl(self, key: str) -> int:
        with _store_errors():
            return int(await self._redis.ttl(key))

    async def compare_and_delete(self, key: str, expected: str) -> bool:
        with _store_errors():
            res = await self._redis.eval(COMPARE_AND_DELETE_LUA, 1, key, expected)
            return int(res) == 1

    async def ping(self) -> bool:
        with _store_errors():
            return bool(await self._redis.ping())
