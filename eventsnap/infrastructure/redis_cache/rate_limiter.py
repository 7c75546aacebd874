from __future__ import annotations

import logging

from eventsnap.domain.errors import RateLimited
from eventsnap.domain.ports.kv_store import KVStorePort
from eventsnap.infrastructure.redis_cache import keys

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    """
    Per (route, client) admission counter.

    The window starts at the first request, not at a clock boundary, and is
    not extended by later requests. Store failures are NOT swallowed here:
    StoreUnavailable propagates so the caller never admits blindly.
    """

    def __init__(
        self,
        kv: KVStorePort,
        *,
        limit: int = 10,
        window_seconds: int = 60,
        prefix: str = keys.RATE_LIMIT_PREFIX,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._kv = kv
        self._limit = limit
        self._window = window_seconds
        self._prefix = prefix

    @property
    def limit(self) -> int:
        return self._limit

    async def hit(self, route: str, client: str) -> int:
        """Count one request; raise RateLimited when the window is already full."""
        key = keys.rate_limit_key(route, client, self._prefix)
        count = await self._kv.increment_window(key, self._window)
        if count > self._limit:
            remaining = await self._kv.ttl(key)
            retry_after = remaining if remaining > 0 else self._window
            logger.warning(
                "rate limit exceeded",
                extra={"route": route, "client": client, "count": count},
            )
            raise RateLimited(retry_after=retry_after)
        return count
