"""QR code cache indexed under two aliases (stable id and public token).

Entry lifetime follows the QR code's own expiration date, so a cached
"still valid" record never outlives the real expiry by more than the
default ceiling. Both aliases are written and invalidated together.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Awaitable, Callable, Iterable, Optional

from eventsnap.domain.entities import QrCode, QrStatusCounts
from eventsnap.domain.ports.cache import CachePort
from eventsnap.domain.services import as_utc, utc_now
from eventsnap.infrastructure.redis_cache import keys

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600
EXPIRED_TTL_SECONDS = 300
STATS_TTL_SECONDS = 300


def calculate_ttl(
    expires_at: datetime | None,
    *,
    now: datetime | None = None,
    default_ttl: int = DEFAULT_TTL_SECONDS,
    expired_ttl: int = EXPIRED_TTL_SECONDS,
) -> int:
    """
    Cache lifetime for a resource expiring at expires_at.

    - no expiry            -> default_ttl
    - already expired      -> expired_ttl (short, but non-zero so a hot
                              expired token does not stampede the database)
    - otherwise            -> seconds remaining, capped at default_ttl
    """
    if expires_at is None:
        return default_ttl
    now = as_utc(now) if now is not None else utc_now()
    remaining = math.floor((as_utc(expires_at) - now).total_seconds())
    if remaining <= 0:
        return expired_ttl
    return min(remaining, default_ttl)


class QrCodeCache:
    def __init__(
        self,
        cache: CachePort,
        *,
        prefix: str = keys.QRCODE_PREFIX,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        expired_ttl: int = EXPIRED_TTL_SECONDS,
        stats_ttl: int = STATS_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._cache = cache
        self._prefix = prefix
        self._default_ttl = default_ttl
        self._expired_ttl = expired_ttl
        self._stats_ttl = stats_ttl
        self._clock = clock

    def ttl_for(self, qrcode: QrCode) -> int:
        return calculate_ttl(
            qrcode.expiration_date,
            now=self._clock(),
            default_ttl=self._default_ttl,
            expired_ttl=self._expired_ttl,
        )

    async def get_by_id(self, qrcode_id: str) -> Optional[QrCode]:
        return await self._cache.get(keys.qrcode_id_key(qrcode_id, self._prefix), QrCode)

    async def get_by_token(self, token: str) -> Optional[QrCode]:
        return await self._cache.get(keys.qrcode_token_key(token, self._prefix), QrCode)

    async def store(self, qrcode: QrCode) -> None:
        ttl = self.ttl_for(qrcode)
        await self._cache.set(keys.qrcode_id_key(qrcode.id, self._prefix), qrcode, ttl)
        await self._cache.set(
            keys.qrcode_token_key(qrcode.token, self._prefix), qrcode, ttl
        )

    async def invalidate(self, qrcode: QrCode) -> None:
        """
        Drop both aliases, then every aggregate that may summarize this QR code.
        The aggregate sweep is coarse: the whole stats namespace goes.
        """
        await self._cache.delete(keys.qrcode_id_key(qrcode.id, self._prefix))
        await self._cache.delete(keys.qrcode_token_key(qrcode.token, self._prefix))
        await self._cache.delete_by_pattern(keys.qrcode_stats_pattern(self._prefix))
        logger.info(
            "qrcode cache invalidated",
            extra={"qrcode_id": qrcode.id, "token": qrcode.token},
        )

    async def lookup(
        self,
        *,
        load: Callable[[], Awaitable[Optional[QrCode]]],
        qrcode_id: str | None = None,
        token: str | None = None,
    ) -> Optional[QrCode]:
        """
        Read path: id alias, then token alias, then the system of record.
        A record loaded from the system of record is written back under both aliases.
        """
        if qrcode_id is None and token is None:
            raise ValueError("lookup needs a qrcode_id or a token")

        if qrcode_id is not None:
            cached = await self.get_by_id(qrcode_id)
            if cached is not None:
                return cached
        if token is not None:
            cached = await self.get_by_token(token)
            if cached is not None:
                return cached

        qrcode = await load()
        if qrcode is not None:
            await self.store(qrcode)
        return qrcode

    async def get_status_counts(
        self,
        user_ids: Iterable[str],
        load: Callable[[], Awaitable[QrStatusCounts]],
    ) -> QrStatusCounts:
        key = keys.qrcode_stats_key(user_ids, self._prefix)
        return await self._cache.get_or_set(
            key, load, ttl=self._stats_ttl, type_=QrStatusCounts
        )
