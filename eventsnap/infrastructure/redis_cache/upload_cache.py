from __future__ import annotations

from typing import Awaitable, Callable

from eventsnap.domain.entities import UploadPage
from eventsnap.domain.ports.cache import CachePort
from eventsnap.infrastructure.redis_cache import keys


class UploadListingCache:
    """
    Derived caches of one QR code's uploads: listing pages and the upload count.
    Everything lives under upload:<token>:* so one pattern sweep clears it.
    """

    def __init__(
        self,
        cache: CachePort,
        *,
        prefix: str = keys.UPLOAD_PREFIX,
        page_ttl: int = 300,
        count_ttl: int = 300,
    ) -> None:
        self._cache = cache
        self._prefix = prefix
        self._page_ttl = page_ttl
        self._count_ttl = count_ttl

    async def get_page(
        self,
        token: str,
        take: int,
        skip: int,
        load: Callable[[], Awaitable[UploadPage]],
    ) -> UploadPage:
        key = keys.upload_page_key(token, take, skip, self._prefix)
        return await self._cache.get_or_set(
            key, load, ttl=self._page_ttl, type_=UploadPage
        )

    async def get_count(self, token: str, load: Callable[[], Awaitable[int]]) -> int:
        key = keys.upload_count_key(token, self._prefix)
        return await self._cache.get_or_set(key, load, ttl=self._count_ttl, type_=int)

    async def invalidate(self, token: str) -> int:
        return await self._cache.delete_by_pattern(
            keys.upload_token_pattern(token, self._prefix)
        )
