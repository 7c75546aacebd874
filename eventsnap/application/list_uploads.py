from __future__ import annotations

from eventsnap.domain.entities import UploadPage
from eventsnap.domain.ports.upload_repository import UploadRepositoryPort
from eventsnap.infrastructure.redis_cache.upload_cache import UploadListingCache


async def list_uploads(
    uploads: UploadRepositoryPort,
    listing_cache: UploadListingCache,
    token: str,
    take: int,
    skip: int,
) -> UploadPage:
    async def load() -> UploadPage:
        items, total = await uploads.list_for_token(token, take, skip)
        return UploadPage.build(items, total, take, skip)

    return await listing_cache.get_page(token, take, skip, load)
