from __future__ import annotations

from eventsnap.application.get_qrcode import get_qrcode
from eventsnap.application.upload_quota import (
    FREE_TIER_UPLOAD_QUOTA,
    enforce_upload_quota,
)
from eventsnap.domain.entities import Upload
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.domain.ports.upload_repository import UploadRepositoryPort
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache
from eventsnap.infrastructure.redis_cache.upload_cache import UploadListingCache


async def create_upload(
    qrcodes: QrCodeRepositoryPort,
    uploads: UploadRepositoryPort,
    qrcode_cache: QrCodeCache,
    listing_cache: UploadListingCache,
    token: str,
    image_url: str,
    quota: int = FREE_TIER_UPLOAD_QUOTA,
) -> Upload:
    qrcode = await get_qrcode(qrcodes, qrcode_cache, token=token)
    await enforce_upload_quota(uploads, listing_cache, qrcode, ceiling=quota)

    upload = await uploads.create(qrcode.id, image_url)

    # listing pages and the cached count are stale now
    await listing_cache.invalidate(qrcode.token)
    return upload
