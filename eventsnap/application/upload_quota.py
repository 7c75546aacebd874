from __future__ import annotations

import logging

from eventsnap.domain.entities import QrCode
from eventsnap.domain.errors import QuotaExceeded
from eventsnap.domain.ports.upload_repository import UploadRepositoryPort
from eventsnap.infrastructure.redis_cache.upload_cache import UploadListingCache

logger = logging.getLogger(__name__)

FREE_TIER_UPLOAD_QUOTA = 10


async def enforce_upload_quota(
    uploads: UploadRepositoryPort,
    listing_cache: UploadListingCache,
    qrcode: QrCode,
    ceiling: int = FREE_TIER_UPLOAD_QUOTA,
) -> int:
    """
    Point-in-time check before one more upload is created; returns the current count.

    Not transactional with the insert that follows: concurrent uploads can
    overshoot the ceiling by a few.
    """

    async def load() -> int:
        return await uploads.count_for_qrcode(qrcode.id)

    count = await listing_cache.get_count(qrcode.token, load)
    if count >= ceiling:
        logger.info(
            "upload quota reached",
            extra={"qrcode_id": qrcode.id, "count": count, "ceiling": ceiling},
        )
        raise QuotaExceeded(ceiling)
    return count
