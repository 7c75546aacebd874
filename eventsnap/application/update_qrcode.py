from __future__ import annotations

from datetime import datetime

from eventsnap.application.get_qrcode import get_qrcode
from eventsnap.domain.entities import QrCode
from eventsnap.domain.errors import QrCodeNotFound
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache


async def update_qrcode(
    qrcodes: QrCodeRepositoryPort,
    qrcode_cache: QrCodeCache,
    qrcode_id: str,
    *,
    event_name: str | None = None,
    description: str | None = None,
    expiration_date: datetime | None = None,
) -> QrCode:
    previous = await get_qrcode(qrcodes, qrcode_cache, qrcode_id=qrcode_id)

    updated = await qrcodes.update_details(
        qrcode_id,
        event_name=event_name,
        description=description,
        expiration_date=expiration_date,
    )
    if updated is None:
        # removed between the read and the write
        await qrcode_cache.invalidate(previous)
        raise QrCodeNotFound()

    # The system of record has committed; readers may see the old entry until
    # the aliases are dropped below.
    await qrcode_cache.invalidate(previous)
    await qrcode_cache.store(updated)
    return updated
