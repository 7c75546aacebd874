from __future__ import annotations

from eventsnap.domain.entities import QrCode
from eventsnap.domain.errors import QrCodeNotFound
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache


async def get_qrcode(
    qrcodes: QrCodeRepositoryPort,
    qrcode_cache: QrCodeCache,
    *,
    qrcode_id: str | None = None,
    token: str | None = None,
) -> QrCode:
    async def load() -> QrCode | None:
        if qrcode_id is not None:
            return await qrcodes.get_by_id(qrcode_id)
        return await qrcodes.get_by_token(token)

    qrcode = await qrcode_cache.lookup(load=load, qrcode_id=qrcode_id, token=token)
    if qrcode is None:
        raise QrCodeNotFound()
    return qrcode
