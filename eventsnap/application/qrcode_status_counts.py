from __future__ import annotations

from datetime import datetime

from eventsnap.domain.entities import QrStatusCounts
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.domain.services import as_utc, utc_now
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache


def classify_users(
    user_ids: list[str],
    expirations: list[tuple[str, datetime | None]],
    now: datetime,
) -> QrStatusCounts:
    """
    active  -> the user owns at least one QR code that has not expired yet
    expired -> the user owns QR codes, all of them expired
    none    -> the user owns no QR code
    """
    owns: dict[str, bool] = {user_id: False for user_id in user_ids}
    has_active: dict[str, bool] = {user_id: False for user_id in user_ids}
    for user_id, expiration in expirations:
        if user_id not in owns:
            continue
        owns[user_id] = True
        if expiration is not None and as_utc(expiration) > now:
            has_active[user_id] = True

    counts = QrStatusCounts()
    for user_id in owns:
        if has_active[user_id]:
            counts.active += 1
        elif owns[user_id]:
            counts.expired += 1
        else:
            counts.none += 1
    return counts


async def get_qrcode_status_counts(
    qrcodes: QrCodeRepositoryPort,
    qrcode_cache: QrCodeCache,
    user_ids: list[str],
    now: datetime | None = None,
) -> QrStatusCounts:
    ids = sorted({user_id for user_id in user_ids if user_id})
    if not ids:
        return QrStatusCounts()

    async def load() -> QrStatusCounts:
        expirations = await qrcodes.list_expirations_for_users(ids)
        return classify_users(ids, expirations, as_utc(now) if now else utc_now())

    return await qrcode_cache.get_status_counts(ids, load)
