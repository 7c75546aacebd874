from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from eventsnap.application.get_qrcode import get_qrcode
from eventsnap.application.qrcode_status_counts import get_qrcode_status_counts
from eventsnap.application.update_qrcode import update_qrcode
from eventsnap.domain.errors import QrCodeNotFound
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache
from eventsnap.presentation.dependencies import get_qrcode_cache, get_qrcode_repository
from eventsnap.schemas.requests import QrCodeUpdateIn
from eventsnap.schemas.responses import QrCodeOut, QrStatusCountsOut

router = APIRouter(prefix="/qrcodes", tags=["QR codes"])

QrCodes = Annotated[QrCodeRepositoryPort, Depends(get_qrcode_repository)]
Cache = Annotated[QrCodeCache, Depends(get_qrcode_cache)]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="qrcode not found")


# declared before /{qrcode_id} so "stats" and "token" are not taken for ids
@router.get("/stats", response_model=QrStatusCountsOut)
async def get_status_counts(
    qrcodes: QrCodes,
    qrcode_cache: Cache,
    user_ids: Annotated[list[str], Query()] = [],
):
    try:
        counts = await get_qrcode_status_counts(qrcodes, qrcode_cache, user_ids)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return QrStatusCountsOut.model_validate(counts)


@router.get("/token/{token}", response_model=QrCodeOut)
async def get_by_token(token: str, qrcodes: QrCodes, qrcode_cache: Cache):
    try:
        qrcode = await get_qrcode(qrcodes, qrcode_cache, token=token)
    # a token that cannot form a cache key cannot exist either
    except (QrCodeNotFound, ValueError):
        raise _not_found()
    return QrCodeOut.model_validate(qrcode)


@router.get("/{qrcode_id}", response_model=QrCodeOut)
async def get_by_id(qrcode_id: UUID, qrcodes: QrCodes, qrcode_cache: Cache):
    try:
        qrcode = await get_qrcode(qrcodes, qrcode_cache, qrcode_id=str(qrcode_id))
    except QrCodeNotFound:
        raise _not_found()
    return QrCodeOut.model_validate(qrcode)


@router.patch("/{qrcode_id}", response_model=QrCodeOut)
async def patch_qrcode(
    qrcode_id: UUID,
    body: QrCodeUpdateIn,
    qrcodes: QrCodes,
    qrcode_cache: Cache,
):
    try:
        qrcode = await update_qrcode(
            qrcodes,
            qrcode_cache,
            str(qrcode_id),
            event_name=body.event_name,
            description=body.description,
            expiration_date=body.expiration_date,
        )
    except QrCodeNotFound:
        raise _not_found()
    return QrCodeOut.model_validate(qrcode)
