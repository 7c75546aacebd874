from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from eventsnap.application.create_upload import create_upload
from eventsnap.application.list_uploads import list_uploads
from eventsnap.domain.errors import QrCodeNotFound, QuotaExceeded
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.domain.ports.upload_repository import UploadRepositoryPort
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache
from eventsnap.infrastructure.redis_cache.upload_cache import UploadListingCache
from eventsnap.presentation.dependencies import (
    get_qrcode_cache,
    get_qrcode_repository,
    get_upload_listing_cache,
    get_upload_quota,
    get_upload_repository,
    rate_limit,
)
from eventsnap.schemas.requests import UploadCreateIn
from eventsnap.schemas.responses import UploadOut, UploadPageOut

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post(
    "/{token}",
    status_code=201,
    response_model=UploadOut,
    dependencies=[Depends(rate_limit("upload"))],
)
async def post_upload(
    token: str,
    body: UploadCreateIn,
    qrcodes: Annotated[QrCodeRepositoryPort, Depends(get_qrcode_repository)],
    uploads: Annotated[UploadRepositoryPort, Depends(get_upload_repository)],
    qrcode_cache: Annotated[QrCodeCache, Depends(get_qrcode_cache)],
    listing_cache: Annotated[UploadListingCache, Depends(get_upload_listing_cache)],
    quota: Annotated[int, Depends(get_upload_quota)],
):
    try:
        upload = await create_upload(
            qrcodes,
            uploads,
            qrcode_cache,
            listing_cache,
            token=token,
            image_url=body.image_url,
            quota=quota,
        )
    except (QrCodeNotFound, ValueError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="qrcode not found"
        )
    except QuotaExceeded as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"upload quota of {e.ceiling} reached",
        )
    return UploadOut.model_validate(upload)


@router.get("/{token}", response_model=UploadPageOut)
async def get_uploads(
    token: str,
    uploads: Annotated[UploadRepositoryPort, Depends(get_upload_repository)],
    listing_cache: Annotated[UploadListingCache, Depends(get_upload_listing_cache)],
    take: Annotated[int, Query(ge=1, le=100)] = 20,
    skip: Annotated[int, Query(ge=0)] = 0,
):
    try:
        page = await list_uploads(uploads, listing_cache, token, take, skip)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UploadPageOut(
        items=[UploadOut.model_validate(item) for item in page.items],
        total=page.total,
        skip=page.next_skip,
    )
