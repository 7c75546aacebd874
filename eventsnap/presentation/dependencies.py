from typing import Annotated, Awaitable, Callable

from fastapi import Depends, HTTPException, Request, status

from eventsnap.application.verification import VerificationCodeService
from eventsnap.domain.errors import RateLimited, StoreUnavailable
from eventsnap.domain.ports.cache import CachePort
from eventsnap.domain.ports.kv_store import KVStorePort
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.domain.ports.upload_repository import UploadRepositoryPort
from eventsnap.infrastructure.db.qrcodes_repo import PgQrCodeRepository
from eventsnap.infrastructure.db.uploads_repo import PgUploadRepository
from eventsnap.infrastructure.redis_cache.cache_service import CacheService
from eventsnap.infrastructure.redis_cache.kv_store import RedisKVStore
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache
from eventsnap.infrastructure.redis_cache.rate_limiter import FixedWindowRateLimiter
from eventsnap.infrastructure.redis_cache.upload_cache import UploadListingCache
from eventsnap.settings import Settings, get_settings


def get_kv_store(request: Request) -> KVStorePort:
    # The Redis handle is created in eventsnap.main lifespan()
    return RedisKVStore(request.app.state.redis)


def get_cache_service(
    kv: Annotated[KVStorePort, Depends(get_kv_store)],
) -> CachePort:
    return CacheService(kv)


def get_qrcode_repository(request: Request) -> QrCodeRepositoryPort:
    return PgQrCodeRepository(request.app.state.db_pool)


def get_upload_repository(request: Request) -> UploadRepositoryPort:
    return PgUploadRepository(request.app.state.db_pool)


def get_qrcode_cache(
    cache: Annotated[CachePort, Depends(get_cache_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> QrCodeCache:
    return QrCodeCache(
        cache,
        default_ttl=settings.cache_default_ttl_seconds,
        expired_ttl=settings.cache_expired_ttl_seconds,
        stats_ttl=settings.cache_stats_ttl_seconds,
    )


def get_upload_listing_cache(
    cache: Annotated[CachePort, Depends(get_cache_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadListingCache:
    return UploadListingCache(
        cache,
        page_ttl=settings.cache_listing_ttl_seconds,
        count_ttl=settings.cache_listing_ttl_seconds,
    )


def get_upload_quota(settings: Annotated[Settings, Depends(get_settings)]) -> int:
    return settings.upload_quota


def get_verification_service(
    kv: Annotated[KVStorePort, Depends(get_kv_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VerificationCodeService:
    return VerificationCodeService(
        kv,
        ttl_seconds=settings.verification_code_ttl_seconds,
        single_use=settings.verification_single_use,
    )


def get_rate_limiter(
    kv: Annotated[KVStorePort, Depends(get_kv_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(
        kv,
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


def rate_limit(route: str) -> Callable[..., Awaitable[None]]:
    """
    Dependency factory: admit the request or answer 429 for the rest of the window.
    A store outage answers 503 instead of admitting blindly.
    """

    async def _admit(
        request: Request,
        limiter: Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)],
    ) -> None:
        client = request.client.host if request.client else "unknown"
        try:
            await limiter.hit(route, client)
        except RateLimited as e:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="too many requests",
                headers={"Retry-After": str(e.retry_after)},
            )
        except StoreUnavailable:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="rate limiter unavailable",
            )

    return _admit
