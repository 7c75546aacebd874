from typing import Annotated

from fastapi import APIRouter, Depends

from eventsnap.domain.errors import StoreUnavailable
from eventsnap.domain.ports.kv_store import KVStorePort
from eventsnap.presentation.dependencies import get_kv_store
from eventsnap.schemas.responses import HealthOut

router = APIRouter()


@router.get("/healthz", response_model=HealthOut)
async def healthz(kv: Annotated[KVStorePort, Depends(get_kv_store)]) -> HealthOut:
    # the cache is advisory, so a Redis outage degrades but does not fail the check
    try:
        redis_ok = await kv.ping()
    except StoreUnavailable:
        redis_ok = False
    return HealthOut(redis="ok" if redis_ok else "unavailable")
