from fastapi import APIRouter

from eventsnap.presentation.routers.v1.qrcodes import router as qrcodes_router
from eventsnap.presentation.routers.v1.uploads import router as uploads_router
from eventsnap.presentation.routers.v1.verification import router as verification_router
from eventsnap.presentation.routes.health import router as health_router

api = APIRouter()

# Add all v1 routers here
routers = (verification_router, qrcodes_router, uploads_router)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(health_router)
