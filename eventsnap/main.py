import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from eventsnap.infrastructure.db.pool import close_pool, create_pool
from eventsnap.infrastructure.redis_cache.client import close_redis, create_redis
from eventsnap.logging import setup_logging
from eventsnap.presentation.api import api
from eventsnap.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: the process owns the store handles and hands them to dependencies
    pool = create_pool(settings)
    await pool.open()
    redis = create_redis(settings)

    app.state.db_pool = pool
    app.state.redis = redis
    logger.info("store handles opened", extra={"app_env": settings.app_env})

    try:
        yield
    finally:
        # shutdown
        await close_redis(redis)
        await close_pool(pool)
        logger.info("store handles closed")


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="EventSnap API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
