from __future__ import annotations

from redis.asyncio import Redis

from eventsnap.settings import Settings


def create_redis(settings: Settings) -> Redis:
    """
    Build the shared Redis handle. The process entry point owns it:
    create on startup, pass it to the components, close_redis() on shutdown.
    decode_responses=True -> we get/put str, not bytes.
    """
    return Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout_seconds,
        socket_connect_timeout=settings.redis_socket_timeout_seconds,
    )


async def close_redis(client: Redis | None) -> None:
    if client is not None:
        await client.aclose()
