from __future__ import annotations

from psycopg_pool import AsyncConnectionPool

from eventsnap.settings import Settings


def _add_connect_timeout(dsn: str, seconds: int = 3) -> str:
    if "connect_timeout=" in dsn:
        return dsn
    sep = "&" if "?" in dsn else "?"
    return f"{dsn}{sep}connect_timeout={seconds}"


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """
    Create the pool WITHOUT opening it; the process entry point opens it on
    startup and closes it on shutdown.
    """
    return AsyncConnectionPool(
        _add_connect_timeout(settings.database_url),
        min_size=1,
        max_size=10,
        timeout=5,
        open=False,  # created closed; caller decides when to open
    )


async def close_pool(pool: AsyncConnectionPool | None) -> None:
    if pool is not None:
        await pool.close()
