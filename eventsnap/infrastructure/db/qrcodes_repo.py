from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from psycopg_pool import AsyncConnectionPool

from eventsnap.domain.entities import QrCode
from eventsnap.domain.ports.qrcode_repository import QrCodeRepositoryPort
from eventsnap.domain.services import as_utc

_COLUMNS = """
    id, token, "userId", "eventName", "descriptionEvent", "expirationDate", active
"""


def _row_to_qrcode(row: tuple[Any, ...]) -> QrCode:
    id_, token, user_id, event_name, description, expiration_date, active = row
    return QrCode(
        id=str(id_),
        token=str(token),
        user_id=str(user_id) if user_id is not None else None,
        event_name=event_name,
        description=description,
        expiration_date=as_utc(expiration_date) if expiration_date else None,
        active=bool(active),
    )


def _to_db_timestamp(value: datetime) -> datetime:
    # columns are TIMESTAMP WITHOUT TIME ZONE holding UTC
    return as_utc(value).replace(tzinfo=None)


class PgQrCodeRepository(QrCodeRepositoryPort):
    """
    Postgres implementation of QrCodeRepositoryPort over the "qrcode" table.

    NOTE:
    - Soft-deleted rows ("deletedAt" set) are invisible.
    - Each call borrows its own connection from the pool.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> Optional[QrCode]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, params)
                row = await cur.fetchone()
        return _row_to_qrcode(row) if row else None

    async def get_by_id(self, qrcode_id: str) -> Optional[QrCode]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM qrcode
        WHERE id = %s AND "deletedAt" IS NULL
        """
        return await self._fetch_one(sql, (qrcode_id,))

    async def get_by_token(self, token: str) -> Optional[QrCode]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM qrcode
        WHERE token = %s AND "deletedAt" IS NULL
        """
        return await self._fetch_one(sql, (token,))

    async def update_details(
        self,
        qrcode_id: str,
        *,
        event_name: str | None = None,
        description: str | None = None,
        expiration_date: datetime | None = None,
    ) -> Optional[QrCode]:
        sql = f"""
        UPDATE qrcode
        SET "eventName" = COALESCE(%s, "eventName"),
            "descriptionEvent" = COALESCE(%s, "descriptionEvent"),
            "expirationDate" = COALESCE(%s, "expirationDate"),
            "updatedAt" = now()
        WHERE id = %s AND "deletedAt" IS NULL
        RETURNING {_COLUMNS}
        """
        params = (
            event_name,
            description,
            _to_db_timestamp(expiration_date) if expiration_date else None,
            qrcode_id,
        )
        async with self._pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(sql, params)
                    row = await cur.fetchone()
        return _row_to_qrcode(row) if row else None

    async def list_expirations_for_users(
        self, user_ids: list[str]
    ) -> list[tuple[str, datetime | None]]:
        if not user_ids:
            return []
        sql = """
        SELECT "userId", "expirationDate"
        FROM qrcode
        WHERE "userId" = ANY(%s) AND "deletedAt" IS NULL
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (list(user_ids),))
                rows = await cur.fetchall()
        return [
            (str(user_id), as_utc(expiration) if expiration else None)
            for user_id, expiration in rows
        ]
