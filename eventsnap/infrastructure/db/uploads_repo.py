from __future__ import annotations

from typing import Any

from psycopg_pool import AsyncConnectionPool

from eventsnap.domain.entities import Upload
from eventsnap.domain.ports.upload_repository import UploadRepositoryPort
from eventsnap.domain.services import as_utc


def _row_to_upload(row: tuple[Any, ...]) -> Upload:
    id_, qrcode_id, file_url, created_at = row
    return Upload(
        id=str(id_),
        qrcode_id=str(qrcode_id),
        image_url=str(file_url),
        created_at=as_utc(created_at) if created_at else None,
    )


class PgUploadRepository(UploadRepositoryPort):
    """Postgres implementation of UploadRepositoryPort over the "upload" table."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def count_for_qrcode(self, qrcode_id: str) -> int:
        sql = """
        SELECT COUNT(*)
        FROM upload
        WHERE "qrCodeId" = %s AND "deletedAt" IS NULL
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (qrcode_id,))
                row = await cur.fetchone()
        return int(row[0]) if row else 0

    async def list_for_token(
        self, token: str, take: int, skip: int
    ) -> tuple[list[Upload], int]:
        sql = """
        SELECT u.id, u."qrCodeId", u."fileUrl", u."createdAt",
               COUNT(*) OVER () AS total
        FROM upload u
        JOIN qrcode q ON q.id = u."qrCodeId"
        WHERE q.token = %s AND u."deletedAt" IS NULL AND q."deletedAt" IS NULL
        ORDER BY u."createdAt" DESC
        LIMIT %s OFFSET %s
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (token, take, skip))
                rows = await cur.fetchall()
        if not rows:
            return [], 0
        return [_row_to_upload(r[:4]) for r in rows], int(rows[0][4])

    async def create(self, qrcode_id: str, image_url: str) -> Upload:
        sql = """
        INSERT INTO upload ("qrCodeId", "fileUrl")
        VALUES (%s, %s)
        RETURNING id, "qrCodeId", "fileUrl", "createdAt"
        """
        async with self._pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(sql, (qrcode_id, image_url))
                    row = await cur.fetchone()
        if not row:
            raise RuntimeError("upload insert returned no row")
        return _row_to_upload(row)
