from __future__ import annotations

from typing import Protocol

from eventsnap.domain.entities import Upload


class UploadRepositoryPort(Protocol):
    async def count_for_qrcode(self, qrcode_id: str) -> int:
        """Number of live uploads attached to the QR code."""

    async def list_for_token(
        self, token: str, take: int, skip: int
    ) -> tuple[list[Upload], int]:
        """A page of uploads (newest first) and the total count for the QR code token."""

    async def create(self, qrcode_id: str, image_url: str) -> Upload:
        """Insert a new upload row and return it."""
