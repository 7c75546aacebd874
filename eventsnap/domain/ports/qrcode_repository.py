from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from eventsnap.domain.entities import QrCode


class QrCodeRepositoryPort(Protocol):
    async def get_by_id(self, qrcode_id: str) -> Optional[QrCode]:
        """Return the QR code or None if not found."""

    async def get_by_token(self, token: str) -> Optional[QrCode]:
        """Return the QR code owning this public token or None if not found."""

    async def update_details(
        self,
        qrcode_id: str,
        *,
        event_name: str | None = None,
        description: str | None = None,
        expiration_date: datetime | None = None,
    ) -> Optional[QrCode]:
        """
        Apply the non-None fields and return the updated record.
        Return None if the QR code does not exist.
        """

    async def list_expirations_for_users(
        self, user_ids: list[str]
    ) -> list[tuple[str, datetime | None]]:
        """(user_id, expiration_date) for every QR code owned by the given users."""
