from __future__ import annotations

import logging

import eventsnap.domain.services as domain_services
from eventsnap.domain.entities import VerificationPurpose
from eventsnap.domain.errors import InvalidOrExpiredCode
from eventsnap.domain.ports.kv_store import KVStorePort
from eventsnap.infrastructure.redis_cache import keys

logger = logging.getLogger(__name__)

CODE_TTL_SECONDS = 600


class VerificationCodeService:
    """
    One-time numeric codes for the signup / reset / update confirmation flows.

    Codes are stored at verification:<purpose>:<email> and replaced by every
    new issuance. By default a validated code stays usable until its TTL runs
    out; with single_use=True a successful validation consumes it atomically.
    Store failures propagate (StoreUnavailable): a code must never be
    accepted or rejected on a guess.
    """

    def __init__(
        self,
        kv: KVStorePort,
        *,
        ttl_seconds: int = CODE_TTL_SECONDS,
        single_use: bool = False,
    ) -> None:
        self._kv = kv
        self._ttl = ttl_seconds
        self._single_use = single_use

    def _key(self, principal: str, purpose: VerificationPurpose) -> str:
        return keys.verification_key(
            VerificationPurpose(purpose).value,
            domain_services.normalize_email(principal),
        )

    async def issue(self, principal: str, purpose: VerificationPurpose) -> str:
        code = domain_services.generate_6digit_code()
        await self._kv.set(self._key(principal, purpose), code, self._ttl)
        logger.info(
            "verification code issued",
            extra={"purpose": VerificationPurpose(purpose).value, "ttl": self._ttl},
        )
        return code

    async def validate(
        self, principal: str, code: str, purpose: VerificationPurpose
    ) -> None:
        key = self._key(principal, purpose)
        stored = await self._kv.get(key)
        if stored is None or not domain_services.secure_compare(stored, code):
            raise InvalidOrExpiredCode()
        # compare-and-delete so two concurrent confirmations cannot both pass
        if self._single_use and not await self._kv.compare_and_delete(key, stored):
            raise InvalidOrExpiredCode()
