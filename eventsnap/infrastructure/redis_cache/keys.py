"""Cache key builders. Single place for the key format.

Keys follow namespace:qualifier:identifier. Components (ids, tokens, routes,
client addresses) must not contain the separator or glob metacharacters,
otherwise a pattern invalidation could reach keys it does not own.
"""

from __future__ import annotations

from typing import Iterable

KEY_SEP = ":"
_FORBIDDEN = (KEY_SEP, "*", "?", "[", "]")
LIST_SEP = ","

QRCODE_PREFIX = "qrcode"
UPLOAD_PREFIX = "upload"
RATE_LIMIT_PREFIX = "rate-limit"
VERIFICATION_PREFIX = "verification"


def _validate_key_component(
    value: str, name: str, forbidden: tuple[str, ...] = _FORBIDDEN
) -> None:
    """Raise ValueError if value is empty or could break the key layout."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    for char in forbidden:
        if char in value:
            raise ValueError(
                f"Cache key component {name!r} must not contain {char!r}"
            )


def _join(*parts: str) -> str:
    return KEY_SEP.join(parts)


def qrcode_id_key(qrcode_id: str, prefix: str = QRCODE_PREFIX) -> str:
    _validate_key_component(qrcode_id, "qrcode_id")
    return _join(prefix, "id", qrcode_id)


def qrcode_token_key(token: str, prefix: str = QRCODE_PREFIX) -> str:
    _validate_key_component(token, "token")
    return _join(prefix, "token", token)


def qrcode_stats_key(user_ids: Iterable[str], prefix: str = QRCODE_PREFIX) -> str:
    """Order-insensitive: the same set of users always maps to the same key."""
    ids = sorted(set(user_ids))
    # ids are joined with LIST_SEP, so it must not occur inside one
    for user_id in ids:
        _validate_key_component(user_id, "user_id", _FORBIDDEN + (LIST_SEP,))
    return _join(prefix, "stats", LIST_SEP.join(ids))


def qrcode_stats_pattern(prefix: str = QRCODE_PREFIX) -> str:
    return _join(prefix, "stats", "*")


def upload_page_key(
    token: str, take: int, skip: int, prefix: str = UPLOAD_PREFIX
) -> str:
    _validate_key_component(token, "token")
    return _join(prefix, token, "page", str(take), str(skip))


def upload_count_key(token: str, prefix: str = UPLOAD_PREFIX) -> str:
    _validate_key_component(token, "token")
    return _join(prefix, token, "count")


def upload_token_pattern(token: str, prefix: str = UPLOAD_PREFIX) -> str:
    """Every derived cache of one QR code's uploads (all pages and the count)."""
    _validate_key_component(token, "token")
    return _join(prefix, token, "*")


def rate_limit_key(route: str, client: str, prefix: str = RATE_LIMIT_PREFIX) -> str:
    _validate_key_component(route, "route")
    # IPv6 client addresses carry colons
    client = client.replace(KEY_SEP, "_")
    _validate_key_component(client, "client")
    return _join(prefix, route, client)


def verification_key(
    purpose: str, principal: str, prefix: str = VERIFICATION_PREFIX
) -> str:
    _validate_key_component(purpose, "purpose")
    # never matched by a pattern, so any email local part is acceptable
    if not principal:
        raise ValueError("Cache key component 'principal' must not be empty")
    return _join(prefix, purpose, principal)
