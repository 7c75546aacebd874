from datetime import datetime, timedelta, timezone

import pytest

from eventsnap.infrastructure.redis_cache.qrcode_cache import calculate_ttl

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def test_no_expiry_uses_default():
    assert calculate_ttl(None, now=NOW) == 3600


def test_remaining_lifetime_below_default():
    assert calculate_ttl(NOW + timedelta(seconds=10), now=NOW) == 10


def test_remaining_lifetime_is_capped_at_default():
    assert calculate_ttl(NOW + timedelta(seconds=7200), now=NOW) == 3600


def test_already_expired_gets_short_ttl():
    assert calculate_ttl(NOW - timedelta(seconds=5), now=NOW) == 300


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(0), 300),
        (timedelta(milliseconds=999), 300),
        (timedelta(seconds=1, milliseconds=500), 1),
        (timedelta(seconds=3600), 3600),
    ],
)
def test_boundaries(delta, expected):
    assert calculate_ttl(NOW + delta, now=NOW) == expected


def test_custom_ceilings():
    assert calculate_ttl(None, now=NOW, default_ttl=60) == 60
    assert calculate_ttl(NOW + timedelta(hours=1), now=NOW, default_ttl=60) == 60
    assert calculate_ttl(NOW - timedelta(days=1), now=NOW, expired_ttl=30) == 30


def test_naive_datetimes_are_utc():
    naive_expiry = (NOW + timedelta(seconds=42)).replace(tzinfo=None)

    assert calculate_ttl(naive_expiry, now=NOW) == 42


def test_defaults_to_current_time():
    expiry = datetime.now(timezone.utc) + timedelta(hours=3)

    assert calculate_ttl(expiry) == 3600
