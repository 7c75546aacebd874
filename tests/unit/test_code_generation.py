from datetime import datetime, timedelta, timezone

from eventsnap.domain.services import (
    as_utc,
    generate_6digit_code,
    normalize_email,
    secure_compare,
)


def test_generate_6digit_code_format_and_range():
    for _ in range(200):
        c = generate_6digit_code()
        assert len(c) == 6 and c.isdigit(), c
        assert 0 <= int(c) <= 999_999


def test_secure_compare_constant_api():
    assert secure_compare("012345", "012345")
    assert not secure_compare("012345", "012346")
    assert not secure_compare("012345", "12345")


def test_normalize_email():
    assert normalize_email("  Ana@Example.COM ") == "ana@example.com"


def test_as_utc_reads_naive_values_as_utc():
    naive = datetime(2026, 1, 1, 12, 0)
    paris = timezone(timedelta(hours=1))

    assert as_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert as_utc(datetime(2026, 1, 1, 13, 0, tzinfo=paris)).hour == 12
