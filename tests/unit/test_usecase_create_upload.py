import pytest

from eventsnap.application.create_upload import create_upload
from eventsnap.application.list_uploads import list_uploads
from eventsnap.application.upload_quota import enforce_upload_quota
from eventsnap.domain.errors import QrCodeNotFound, QuotaExceeded
from tests.fakes import make_qrcode


@pytest.mark.asyncio
async def test_create_upload_happy_path(qrcode_repo, upload_repo, qrcode_cache, listing_cache):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 2)

    upload = await create_upload(
        qrcode_repo,
        upload_repo,
        qrcode_cache,
        listing_cache,
        qrcode.token,
        "https://cdn.test/new.jpg",
    )

    assert upload.qrcode_id == qrcode.id
    assert upload.image_url == "https://cdn.test/new.jpg"
    assert len(upload_repo.uploads) == 3


@pytest.mark.asyncio
async def test_create_upload_invalidates_listing_caches(
    qrcode_repo, upload_repo, qrcode_cache, listing_cache
):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 2)
    before = await list_uploads(upload_repo, listing_cache, qrcode.token, 20, 0)

    await create_upload(
        qrcode_repo, upload_repo, qrcode_cache, listing_cache, qrcode.token, "u"
    )
    after = await list_uploads(upload_repo, listing_cache, qrcode.token, 20, 0)

    assert before.total == 2
    assert after.total == 3
    assert len(upload_repo.list_calls) == 2


@pytest.mark.asyncio
async def test_create_upload_rejected_at_quota(
    qrcode_repo, upload_repo, qrcode_cache, listing_cache
):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 10)

    with pytest.raises(QuotaExceeded) as exc_info:
        await create_upload(
            qrcode_repo, upload_repo, qrcode_cache, listing_cache, qrcode.token, "u"
        )

    assert exc_info.value.ceiling == 10
    assert len(upload_repo.uploads) == 10


@pytest.mark.asyncio
async def test_last_upload_below_quota_is_accepted(
    qrcode_repo, upload_repo, qrcode_cache, listing_cache
):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 9)

    await create_upload(
        qrcode_repo, upload_repo, qrcode_cache, listing_cache, qrcode.token, "u"
    )

    with pytest.raises(QuotaExceeded):
        await create_upload(
            qrcode_repo, upload_repo, qrcode_cache, listing_cache, qrcode.token, "u"
        )
    assert len(upload_repo.uploads) == 10


@pytest.mark.asyncio
async def test_create_upload_unknown_token(
    qrcode_repo, upload_repo, qrcode_cache, listing_cache
):
    with pytest.raises(QrCodeNotFound):
        await create_upload(
            qrcode_repo, upload_repo, qrcode_cache, listing_cache, "nope", "u"
        )
    assert upload_repo.uploads == []


@pytest.mark.asyncio
async def test_quota_count_is_cached(upload_repo, listing_cache):
    qrcode = make_qrcode()
    upload_repo.seed(qrcode.id, 3)

    assert await enforce_upload_quota(upload_repo, listing_cache, qrcode) == 3
    assert await enforce_upload_quota(upload_repo, listing_cache, qrcode) == 3
    assert upload_repo.count_calls == [qrcode.id]


@pytest.mark.asyncio
async def test_quota_check_counts_from_database_when_cache_is_down(
    upload_repo, listing_cache, fake_redis
):
    qrcode = make_qrcode()
    upload_repo.seed(qrcode.id, 10)
    fake_redis.down = True

    with pytest.raises(QuotaExceeded):
        await enforce_upload_quota(upload_repo, listing_cache, qrcode, ceiling=10)
