import pytest

from eventsnap.infrastructure.redis_cache.cache_service import CacheService
from eventsnap.infrastructure.redis_cache.kv_store import RedisKVStore
from eventsnap.infrastructure.redis_cache.qrcode_cache import QrCodeCache
from eventsnap.infrastructure.redis_cache.upload_cache import UploadListingCache
from tests.fakes import FakeQrCodeRepo, FakeRedis, FakeUploadRepo


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def kv(fake_redis):
    return RedisKVStore(fake_redis)


@pytest.fixture()
def cache(kv):
    return CacheService(kv)


@pytest.fixture()
def qrcode_cache(cache):
    return QrCodeCache(cache)


@pytest.fixture()
def listing_cache(cache):
    return UploadListingCache(cache)


@pytest.fixture()
def qrcode_repo():
    return FakeQrCodeRepo()


@pytest.fixture()
def upload_repo(qrcode_repo):
    return FakeUploadRepo(qrcode_repo)


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make the 6-digit code deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from eventsnap.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_6digit_code", lambda: "012345")
    yield
