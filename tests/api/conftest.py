import pytest
from fastapi.testclient import TestClient

from eventsnap.infrastructure.redis_cache.kv_store import RedisKVStore
from eventsnap.main import create_app
from eventsnap.presentation.dependencies import (
    get_kv_store,
    get_qrcode_repository,
    get_upload_repository,
)


@pytest.fixture()
def app(fake_redis, qrcode_repo, upload_repo):
    app = create_app()

    def _get_kv_store():
        return RedisKVStore(fake_redis)

    def _get_qrcode_repository():
        return qrcode_repo

    def _get_upload_repository():
        return upload_repo

    app.dependency_overrides[get_kv_store] = _get_kv_store
    app.dependency_overrides[get_qrcode_repository] = _get_qrcode_repository
    app.dependency_overrides[get_upload_repository] = _get_upload_repository

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    # no context manager: the lifespan (real Postgres and Redis) must not run
    return TestClient(app, raise_server_exceptions=False)
