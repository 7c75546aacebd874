from tests.fakes import make_qrcode


def test_create_and_list_uploads(client, qrcode_repo, upload_repo):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 2)

    r = client.get(f"/v1/uploads/{qrcode.token}")
    assert r.status_code == 200
    assert r.json()["total"] == 2

    r = client.post(f"/v1/uploads/{qrcode.token}", json={"image_url": "https://cdn.test/x.jpg"})
    assert r.status_code == 201
    assert r.json()["qrcode_id"] == qrcode.id

    # listing was invalidated by the upload
    r = client.get(f"/v1/uploads/{qrcode.token}")
    assert r.json()["total"] == 3


def test_listing_pagination(client, qrcode_repo, upload_repo):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 5)

    first = client.get(f"/v1/uploads/{qrcode.token}", params={"take": 2}).json()
    last = client.get(f"/v1/uploads/{qrcode.token}", params={"take": 2, "skip": 4}).json()

    assert len(first["items"]) == 2
    assert first["skip"] == 2
    assert len(last["items"]) == 1
    assert last["skip"] is None


def test_listing_rejects_bad_window(client):
    assert client.get("/v1/uploads/t", params={"take": 0}).status_code == 422
    assert client.get("/v1/uploads/t", params={"take": 101}).status_code == 422
    assert client.get("/v1/uploads/t", params={"skip": -1}).status_code == 422


def test_upload_to_unknown_qrcode(client):
    r = client.post("/v1/uploads/unknown", json={"image_url": "u"})

    assert r.status_code == 404


def test_upload_quota(client, qrcode_repo, upload_repo):
    qrcode = qrcode_repo.add(make_qrcode())
    upload_repo.seed(qrcode.id, 10)

    r = client.post(f"/v1/uploads/{qrcode.token}", json={"image_url": "u"})

    assert r.status_code == 403
    assert r.json()["detail"] == "upload quota of 10 reached"


def test_uploads_are_rate_limited(client, qrcode_repo, fake_redis):
    qrcode = qrcode_repo.add(make_qrcode())

    statuses = [
        client.post(f"/v1/uploads/{qrcode.token}", json={"image_url": "u"}).status_code
        for _ in range(11)
    ]

    # the quota runs out at the same time as the window
    assert statuses[:10] == [201] * 10
    assert statuses[10] == 429


def test_rate_limit_window_reports_remaining_time(client, fake_redis):
    for _ in range(10):
        client.post("/v1/uploads/unknown", json={"image_url": "u"})
    fake_redis.advance(20)

    r = client.post("/v1/uploads/unknown", json={"image_url": "u"})

    assert r.status_code == 429
    assert r.headers["Retry-After"] == "40"


def test_rate_limiter_outage_is_503(client, fake_redis):
    fake_redis.down = True

    r = client.post("/v1/uploads/whatever", json={"image_url": "u"})

    assert r.status_code == 503
