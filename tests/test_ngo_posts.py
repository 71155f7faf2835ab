"""Tests for NGO posts and photo uploads."""

from __future__ import annotations

import re
from io import BytesIO
from pathlib import Path
from urllib.parse import urlparse

from flask.testing import FlaskClient

from conftest import bearer, build_app, register
from errors import StoreError


def test_ngo_creates_post_with_photo(client: FlaskClient, app):
    ngo = register(client, "ngo@x.com", role="ngo")

    response = client.post(
        "/api/ngo/posts",
        data={
            "title": "Blood camp",
            "description": "Sunday drive",
            "location_text": "City hall",
            "photo": (BytesIO(b"\x89PNG fake image"), "camp.PNG"),
        },
        headers=bearer(ngo["token"]),
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    post = response.get_json()["post"]
    assert post["id"] == 1
    assert post["ngo_id"] == ngo["user"]["id"]
    assert post["title"] == "Blood camp"
    assert post["location_text"] == "City hall"
    assert len(post["photos"]) == 1

    url = urlparse(post["photos"][0])
    filename = url.path.rsplit("/", 1)[-1]
    assert url.path.startswith("/uploads/")
    assert re.fullmatch(r"photo-\d+-\d+\.png", filename)
    assert (Path(app.config["UPLOAD_DIR"]) / filename).is_file()

    served = client.get(url.path)
    assert served.status_code == 200
    assert served.data == b"\x89PNG fake image"


def test_post_without_photo(client: FlaskClient):
    admin = register(client, "admin@x.com", role="admin")

    response = client.post(
        "/api/ngo/posts", json={"title": "Appeal"}, headers=bearer(admin["token"])
    )

    assert response.status_code == 200
    post = response.get_json()["post"]
    assert post["photos"] == []
    assert post["description"] == ""
    assert post["location_text"] == ""


def test_donor_cannot_post(client: FlaskClient, store):
    donor = register(client, "donor@x.com", role="donor")

    response = client.post(
        "/api/ngo/posts",
        data={"title": "Nope", "photo": (BytesIO(b"img"), "nope.jpg")},
        headers=bearer(donor["token"]),
        content_type="multipart/form-data",
    )

    assert response.status_code == 403
    assert response.get_json() == {
        "ok": False,
        "error": "forbidden",
        "request_id": response.get_json()["request_id"],
    }
    assert store.load()["posts"] == []


def test_post_requires_token(client: FlaskClient, store):
    response = client.post("/api/ngo/posts", json={"title": "t"})

    assert response.status_code == 401
    assert store.load()["posts"] == []


def test_oversized_photo_is_rejected(tmp_path):
    app = build_app(tmp_path, MAX_UPLOAD_SIZE=16)
    client = app.test_client()
    ngo = register(client, "ngo@x.com", role="ngo")

    response = client.post(
        "/api/ngo/posts",
        data={"title": "Big", "photo": (BytesIO(b"x" * 64), "big.jpg")},
        headers=bearer(ngo["token"]),
        content_type="multipart/form-data",
    )

    assert response.status_code == 400
    assert "maximum upload size" in response.get_json()["error"]
    assert app.extensions["document_store"].load()["posts"] == []
    assert list((tmp_path / "uploads").iterdir()) == []


def test_posts_listed_newest_first(client: FlaskClient):
    ngo = register(client, "ngo@x.com", role="ngo")
    for title in ("first", "second", "third"):
        client.post("/api/ngo/posts", json={"title": title}, headers=bearer(ngo["token"]))

    response = client.get("/api/ngo/posts")

    assert response.status_code == 200
    titles = [post["title"] for post in response.get_json()["posts"]]
    assert titles == ["third", "second", "first"]


def test_missing_upload_returns_404(client: FlaskClient):
    response = client.get("/uploads/photo-1-2.png")

    assert response.status_code == 404
    assert response.get_json()["ok"] is False


def test_failed_save_removes_stored_photo(client: FlaskClient, app, store, monkeypatch):
    ngo = register(client, "ngo@x.com", role="ngo")

    def broken_save(document):
        raise StoreError("disk gone")

    monkeypatch.setattr(store, "save", broken_save)

    response = client.post(
        "/api/ngo/posts",
        data={"title": "Camp", "photo": (BytesIO(b"img"), "camp.png")},
        headers=bearer(ngo["token"]),
        content_type="multipart/form-data",
    )

    assert response.status_code == 500
    assert response.get_json()["error"] == "internal error"
    assert list(Path(app.config["UPLOAD_DIR"]).iterdir()) == []
    assert store.load()["posts"] == []
