import uuid

import httpx
import pytest
from jose import jwt

from videohub.core.blob_storage import get_blob_storage
from videohub.core.config import settings
from videohub.core.db import get_db
from videohub.main import create_app


def auth(user):
    token = jwt.encode({"sub": str(user.id)}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(session_factory, blob_storage):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def test_health(client):
    resp = await client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "statusCode": 200,
        "data": {"status": "ok"},
        "message": "Service is healthy",
        "success": True,
    }


async def test_publish_and_fetch_video(client, alice, bob):
    resp = await client.post(
        "/api/v1/videos",
        headers=auth(alice),
        data={"title": "Launch", "description": "Release day"},
        files={
            "videoFile": ("launch.mp4", b"video-bytes", "video/mp4"),
            "thumbnail": ("launch.png", b"png-bytes", "image/png"),
        },
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["statusCode"] == 201
    video_id = body["data"]["id"]
    assert body["data"]["isPublished"] is True

    resp = await client.get(f"/api/v1/videos/{video_id}", headers=auth(bob))
    data = resp.json()["data"]
    assert data["owner"]["username"] == "alice"
    assert data["likesCount"] == 0
    assert data["isLiked"] is False
    assert data["comments"] == []


async def test_like_toggle_over_http(client, make_video, alice, bob):
    video = await make_video(alice)

    first = await client.post(f"/api/v1/likes/toggle/v/{video.id}", headers=auth(bob))
    second = await client.post(f"/api/v1/likes/toggle/v/{video.id}", headers=auth(bob))

    assert first.json()["data"] == {"isLiked": True}
    assert second.json()["data"] == {"isLiked": False}


async def test_listing_envelope_uses_camel_case(client, make_video, alice):
    for views in range(12):
        await make_video(alice, views=views)

    resp = await client.get("/api/v1/videos", params={"sortBy": "views", "sortType": "asc", "page": 2, "limit": 5})

    data = resp.json()["data"]
    assert [item["views"] for item in data["items"]] == [5, 6, 7, 8, 9]
    assert data["totalPages"] == 3
    assert data["totalItems"] == 12
    assert data["hasNextPage"] is True
    assert "isLiked" not in data["items"][0]


async def test_mutation_requires_authentication(client):
    resp = await client.post("/api/v1/tweets", json={"content": "hello"})

    assert resp.status_code == 401
    assert resp.json()["success"] is False


async def test_invalid_token_rejected(client):
    resp = await client.post(
        "/api/v1/tweets", json={"content": "hello"}, headers={"Authorization": "Bearer nonsense"}
    )

    assert resp.status_code == 401


async def test_non_owner_gets_forbidden_even_with_invalid_payload(client, alice, bob):
    created = await client.post("/api/v1/tweets", json={"content": "mine"}, headers=auth(alice))
    tweet_id = created.json()["data"]["id"]

    resp = await client.patch(f"/api/v1/tweets/{tweet_id}", json={"content": ""}, headers=auth(bob))

    assert resp.status_code == 403
    body = resp.json()
    assert body == {
        "statusCode": 403,
        "message": body["message"],
        "errors": [],
        "success": False,
    }


async def test_owner_invalid_payload_is_bad_request(client, alice):
    created = await client.post("/api/v1/tweets", json={"content": "mine"}, headers=auth(alice))
    tweet_id = created.json()["data"]["id"]

    resp = await client.patch(f"/api/v1/tweets/{tweet_id}", json={"content": "  "}, headers=auth(alice))

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "content"


async def test_unknown_sort_field_is_bad_request(client):
    resp = await client.get("/api/v1/videos", params={"sortBy": "password"})

    assert resp.status_code == 400
    assert resp.json()["success"] is False


async def test_malformed_id_is_bad_request(client):
    resp = await client.get("/api/v1/videos/not-a-uuid")

    assert resp.status_code == 400


async def test_missing_resource_is_not_found(client, bob):
    resp = await client.delete(f"/api/v1/playlists/{uuid.uuid4()}", headers=auth(bob))

    assert resp.status_code == 404
    assert resp.json()["message"] == "Playlist not found"


async def test_playlist_flow(client, make_video, alice):
    video = await make_video(alice, views=3)
    created = await client.post(
        "/api/v1/playlists", json={"name": "Favorites", "description": "desc"}, headers=auth(alice)
    )
    playlist_id = created.json()["data"]["id"]

    for _ in range(2):
        resp = await client.patch(f"/api/v1/playlists/add/{video.id}/{playlist_id}", headers=auth(alice))

    data = resp.json()["data"]
    assert data["totalVideos"] == 1
    assert data["totalViews"] == 3

    resp = await client.get(f"/api/v1/playlists/user/{alice.id}")
    assert resp.json()["data"]["items"][0]["totalVideos"] == 1


async def test_listing_uses_configured_page_size(client, make_video, monkeypatch, alice):
    monkeypatch.setattr(settings, "page_size_default", 3)
    for _ in range(5):
        await make_video(alice)

    resp = await client.get("/api/v1/videos")

    data = resp.json()["data"]
    assert len(data["items"]) == 3
    assert data["totalPages"] == 2
