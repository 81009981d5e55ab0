from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from wolfpack.models.engagement import Follow
from wolfpack.models.user import User
from wolfpack.services import feed_service
from wolfpack.services.feed_service import fetch_feed_items, validate_pagination
from wolfpack.services.user_service import resolve_display_name

BASE_TIME = datetime(2025, 6, 1, 21, 0, 0)


async def _seed_videos(make_video, owner, count, start=0):
    videos = []
    for i in range(start, start + count):
        videos.append(await make_video(owner, caption=f"clip {i}", created_at=BASE_TIME + timedelta(minutes=i)))
    return videos


@pytest.mark.unit
@pytest.mark.parametrize(
    "page,limit,expected",
    [
        (None, None, (1, 10)),
        (0, 10, (1, 10)),
        (-3, 5, (1, 5)),
        (2, 0, (2, 10)),
        (1, -5, (1, 1)),
        (1, 500, (1, 100)),
    ],
)
def test_validate_pagination_clamps(page, limit, expected):
    assert validate_pagination(page, limit) == expected


@pytest.mark.unit
def test_display_name_resolution_order():
    assert resolve_display_name(User(display_name="Wolfie", username="w1", first_name="A")) == "Wolfie"
    assert resolve_display_name(User(username="w1", first_name="A", last_name="B")) == "w1"
    assert resolve_display_name(User(first_name="Ann", last_name="Bell")) == "Ann Bell"
    assert resolve_display_name(User()) == "Unknown"
    assert resolve_display_name(None) == "Unknown"


async def test_empty_feed(client):
    response = await client.get("/api/v1/wolfpack/feed")
    assert response.status_code == 200
    assert response.json() == {"items": [], "total_items": 0, "has_more": False}


async def test_feed_pages_newest_first(client, make_user, make_video):
    author = await make_user(display_name="DJ Howl")
    await _seed_videos(make_video, author, 12)

    first = (await client.get("/api/v1/wolfpack/feed", params={"page": 1, "limit": 10})).json()
    assert len(first["items"]) == 10
    assert first["total_items"] == 12
    assert first["has_more"] is True
    assert [item["caption"] for item in first["items"][:3]] == ["clip 11", "clip 10", "clip 9"]
    assert first["items"][0]["username"] == "DJ Howl"

    second = (await client.get("/api/v1/wolfpack/feed", params={"page": 2, "limit": 10})).json()
    assert [item["caption"] for item in second["items"]] == ["clip 1", "clip 0"]
    assert second["has_more"] is False


async def test_feed_has_more_false_on_exact_boundary(client, make_user, make_video):
    author = await make_user()
    await _seed_videos(make_video, author, 10)

    body = (await client.get("/api/v1/wolfpack/feed", params={"page": 1, "limit": 10})).json()
    assert len(body["items"]) == 10
    assert body["has_more"] is False


async def test_feed_filters_author_in_query(client, make_user, make_video):
    alice = await make_user()
    bob = await make_user()
    await _seed_videos(make_video, alice, 3)
    await _seed_videos(make_video, bob, 15, start=10)

    body = (
        await client.get("/api/v1/wolfpack/feed", params={"page": 1, "limit": 10, "user_id": str(alice.id)})
    ).json()
    assert body["total_items"] == 3
    assert len(body["items"]) == 3
    assert {item["user_id"] for item in body["items"]} == {str(alice.id)}
    assert body["has_more"] is False


async def test_feed_skips_inactive_videos(client, make_user, make_video):
    author = await make_user()
    await make_video(author, caption="visible")
    await make_video(author, caption="removed", is_active=False)

    body = (await client.get("/api/v1/wolfpack/feed")).json()
    assert [item["caption"] for item in body["items"]] == ["visible"]


async def test_feed_limit_is_clamped(client, make_user, make_video):
    author = await make_user()
    await _seed_videos(make_video, author, 3)

    body = (await client.get("/api/v1/wolfpack/feed", params={"page": 0, "limit": 1000})).json()
    assert len(body["items"]) == 3


async def test_feed_marks_liked_and_followed_for_viewer(client, make_user, make_video, auth_headers, session_maker):
    viewer = await make_user()
    followed = await make_user()
    stranger = await make_user()
    liked_video = await make_video(followed, created_at=BASE_TIME)
    await make_video(stranger, created_at=BASE_TIME + timedelta(minutes=1))
    async with session_maker() as session:
        session.add(Follow(follower_id=viewer.id, following_id=followed.id))
        await session.commit()
    await client.post(f"/api/v1/videos/{liked_video.id}/like", headers=auth_headers(viewer))

    body = (await client.get("/api/v1/wolfpack/feed", headers=auth_headers(viewer))).json()
    by_author = {item["user_id"]: item for item in body["items"]}
    assert by_author[str(followed.id)]["user_liked"] is True
    assert by_author[str(followed.id)]["user_following"] is True
    assert by_author[str(stranger.id)]["user_liked"] is False
    assert by_author[str(stranger.id)]["user_following"] is False


async def test_following_feed_only_has_followed_authors(client, make_user, make_video, auth_headers, session_maker):
    viewer = await make_user()
    followed = await make_user()
    other = await make_user()
    await make_video(followed, caption="from followed")
    await make_video(other, caption="from other")
    async with session_maker() as session:
        session.add(Follow(follower_id=viewer.id, following_id=followed.id))
        await session.commit()

    body = (await client.get("/api/v1/wolfpack/feed/following", headers=auth_headers(viewer))).json()
    assert [item["caption"] for item in body["items"]] == ["from followed"]
    assert body["items"][0]["user_following"] is True


async def test_following_feed_requires_auth(client):
    response = await client.get("/api/v1/wolfpack/feed/following")
    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_REQUIRED"


async def test_feed_backend_error_degrades_to_empty_page(db, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection reset"))

    monkeypatch.setattr(feed_service, "get_feed_page", broken)

    result = await fetch_feed_items(db, page=1, limit=10)
    assert result.items == []
    assert result.total_items == 0
    assert result.has_more is False


async def test_video_lifecycle(client, make_user, auth_headers):
    owner = await make_user()
    other = await make_user()

    created = await client.post(
        "/api/v1/videos",
        json={"video_url": "https://cdn.example.com/a.mp4", "caption": "first", "hashtags": ["wolfpack"]},
        headers=auth_headers(owner),
    )
    assert created.status_code == 201
    video_id = created.json()["id"]
    assert created.json()["hashtags"] == ["wolfpack"]

    forbidden = await client.patch(
        f"/api/v1/videos/{video_id}", json={"caption": "hijack"}, headers=auth_headers(other)
    )
    assert forbidden.status_code == 403

    updated = await client.patch(f"/api/v1/videos/{video_id}", json={"caption": "edited"}, headers=auth_headers(owner))
    assert updated.json()["caption"] == "edited"

    viewed = await client.post(f"/api/v1/videos/{video_id}/view")
    assert viewed.json() == {"views_count": 1}

    deleted = await client.delete(f"/api/v1/videos/{video_id}", headers=auth_headers(owner))
    assert deleted.status_code == 204
    missing = await client.get(f"/api/v1/videos/{video_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Video not found", "code": "NOT_FOUND", "details": {"resource": "Video"}}
