import uuid

import pytest
from sqlalchemy import func, select

from wolfpack.models.engagement import VideoLike
from wolfpack.models.notification import Notification

pytestmark = pytest.mark.integration


async def _notifications_for(session_maker, user_id, notification_type="like"):
    async with session_maker() as session:
        result = await session.execute(
            select(Notification).where(Notification.recipient_id == user_id, Notification.type == notification_type)
        )
        return list(result.scalars().all())


async def test_toggle_twice_returns_to_original_state(client, make_user, make_video, auth_headers):
    owner = await make_user()
    fan = await make_user()
    video = await make_video(owner)

    first = await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))
    assert first.status_code == 200
    assert first.json() == {"liked": True, "likes_count": 1}

    second = await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))
    assert second.json() == {"liked": False, "likes_count": 0}

    status = await client.get(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))
    assert status.json() == {"liked": False, "count": 0}


async def test_likes_count_reflects_all_users(client, make_user, make_video, auth_headers, session_maker):
    owner = await make_user()
    fans = [await make_user() for _ in range(3)]
    video = await make_video(owner)

    for fan in fans:
        await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))

    status = await client.get(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fans[0]))
    assert status.json() == {"liked": True, "count": 3}

    anonymous = await client.get(f"/api/v1/videos/{video.id}/like")
    assert anonymous.json() == {"liked": False, "count": 3}

    async with session_maker() as session:
        rows = await session.scalar(select(func.count(VideoLike.id)).where(VideoLike.video_id == video.id))
    assert rows == 3

    feed = (await client.get("/api/v1/wolfpack/feed")).json()
    assert feed["items"][0]["likes_count"] == 3


async def test_new_like_notifies_owner_once(client, make_user, make_video, auth_headers, session_maker):
    owner = await make_user()
    fan = await make_user(display_name="Luna")
    video = await make_video(owner)

    await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))
    notifications = await _notifications_for(session_maker, owner.id)
    assert len(notifications) == 1
    assert notifications[0].message == "Luna liked your video"
    assert notifications[0].related_user_id == fan.id
    assert notifications[0].related_video_id == video.id

    # Unlike keeps the existing notification; liking again adds a new one
    await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))
    assert len(await _notifications_for(session_maker, owner.id)) == 1
    await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(fan))
    assert len(await _notifications_for(session_maker, owner.id)) == 2


async def test_self_like_does_not_notify(client, make_user, make_video, auth_headers, session_maker):
    owner = await make_user()
    video = await make_video(owner)

    response = await client.post(f"/api/v1/videos/{video.id}/like", headers=auth_headers(owner))
    assert response.json()["liked"] is True
    assert await _notifications_for(session_maker, owner.id) == []


async def test_like_missing_video_is_404(client, make_user, auth_headers):
    fan = await make_user()
    response = await client.post(f"/api/v1/videos/{uuid.uuid4()}/like", headers=auth_headers(fan))
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


async def test_like_requires_auth(client, make_user, make_video):
    video = await make_video(await make_user())
    response = await client.post(f"/api/v1/videos/{video.id}/like")
    assert response.status_code == 401
    body = response.json()
    assert body["code"] == "AUTH_REQUIRED"
    assert body["details"] == {"redirectAfterLogin": f"/api/v1/videos/{video.id}/like"}


async def test_comments_update_count_and_notify(client, make_user, make_video, auth_headers, session_maker):
    owner = await make_user()
    fan = await make_user(username="howler")
    video = await make_video(owner)

    created = await client.post(
        f"/api/v1/videos/{video.id}/comments", json={"content": "  Awooo!  "}, headers=auth_headers(fan)
    )
    assert created.status_code == 201
    comment = created.json()
    assert comment["content"] == "Awooo!"
    assert comment["user"]["username"] == "howler"

    listed = (await client.get(f"/api/v1/videos/{video.id}/comments")).json()
    assert [c["id"] for c in listed] == [comment["id"]]
    assert (await client.get(f"/api/v1/videos/{video.id}")).json()["comments_count"] == 1
    assert len(await _notifications_for(session_maker, owner.id, "comment")) == 1

    blank = await client.post(f"/api/v1/videos/{video.id}/comments", json={"content": "   "}, headers=auth_headers(fan))
    assert blank.status_code == 400

    removed = await client.delete(f"/api/v1/videos/{video.id}/comments/{comment['id']}", headers=auth_headers(owner))
    assert removed.status_code == 204
    assert (await client.get(f"/api/v1/videos/{video.id}/comments")).json() == []
    assert (await client.get(f"/api/v1/videos/{video.id}")).json()["comments_count"] == 0
