import pytest

from wolfpack.core.errors import ValidationError
from wolfpack.services.storage_service import AVATAR, THUMBNAIL, VIDEO, LocalStorage, get_storage


@pytest.fixture
def storage(tmp_path, app):
    storage = LocalStorage(base_dir=str(tmp_path), base_url="http://media.test/")
    app.dependency_overrides[get_storage] = lambda: storage
    return storage


@pytest.mark.unit
def test_save_writes_under_user_folder(tmp_path):
    storage = LocalStorage(base_dir=str(tmp_path), base_url="http://media.test")
    url = storage.save("user-1", AVATAR, b"\x89PNG", "image/png")

    assert url.startswith("http://media.test/uploads/users/user-1/avatars/")
    assert url.endswith(".png")
    stored = list((tmp_path / "users" / "user-1" / "avatars").iterdir())
    assert [p.read_bytes() for p in stored] == [b"\x89PNG"]


@pytest.mark.unit
def test_save_rejects_wrong_type_and_size(tmp_path):
    storage = LocalStorage(base_dir=str(tmp_path))
    with pytest.raises(ValidationError, match="Invalid file type"):
        storage.save("u", VIDEO, b"data", "image/png")
    with pytest.raises(ValidationError, match="empty"):
        storage.save("u", AVATAR, b"", "image/png")
    with pytest.raises(ValidationError, match="Max 2MB"):
        storage.save("u", THUMBNAIL, b"x" * (2 * 1024 * 1024 + 1), "image/jpeg")


@pytest.mark.unit
def test_delete_stays_inside_upload_dir(tmp_path):
    storage = LocalStorage(base_dir=str(tmp_path / "media"), base_url="http://media.test")
    url = storage.save("u", AVATAR, b"img", "image/webp")
    outside = tmp_path / "secret.txt"
    outside.write_text("keep me")

    assert storage.delete("http://media.test/uploads/../../secret.txt") is False
    assert outside.exists()
    assert storage.delete("https://elsewhere.example.com/a.png") is False
    assert storage.delete(url) is True
    assert storage.delete(url) is False


async def test_upload_video_with_thumbnail(client, make_user, auth_headers, storage):
    user = await make_user()
    response = await client.post(
        "/api/v1/uploads/video",
        files={
            "video": ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4"),
            "thumbnail": ("thumb.jpg", b"\xff\xd8\xff", "image/jpeg"),
        },
        headers=auth_headers(user),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["video_url"].startswith(f"http://media.test/uploads/users/{user.id}/videos/")
    assert body["thumbnail_url"].startswith(f"http://media.test/uploads/users/{user.id}/thumbnails/")


async def test_upload_video_rejects_images(client, make_user, auth_headers, storage):
    user = await make_user()
    response = await client.post(
        "/api/v1/uploads/video",
        files={"video": ("clip.png", b"\x89PNG", "image/png")},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_upload_avatar(client, make_user, auth_headers, storage):
    user = await make_user()
    response = await client.post(
        "/api/v1/uploads/avatar",
        files={"file": ("me.png", b"\x89PNG", "image/png")},
        headers=auth_headers(user),
    )
    assert response.status_code == 200
    assert response.json()["url"].startswith(f"http://media.test/uploads/users/{user.id}/avatars/")


async def test_upload_requires_auth(client, storage):
    response = await client.post("/api/v1/uploads/avatar", files={"file": ("me.png", b"\x89PNG", "image/png")})
    assert response.status_code == 401
