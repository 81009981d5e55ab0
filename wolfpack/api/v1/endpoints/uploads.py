"""Media uploads. Files are stored per user; the returned URLs go into video/profile records."""
from fastapi import APIRouter, Depends, File, UploadFile

from wolfpack.api.deps import get_current_user
from wolfpack.models.user import User
from wolfpack.services.storage_service import AVATAR, THUMBNAIL, VIDEO, LocalStorage, get_storage

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/video")
async def upload_video(
    video: UploadFile = File(...),
    thumbnail: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    storage: LocalStorage = Depends(get_storage),
):
    """Upload a video and optional thumbnail. Returns video_url and thumbnail_url."""
    video_url = storage.save(str(current_user.id), VIDEO, await video.read(), video.content_type)

    thumbnail_url = None
    if thumbnail and thumbnail.filename:
        thumbnail_url = storage.save(str(current_user.id), THUMBNAIL, await thumbnail.read(), thumbnail.content_type)

    return {"video_url": video_url, "thumbnail_url": thumbnail_url}


@router.post("/avatar")
async def upload_avatar(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    storage: LocalStorage = Depends(get_storage),
):
    url = storage.save(str(current_user.id), AVATAR, await file.read(), file.content_type)
    return {"url": url}
