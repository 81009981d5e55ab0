"""Like toggling for videos.

The toggle never reads before it writes: the unlike path is one conditional
DELETE, and the like path inserts inside a savepoint so a concurrent
duplicate hits the unique constraint instead of creating a second row.
"""
import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.models.engagement import VideoLike
from wolfpack.models.user import User
from wolfpack.schemas.video import LikeStatusResponse, LikeToggleResponse
from wolfpack.services.feed_service import get_active_video
from wolfpack.services.notification_service import create_notification
from wolfpack.services.user_service import resolve_display_name

logger = logging.getLogger(__name__)


async def count_likes(db: AsyncSession, video_id: UUID) -> int:
    return await db.scalar(select(func.count(VideoLike.id)).where(VideoLike.video_id == video_id)) or 0


async def toggle_like(db: AsyncSession, user: User, video_id: UUID) -> LikeToggleResponse:
    video = await get_active_video(db, video_id)

    result = await db.execute(
        delete(VideoLike).where(VideoLike.user_id == user.id, VideoLike.video_id == video_id)
    )
    if (result.rowcount or 0) > 0:
        liked = False
    else:
        liked = True
        try:
            async with db.begin_nested():
                db.add(VideoLike(user_id=user.id, video_id=video_id))
        except IntegrityError:
            # Another request inserted the same pair first; it is liked either way.
            logger.info("Duplicate like for user=%s video=%s ignored", user.id, video_id)
        else:
            await create_notification(
                db,
                recipient_id=video.user_id,
                actor_id=user.id,
                notification_type="like",
                message=f"{resolve_display_name(user)} liked your video",
                related_video_id=video.id,
            )

    video.likes_count = await count_likes(db, video_id)
    await db.flush()
    return LikeToggleResponse(liked=liked, likes_count=video.likes_count)


async def get_like_status(db: AsyncSession, user_id: UUID | None, video_id: UUID) -> LikeStatusResponse:
    await get_active_video(db, video_id)
    count = await count_likes(db, video_id)
    if user_id is None:
        return LikeStatusResponse(liked=False, count=count)
    result = await db.execute(
        select(VideoLike.id).where(VideoLike.user_id == user_id, VideoLike.video_id == video_id)
    )
    return LikeStatusResponse(liked=result.scalar_one_or_none() is not None, count=count)
