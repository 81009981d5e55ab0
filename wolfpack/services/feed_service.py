"""Video feed and video post business logic."""
import logging
from uuid import UUID

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wolfpack.core.config import settings
from wolfpack.core.errors import AuthorizationError, NotFoundError
from wolfpack.models.engagement import Follow, VideoLike
from wolfpack.models.user import User
from wolfpack.models.video import WolfpackVideo
from wolfpack.schemas.video import FeedItem, FetchFeedResponse, VideoCreate, VideoUpdate
from wolfpack.services.user_service import get_following_author_ids, resolve_display_name, user_to_public

logger = logging.getLogger(__name__)


def validate_pagination(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to 1..FEED_MAX_LIMIT."""
    validated_page = max(1, page or 1)
    validated_limit = min(max(1, limit or settings.FEED_DEFAULT_LIMIT), settings.FEED_MAX_LIMIT)
    return validated_page, validated_limit


async def create_video(db: AsyncSession, user_id: UUID, data: VideoCreate) -> WolfpackVideo:
    video = WolfpackVideo(
        user_id=user_id,
        video_url=data.video_url,
        thumbnail_url=data.thumbnail_url,
        caption=data.caption,
        hashtags=data.hashtags or [],
        duration=data.duration,
    )
    db.add(video)
    await db.flush()
    await db.refresh(video)
    return video


async def get_active_video(db: AsyncSession, video_id: UUID) -> WolfpackVideo:
    result = await db.execute(
        select(WolfpackVideo)
        .where(WolfpackVideo.id == video_id, WolfpackVideo.is_active.is_(True))
        .options(selectinload(WolfpackVideo.user))
    )
    video = result.scalar_one_or_none()
    if video is None:
        raise NotFoundError("Video")
    return video


async def update_video(db: AsyncSession, video_id: UUID, owner_id: UUID, data: VideoUpdate) -> WolfpackVideo:
    video = await get_active_video(db, video_id)
    if video.user_id != owner_id:
        raise AuthorizationError("Only the owner can edit this video")
    if data.caption is not None:
        video.caption = data.caption
    if data.thumbnail_url is not None:
        video.thumbnail_url = data.thumbnail_url
    if data.hashtags is not None:
        video.hashtags = data.hashtags
    await db.flush()
    return video


async def deactivate_video(db: AsyncSession, video_id: UUID, user: User) -> None:
    """Soft delete: the row stays, ``is_active`` goes false."""
    video = await get_active_video(db, video_id)
    if video.user_id != user.id and user.role != "admin":
        raise AuthorizationError("Only the owner can delete this video")
    video.is_active = False
    await db.flush()


async def record_view(db: AsyncSession, video_id: UUID) -> int:
    await get_active_video(db, video_id)
    await db.execute(
        update(WolfpackVideo)
        .where(WolfpackVideo.id == video_id)
        .values(views_count=WolfpackVideo.views_count + 1)
    )
    return await db.scalar(select(WolfpackVideo.views_count).where(WolfpackVideo.id == video_id)) or 0


async def get_user_liked_video_ids(
    db: AsyncSession,
    user_id: UUID,
    video_ids: list[UUID],
) -> set[UUID]:
    """Return set of video IDs that the user has liked."""
    if not video_ids:
        return set()
    result = await db.execute(
        select(VideoLike.video_id).where(
            VideoLike.user_id == user_id,
            VideoLike.video_id.in_(video_ids),
        )
    )
    return set(row[0] for row in result.all() if row[0])


def video_to_feed_item(video: WolfpackVideo, user_liked: bool = False, user_following: bool = False) -> FeedItem:
    user = video.user
    return FeedItem(
        id=video.id,
        user_id=video.user_id,
        username=resolve_display_name(user),
        avatar_url=(user.profile_image_url or user.avatar_url) if user else None,
        caption=video.caption or "",
        video_url=video.video_url,
        thumbnail_url=video.thumbnail_url,
        likes_count=video.likes_count or 0,
        comments_count=video.comments_count or 0,
        views_count=video.views_count or 0,
        shares_count=video.shares_count or 0,
        hashtags=video.hashtags or [],
        created_at=video.created_at,
        user=user_to_public(user, is_following=user_following) if user else None,
        user_liked=user_liked,
        user_following=user_following,
    )


async def _fetch_page(
    db: AsyncSession,
    base,
    page: int,
    limit: int,
    current_user_id: UUID | None,
    following_feed: bool = False,
) -> FetchFeedResponse:
    offset = (page - 1) * limit
    total = await db.scalar(select(func.count()).select_from(base.subquery())) or 0
    result = await db.execute(
        base.order_by(desc(WolfpackVideo.created_at), desc(WolfpackVideo.id))
        .offset(offset)
        .limit(limit)
        .options(selectinload(WolfpackVideo.user))
    )
    videos = list(result.scalars().all())

    liked_ids: set[UUID] = set()
    following_ids: set[UUID] = set()
    if current_user_id is not None:
        liked_ids = await get_user_liked_video_ids(db, current_user_id, [v.id for v in videos])
        if not following_feed:
            following_ids = await get_following_author_ids(db, current_user_id, list({v.user_id for v in videos}))

    items = [
        video_to_feed_item(
            v,
            user_liked=v.id in liked_ids,
            user_following=following_feed or v.user_id in following_ids,
        )
        for v in videos
    ]
    return FetchFeedResponse(items=items, total_items=total, has_more=offset + len(items) < total)


async def get_feed_page(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    user_id: UUID | None = None,
    current_user_id: UUID | None = None,
) -> FetchFeedResponse:
    """Active videos newest first, optionally restricted to one author."""
    page, limit = validate_pagination(page, limit)
    base = select(WolfpackVideo).where(WolfpackVideo.is_active.is_(True))
    if user_id is not None:
        base = base.where(WolfpackVideo.user_id == user_id)
    return await _fetch_page(db, base, page, limit, current_user_id)


async def get_following_feed_page(
    db: AsyncSession,
    current_user_id: UUID,
    page: int = 1,
    limit: int = 10,
) -> FetchFeedResponse:
    """Active videos by authors the viewer follows."""
    page, limit = validate_pagination(page, limit)
    subq_following = select(Follow.following_id).where(Follow.follower_id == current_user_id)
    base = select(WolfpackVideo).where(
        WolfpackVideo.is_active.is_(True),
        WolfpackVideo.user_id.in_(subq_following),
    )
    return await _fetch_page(db, base, page, limit, current_user_id, following_feed=True)


async def fetch_feed_items(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    user_id: UUID | None = None,
    current_user_id: UUID | None = None,
) -> FetchFeedResponse:
    """Feed page for the UI. Backend failures degrade to an empty page."""
    try:
        return await get_feed_page(db, page, limit, user_id=user_id, current_user_id=current_user_id)
    except SQLAlchemyError:
        logger.exception("Failed to fetch feed items (page=%s, limit=%s)", page, limit)
        await db.rollback()
        return FetchFeedResponse(items=[], total_items=0, has_more=False)


async def fetch_following_feed(
    db: AsyncSession,
    current_user_id: UUID,
    page: int = 1,
    limit: int = 10,
) -> FetchFeedResponse:
    try:
        return await get_following_feed_page(db, current_user_id, page, limit)
    except SQLAlchemyError:
        logger.exception("Failed to fetch following feed for %s", current_user_id)
        await db.rollback()
        return FetchFeedResponse(items=[], total_items=0, has_more=False)
