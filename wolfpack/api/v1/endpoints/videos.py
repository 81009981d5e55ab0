"""Video posts: CRUD, likes, views and comments."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_current_user, get_current_user_optional, get_db
from wolfpack.models.user import User
from wolfpack.schemas.video import (
    CommentCreate,
    CommentResponse,
    FeedItem,
    LikeStatusResponse,
    LikeToggleResponse,
    VideoCreate,
    VideoUpdate,
)
from wolfpack.services.comment_service import add_comment, comment_to_response, delete_comment, list_comments
from wolfpack.services.feed_service import (
    create_video,
    deactivate_video,
    get_active_video,
    get_user_liked_video_ids,
    record_view,
    update_video,
    video_to_feed_item,
)
from wolfpack.services.like_service import get_like_status, toggle_like
from wolfpack.services.notification_service import send_pending_pushes
from wolfpack.services.user_service import is_following

router = APIRouter(prefix="/videos", tags=["videos"])


@router.post("", response_model=FeedItem, status_code=status.HTTP_201_CREATED)
async def create(
    data: VideoCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    video = await create_video(db, current_user.id, data)
    await db.commit()
    await db.refresh(video, attribute_names=["user"])
    return video_to_feed_item(video)


@router.get("/{video_id}", response_model=FeedItem)
async def get_video(
    video_id: UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    video = await get_active_video(db, video_id)
    liked = following = False
    if current_user is not None:
        liked = video.id in await get_user_liked_video_ids(db, current_user.id, [video.id])
        if video.user_id != current_user.id:
            following = await is_following(db, current_user.id, video.user_id)
    return video_to_feed_item(video, user_liked=liked, user_following=following)


@router.patch("/{video_id}", response_model=FeedItem)
async def update(
    video_id: UUID,
    data: VideoUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    video = await update_video(db, video_id, current_user.id, data)
    await db.commit()
    return video_to_feed_item(video)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await deactivate_video(db, video_id, current_user)
    await db.commit()


@router.post("/{video_id}/like", response_model=LikeToggleResponse)
async def like_toggle(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await toggle_like(db, current_user, video_id)
    await db.commit()
    await send_pending_pushes(db)
    return result


@router.get("/{video_id}/like", response_model=LikeStatusResponse)
async def like_status(
    video_id: UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    return await get_like_status(db, current_user.id if current_user else None, video_id)


@router.post("/{video_id}/view")
async def view(video_id: UUID, db: AsyncSession = Depends(get_db)):
    views = await record_view(db, video_id)
    await db.commit()
    return {"views_count": views}


@router.get("/{video_id}/comments", response_model=list[CommentResponse])
async def get_comments(
    video_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    comments = await list_comments(db, video_id, skip=skip, limit=limit)
    return [comment_to_response(c) for c in comments]


@router.post("/{video_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    video_id: UUID,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await add_comment(db, current_user, video_id, data.content)
    await db.commit()
    await send_pending_pushes(db)
    return comment_to_response(comment)


@router.delete("/{video_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_comment(
    video_id: UUID,
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_comment(db, current_user, video_id, comment_id)
    await db.commit()
