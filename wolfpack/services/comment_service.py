"""Comments on videos."""
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wolfpack.core.errors import AuthorizationError, NotFoundError, ValidationError
from wolfpack.models.engagement import VideoComment
from wolfpack.models.user import User
from wolfpack.schemas.video import CommentResponse
from wolfpack.services.feed_service import get_active_video
from wolfpack.services.notification_service import create_notification
from wolfpack.services.user_service import resolve_display_name, user_to_public


def comment_to_response(comment: VideoComment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        video_id=comment.video_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
        user=user_to_public(comment.user) if comment.user else None,
    )


async def list_comments(db: AsyncSession, video_id: UUID, skip: int = 0, limit: int = 50) -> list[VideoComment]:
    await get_active_video(db, video_id)
    result = await db.execute(
        select(VideoComment)
        .where(VideoComment.video_id == video_id, VideoComment.is_deleted.is_(False))
        .order_by(desc(VideoComment.created_at))
        .offset(skip)
        .limit(limit)
        .options(selectinload(VideoComment.user))
    )
    return list(result.scalars().all())


async def add_comment(db: AsyncSession, user: User, video_id: UUID, content: str) -> VideoComment:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment content is required")
    video = await get_active_video(db, video_id)
    comment = VideoComment(video_id=video_id, user_id=user.id, content=content)
    db.add(comment)
    video.comments_count = (video.comments_count or 0) + 1
    preview = content[:50] + "..." if len(content) > 50 else content
    await create_notification(
        db,
        recipient_id=video.user_id,
        actor_id=user.id,
        notification_type="comment",
        message=f'{resolve_display_name(user)} commented: "{preview}"',
        related_video_id=video.id,
    )
    await db.flush()
    await db.refresh(comment)
    comment.user = user
    return comment


async def delete_comment(db: AsyncSession, user: User, video_id: UUID, comment_id: UUID) -> None:
    result = await db.execute(
        select(VideoComment).where(
            VideoComment.id == comment_id,
            VideoComment.video_id == video_id,
            VideoComment.is_deleted.is_(False),
        )
    )
    comment = result.scalar_one_or_none()
    if comment is None:
        raise NotFoundError("Comment")
    video = await get_active_video(db, video_id)
    if comment.user_id != user.id and video.user_id != user.id and user.role != "admin":
        raise AuthorizationError("You cannot delete this comment")
    comment.is_deleted = True
    video.comments_count = max(0, (video.comments_count or 0) - 1)
    await db.flush()
