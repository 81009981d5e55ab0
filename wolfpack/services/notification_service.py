"""Notification creation, queries and read state."""
import logging
from uuid import UUID

from kombu.exceptions import OperationalError
from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from starlette.concurrency import run_in_threadpool

from wolfpack.core.config import settings
from wolfpack.core.errors import NotFoundError
from wolfpack.models.notification import DeviceToken, Notification

logger = logging.getLogger(__name__)

PENDING_PUSHES = "pending_pushes"


async def create_notification(
    db: AsyncSession,
    *,
    recipient_id: UUID,
    actor_id: UUID | None,
    notification_type: str,
    message: str,
    related_video_id: UUID | None = None,
) -> Notification | None:
    """Create a notification. Skips if actor is the same as recipient (no self-notify)."""
    if actor_id is not None and recipient_id == actor_id:
        return None
    notification = Notification(
        recipient_id=recipient_id,
        related_user_id=actor_id,
        type=notification_type,
        message=message,
        status="unread",
        related_video_id=related_video_id,
    )
    db.add(notification)
    await db.flush()
    await _queue_push(db, recipient_id, message, notification_type)
    return notification


async def _queue_push(db: AsyncSession, recipient_id: UUID, body: str, notification_type: str) -> None:
    result = await db.execute(
        select(DeviceToken.token).where(
            DeviceToken.user_id == recipient_id,
            DeviceToken.is_active.is_(True),
        )
    )
    tokens = [row[0] for row in result.all()]
    if not tokens:
        return
    db.info.setdefault(PENDING_PUSHES, []).append((tokens, settings.APP_NAME, body, {"type": notification_type}))


async def send_pending_pushes(db: AsyncSession) -> None:
    """Hand pushes collected during the request to the worker. Call after commit."""
    pending = db.info.pop(PENDING_PUSHES, [])
    if not pending:
        return
    from wolfpack.workers.notifications import send_push_notification

    for tokens, title, body, data in pending:
        try:
            await run_in_threadpool(send_push_notification.delay, tokens, title, body, data)
        except OperationalError:
            logger.exception("Could not queue push notification for %d device(s)", len(tokens))


async def get_notifications(
    db: AsyncSession,
    user_id: UUID,
    *,
    limit: int | None = None,
) -> list[Notification]:
    """Get notifications for user, most recent first."""
    result = await db.execute(
        select(Notification)
        .where(Notification.recipient_id == user_id)
        .order_by(desc(Notification.created_at), desc(Notification.id))
        .limit(limit or settings.NOTIFICATIONS_DEFAULT_LIMIT)
        .options(
            selectinload(Notification.related_user),
            selectinload(Notification.related_video),
        )
    )
    return list(result.scalars().all())


async def get_unread_count(db: AsyncSession, user_id: UUID) -> int:
    """Get count of unread notifications."""
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.recipient_id == user_id,
            Notification.status == "unread",
        )
    )
    return result.scalar() or 0


async def mark_all_read(db: AsyncSession, user_id: UUID) -> int:
    """Mark all notifications as read. Returns count updated."""
    stmt = (
        update(Notification)
        .where(Notification.recipient_id == user_id, Notification.status == "unread")
        .values(status="read")
    )
    result = await db.execute(stmt)
    return result.rowcount or 0


async def _get_owned(db: AsyncSession, user_id: UUID, notification_id: UUID) -> Notification:
    result = await db.execute(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.recipient_id == user_id,
        )
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        raise NotFoundError("Notification")
    return notification


async def mark_one_read(db: AsyncSession, user_id: UUID, notification_id: UUID) -> bool:
    """Mark a single notification as read. Returns True if it was unread."""
    notification = await _get_owned(db, user_id, notification_id)
    if notification.status == "read":
        return False
    notification.status = "read"
    await db.flush()
    return True


async def delete_notification(db: AsyncSession, user_id: UUID, notification_id: UUID) -> None:
    notification = await _get_owned(db, user_id, notification_id)
    await db.delete(notification)
    await db.flush()


async def register_device_token(db: AsyncSession, user_id: UUID, token: str, platform: str) -> DeviceToken:
    """Store a push token; a token seen before is moved to the current user."""
    result = await db.execute(select(DeviceToken).where(DeviceToken.token == token))
    device = result.scalar_one_or_none()
    if device is None:
        device = DeviceToken(user_id=user_id, token=token, platform=platform, is_active=True)
        db.add(device)
    else:
        device.user_id = user_id
        device.platform = platform
        device.is_active = True
    await db.flush()
    return device


async def deactivate_device_token(db: AsyncSession, user_id: UUID, token: str) -> bool:
    result = await db.execute(
        update(DeviceToken)
        .where(DeviceToken.user_id == user_id, DeviceToken.token == token)
        .values(is_active=False)
    )
    return (result.rowcount or 0) > 0
