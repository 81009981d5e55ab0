"""DJ broadcasts: short-lived announcements pushed into a location's chat."""
import logging
import re
from datetime import timedelta
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wolfpack.core.config import settings
from wolfpack.core.errors import AuthorizationError, NotFoundError, ValidationError
from wolfpack.db.session import utcnow
from wolfpack.models.membership import DJBroadcast
from wolfpack.models.message import ChatMessage
from wolfpack.models.user import User
from wolfpack.schemas.wolfpack import BroadcastCreate
from wolfpack.services.membership_service import get_active_location
from wolfpack.services.user_service import resolve_display_name

logger = logging.getLogger(__name__)

TYPE_TITLES = {
    "announcement": "DJ Announcement",
    "howl_request": "Howl Request",
    "contest_announcement": "Contest Alert",
    "song_request": "Song Request",
    "general": "DJ Broadcast",
}

TYPE_EMOJIS = {
    "announcement": "\U0001F4E2",
    "howl_request": "\U0001F43A",
    "contest_announcement": "\U0001F3C6",
    "song_request": "\U0001F3B5",
    "general": "\U0001F3A7",
}

_WHITESPACE = re.compile(r"\s+")


def can_broadcast(user: User) -> bool:
    return user.role in ("dj", "admin") or bool(user.is_vip)


def sanitize_message(message: str | None, max_length: int | None = None) -> str:
    max_length = max_length or settings.BROADCAST_MAX_LENGTH
    text = (message or "").strip().replace("<", "").replace(">", "")
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:max_length]


def session_id_for_location(location_id: UUID) -> str:
    return f"location_{location_id}"


def format_chat_message(message: str, broadcast_type: str, dj_name: str) -> str:
    emoji = TYPE_EMOJIS.get(broadcast_type, TYPE_EMOJIS["general"])
    if broadcast_type == "howl_request":
        return f"{emoji} DJ {dj_name} wants to hear your HOWL! {message}"
    if broadcast_type == "contest_announcement":
        return f"{emoji} CONTEST ALERT from DJ {dj_name}: {message}"
    if broadcast_type == "song_request":
        return f"{emoji} DJ {dj_name} is taking requests: {message}"
    if broadcast_type == "announcement":
        return f"{emoji} DJ ANNOUNCEMENT from {dj_name}: {message}"
    return f"{emoji} DJ {dj_name}: {message}"


async def create_broadcast(db: AsyncSession, dj: User, data: BroadcastCreate) -> tuple[DJBroadcast, ChatMessage]:
    """Store a broadcast and mirror it into the location chat session."""
    if not can_broadcast(dj):
        raise AuthorizationError("DJ permissions required")
    message = sanitize_message(data.message)
    if not message:
        raise ValidationError("Broadcast message is required")
    location = await get_active_location(db, data.location_id)

    now = utcnow()
    broadcast = DJBroadcast(
        dj_id=dj.id,
        location_id=location.id,
        title=TYPE_TITLES.get(data.broadcast_type, TYPE_TITLES["general"]),
        message=message,
        broadcast_type=data.broadcast_type,
        priority=data.priority,
        status="active",
        created_at=now,
        expires_at=now + timedelta(minutes=settings.BROADCAST_TTL_MINUTES),
    )
    db.add(broadcast)

    dj_name = resolve_display_name(dj)
    chat_message = ChatMessage(
        session_id=session_id_for_location(location.id),
        user_id=dj.id,
        display_name=dj_name,
        avatar_url=dj.profile_image_url or dj.avatar_url,
        content=format_chat_message(message, data.broadcast_type, dj_name),
        message_type="dj_broadcast",
        created_at=now,
    )
    db.add(chat_message)
    await db.flush()
    await db.refresh(broadcast, attribute_names=["dj"])
    logger.info("DJ %s broadcast %s to location %s", dj.id, data.broadcast_type, location.id)
    return broadcast, chat_message


async def list_broadcasts(
    db: AsyncSession,
    location_id: UUID,
    *,
    include_expired: bool = False,
    limit: int = 20,
) -> list[DJBroadcast]:
    stmt = (
        select(DJBroadcast)
        .where(DJBroadcast.location_id == location_id, DJBroadcast.status == "active")
        .options(selectinload(DJBroadcast.dj))
        .order_by(desc(DJBroadcast.created_at))
        .limit(limit)
    )
    if not include_expired:
        stmt = stmt.where(DJBroadcast.expires_at > utcnow())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_broadcast(db: AsyncSession, broadcast_id: UUID) -> DJBroadcast:
    result = await db.execute(
        select(DJBroadcast)
        .where(DJBroadcast.id == broadcast_id)
        .options(selectinload(DJBroadcast.dj))
    )
    broadcast = result.scalar_one_or_none()
    if broadcast is None:
        raise NotFoundError("Broadcast")
    return broadcast


async def delete_broadcast(db: AsyncSession, broadcast_id: UUID, user: User) -> None:
    broadcast = await get_broadcast(db, broadcast_id)
    if broadcast.dj_id != user.id and user.role != "admin":
        raise AuthorizationError("Only the broadcasting DJ can delete this broadcast")
    await db.delete(broadcast)
    await db.flush()
