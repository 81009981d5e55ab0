"""Direct messages between two users and session chat messages."""
import logging
from uuid import UUID

from sqlalchemy import and_, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.core.config import settings
from wolfpack.core.errors import NotFoundError, ValidationError
from wolfpack.models.message import ChatMessage, PrivateMessage
from wolfpack.models.user import User
from wolfpack.schemas.message import ConversationSummary, MessageResponse
from wolfpack.services.notification_service import create_notification
from wolfpack.services.user_service import get_user_by_id, resolve_display_name, user_to_public

logger = logging.getLogger(__name__)


def _clean_content(content: str | None, max_length: int) -> str:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Message content is required")
    if len(content) > max_length:
        raise ValidationError(f"Message is too long (max {max_length} characters)")
    return content


async def send_message(db: AsyncSession, sender: User, receiver_id: UUID, content: str | None) -> PrivateMessage:
    """Insert a direct message. Content is validated before anything is written."""
    content = _clean_content(content, settings.MESSAGE_MAX_LENGTH)
    if receiver_id == sender.id:
        raise ValidationError("You cannot message yourself")
    receiver = await get_user_by_id(db, receiver_id)
    if receiver is None:
        raise NotFoundError("Receiver")

    message = PrivateMessage(
        sender_id=sender.id,
        receiver_id=receiver.id,
        content=content,
        is_read=False,
    )
    db.add(message)
    await db.flush()
    await db.refresh(message)
    await create_notification(
        db,
        recipient_id=receiver.id,
        actor_id=sender.id,
        notification_type="message",
        message=f"New message from {resolve_display_name(sender)}",
    )
    return message


def _between(user_id: UUID, other_user_id: UUID):
    return or_(
        and_(PrivateMessage.sender_id == user_id, PrivateMessage.receiver_id == other_user_id),
        and_(PrivateMessage.sender_id == other_user_id, PrivateMessage.receiver_id == user_id),
    )


async def get_conversation(
    db: AsyncSession,
    user_id: UUID,
    other_user_id: UUID,
    *,
    limit: int = 100,
) -> list[PrivateMessage]:
    """Messages in both directions, oldest first. Marks the other user's messages as read."""
    result = await db.execute(
        select(PrivateMessage)
        .where(_between(user_id, other_user_id))
        .order_by(desc(PrivateMessage.created_at), desc(PrivateMessage.id))
        .limit(limit)
    )
    messages = list(reversed(result.scalars().all()))

    await mark_conversation_read(db, user_id, other_user_id)
    return messages


async def mark_conversation_read(db: AsyncSession, user_id: UUID, other_user_id: UUID) -> int:
    result = await db.execute(
        update(PrivateMessage)
        .where(
            PrivateMessage.receiver_id == user_id,
            PrivateMessage.sender_id == other_user_id,
            PrivateMessage.is_read.is_(False),
        )
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


async def get_unread_message_count(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(
        select(func.count(PrivateMessage.id)).where(
            PrivateMessage.receiver_id == user_id,
            PrivateMessage.is_read.is_(False),
        )
    )
    return result.scalar() or 0


async def list_conversations(db: AsyncSession, user: User, *, limit: int = 50) -> list[ConversationSummary]:
    """One entry per counterpart: latest message and unread count, newest first."""
    result = await db.execute(
        select(PrivateMessage)
        .where(or_(PrivateMessage.sender_id == user.id, PrivateMessage.receiver_id == user.id))
        .order_by(desc(PrivateMessage.created_at), desc(PrivateMessage.id))
    )
    latest: dict[UUID, PrivateMessage] = {}
    unread: dict[UUID, int] = {}
    for message in result.scalars().all():
        other_id = message.receiver_id if message.sender_id == user.id else message.sender_id
        latest.setdefault(other_id, message)
        if message.receiver_id == user.id and not message.is_read:
            unread[other_id] = unread.get(other_id, 0) + 1

    other_ids = list(latest)[:limit]
    if not other_ids:
        return []
    users_result = await db.execute(select(User).where(User.id.in_(other_ids)))
    users = {u.id: u for u in users_result.scalars().all()}

    return [
        ConversationSummary(
            other_user=user_to_public(users[other_id]),
            last_message=MessageResponse.model_validate(latest[other_id]),
            unread_count=unread.get(other_id, 0),
        )
        for other_id in other_ids
        if other_id in users
    ]


async def post_chat_message(
    db: AsyncSession,
    session_id: str,
    user: User,
    content: str | None,
    *,
    message_type: str = "text",
    max_length: int | None = None,
) -> ChatMessage:
    content = _clean_content(content, max_length or settings.MESSAGE_MAX_LENGTH)
    chat_message = ChatMessage(
        session_id=session_id,
        user_id=user.id,
        display_name=resolve_display_name(user),
        avatar_url=user.profile_image_url or user.avatar_url,
        content=content,
        message_type=message_type,
    )
    db.add(chat_message)
    await db.flush()
    await db.refresh(chat_message)
    return chat_message


async def list_chat_messages(db: AsyncSession, session_id: str, *, limit: int = 50) -> list[ChatMessage]:
    """Most recent chat messages of a session, oldest first."""
    result = await db.execute(
        select(ChatMessage)
        .where(ChatMessage.session_id == session_id, ChatMessage.is_deleted.is_(False))
        .order_by(desc(ChatMessage.created_at), desc(ChatMessage.id))
        .limit(limit)
    )
    return list(reversed(result.scalars().all()))
