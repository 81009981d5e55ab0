"""Auth-provider id to profile mapping, profile updates and follows."""
import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.core.errors import NotFoundError, ValidationError
from wolfpack.models.engagement import Follow
from wolfpack.models.user import User
from wolfpack.schemas.user import UserPublic, UserResponse, UserUpdate
from wolfpack.services.notification_service import create_notification

logger = logging.getLogger(__name__)


def parse_subject(sub: str | None) -> UUID | None:
    if not sub:
        return None
    try:
        return UUID(str(sub))
    except ValueError:
        return None


async def get_user_by_auth_id(db: AsyncSession, auth_id: UUID) -> User | None:
    """Find the profile row for an auth-provider id.

    Rows created before ``auth_id`` was populated share the auth id as their
    primary key, so fall back to a lookup by ``users.id``.
    """
    result = await db.execute(select(User).where(User.auth_id == auth_id))
    user = result.scalar_one_or_none()
    if user is not None:
        return user
    result = await db.execute(select(User).where(User.id == auth_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning("User not found in database for auth id %s", auth_id)
    return user


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


async def update_profile(db: AsyncSession, user: User, data: UserUpdate) -> User:
    changes = data.model_dump(exclude_unset=True)
    if "username" in changes and changes["username"] != user.username:
        result = await db.execute(select(User.id).where(User.username == changes["username"]))
        if result.scalar_one_or_none() is not None:
            raise ValidationError("Username is already taken")
    for field, value in changes.items():
        setattr(user, field, value)
    await db.flush()
    return user


def resolve_display_name(user: User | None) -> str:
    if user is None:
        return "Unknown"
    full_name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return user.display_name or user.username or full_name or "Unknown"


def user_to_public(user: User, is_following: bool = False) -> UserPublic:
    return UserPublic(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        first_name=user.first_name,
        last_name=user.last_name,
        avatar_url=user.avatar_url,
        profile_image_url=user.profile_image_url,
        wolf_emoji=user.wolf_emoji,
        role=user.role or "user",
        is_wolfpack_member=bool(user.is_wolfpack_member),
        is_following=is_following,
    )


def user_to_response(user: User, include_email: bool = False) -> UserResponse:
    public = user_to_public(user)
    return UserResponse(
        **public.model_dump(),
        email=user.email if include_email else None,
        bio=user.bio,
        is_vip=bool(user.is_vip),
        is_permanent_pack_member=bool(user.is_permanent_pack_member),
        wolfpack_status=user.wolfpack_status or "inactive",
        wolfpack_joined_at=user.wolfpack_joined_at,
        location_id=user.location_id,
        last_activity=user.last_activity,
        created_at=user.created_at,
    )


async def is_following(db: AsyncSession, follower_id: UUID, following_id: UUID) -> bool:
    result = await db.execute(
        select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
    )
    return result.scalar_one_or_none() is not None


async def get_following_author_ids(
    db: AsyncSession,
    follower_id: UUID,
    author_ids: list[UUID],
) -> set[UUID]:
    """Return set of author IDs that the follower follows."""
    if not author_ids:
        return set()
    result = await db.execute(
        select(Follow.following_id).where(
            Follow.follower_id == follower_id,
            Follow.following_id.in_(author_ids),
        )
    )
    return set(row[0] for row in result.all() if row[0])


async def follow_user(db: AsyncSession, follower: User, target_id: UUID) -> bool:
    """Follow ``target_id``. Returns False when already following."""
    if follower.id == target_id:
        raise ValidationError("You cannot follow yourself")
    await get_user_or_404(db, target_id)
    if await is_following(db, follower.id, target_id):
        return False
    db.add(Follow(follower_id=follower.id, following_id=target_id))
    await create_notification(
        db,
        recipient_id=target_id,
        actor_id=follower.id,
        notification_type="follow",
        message=f"{resolve_display_name(follower)} started following you",
    )
    await db.flush()
    return True


async def unfollow_user(db: AsyncSession, follower_id: UUID, target_id: UUID) -> bool:
    result = await db.execute(
        delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == target_id,
        )
    )
    return (result.rowcount or 0) > 0
