"""User profile and follow endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_current_user, get_current_user_optional, get_db
from wolfpack.models.user import User
from wolfpack.schemas.user import UserPublic, UserResponse, UserUpdate
from wolfpack.schemas.video import FetchFeedResponse
from wolfpack.services.feed_service import fetch_feed_items
from wolfpack.services.notification_service import send_pending_pushes
from wolfpack.services.user_service import (
    follow_user,
    get_user_or_404,
    is_following,
    unfollow_user,
    update_profile,
    user_to_public,
    user_to_response,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return user_to_response(current_user, include_email=True)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await update_profile(db, current_user, data)
    await db.commit()
    await db.refresh(current_user)
    return user_to_response(current_user, include_email=True)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    user = await get_user_or_404(db, user_id)
    following = False
    if current_user is not None and current_user.id != user.id:
        following = await is_following(db, current_user.id, user.id)
    return user_to_public(user, is_following=following)


@router.get("/{user_id}/videos", response_model=FetchFeedResponse)
async def get_user_videos(
    user_id: UUID,
    page: int = 1,
    limit: int = 10,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    await get_user_or_404(db, user_id)
    return await fetch_feed_items(
        db,
        page,
        limit,
        user_id=user_id,
        current_user_id=current_user.id if current_user else None,
    )


@router.post("/{user_id}/follow")
async def follow(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    created = await follow_user(db, current_user, user_id)
    await db.commit()
    await send_pending_pushes(db)
    return {"following": True, "created": created}


@router.delete("/{user_id}/follow")
async def unfollow(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    removed = await unfollow_user(db, current_user.id, user_id)
    await db.commit()
    return {"following": False, "removed": removed}
