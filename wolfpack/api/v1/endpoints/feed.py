"""Wolfpack video feed."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_current_user, get_current_user_optional, get_db
from wolfpack.models.user import User
from wolfpack.schemas.video import FetchFeedResponse
from wolfpack.services.feed_service import fetch_feed_items, fetch_following_feed

router = APIRouter(prefix="/wolfpack/feed", tags=["feed"])


@router.get("", response_model=FetchFeedResponse)
async def get_feed(
    page: int = Query(1),
    limit: int = Query(10),
    user_id: UUID | None = Query(None, description="Only videos by this author"),
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    # Out-of-range page/limit are clamped by the service rather than rejected
    return await fetch_feed_items(
        db,
        page,
        limit,
        user_id=user_id,
        current_user_id=current_user.id if current_user else None,
    )


@router.get("/following", response_model=FetchFeedResponse)
async def get_following_feed(
    page: int = Query(1),
    limit: int = Query(10),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await fetch_following_feed(db, current_user.id, page, limit)
