"""V1 API router aggregation."""
from fastapi import APIRouter

from wolfpack.api.v1.endpoints import (
    chat,
    dj,
    feed,
    locations,
    membership,
    menu,
    messages,
    notifications,
    realtime,
    uploads,
    users,
    videos,
)

api_router = APIRouter(prefix="/v1")
api_router.include_router(users.router)
api_router.include_router(feed.router)
api_router.include_router(videos.router)
api_router.include_router(notifications.router)
api_router.include_router(messages.router)
api_router.include_router(chat.router)
api_router.include_router(locations.router)
api_router.include_router(membership.router)
api_router.include_router(dj.router)
api_router.include_router(menu.router)
api_router.include_router(uploads.router)
api_router.include_router(realtime.router)
