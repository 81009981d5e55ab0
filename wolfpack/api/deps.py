"""API dependencies: auth, db session, realtime hub."""
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.core.errors import AuthenticationError, AuthorizationError, NotFoundError
from wolfpack.core.security import decode_token
from wolfpack.db.session import async_session_maker, get_db
from wolfpack.models.user import User
from wolfpack.realtime.channels import ChannelHub
from wolfpack.realtime.typing import TypingRegistry
from wolfpack.services.dj_service import can_broadcast
from wolfpack.services.user_service import get_user_by_auth_id, parse_subject

security = HTTPBearer(auto_error=False)


def subject_from_token(token: str | None) -> UUID | None:
    """Auth-provider user id carried in a bearer token, or None if the token is unusable."""
    if not token:
        return None
    payload = decode_token(token)
    if not payload:
        return None
    return parse_subject(payload.get("sub"))


async def get_auth_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> UUID | None:
    return subject_from_token(credentials.credentials if credentials else None)


async def get_current_user_optional(
    auth_id: UUID | None = Depends(get_auth_subject),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if auth_id is None:
        return None
    return await get_user_by_auth_id(db, auth_id)


async def get_current_user(
    request: Request,
    auth_id: UUID | None = Depends(get_auth_subject),
    db: AsyncSession = Depends(get_db),
) -> User:
    if auth_id is None:
        # Client stores this and returns the user here after signing in
        raise AuthenticationError(details={"redirectAfterLogin": request.url.path})
    user = await get_user_by_auth_id(db, auth_id)
    if user is None:
        raise NotFoundError("User profile")
    return user


async def get_current_dj(user: User = Depends(get_current_user)) -> User:
    if not can_broadcast(user):
        raise AuthorizationError("DJ permissions required")
    return user


async def resolve_socket_user(db: AsyncSession, token: str | None) -> User | None:
    """Profile behind a WebSocket `?token=`, or None to refuse the socket."""
    auth_id = subject_from_token(token)
    if auth_id is None:
        return None
    return await get_user_by_auth_id(db, auth_id)


async def get_socket_user(token: str | None = Query(None)) -> User | None:
    # Session is closed before the socket is accepted
    if subject_from_token(token) is None:
        return None
    async with async_session_maker() as db:
        return await resolve_socket_user(db, token)


def get_channel_hub(request: Request) -> ChannelHub:
    return request.app.state.channels


def get_typing_registry(request: Request) -> TypingRegistry:
    return request.app.state.typing
