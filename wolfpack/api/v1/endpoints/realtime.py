"""WebSocket routes for ephemeral realtime signals.

Typing: clients send ``{"isTyping"}`` frames; the server fills in the
sender's ``userId`` and ``displayName`` from the token, stamps ``timestamp``
(ms) and rebroadcasts to every subscriber of the session, the sender included.
Nothing is persisted.
"""
import json
import logging
import time

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError as PydanticValidationError

from wolfpack.api.deps import (
    get_channel_hub,
    get_current_user,
    get_socket_user,
    get_typing_registry,
    subject_from_token,
)
from wolfpack.models.user import User
from wolfpack.realtime.channels import ChannelHub, chat_topic, typing_topic
from wolfpack.realtime.typing import TypingRegistry
from wolfpack.schemas.realtime import TypingEvent, TypingUsersResponse
from wolfpack.services.user_service import resolve_display_name

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/realtime", tags=["realtime"])


@router.websocket("/typing/{session_id}")
async def typing_websocket(ws: WebSocket, session_id: str, user: User | None = Depends(get_socket_user)):
    if user is None:
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    hub: ChannelHub = ws.app.state.channels
    registry: TypingRegistry = ws.app.state.typing
    topic = typing_topic(session_id)
    user_id, display_name = str(user.id), resolve_display_name(user)
    await hub.subscribe(topic, ws)

    try:
        while True:
            data = await ws.receive_text()
            try:
                event = TypingEvent.model_validate(json.loads(data))
            except (ValueError, PydanticValidationError):
                # json.JSONDecodeError is a ValueError; malformed frames are ignored
                logger.debug("Ignoring malformed typing frame on %s", topic)
                continue
            event.user_id, event.display_name = user_id, display_name
            event.timestamp = int(time.time() * 1000)
            registry.tracker(session_id).update(event.user_id, event.display_name, event.is_typing)
            await hub.broadcast(topic, event.model_dump(by_alias=True))
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error("Typing WebSocket error on %s: %s", topic, e)
    finally:
        await hub.unsubscribe(topic, ws)
        if not hub.subscriber_count(topic):
            registry.discard(session_id)


@router.websocket("/chat/{session_id}")
async def chat_websocket(ws: WebSocket, session_id: str, token: str | None = Query(None)):
    """Receive-only feed of chat messages posted to the session."""
    if subject_from_token(token) is None:
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    hub: ChannelHub = ws.app.state.channels
    topic = chat_topic(session_id)
    await hub.subscribe(topic, ws)
    try:
        while True:
            data = await ws.receive_text()
            if data == "ping":
                await ws.send_text("pong")
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error("Chat WebSocket error on %s: %s", topic, e)
    finally:
        await hub.unsubscribe(topic, ws)


@router.get("/typing/{session_id}", response_model=TypingUsersResponse)
async def typing_users(
    session_id: str,
    current_user: User = Depends(get_current_user),
    registry: TypingRegistry = Depends(get_typing_registry),
):
    return TypingUsersResponse(session_id=session_id, typing_users=registry.typing_users(session_id))


@router.get("/stats")
async def realtime_stats(hub: ChannelHub = Depends(get_channel_hub)):
    return hub.get_stats()
