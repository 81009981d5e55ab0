"""In-process pub/sub for realtime topics (typing indicators, session chat).

Delivery is fire-and-forget and at-most-once: a socket that fails to receive
is dropped from its topic and the broadcast carries on.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


def typing_topic(session_id: str) -> str:
    return f"typing_{session_id}"


def chat_topic(session_id: str) -> str:
    return f"chat_{session_id}"


class ChannelHub:
    def __init__(self):
        self._topics: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()
        self._stats = {"total_events_emitted": 0, "dropped_connections": 0}

    async def subscribe(self, topic: str, ws: WebSocket) -> None:
        """Register then accept, so a client sees every broadcast sent after its handshake."""
        async with self._lock:
            self._topics[topic].add(ws)
        await ws.accept()
        logger.info("WS subscribed to %s (total=%d)", topic, len(self._topics[topic]))

    async def unsubscribe(self, topic: str, ws: WebSocket) -> None:
        async with self._lock:
            sockets = self._topics.get(topic)
            if sockets is None:
                return
            sockets.discard(ws)
            if not sockets:
                del self._topics[topic]
        logger.info("WS unsubscribed from %s", topic)

    async def broadcast(self, topic: str, payload: dict[str, Any]) -> int:
        """Send ``payload`` to every subscriber of ``topic``. Returns deliveries."""
        sockets = list(self._topics.get(topic, ()))
        if not sockets:
            return 0
        self._stats["total_events_emitted"] += 1

        delivered = 0
        dead: list[WebSocket] = []
        for ws in sockets:
            if ws.application_state != WebSocketState.CONNECTED:
                continue
            try:
                await ws.send_json(payload)
                delivered += 1
            except Exception as e:
                logger.debug("Dropping subscriber of %s: %s", topic, e)
                dead.append(ws)

        if dead:
            async with self._lock:
                for ws in dead:
                    self._topics.get(topic, set()).discard(ws)
                self._stats["dropped_connections"] += len(dead)
        return delivered

    def subscriber_count(self, topic: str) -> int:
        return len(self._topics.get(topic, ()))

    def get_stats(self) -> dict[str, Any]:
        return {
            **self._stats,
            "topics": len(self._topics),
            "active_connections": sum(len(s) for s in self._topics.values()),
        }
