import uuid

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from wolfpack.api.deps import get_socket_user, resolve_socket_user
from wolfpack.core.security import create_access_token
from wolfpack.main import create_app
from wolfpack.models.user import User
from wolfpack.realtime.typing import TypingRegistry, TypingTracker


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.unit
def test_typing_expires_after_ttl(clock):
    tracker = TypingTracker(ttl=3.0, clock=clock)
    tracker.update("u1", "Ann", True)

    clock.advance(2.9)
    assert tracker.typing_users() == ["Ann"]
    clock.advance(0.1)
    assert tracker.typing_users() == []
    assert len(tracker) == 0


@pytest.mark.unit
def test_stop_signal_removes_immediately(clock):
    tracker = TypingTracker(ttl=3.0, clock=clock)
    tracker.update("u1", "Ann", True)
    tracker.update("u2", "Bo", True)
    tracker.update("u1", "Ann", False)
    assert tracker.typing_users() == ["Bo"]
    # Stopping someone who is not typing is harmless
    tracker.update("u9", "Nobody", False)
    assert tracker.typing_users() == ["Bo"]


@pytest.mark.unit
def test_new_signal_rearms_expiry(clock):
    tracker = TypingTracker(ttl=3.0, clock=clock)
    tracker.update("u1", "Ann", True)
    clock.advance(2.0)
    tracker.update("u1", "Ann", True)
    clock.advance(2.0)
    assert tracker.typing_users() == ["Ann"]
    clock.advance(1.0)
    assert tracker.typing_users() == []


@pytest.mark.unit
def test_default_ttl_comes_from_settings():
    assert TypingTracker().ttl == 3.0


@pytest.mark.unit
def test_registry_keeps_sessions_apart(clock):
    registry = TypingRegistry(ttl=3.0, clock=clock)
    registry.tracker("location_a").update("u1", "Ann", True)
    registry.tracker("location_b").update("u2", "Bo", True)

    assert registry.typing_users("location_a") == ["Ann"]
    assert registry.typing_users("location_b") == ["Bo"]
    assert registry.typing_users("unknown") == []

    clock.advance(5)
    assert registry.typing_users("location_a") == []



@pytest.mark.unit
def test_idle_sessions_do_not_accumulate(clock):
    registry = TypingRegistry(ttl=3.0, clock=clock)
    for i in range(1000):
        registry.tracker(f"session_{i}").update(f"u{i}", "Ann", True)
    assert len(registry) == 1000

    clock.advance(3600)
    registry.tracker("late").update("u0", "Ann", False)
    assert len(registry) <= 1
    registry.sweep()
    assert len(registry) == 0


@pytest.mark.unit
def test_update_prunes_expired_entries(clock):
    tracker = TypingTracker(ttl=3.0, clock=clock)
    for i in range(50):
        tracker.update(f"u{i}", "Ann", True)
    clock.advance(10)
    tracker.update("u99", "Bo", True)
    assert len(tracker) == 1


@pytest.mark.unit
def test_discard_drops_session(clock):
    registry = TypingRegistry(ttl=3.0, clock=clock)
    registry.tracker("location_a").update("u1", "Ann", True)
    registry.discard("location_a")
    registry.discard("never_seen")
    assert registry.typing_users("location_a") == []
    assert len(registry) == 0


async def test_socket_user_comes_from_token(db, make_user):
    user = await make_user(display_name="Nova")
    resolved = await resolve_socket_user(db, create_access_token(user.auth_id))
    assert resolved.id == user.id
    assert await resolve_socket_user(db, "garbage") is None
    assert await resolve_socket_user(db, None) is None
    assert await resolve_socket_user(db, create_access_token(uuid.uuid4())) is None


def _typing_url(session_id: str) -> str:
    return f"/api/v1/realtime/typing/{session_id}?token=unused"


def _app_as(user: User):
    app = create_app()
    app.dependency_overrides[get_socket_user] = lambda: user
    return app


ANN_ID = uuid.UUID("4b0f5c1e-7f7e-4a44-9d43-3cf1f9a3e001")


def test_typing_frame_is_stamped_and_echoed():
    app = _app_as(User(id=ANN_ID, display_name="Ann"))
    client = TestClient(app)

    with client.websocket_connect(_typing_url("location_1")) as ws:
        ws.send_text("not json")
        ws.send_json({"displayName": "Ann"})
        ws.send_json({"isTyping": True})
        event = ws.receive_json()
        assert app.state.typing.typing_users("location_1") == ["Ann"]

    assert event["userId"] == str(ANN_ID)
    assert event["displayName"] == "Ann"
    assert event["isTyping"] is True
    assert isinstance(event["timestamp"], int)


def test_spoofed_identity_is_replaced():
    app = _app_as(User(id=ANN_ID, display_name="Ann"))
    client = TestClient(app)

    with client.websocket_connect(_typing_url("location_1")) as ws:
        ws.send_json({"userId": "someone-else", "displayName": "DJ Admin", "isTyping": True})
        event = ws.receive_json()
        assert app.state.typing.typing_users("location_1") == ["Ann"]

    assert event["userId"] == str(ANN_ID)
    assert event["displayName"] == "Ann"


def test_typing_is_broadcast_to_every_subscriber():
    app = _app_as(User(id=uuid.uuid4(), username="bo"))
    client = TestClient(app)

    with client.websocket_connect(_typing_url("location_1")) as first:
        with client.websocket_connect(_typing_url("location_1")) as second:
            second.send_json({"isTyping": True})
            assert first.receive_json()["displayName"] == "bo"
            assert second.receive_json()["displayName"] == "bo"

            first.send_json({"isTyping": False})
            assert first.receive_json()["isTyping"] is False
            assert second.receive_json()["isTyping"] is False

    assert app.state.typing.typing_users("location_1") == []


def test_last_subscriber_leaving_drops_session():
    app = _app_as(User(id=ANN_ID, display_name="Ann"))
    client = TestClient(app)
    registry = app.state.typing

    with client.websocket_connect(_typing_url("location_1")) as first:
        with client.websocket_connect(_typing_url("location_1")) as second:
            second.send_json({"isTyping": True})
            first.receive_json()
            second.receive_json()
        # One subscriber is still here
        first.send_json({"isTyping": True})
        first.receive_json()
        assert len(registry) == 1

    assert len(registry) == 0


def test_typing_socket_rejects_bad_token():
    client = TestClient(create_app())
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/api/v1/realtime/typing/location_1?token=garbage"):
            pass
    assert exc_info.value.code == 1008


def test_chat_socket_answers_ping():
    client = TestClient(create_app())
    token = create_access_token("4b0f5c1e-7f7e-4a44-9d43-3cf1f9a3e003")
    with client.websocket_connect(f"/api/v1/realtime/chat/location_1?token={token}") as ws:
        ws.send_text("ping")
        assert ws.receive_text() == "pong"
