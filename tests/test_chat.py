import pytest
from starlette.websockets import WebSocketState

from wolfpack.realtime.channels import ChannelHub, chat_topic, typing_topic


class FakeSocket:
    def __init__(self, fail: bool = False):
        self.application_state = WebSocketState.CONNECTING
        self.sent: list[dict] = []
        self.fail = fail

    async def accept(self):
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, payload):
        if self.fail:
            raise RuntimeError("socket gone")
        self.sent.append(payload)


@pytest.mark.unit
def test_topic_names():
    assert typing_topic("location_1") == "typing_location_1"
    assert chat_topic("location_1") == "chat_location_1"


async def test_hub_delivers_to_topic_subscribers_only():
    hub = ChannelHub()
    here, there = FakeSocket(), FakeSocket()
    await hub.subscribe("chat_a", here)
    await hub.subscribe("chat_b", there)

    assert await hub.broadcast("chat_a", {"n": 1}) == 1
    assert here.sent == [{"n": 1}]
    assert there.sent == []
    assert await hub.broadcast("chat_empty", {"n": 2}) == 0


async def test_hub_drops_failing_subscribers():
    hub = ChannelHub()
    good, bad = FakeSocket(), FakeSocket(fail=True)
    await hub.subscribe("chat_a", good)
    await hub.subscribe("chat_a", bad)

    assert await hub.broadcast("chat_a", {"n": 1}) == 1
    assert hub.subscriber_count("chat_a") == 1
    stats = hub.get_stats()
    assert stats["dropped_connections"] == 1
    assert stats["active_connections"] == 1

    await hub.unsubscribe("chat_a", good)
    assert hub.subscriber_count("chat_a") == 0
    assert hub.get_stats()["topics"] == 0


async def test_post_and_list_session_chat(client, app, make_user, auth_headers):
    listener = FakeSocket()
    await app.state.channels.subscribe(chat_topic("location_42"), listener)
    user = await make_user(display_name="Ann", avatar_url="https://cdn.example.com/ann.png")

    created = await client.post(
        "/api/v1/chat/location_42/messages", json={"content": "  first round on me  "}, headers=auth_headers(user)
    )
    assert created.status_code == 201
    message = created.json()
    assert message["content"] == "first round on me"
    assert message["display_name"] == "Ann"
    assert message["avatar_url"] == "https://cdn.example.com/ann.png"
    assert message["message_type"] == "text"

    await client.post("/api/v1/chat/location_42/messages", json={"content": "second"}, headers=auth_headers(user))
    await client.post("/api/v1/chat/elsewhere/messages", json={"content": "other room"}, headers=auth_headers(user))

    listed = (await client.get("/api/v1/chat/location_42/messages", headers=auth_headers(user))).json()
    assert [m["content"] for m in listed] == ["first round on me", "second"]

    assert [frame["type"] for frame in listener.sent] == ["chat_message", "chat_message"]
    assert listener.sent[0]["message"]["id"] == message["id"]


async def test_empty_chat_message_is_rejected(client, make_user, auth_headers):
    user = await make_user()
    response = await client.post("/api/v1/chat/location_42/messages", json={"content": " "}, headers=auth_headers(user))
    assert response.status_code == 400


async def test_realtime_stats(client, app):
    await app.state.channels.subscribe(typing_topic("location_1"), FakeSocket())
    body = (await client.get("/api/v1/realtime/stats")).json()
    assert body["topics"] == 1
    assert body["active_connections"] == 1


async def test_typing_snapshot_endpoint(client, app, make_user, auth_headers):
    user = await make_user()
    app.state.typing.tracker("location_1").update("u1", "Ann", True)
    body = (await client.get("/api/v1/realtime/typing/location_1", headers=auth_headers(user))).json()
    assert body == {"session_id": "location_1", "typing_users": ["Ann"]}
