"""
API Tests
==========
Route functions are called directly on an event loop (no server needed),
the websocket manager is exercised with a fake socket.
"""

import asyncio
import json

import pytest
from fastapi import HTTPException, WebSocketDisconnect

from stressmeter.api import routes
from stressmeter.api.server import create_app
from stressmeter.api.ws_handler import ConnectionManager
from stressmeter.config.profiles import ReliefItemProfile, SessionProfile, StressProfile
from stressmeter.schemas import ChatResponse, InteractRequest
from stressmeter.session import GameSession


class FakeWebSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.accepted = False
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_text(self, text):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(json.loads(text))


class SlowWebSocket(FakeWebSocket):
    """Yields to the event loop on every send, like a real network write."""

    async def send_text(self, text):
        await asyncio.sleep(0)
        await super().send_text(text)


class ScriptedWebSocket(FakeWebSocket):
    """Plays back queued client messages, then disconnects."""

    def __init__(self, incoming):
        super().__init__()
        self.incoming = list(incoming)

    async def receive_text(self):
        if not self.incoming:
            raise WebSocketDisconnect()
        return self.incoming.pop(0)


def run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def app_session():
    profile = SessionProfile(
        stress=StressProfile(starting=50),
        items=[ReliefItemProfile(name="coffee", reduction=10, max_uses=1)],
    )
    session = GameSession(profile)
    app = create_app(session)
    return app, session


def test_app_has_routes(app_session):
    app, session = app_session
    paths = {route.path for route in app.routes}
    assert "/api/state" in paths
    assert "/api/items/{name}/use" in paths
    assert "/ws" in paths
    assert app.state.session is session


def test_health_and_state(app_session):
    assert run(routes.root())["status"] == "ok"
    state = run(routes.get_state())
    assert state["stress"]["current"] == 50


def test_post_responses(app_session):
    _, session = app_session
    resp = run(routes.post_response(ChatResponse(message="hello", action="positive")))
    assert resp["counted"] is True
    assert resp["state"]["stress"]["current"] == 32
    resp = run(routes.post_audio_response())
    assert resp["state"]["stress"]["current"] == 34
    assert session.responses.total_responses == 2


def test_use_refill_and_interact_item(app_session):
    _, session = app_session
    result = run(routes.use_item("coffee"))
    assert result.outcome == "used"
    assert result.stress == 40
    assert result.remaining_uses == 0

    assert run(routes.use_item("coffee")).outcome == "empty"
    assert run(routes.refill_item("coffee"))["remaining_uses"] == 1

    resp = run(routes.interact_item("coffee", InteractRequest(distance=10.0)))
    assert resp["fired"] is False
    assert resp["outcome"] is None
    resp = run(routes.interact_item("coffee", InteractRequest(distance=1.0)))
    assert resp["fired"] is True
    assert resp["outcome"] == "used"
    assert resp["interactable"]["hint"] == "Empty"
    assert session.accumulator.current == 30

    items = run(routes.get_items())["items"]
    assert items[0]["name"] == "coffee"


def test_unknown_item_is_404(app_session):
    with pytest.raises(HTTPException) as exc:
        run(routes.use_item("sandwich"))
    assert exc.value.status_code == 404


def test_events_and_reset(app_session):
    _, session = app_session
    for _ in range(3):
        run(routes.post_response(ChatResponse(action="NEGATIVE")))
    events = run(routes.get_events(limit=5))
    assert len(events["events"]) == 5
    assert events["total"] == len(session.events)

    snap = run(routes.reset_session())
    assert snap["stress"]["current"] == 50
    assert snap["responses"]["total_responses"] == 0


def test_no_session_is_503():
    routes.set_app_state({})
    with pytest.raises(HTTPException) as exc:
        run(routes.get_state())
    assert exc.value.status_code == 503


def test_mutations_broadcast_to_websockets(app_session):
    app, _ = app_session
    manager = app.state.ws_manager
    ws = FakeWebSocket()
    run(manager.connect(ws))
    assert ws.accepted
    run(routes.post_response(ChatResponse(action="NEGATIVE")))
    assert ws.sent[-1]["type"] == "update"
    assert ws.sent[-1]["data"]["stress"]["current"] == 72


def test_connection_manager_drops_dead_sockets():
    manager = ConnectionManager()
    good, bad = FakeWebSocket(), FakeWebSocket(fail=True)
    run(manager.connect(good))
    run(manager.connect(bad))
    assert manager.client_count == 2
    assert run(manager.broadcast({"type": "ping"})) == 1
    assert manager.client_count == 1
    assert good.sent == [{"type": "ping"}]
    manager.disconnect(good)
    assert manager.client_count == 0


def test_interact_after_game_over_reports_outcome(app_session):
    _, session = app_session
    for _ in range(3):
        run(routes.post_response(ChatResponse(action="NEGATIVE")))
    assert session.game_over

    resp = run(routes.interact_item("coffee", InteractRequest(distance=1.0)))
    assert resp["fired"] is True
    assert resp["outcome"] == "game_over"
    assert resp["item"]["remaining_uses"] == 1
    assert session.accumulator.current == 100


def test_leave_item(app_session):
    _, session = app_session
    assert run(routes.leave_item("coffee", InteractRequest(distance=2.0)))["left"] is False
    assert run(routes.leave_item("coffee", InteractRequest(distance=8.0)))["left"] is True
    assert session.events[-1]["type"] == "left_range"


def test_events_limit_boundaries(app_session):
    _, session = app_session
    run(routes.post_response(ChatResponse(action="NEGATIVE")))
    total = len(session.events)
    assert total > 1

    assert run(routes.get_events(limit=0)) == {"events": [], "total": total}
    newest = run(routes.get_events(limit=1))["events"]
    assert newest == [session.events[-1]]
    assert len(run(routes.get_events(limit=total + 10))["events"]) == total


def test_broadcast_while_a_client_joins():
    manager = ConnectionManager()
    slow = [SlowWebSocket() for _ in range(3)]
    late = FakeWebSocket()

    async def scenario():
        for ws in slow:
            await manager.connect(ws)
        return await asyncio.gather(manager.broadcast({"type": "ping"}), manager.connect(late))

    delivered, _ = run(scenario())
    assert delivered == 3
    assert manager.client_count == 4
    assert all(ws.sent == [{"type": "ping"}] for ws in slow)
    assert late.sent == []


def test_broadcast_drops_failing_client_midway():
    manager = ConnectionManager()
    clients = [SlowWebSocket(), SlowWebSocket(fail=True), SlowWebSocket()]
    for ws in clients:
        run(manager.connect(ws))
    assert run(manager.broadcast({"type": "ping"})) == 2
    assert manager.client_count == 2


@pytest.mark.parametrize("text", ["[1, 2]", "42", "null", '"get_state"', "not json", '{"action": "dance"}'])
def test_ws_ignores_unexpected_messages(text):
    manager = ConnectionManager()
    ws = FakeWebSocket()
    run(manager.connect(ws))
    assert run(manager.handle_message(ws, text, lambda: {"stress": 1})) is False
    assert ws.sent == []
    assert manager.client_count == 1


def test_ws_get_state_is_answered():
    manager = ConnectionManager()
    ws = FakeWebSocket()
    run(manager.connect(ws))
    assert run(manager.handle_message(ws, '{"action": "get_state"}', lambda: {"stress": 1})) is True
    assert ws.sent == [{"type": "state", "data": {"stress": 1}}]


def test_ws_endpoint_keeps_serving_after_odd_messages(app_session):
    app, _ = app_session
    endpoint = next(route.endpoint for route in app.routes if route.path == "/ws")
    ws = ScriptedWebSocket(["[1, 2]", "7", '{"action": "get_state"}'])

    run(endpoint(ws))
    assert [msg["type"] for msg in ws.sent] == ["update", "state"]
    assert app.state.ws_manager.client_count == 0
