"""Tests for the HTTP endpoints and server wiring."""

import pytest
import socketio
from fastapi.testclient import TestClient

from src.draft_room.broadcast_gateway import BroadcastGateway
from src.server.app import create_api, create_app
from src.server.socketio_server import ACTION_EVENTS, create_socketio_server, register_handlers
from tests.conftest import make_engine, make_pool, pick_for_current


class NullEmitter:
    async def emit(self, event, data=None, to=None):
        pass

    async def enter_room(self, sid, room):
        pass


def _client(engine=None):
    engine = engine or make_engine()
    gateway = BroadcastGateway(engine, NullEmitter())
    return TestClient(create_api(gateway)), engine


def _finished_engine():
    engine = make_engine()
    engine.join("Alpha", "sid-alpha")
    engine.join("Beta", "sid-beta")
    engine.start()
    while not engine.is_complete:
        pick_for_current(engine)
    return engine


# ── /api/state ───────────────────────────────────────────────────────

class TestStateEndpoint:
    def test_setup_state(self):
        client, engine = _client()
        engine.join("Alpha", "sid-alpha")
        response = client.get("/api/state")
        assert response.status_code == 200
        body = response.json()
        assert body["phase"] == "setup"
        assert body["session_token"] == engine.draft_state.session_token
        assert [t["name"] for t in body["teams"]] == ["Alpha"]

    def test_state_tracks_picks(self):
        engine = make_engine()
        engine.join("Alpha", "sid-alpha")
        engine.join("Beta", "sid-beta")
        engine.start()
        pick = pick_for_current(engine)
        client, _ = _client(engine)
        body = client.get("/api/state").json()
        assert body["drafted_item_ids"] == [pick.item_id]
        assert body["current_pick_index"] == 1


# ── /api/players ─────────────────────────────────────────────────────

class TestPlayersEndpoint:
    def test_all_players(self):
        client, engine = _client()
        body = client.get("/api/players").json()
        assert len(body) == len(engine.pool)
        assert set(body[0]) == {"item_id", "name", "category", "group", "search_key"}

    @pytest.mark.parametrize("position,count", [("QB", 10), ("te", 12), ("ALL", 68), ("DST", 0)])
    def test_position_filter(self, position, count):
        client, _ = _client()
        body = client.get("/api/players", params={"position": position}).json()
        assert len(body) == count

    def test_drafted_players_hidden(self):
        engine = make_engine()
        engine.join("Alpha", "sid-alpha")
        engine.join("Beta", "sid-beta")
        engine.start()
        pick = pick_for_current(engine)
        client, _ = _client(engine)
        ids = [p["item_id"] for p in client.get("/api/players").json()]
        assert pick.item_id not in ids


# ── /api/results ─────────────────────────────────────────────────────

class TestResultsEndpoint:
    def test_not_complete_is_400(self):
        client, _ = _client()
        response = client.get("/api/results")
        assert response.status_code == 400
        assert response.json() == {"detail": "Draft is not complete"}

    def test_complete_results(self):
        client, engine = _client(_finished_engine())
        response = client.get("/api/results")
        assert response.status_code == 200
        body = response.json()
        assert body["session_token"] == engine.draft_state.session_token
        assert len(body["pick_history"]) == 14
        assert [t["name"] for t in body["teams"]] == ["Alpha", "Beta"]


# ── Wiring ───────────────────────────────────────────────────────────

class TestWiring:
    def test_all_action_events_registered(self):
        sio = create_socketio_server()
        gateway = BroadcastGateway(make_engine(), sio)
        register_handlers(sio, gateway)
        registered = set(sio.handlers["/"])
        assert set(ACTION_EVENTS) | {"connect", "disconnect"} <= registered

    def test_create_app(self, tmp_path):
        app = create_app(make_pool(), results_dir=tmp_path)
        assert isinstance(app, socketio.ASGIApp)
