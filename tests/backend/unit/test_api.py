import pytest

fastapi = pytest.importorskip("fastapi")
pytest.importorskip("httpx")
from fastapi.testclient import TestClient

from longedrome.backend.api import create_app
from longedrome.backend.store import InMemorySessionStore


def test_post_sessions_returns_id_and_token() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    client = TestClient(create_app(store=store))

    response = client.post("/api/sessions")

    assert response.status_code == 200
    data = response.json()
    assert data["session_id"]
    assert data["token"]


def test_get_session_returns_full_state_for_valid_token() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    client = TestClient(create_app(store=store))

    created = client.post("/api/sessions").json()
    session_id = created["session_id"]

    response = client.get(f"/api/sessions/{session_id}", params={"token": created["token"]})

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["id"] == session_id
    assert state["gameState"] == "tutorial"


def test_get_session_rejects_invalid_token() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    client = TestClient(create_app(store=store))

    created = client.post("/api/sessions").json()

    response = client.get(f"/api/sessions/{created['session_id']}", params={"token": "invalid"})

    assert response.status_code == 404


def test_post_action_accepts_owner_and_rejects_other_token() -> None:
    store = InMemorySessionStore(server_salt="test-salt", seed=1)
    client = TestClient(create_app(store=store))

    created = client.post("/api/sessions").json()
    session_id = created["session_id"]

    forbidden = client.post(
        f"/api/sessions/{session_id}/actions",
        json={"token": "invalid", "action": {"type": "COMPLETE_TUTORIAL"}},
    )
    allowed = client.post(
        f"/api/sessions/{session_id}/actions",
        json={"token": created["token"], "action": {"type": "COMPLETE_TUTORIAL"}},
    )

    assert forbidden.status_code == 403
    assert allowed.status_code == 200
    body = allowed.json()
    assert body["state"]["gameState"] == "idle"
    assert [event["kind"] for event in body["events"]] == ["tutorial_completed"]


def test_post_action_rejects_empty_token() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    client = TestClient(create_app(store=store))

    created = client.post("/api/sessions").json()

    response = client.post(
        f"/api/sessions/{created['session_id']}/actions",
        json={"token": "", "action": {"type": "RESET"}},
    )

    assert response.status_code == 422


def test_websocket_sends_initial_state_after_connect() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    client = TestClient(create_app(store=store))

    created = client.post("/api/sessions").json()
    session_id = created["session_id"]

    with client.websocket_connect(f"/ws/sessions/{session_id}?token={created['token']}") as websocket:
        message = websocket.receive_json()

    assert message["type"] == "state.full"
    assert message["state"]["id"] == session_id


def test_websocket_rejects_invalid_token() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    client = TestClient(create_app(store=store))

    created = client.post("/api/sessions").json()

    with pytest.raises(Exception):
        with client.websocket_connect(f"/ws/sessions/{created['session_id']}?token=invalid"):
            pass


def test_websocket_broadcasts_full_state_to_all_clients() -> None:
    store = InMemorySessionStore(server_salt="test-salt")
    app = create_app(store=store)

    with TestClient(app) as client:
        created = client.post("/api/sessions").json()
        session_id = created["session_id"]
        token = created["token"]

        with client.websocket_connect(f"/ws/sessions/{session_id}?token={token}") as ws_first:
            with client.websocket_connect(f"/ws/sessions/{session_id}?token={token}") as ws_second:
                ws_first.receive_json()
                ws_second.receive_json()

                client.post(
                    f"/api/sessions/{session_id}/actions",
                    json={"token": token, "action": {"type": "COMPLETE_TUTORIAL"}},
                )

                first_message = ws_first.receive_json()
                second_message = ws_second.receive_json()

    assert first_message["type"] == "state.full"
    assert first_message["state"]["gameState"] == "idle"
    assert second_message["state"]["version"] == 2
