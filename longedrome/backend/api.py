"""Optional HTTP and WebSocket driver around the in-process engine.

The engine in `engine.py` needs none of this; these endpoints only create
sessions, forward player actions to the store and push full state snapshots.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field

from .config import load_settings
from .security import generate_token
from .store import SessionStore, create_store


class CreateSessionResponse(BaseModel):
    session_id: str
    token: str


class SessionStateResponse(BaseModel):
    state: dict[str, Any]


class ActionEnvelope(BaseModel):
    token: str = Field(min_length=1)
    action: dict[str, Any]


class ActionResponse(BaseModel):
    state: dict[str, Any]
    events: list[dict[str, Any]]


class SessionWebSocketHub:
    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)

    async def connect(self, session_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections[session_id].add(websocket)

    def disconnect(self, session_id: str, websocket: WebSocket) -> None:
        connections = self._connections.get(session_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(session_id, None)

    async def send_state(self, websocket: WebSocket, state: dict[str, Any]) -> None:
        await websocket.send_json({"type": "state.full", "state": state})

    async def broadcast_state(self, session_id: str, state: dict[str, Any]) -> None:
        stale_connections: list[WebSocket] = []
        for websocket in list(self._connections.get(session_id, set())):
            try:
                await self.send_state(websocket, state)
            except RuntimeError:
                stale_connections.append(websocket)
        for websocket in stale_connections:
            self.disconnect(session_id=session_id, websocket=websocket)


def _default_store() -> SessionStore:
    settings = load_settings()
    return create_store(server_salt=settings.server_salt, seed=settings.seed)


def create_app(store: SessionStore | None = None) -> FastAPI:
    app = FastAPI(title="Longedrome API", version="0.1.0")
    session_store = store if store is not None else _default_store()
    websocket_hub = SessionWebSocketHub()
    app.state.websocket_hub = websocket_hub

    def get_store() -> SessionStore:
        return session_store

    @app.post("/api/sessions", response_model=CreateSessionResponse)
    def create_session(local_store: SessionStore = Depends(get_store)) -> CreateSessionResponse:
        created = local_store.create_session(token=generate_token())
        return CreateSessionResponse(session_id=created.session_id, token=created.token)

    @app.get("/api/sessions/{session_id}", response_model=SessionStateResponse)
    def get_session(
        session_id: str,
        token: str = Query(min_length=1),
        local_store: SessionStore = Depends(get_store),
    ) -> SessionStateResponse:
        record = local_store.get_session_state(session_id=session_id, raw_token=token)
        if record is None:
            raise HTTPException(status_code=404, detail="Session not found or token invalid")
        return SessionStateResponse(state=record.state)

    @app.post("/api/sessions/{session_id}/actions", response_model=ActionResponse)
    async def post_action(
        session_id: str,
        payload: ActionEnvelope,
        local_store: SessionStore = Depends(get_store),
    ) -> ActionResponse:
        result = local_store.apply_action(session_id=session_id, raw_token=payload.token, action=payload.action)
        if result is None:
            raise HTTPException(status_code=403, detail="Action not allowed")
        await websocket_hub.broadcast_state(session_id=session_id, state=result.state)
        return ActionResponse(state=result.state, events=result.engine_events)

    @app.websocket("/ws/sessions/{session_id}")
    async def session_ws(
        websocket: WebSocket,
        session_id: str,
        local_store: SessionStore = Depends(get_store),
    ) -> None:
        token = websocket.query_params.get("token")
        if token is None or token == "":
            await websocket.close(code=1008)
            return
        record = local_store.get_session_state(session_id=session_id, raw_token=token)
        if record is None:
            await websocket.close(code=1008)
            return

        await websocket_hub.connect(session_id=session_id, websocket=websocket)
        await websocket_hub.send_state(websocket=websocket, state=record.state)

        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            websocket_hub.disconnect(session_id=session_id, websocket=websocket)

    return app


app = create_app()
