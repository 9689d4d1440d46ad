"""Session store: owns session snapshots and serialises mutations per session."""

from __future__ import annotations

import logging
import random
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from longedrome.backend.config import DEFAULT_CONFIG, GameConfig
from longedrome.backend.engine import ActionResult, apply_player_action
from longedrome.backend.models import CreatedSession, SessionRecord
from longedrome.backend.security import hash_token, verify_token
from longedrome.backend.state import build_initial_state

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def create_session(self, token: str) -> CreatedSession:
        """Create a session in the tutorial state bound to ``token``."""

    def get_session_state(self, session_id: str, raw_token: str) -> SessionRecord | None:
        """Return the session snapshot when the token is valid."""

    def apply_action(self, session_id: str, raw_token: str, action: dict[str, Any]) -> ActionResult | None:
        """Apply a player action and return the new state and engine events when authorized."""


@dataclass
class _SessionEntry:
    state: dict[str, Any]
    token_hash: str
    rng: random.Random
    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass
class InMemorySessionStore:
    server_salt: str
    config: GameConfig = DEFAULT_CONFIG
    seed: int | None = None

    def __post_init__(self) -> None:
        self._sessions: dict[str, _SessionEntry] = {}
        self._registry_lock = threading.Lock()

    def create_session(self, token: str) -> CreatedSession:
        session_id = str(uuid.uuid4())
        entry = _SessionEntry(
            state=build_initial_state(session_id=session_id, config=self.config),
            token_hash=hash_token(token, self.server_salt),
            rng=random.Random(self.seed),
        )
        with self._registry_lock:
            self._sessions[session_id] = entry
        logger.info("Created session %s", session_id)
        return CreatedSession(session_id=session_id, token=token)

    def _authorized_entry(self, session_id: str, raw_token: str) -> _SessionEntry | None:
        with self._registry_lock:
            entry = self._sessions.get(session_id)
        if entry is None:
            return None
        if not verify_token(raw_token, entry.token_hash, self.server_salt):
            logger.warning("Rejected token for session %s", session_id)
            return None
        return entry

    def get_session_state(self, session_id: str, raw_token: str) -> SessionRecord | None:
        entry = self._authorized_entry(session_id=session_id, raw_token=raw_token)
        if entry is None:
            return None
        with entry.lock:
            return SessionRecord(session_id=session_id, state=entry.state)

    def apply_action(self, session_id: str, raw_token: str, action: dict[str, Any]) -> ActionResult | None:
        entry = self._authorized_entry(session_id=session_id, raw_token=raw_token)
        if entry is None:
            return None
        with entry.lock:
            reduced = apply_player_action(state=entry.state, action=action, config=self.config, rng=entry.rng)
            entry.state = self._next_state_with_events(
                state=reduced.state,
                previous=entry.state,
                event={"kind": "action", "action": action},
                engine_events=reduced.engine_events,
            )
            return ActionResult(state=entry.state, engine_events=reduced.engine_events)

    def _next_state_with_events(
        self,
        state: dict[str, Any],
        previous: dict[str, Any],
        event: dict[str, Any],
        engine_events: list[dict[str, Any]],
    ) -> dict[str, Any]:
        next_state = dict(state)
        next_state["version"] = int(previous["version"]) + 1
        next_meta = dict(previous["meta"])
        next_meta["updatedAt"] = datetime.now(timezone.utc).isoformat()
        next_state["meta"] = next_meta

        next_log = list(previous.get("log", []))
        next_log.append(event)
        next_log.extend(engine_events)
        next_state["log"] = next_log
        return next_state


def create_store(server_salt: str, seed: int | None = None, config: GameConfig = DEFAULT_CONFIG) -> SessionStore:
    return InMemorySessionStore(server_salt=server_salt, config=config, seed=seed)
