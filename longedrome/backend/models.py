"""Domain records shared by the engine, the store and the API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PalindromeSpan:
    start: int
    length: int
    tokens: tuple[str, ...]

    @property
    def end(self) -> int:
        return self.start + self.length

    def indices(self) -> list[int]:
        return list(range(self.start, self.end))

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "length": self.length, "tokens": list(self.tokens)}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PalindromeSpan":
        return cls(
            start=int(payload.get("start", 0)),
            length=int(payload.get("length", 0)),
            tokens=tuple(payload.get("tokens", ())),
        )


@dataclass(frozen=True)
class SubmissionResult:
    valid: bool
    reason: str | None
    state: dict[str, Any]


@dataclass(frozen=True)
class EnemyTurnOutcome:
    damage: int
    state: dict[str, Any]
    outcome: str
    events: list[dict[str, Any]]


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    state: dict[str, Any]


@dataclass(frozen=True)
class CreatedSession:
    session_id: str
    token: str
