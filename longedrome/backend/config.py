"""Game thresholds and backend runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AmiabilityThresholds:
    hostile: int = 30
    friendly: int = 70


@dataclass(frozen=True)
class HealthThresholds:
    weakened: float = 0.5
    critical: float = 0.1


@dataclass(frozen=True)
class RestHealing:
    hp: int = 30
    mp: int = 30


@dataclass(frozen=True)
class GameConfig:
    """Static rules for one session. Supplied at session start and never changed."""

    max_turns: int = 6
    amiability_thresholds: AmiabilityThresholds = field(default_factory=AmiabilityThresholds)
    health_thresholds: HealthThresholds = field(default_factory=HealthThresholds)
    magic_cost: int = 20
    rest_healing: RestHealing = field(default_factory=RestHealing)
    sequence_min_length: int = 5
    sequence_max_length: int = 12
    player_max_hp: int = 100
    player_max_mp: int = 50
    enemy_max_hp: int = 100
    enemy_amiability: int = 50
    npc_name: str = "Ancient Guardian"


DEFAULT_CONFIG = GameConfig()


@dataclass(frozen=True)
class BackendSettings:
    server_salt: str
    host: str
    port: int
    seed: int | None


def load_settings() -> BackendSettings:
    port_raw = os.getenv("LONGEDROME_PORT", "8000")
    seed_raw = os.getenv("LONGEDROME_SEED")
    return BackendSettings(
        server_salt=os.getenv("LONGEDROME_SERVER_SALT", "dev-salt"),
        host=os.getenv("LONGEDROME_HOST", "127.0.0.1"),
        port=int(port_raw),
        seed=int(seed_raw) if seed_raw else None,
    )
