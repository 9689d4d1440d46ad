"""State builders and stat helpers for game session snapshots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .config import DEFAULT_CONFIG, GameConfig
from .disposition import clamp_amiability

GAME_STATES = ("tutorial", "idle", "userTurn", "enemyTurn", "home", "gameOver", "victory")
TERMINAL_STATES = frozenset({"gameOver", "victory"})


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_initial_state(session_id: str, config: GameConfig = DEFAULT_CONFIG, epoch: int = 0) -> dict[str, Any]:
    """Return a fresh session in the tutorial state."""
    now = _utc_now_iso()
    return {
        "id": session_id,
        "version": 1,
        "gameState": "tutorial",
        "turnCount": 0,
        "finalBattle": False,
        "sequence": [],
        "optimal": None,
        "selection": [],
        "showOptimal": False,
        "hasSubmittedThisTurn": False,
        "hasTalkedThisRound": False,
        "hasRestedThisTurn": False,
        "homePromptShown": False,
        "lastSubmission": None,
        "pendingSteps": [],
        "epoch": epoch,
        "stats": {
            "hp": config.player_max_hp,
            "maxHp": config.player_max_hp,
            "mp": config.player_max_mp,
            "maxMp": config.player_max_mp,
        },
        "enemy": {
            "hp": config.enemy_max_hp,
            "maxHp": config.enemy_max_hp,
            "amiability": clamp_amiability(config.enemy_amiability),
        },
        "npcName": config.npc_name,
        "feedback": "",
        "dialog": None,
        "log": [],
        "meta": {
            "createdAt": now,
            "updatedAt": now,
        },
    }


def adjust_player_stats(stats: dict[str, Any], hp: int = 0, mp: int = 0) -> dict[str, Any]:
    """Return new player stats with hp/mp shifted and clamped to ``[0, max]``."""
    next_stats = dict(stats)
    next_stats["hp"] = max(0, min(int(stats["maxHp"]), int(stats["hp"]) + hp))
    next_stats["mp"] = max(0, min(int(stats["maxMp"]), int(stats["mp"]) + mp))
    return next_stats
