from longedrome.backend.config import GameConfig
from longedrome.backend.state import GAME_STATES, TERMINAL_STATES, adjust_player_stats, build_initial_state


def test_build_initial_state_starts_in_tutorial() -> None:
    state = build_initial_state(session_id="session-123")

    assert state["id"] == "session-123"
    assert state["version"] == 1
    assert state["gameState"] == "tutorial"
    assert state["turnCount"] == 0
    assert state["finalBattle"] is False
    assert state["sequence"] == []
    assert state["optimal"] is None
    assert state["selection"] == []
    assert state["pendingSteps"] == []
    assert state["epoch"] == 0
    assert state["stats"] == {"hp": 100, "maxHp": 100, "mp": 50, "maxMp": 50}
    assert state["enemy"] == {"hp": 100, "maxHp": 100, "amiability": 50}
    assert state["npcName"] == "Ancient Guardian"
    assert state["dialog"] is None
    assert state["log"] == []


def test_terminal_states_are_game_states() -> None:
    assert TERMINAL_STATES <= set(GAME_STATES)
    assert "tutorial" not in TERMINAL_STATES


def test_build_initial_state_uses_shared_timestamp_for_meta_fields() -> None:
    state = build_initial_state(session_id="session-456")

    assert state["meta"]["createdAt"] == state["meta"]["updatedAt"]
    assert state["meta"]["createdAt"].endswith("+00:00")


def test_build_initial_state_honours_config_and_epoch() -> None:
    config = GameConfig(player_max_hp=80, player_max_mp=20, enemy_amiability=140)

    state = build_initial_state(session_id="session-789", config=config, epoch=4)

    assert state["stats"]["hp"] == 80
    assert state["stats"]["maxMp"] == 20
    assert state["enemy"]["amiability"] == 100
    assert state["epoch"] == 4


def test_adjust_player_stats_clamps_to_bounds() -> None:
    stats = {"hp": 90, "maxHp": 100, "mp": 5, "maxMp": 50}

    healed = adjust_player_stats(stats, hp=30, mp=-20)

    assert healed == {"hp": 100, "maxHp": 100, "mp": 0, "maxMp": 50}
    assert stats["hp"] == 90
