from longedrome.backend.config import DEFAULT_CONFIG, load_settings


def test_load_settings_reads_expected_env(monkeypatch) -> None:
    monkeypatch.setenv("LONGEDROME_SERVER_SALT", "salt-1")
    monkeypatch.setenv("LONGEDROME_HOST", "localhost")
    monkeypatch.setenv("LONGEDROME_PORT", "9000")
    monkeypatch.setenv("LONGEDROME_SEED", "17")

    settings = load_settings()

    assert settings.server_salt == "salt-1"
    assert settings.host == "localhost"
    assert settings.port == 9000
    assert settings.seed == 17


def test_load_settings_applies_defaults(monkeypatch) -> None:
    monkeypatch.delenv("LONGEDROME_SERVER_SALT", raising=False)
    monkeypatch.delenv("LONGEDROME_HOST", raising=False)
    monkeypatch.delenv("LONGEDROME_PORT", raising=False)
    monkeypatch.delenv("LONGEDROME_SEED", raising=False)

    settings = load_settings()

    assert settings.server_salt == "dev-salt"
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.seed is None


def test_default_game_config_values() -> None:
    assert DEFAULT_CONFIG.max_turns == 6
    assert DEFAULT_CONFIG.magic_cost == 20
    assert DEFAULT_CONFIG.amiability_thresholds.hostile == 30
    assert DEFAULT_CONFIG.amiability_thresholds.friendly == 70
    assert DEFAULT_CONFIG.health_thresholds.weakened == 0.5
    assert DEFAULT_CONFIG.health_thresholds.critical == 0.1
    assert (DEFAULT_CONFIG.rest_healing.hp, DEFAULT_CONFIG.rest_healing.mp) == (30, 30)
