import pytest

pytest.importorskip("uvicorn")

from longedrome.backend import server


def test_parse_args_defaults_come_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("LONGEDROME_HOST", "0.0.0.0")
    monkeypatch.setenv("LONGEDROME_PORT", "9100")

    args = server.parse_args([])

    assert args.host == "0.0.0.0"
    assert args.port == 9100
    assert args.log_level == "info"


def test_main_runs_uvicorn_with_parsed_address(monkeypatch) -> None:
    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    exit_code = server.main(["--host", "localhost", "--port", "8123", "--log-level", "debug"])

    assert exit_code == 0
    assert calls == [
        ("longedrome.backend.api:app", {"host": "localhost", "port": 8123, "log_level": "debug"}),
    ]
