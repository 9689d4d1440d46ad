import hashlib
import hmac

from longedrome.backend.security import generate_token, hash_token, verify_token


def test_hash_token_is_deterministic_for_same_inputs() -> None:
    hashed_first = hash_token("session-token", "local-dev-salt")
    hashed_second = hash_token("session-token", "local-dev-salt")

    assert hashed_first == hashed_second
    assert len(hashed_first) == 64


def test_hash_token_depends_on_salt() -> None:
    assert hash_token("session-token", "salt-a") != hash_token("session-token", "salt-b")


def test_verify_token_accepts_valid_and_rejects_invalid_token() -> None:
    salt = "local-dev-salt"
    stored_hash = hash_token("session-token", salt)

    assert verify_token("session-token", stored_hash, salt) is True
    assert verify_token("wrong-token", stored_hash, salt) is False


def test_generate_token_returns_distinct_values() -> None:
    first = generate_token()
    second = generate_token()

    assert first
    assert first != second


def test_verify_token_rejects_empty_values() -> None:
    stored_hash = hash_token("session-token", "salt")

    assert verify_token("", stored_hash, "salt") is False
    assert verify_token("session-token", "", "salt") is False


def test_hash_token_is_hmac_keyed_by_salt() -> None:
    expected = hmac.new(b"salt", b"session-token", hashlib.sha256).hexdigest()

    assert hash_token("session-token", "salt") == expected
