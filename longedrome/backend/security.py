"""Session token issuing and verification.

Raw tokens are handed to the client once and never stored. The store keeps
an HMAC-SHA256 digest keyed by the server salt.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

TOKEN_BYTES = 24


def generate_token(nbytes: int = TOKEN_BYTES) -> str:
    """Generate a URL-safe token that grants control of one session."""
    return secrets.token_urlsafe(nbytes)


def hash_token(token: str, server_salt: str) -> str:
    """Return the HMAC-SHA256 hex digest of ``token`` keyed by ``server_salt``."""
    return hmac.new(server_salt.encode("utf-8"), token.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_token(raw_token: str, expected_hash: str, server_salt: str) -> bool:
    """Compare a raw token against a stored digest in constant time."""
    if not raw_token or not expected_hash:
        return False
    return hmac.compare_digest(hash_token(raw_token, server_salt), expected_hash)
