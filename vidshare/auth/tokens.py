"""Access and refresh tokens.

Tokens are HMAC-SHA256 signed, base64url encoded JSON payloads carrying the
user id (``sub``), the token ``type`` and an ``exp`` timestamp.
"""

import base64
import hashlib
import hmac
import json
import secrets
import time
from dataclasses import dataclass
from uuid import UUID

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _sign(secret: str, payload_b64: str) -> bytes:
    return hmac.new(secret.encode(), payload_b64.encode(), hashlib.sha256).digest()


def create_signed_token(payload: dict, secret: str, expires_in: int) -> str:
    """Sign ``payload`` with an expiry ``expires_in`` seconds from now.

    Returns:
        ``base64(json_payload).base64(signature)``
    """
    payload = {**payload, "exp": int(time.time()) + expires_in}
    payload_bytes = json.dumps(payload, separators=(",", ":")).encode()
    payload_b64 = base64.urlsafe_b64encode(payload_bytes).decode()
    sig_b64 = base64.urlsafe_b64encode(_sign(secret, payload_b64)).decode()
    return f"{payload_b64}.{sig_b64}"


def verify_signed_token(token: str, secret: str) -> dict | None:
    """Decode a signed token.

    Returns ``None`` when the token is malformed, tampered with or expired.
    """
    parts = token.split(".")
    if len(parts) != 2:
        return None

    payload_b64, sig_b64 = parts
    try:
        actual_sig = base64.urlsafe_b64decode(sig_b64)
    except ValueError:
        return None

    if not hmac.compare_digest(_sign(secret, payload_b64), actual_sig):
        return None

    try:
        payload = json.loads(base64.urlsafe_b64decode(payload_b64))
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or time.time() > exp:
        return None

    return payload


def verify_token_of_type(token: str, secret: str, token_type: str) -> UUID | None:
    """Verify ``token`` and return its subject when it has the expected type."""
    payload = verify_signed_token(token, secret)
    if payload is None or payload.get("type") != token_type:
        return None
    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        return None


def issue_token_pair(user_id: UUID, secret: str, access_ttl: int, refresh_ttl: int) -> TokenPair:
    """Issue a short-lived access token and a longer-lived refresh token."""
    subject = str(user_id)
    return TokenPair(
        access_token=create_signed_token({"sub": subject, "type": ACCESS}, secret, access_ttl),
        refresh_token=create_signed_token(
            # jti keeps two refresh tokens issued within the same second distinct
            {"sub": subject, "type": REFRESH, "jti": secrets.token_urlsafe(9)},
            secret,
            refresh_ttl,
        ),
    )
