"""
hackathon_web.sessions.tokens

Signed cookie values for session identifiers.

Responsibilities:
- Issue an HS256 JWT whose subject is the opaque session id.
- Verify a cookie value and return the session id, or None when it is not trustworthy.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError


@dataclass(frozen=True, slots=True)
class SessionTokenConfig:
    secret: str
    issuer: str
    max_age: timedelta
    alg: str = "HS256"


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def issue_session_token(*, cfg: SessionTokenConfig, session_id: str) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "sub": session_id,
        "iat": int(now.timestamp()),
        "exp": int((now + cfg.max_age).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def read_session_token(*, cfg: SessionTokenConfig, token: str | None) -> str | None:
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
    except InvalidTokenError:
        # Tampered, expired or foreign cookies behave like a missing cookie.
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None


# --- Module Notes -----------------------------------------------------------
# The token only proves the id was issued by us. Whether the session still exists
# is decided by the store (`db.repositories.sessions`).
