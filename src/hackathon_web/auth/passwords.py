"""
hackathon_web.auth.passwords

Password hashing helpers (bcrypt).
"""

from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes; newer releases reject longer input outright.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash"""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


# --- Module Notes -----------------------------------------------------------
# Hashes carry their own salt and cost factor, so raising the cost only affects new hashes.
