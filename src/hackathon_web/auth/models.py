"""
hackathon_web.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) attached to a request.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from hackathon_web.db.models import User


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated user for the current request. Never carries the password hash.
    """

    id: uuid.UUID
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> Principal:
        return cls(id=user.id, username=user.username, email=user.email)


# --- Module Notes -----------------------------------------------------------
# Templates receive this object as `current_user`; keep it free of secrets.
