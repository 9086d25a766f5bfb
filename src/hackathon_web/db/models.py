"""
hackathon_web.db.models

Persistence schema.

Responsibilities:
- User: an account with username/password authentication.
- SessionRecord: server-side session state keyed by the opaque session id.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from hackathon_web.db.base import Base


def utcnow() -> datetime:
    # Naive UTC timestamps; SQLite does not keep tz info anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    # bcrypt hash; never rendered or put into a session.
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


class SessionRecord(Base):
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    expires_at: Mapped[datetime] = mapped_column(nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


# --- Module Notes -----------------------------------------------------------
# `SessionRecord.updated_at` is the last save/touch time; the store compares it with
# the touch interval to decide whether an unmodified session needs its expiry pushed.
