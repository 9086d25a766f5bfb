"""
hackathon_web.db.repositories.sessions

Repository for `SessionRecord` entities: the Session Store.

Responsibilities:
- get/set/touch/destroy session state keyed by session id.
- Enforce expiry: a record past `expires_at` is treated as absent.
- Sliding window: saving or touching a record pushes `expires_at` to now + max_age.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from hackathon_web.db.models import SessionRecord, utcnow


class SessionRepo:
    def __init__(
        self,
        session: AsyncSession,
        *,
        max_age: timedelta,
        touch_after: timedelta,
    ) -> None:
        self._session = session
        self._max_age = max_age
        self._touch_after = touch_after

    async def get(self, session_id: str, *, now: datetime | None = None) -> SessionRecord | None:
        now = now or utcnow()
        record = await self._session.get(SessionRecord, session_id)
        if record is None:
            return None
        if record.expires_at <= now:
            # Expired records are dropped lazily on lookup; `purge_expired` sweeps the rest.
            await self._session.delete(record)
            await self._session.flush()
            return None
        return record

    async def set(
        self, session_id: str, data: dict[str, Any], *, now: datetime | None = None
    ) -> SessionRecord:
        now = now or utcnow()
        record = await self._session.get(SessionRecord, session_id)
        if record is None:
            record = SessionRecord(id=session_id)
            self._session.add(record)
        record.data = data
        record.updated_at = now
        record.expires_at = now + self._max_age
        await self._session.flush()
        return record

    async def touch(self, session_id: str, *, now: datetime | None = None) -> bool:
        """
        Refresh expiry of an unmodified session, at most once per `touch_after`.
        Returns True when the record was actually written.
        """

        now = now or utcnow()
        record = await self._session.get(SessionRecord, session_id)
        if record is None:
            return False
        if now - record.updated_at < self._touch_after:
            return False
        record.updated_at = now
        record.expires_at = now + self._max_age
        await self._session.flush()
        return True

    async def destroy(self, session_id: str) -> None:
        await self._session.execute(delete(SessionRecord).where(SessionRecord.id == session_id))

    async def purge_expired(self, *, now: datetime | None = None) -> int:
        now = now or utcnow()
        result = await self._session.execute(
            delete(SessionRecord).where(SessionRecord.expires_at <= now)
        )
        return result.rowcount or 0


# --- Module Notes -----------------------------------------------------------
# Concurrent writes to one session id are last-write-wins; no row locking is used.
