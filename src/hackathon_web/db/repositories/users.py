"""
hackathon_web.db.repositories.users

Repository for `User` entities.

Responsibilities:
- Create accounts and look them up by id or username.
- Check username/email uniqueness before registration.
"""

from __future__ import annotations

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hackathon_web.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, username: str, email: str, password_hash: str) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists(self, *, username: str, email: str) -> bool:
        stmt = select(User.id).where(or_(User.username == username, User.email == email)).limit(1)
        return (await self._session.execute(stmt)).first() is not None


# --- Module Notes -----------------------------------------------------------
# Password hashing happens in `auth.passwords`; this repo only stores the hash.
