"""
hackathon_web.auth.credentials

Credential store: username/password accounts backed by the `users` table.

Responsibilities:
- Verify credentials and produce a `Principal`.
- Serialize a principal to the compact token kept in the session, and back.
- Register new accounts.
"""

from __future__ import annotations

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from hackathon_web.auth.models import Principal
from hackathon_web.auth.passwords import hash_password, verify_password
from hackathon_web.db.repositories.users import UserRepo
from hackathon_web.errors import AuthenticationError, DuplicateUserError

# Compared against when the username is unknown, so both failure paths cost a bcrypt check.
_DUMMY_HASH = hash_password("not-a-real-password")


class CredentialStore(Protocol):
    async def authenticate(self, username: str, password: str) -> Principal: ...

    def serialize(self, principal: Principal) -> str: ...

    async def deserialize(self, token: str) -> Principal | None: ...

    async def register(self, *, username: str, email: str, password: str) -> Principal: ...


class LocalCredentialStore:
    """
    Local username/password strategy over `UserRepo`.

    `authenticate` raises `AuthenticationError` with the same message for an
    unknown user and for a wrong password.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepo(session)

    async def authenticate(self, username: str, password: str) -> Principal:
        user = await self._users.get_by_username(username)
        if user is None:
            verify_password(password, _DUMMY_HASH)
            raise AuthenticationError()
        if not verify_password(password, user.password_hash):
            raise AuthenticationError()
        return Principal.from_user(user)

    def serialize(self, principal: Principal) -> str:
        return str(principal.id)

    async def deserialize(self, token: str) -> Principal | None:
        try:
            user_id = uuid.UUID(token)
        except (TypeError, ValueError):
            return None
        user = await self._users.get(user_id)
        return Principal.from_user(user) if user is not None else None

    async def register(self, *, username: str, email: str, password: str) -> Principal:
        if await self._users.exists(username=username, email=email):
            raise DuplicateUserError()
        user = await self._users.create(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        await self._session.commit()
        return Principal.from_user(user)


# --- Module Notes -----------------------------------------------------------
# Any backend with the three `CredentialStore` methods can replace this one; the
# pipeline obtains stores through `AppContext.credentials`.
