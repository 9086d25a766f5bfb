"""
hackathon_web.context

Explicit application context shared by the request pipeline and routes.

Responsibilities:
- Own the engine, the DB session factory and the templates for one app instance.
- Build per-use collaborators (credential store, session store) on a DB session.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hackathon_web.auth.credentials import CredentialStore, LocalCredentialStore
from hackathon_web.db.repositories.sessions import SessionRepo
from hackathon_web.db.session import create_engine, create_sessionmaker
from hackathon_web.sessions.tokens import SessionTokenConfig
from hackathon_web.settings import Settings
from hackathon_web.templating import create_templates


@dataclass(slots=True)
class AppContext:
    settings: Settings
    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]
    templates: Jinja2Templates
    credential_store_factory: Callable[[AsyncSession], CredentialStore] = field(
        default=LocalCredentialStore
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        engine = create_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            sessionmaker=create_sessionmaker(engine),
            templates=create_templates(),
        )

    @property
    def session_max_age(self) -> timedelta:
        return timedelta(seconds=self.settings.session_max_age_seconds)

    @property
    def session_token_config(self) -> SessionTokenConfig:
        return SessionTokenConfig(
            secret=self.settings.session_secret,
            issuer=self.settings.session_token_issuer,
            max_age=self.session_max_age,
        )

    def credentials(self, db: AsyncSession) -> CredentialStore:
        return self.credential_store_factory(db)

    def session_store(self, db: AsyncSession) -> SessionRepo:
        return SessionRepo(
            db,
            max_age=self.session_max_age,
            touch_after=timedelta(seconds=self.settings.session_touch_after_seconds),
        )

    async def purge_expired_sessions(self) -> int:
        async with self.sessionmaker() as db:
            purged = await self.session_store(db).purge_expired()
            await db.commit()
        return purged


# --- Module Notes -----------------------------------------------------------
# One context per `create_app` call; tests build several apps side by side without
# sharing engines.
