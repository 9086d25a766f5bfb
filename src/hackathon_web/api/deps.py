"""
hackathon_web.api.deps

FastAPI dependency wiring for the route layer.

Responsibilities:
- Expose the `AppContext` built by `create_app`.
- Provide request-scoped DB sessions and credential stores.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hackathon_web.auth.credentials import CredentialStore
from hackathon_web.context import AppContext


def app_context(request: Request) -> AppContext:
    # Stored on app.state by `hackathon_web.api.app.create_app`.
    return request.app.state.context  # type: ignore[attr-defined]


async def db_session(context: AppContext = Depends(app_context)) -> AsyncIterator[AsyncSession]:
    async with context.sessionmaker() as session:
        yield session


def credential_store(
    context: AppContext = Depends(app_context),
    session: AsyncSession = Depends(db_session),
) -> CredentialStore:
    return context.credentials(session)
