"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file and an HTTP client that
keeps cookies between requests like a browser would.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy import func, select

from hackathon_web.api.app import create_app
from hackathon_web.db.models import SessionRecord
from hackathon_web.settings import Settings


def make_settings(tmp_path, **overrides) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        **overrides,
    )


def add_route_first(app: FastAPI, path: str, endpoint: Callable, methods: list[str]) -> None:
    # The not-found fallback matches everything, so test-only routes go in front of it.
    app.router.add_api_route(path, endpoint, methods=methods)
    app.router.routes.insert(0, app.router.routes.pop())


async def count_sessions(app: FastAPI) -> int:
    async with app.state.context.sessionmaker() as db:
        stmt = select(func.count()).select_from(SessionRecord)
        return (await db.execute(stmt)).scalar_one()


@pytest_asyncio.fixture
async def app(tmp_path) -> AsyncIterator[FastAPI]:
    app = create_app(settings=make_settings(tmp_path))
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


async def register(
    client: httpx.AsyncClient, username: str = "alice", password: str = "s3cret"
) -> httpx.Response:
    return await client.post(
        "/register",
        data={"username": username, "email": f"{username}@example.com", "password": password},
    )
