"""
tests.test_sessions

Session resolution: cookie issuance, lookup, tampering, expiry and touch semantics.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import httpx
import pytest
from fastapi import FastAPI, Request
from sqlalchemy import update

from hackathon_web.api.app import create_app
from hackathon_web.db.models import SessionRecord
from hackathon_web.db.repositories.sessions import SessionRepo
from hackathon_web.sessions.state import SessionState
from hackathon_web.sessions.tokens import (
    SessionTokenConfig,
    issue_session_token,
    read_session_token,
)
from tests.conftest import add_route_first, count_sessions, make_settings

T0 = datetime(2026, 1, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_new_client_gets_one_cookie_and_one_record(app: FastAPI, client: httpx.AsyncClient) -> None:
    r = await client.get("/")
    cookies = r.headers.get_list("set-cookie")
    assert len(cookies) == 1
    assert cookies[0].startswith("session=")
    assert "HttpOnly" in cookies[0]
    assert "Max-Age=604800" in cookies[0]
    assert await count_sessions(app) == 1

    r = await client.get("/")
    assert r.headers.get_list("set-cookie") == []
    assert await count_sessions(app) == 1


@pytest.mark.asyncio
async def test_session_values_persist_between_requests(app: FastAPI, client: httpx.AsyncClient) -> None:
    async def bump(request: Request) -> dict[str, int]:
        request.session["hits"] = request.session.get("hits", 0) + 1
        return {"hits": request.session["hits"]}

    add_route_first(app, "/bump", bump, ["GET"])

    assert (await client.get("/bump")).json() == {"hits": 1}
    assert (await client.get("/bump")).json() == {"hits": 2}
    assert (await client.get("/bump")).json() == {"hits": 3}


@pytest.mark.asyncio
async def test_tampered_cookie_starts_fresh_session(app: FastAPI, client: httpx.AsyncClient) -> None:
    await client.get("/")
    original = client.cookies["session"]

    tampered = original[:-4] + ("abcd" if not original.endswith("abcd") else "wxyz")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"cookie": f"session={tampered}"},
    ) as forged:
        r = await forged.get("/")

    assert len(r.headers.get_list("set-cookie")) == 1
    assert await count_sessions(app) == 2


def test_session_token_rejects_foreign_secret() -> None:
    cfg = SessionTokenConfig(secret="a" * 32, issuer="hackathon-web", max_age=timedelta(days=7))
    other = SessionTokenConfig(secret="b" * 32, issuer="hackathon-web", max_age=timedelta(days=7))

    token = issue_session_token(cfg=cfg, session_id="abc")
    assert read_session_token(cfg=cfg, token=token) == "abc"
    assert read_session_token(cfg=other, token=token) is None
    assert read_session_token(cfg=cfg, token=None) is None
    assert read_session_token(cfg=cfg, token="not-a-jwt") is None


def test_session_state_tracks_changes_and_rotation() -> None:
    fresh = SessionState.create()
    assert fresh.is_new and not fresh.modified

    loaded = SessionState("sid-1", {"flash": {"success": ["hi"]}})
    assert not loaded.modified
    loaded["flash"]["success"].pop()
    assert loaded.modified

    loaded.regenerate()
    assert loaded.rotated
    assert loaded.previous_id == "sid-1"
    assert loaded.session_id != "sid-1"
    assert loaded["flash"] == {"success": []}


@pytest.mark.asyncio
async def test_store_treats_expired_record_as_absent(app: FastAPI) -> None:
    ctx = app.state.context
    async with ctx.sessionmaker() as db:
        store = ctx.session_store(db)
        await store.set("sid", {"a": 1}, now=T0)
        await db.commit()

        assert (await store.get("sid", now=T0 + timedelta(days=6))) is not None
        assert (await store.get("sid", now=T0 + timedelta(days=7, seconds=1))) is None
        await db.commit()

    assert await count_sessions(app) == 0


@pytest.mark.asyncio
async def test_touch_refreshes_at_most_once_per_interval(app: FastAPI) -> None:
    async with app.state.context.sessionmaker() as db:
        store = SessionRepo(db, max_age=timedelta(days=7), touch_after=timedelta(hours=24))
        await store.set("sid", {}, now=T0)

        assert await store.touch("sid", now=T0 + timedelta(hours=1)) is False
        assert await store.touch("sid", now=T0 + timedelta(hours=25)) is True
        assert await store.touch("sid", now=T0 + timedelta(hours=26)) is False

        # Sliding window: still alive past the original 7 days.
        alive_at = T0 + timedelta(days=7, hours=12)
        record = await store.get("sid", now=alive_at)
        assert record is not None
        assert record.expires_at == T0 + timedelta(hours=25) + timedelta(days=7)

        assert await store.touch("missing", now=alive_at) is False


@pytest.mark.asyncio
async def test_purge_expired(app: FastAPI) -> None:
    async with app.state.context.sessionmaker() as db:
        store = app.state.context.session_store(db)
        await store.set("old", {}, now=T0 - timedelta(days=30))
        await store.set("new", {}, now=T0)
        assert await store.purge_expired(now=T0 + timedelta(hours=1)) == 1
        assert await store.get("new", now=T0 + timedelta(hours=1)) is not None


@pytest.mark.asyncio
async def test_expired_record_behind_valid_cookie_gets_fresh_session(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    await client.get("/")
    old_cookie = client.cookies["session"]

    async with app.state.context.sessionmaker() as db:
        await db.execute(update(SessionRecord).values(expires_at=datetime(2000, 1, 1)))
        await db.commit()

    r = await client.get("/")
    cookies = r.headers.get_list("set-cookie")
    assert len(cookies) == 1
    assert not cookies[0].startswith(f"session={old_cookie};")
    # The expired row is replaced, not kept alongside the new one.
    assert await count_sessions(app) == 1


@pytest.mark.asyncio
async def test_health_checks_do_not_create_sessions(app: FastAPI, client: httpx.AsyncClient) -> None:
    for _ in range(5):
        for path in ("/healthz", "/readyz"):
            r = await client.get(path)
            assert r.status_code == 200
            assert r.headers.get_list("set-cookie") == []

    assert await count_sessions(app) == 0


@pytest.mark.asyncio
async def test_expired_sessions_are_purged_while_running(tmp_path) -> None:
    app = create_app(settings=make_settings(tmp_path, session_purge_interval_seconds=0.05))

    async with app.router.lifespan_context(app):
        ctx = app.state.context
        async with ctx.sessionmaker() as db:
            await ctx.session_store(db).set("stale", {}, now=datetime(2000, 1, 1))
            await ctx.session_store(db).set("live", {})
            await db.commit()
        assert await count_sessions(app) == 2

        for _ in range(50):
            await asyncio.sleep(0.05)
            if await count_sessions(app) == 1:
                break
        assert await count_sessions(app) == 1
