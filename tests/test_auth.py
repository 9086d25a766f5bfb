"""
tests.test_auth

Login/logout through the pipeline and the credential store underneath it.
"""

from __future__ import annotations

import uuid

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy import delete

from hackathon_web.auth.credentials import LocalCredentialStore
from hackathon_web.auth.passwords import hash_password, verify_password
from hackathon_web.db.models import User
from hackathon_web.errors import AuthenticationError, DuplicateUserError
from tests.conftest import count_sessions, register


@pytest.mark.asyncio
async def test_register_logs_in_and_flashes_welcome(client: httpx.AsyncClient) -> None:
    r = await register(client)
    assert r.status_code == 302
    assert r.headers["location"] == "/"

    r = await client.get("/")
    assert "Signed in as alice" in r.text
    assert "Welcome!" in r.text


@pytest.mark.asyncio
async def test_login_then_logout(app: FastAPI, client: httpx.AsyncClient) -> None:
    await register(client)
    await client.post("/logout", data={"_method": "DELETE"})
    r = await client.get("/")
    assert "Signed in as" not in r.text
    assert "Goodbye!" in r.text

    before = client.cookies["session"]
    r = await client.post("/login", data={"username": "alice", "password": "s3cret"})
    assert r.status_code == 302
    assert r.headers["location"] == "/"
    # The session id rotates on login; the old record is gone.
    assert len(r.headers.get_list("set-cookie")) == 1
    assert client.cookies["session"] != before
    assert await count_sessions(app) == 1

    r = await client.get("/")
    assert "Signed in as alice" in r.text
    assert "Welcome back!" in r.text

    r = await client.post("/logout", data={"_method": "DELETE"})
    assert r.status_code == 302
    r = await client.get("/")
    assert "Signed in as" not in r.text


@pytest.mark.asyncio
async def test_bad_credentials_leave_request_anonymous(client: httpx.AsyncClient) -> None:
    await register(client, username="bob")
    await client.post("/logout", data={"_method": "DELETE"})

    r = await client.post("/login", data={"username": "bob", "password": "wrong"})
    assert r.status_code == 302
    assert r.headers["location"] == "/login"
    assert r.headers.get_list("set-cookie") == []

    r = await client.get("/login")
    assert "Password or username is incorrect" in r.text
    assert "Signed in as" not in r.text


@pytest.mark.asyncio
async def test_duplicate_registration_is_flashed(client: httpx.AsyncClient) -> None:
    await register(client)
    await client.post("/logout", data={"_method": "DELETE"})

    r = await register(client)
    assert r.headers["location"] == "/register"
    r = await client.get("/register")
    assert "A user with the given username is already registered" in r.text


@pytest.mark.asyncio
async def test_deleted_account_yields_anonymous_request(app: FastAPI, client: httpx.AsyncClient) -> None:
    await register(client)
    async with app.state.context.sessionmaker() as db:
        await db.execute(delete(User))
        await db.commit()

    r = await client.get("/")
    assert r.status_code == 200
    assert "Signed in as" not in r.text


@pytest.mark.asyncio
async def test_invalid_login_form_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.post("/login", data={"username": "", "password": ""})
    assert r.status_code == 400
    assert "Invalid form submission" in r.text


@pytest.mark.asyncio
async def test_credential_store_contract(app: FastAPI) -> None:
    async with app.state.context.sessionmaker() as db:
        store = LocalCredentialStore(db)
        principal = await store.register(username="carol", email="carol@example.com", password="pw")

        assert await store.authenticate("carol", "pw") == principal
        with pytest.raises(AuthenticationError):
            await store.authenticate("carol", "nope")
        with pytest.raises(AuthenticationError):
            await store.authenticate("nobody", "pw")
        with pytest.raises(DuplicateUserError):
            await store.register(username="carol", email="other@example.com", password="pw")

        token = store.serialize(principal)
        assert await store.deserialize(token) == principal
        assert await store.deserialize(str(uuid.uuid4())) is None
        assert await store.deserialize("garbage") is None


def test_password_hashing() -> None:
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)
    assert not verify_password("hunter2", "not-a-bcrypt-hash")
