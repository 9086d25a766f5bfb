"""
hackathon_web.pipeline.session

Session resolution stage.

Responsibilities:
- Resolve the `session` cookie to a stored record, or start a new session.
- Persist the session (save, rotate or touch) right before the response head is sent.
- Issue the cookie only for new or rotated sessions.
"""

from __future__ import annotations

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from hackathon_web.context import AppContext
from hackathon_web.observability.logging import get_logger
from hackathon_web.sessions.state import SessionState
from hackathon_web.sessions.tokens import issue_session_token, read_session_token

log = get_logger(__name__)


class SessionStage:
    """
    Reads: the session cookie.
    Writes: `scope["session"]` (a `SessionState`, exposed as `request.session`).
    """

    def __init__(self, app: ASGIApp, *, context: AppContext) -> None:
        self.app = app
        self._ctx = context
        self._settings = context.settings
        self._token_cfg = context.session_token_config
        self._exempt_paths = frozenset(context.settings.session_exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["path"] in self._exempt_paths:
            scope["session"] = SessionState.create()
            await self.app(scope, receive, send)
            return

        cookie = HTTPConnection(scope).cookies.get(self._settings.session_cookie_name)
        session = await self._load(read_session_token(cfg=self._token_cfg, token=cookie))
        scope["session"] = session

        async def send_with_session(message: Message) -> None:
            if message["type"] == "http.response.start":
                await self._commit(session)
                if session.is_new or session.rotated:
                    headers = MutableHeaders(scope=message)
                    headers.append("set-cookie", self._cookie_header(session))
            await send(message)

        await self.app(scope, receive, send_with_session)

    async def _load(self, session_id: str | None) -> SessionState:
        if session_id is not None:
            async with self._ctx.sessionmaker() as db:
                record = await self._ctx.session_store(db).get(session_id)
                await db.commit()
            if record is not None:
                return SessionState(record.id, record.data)
        return SessionState.create()

    async def _commit(self, session: SessionState) -> None:
        async with self._ctx.sessionmaker() as db:
            store = self._ctx.session_store(db)
            if session.rotated:
                await store.destroy(session.previous_id)
                log.info("session.rotated")
            if session.is_new or session.rotated or session.modified:
                await store.set(session.session_id, dict(session))
                if session.is_new:
                    log.info("session.created")
            else:
                await store.touch(session.session_id)
            await db.commit()

    def _cookie_header(self, session: SessionState) -> str:
        token = issue_session_token(cfg=self._token_cfg, session_id=session.session_id)
        parts = [
            f"{self._settings.session_cookie_name}={token}",
            "Path=/",
            f"Max-Age={self._settings.session_max_age_seconds}",
            "HttpOnly",
            "SameSite=Lax",
        ]
        if self._settings.session_cookie_secure:
            parts.append("Secure")
        return "; ".join(parts)


# --- Module Notes -----------------------------------------------------------
# No absolute `Expires` is sent: the store's sliding window decides when a session
# ends, the cookie's Max-Age only bounds how long the browser keeps presenting it.
