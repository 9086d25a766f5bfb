"""
hackathon_web.pipeline.auth

Authentication resolution stage.

Responsibilities:
- Restore the principal remembered in the session and expose it as `request.user`.
"""

from __future__ import annotations

from starlette.types import ASGIApp, Receive, Scope, Send

from hackathon_web.auth.login import SESSION_USER_KEY
from hackathon_web.context import AppContext


class AuthenticationStage:
    """
    Reads: `scope["session"]`.
    Writes: `scope["user"]` (a `Principal`, or None for anonymous requests).
    """

    def __init__(self, app: ASGIApp, *, context: AppContext) -> None:
        self.app = app
        self._ctx = context

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        principal = None
        token = scope["session"].get(SESSION_USER_KEY)
        if isinstance(token, str):
            async with self._ctx.sessionmaker() as db:
                # An account deleted since login simply leaves the request anonymous.
                principal = await self._ctx.credentials(db).deserialize(token)
        scope["user"] = principal
        await self.app(scope, receive, send)
