"""
hackathon_web.pipeline.flash

Flash resolution stage.

Responsibilities:
- Drain queued flash messages once per request into the render context.
"""

from __future__ import annotations

from starlette.types import ASGIApp, Receive, Scope, Send

from hackathon_web.sessions.flash import drain
from hackathon_web.templating import RENDER_CONTEXT_KEY


class FlashStage:
    """
    Reads: `scope["session"]`, `scope["user"]`.
    Writes: `scope["state"]["render_context"]` with `current_user`,
    `success_messages` and `error_messages`.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        session = scope["session"]
        scope.setdefault("state", {})[RENDER_CONTEXT_KEY] = {
            "current_user": scope.get("user"),
            "success_messages": drain(session, "success"),
            "error_messages": drain(session, "error"),
        }
        await self.app(scope, receive, send)
