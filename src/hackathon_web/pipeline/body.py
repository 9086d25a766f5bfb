"""
hackathon_web.pipeline.body

Body decoding and HTTP method override stages.

Responsibilities:
- Decode form bodies once (Starlette's form parser) into `request.state.form`.
- Let a POSTed `_method` field (or `?_method=` query parameter) choose the verb used
  for routing.
"""

from __future__ import annotations

from starlette.datastructures import FormData, QueryParams
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})
OVERRIDE_FIELD = "_method"
OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


def _replay(body: bytes, receive: Receive) -> Receive:
    # The body was consumed here; hand it to the route layer again as a single message.
    consumed = False

    async def replay() -> Message:
        nonlocal consumed
        if not consumed:
            consumed = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


class BodyDecodingStage:
    """
    Reads: request body (url-encoded or multipart forms).
    Writes: `scope["state"]["form"]` (a Starlette `FormData`, empty for other bodies).
    The raw body is replayed so `Form(...)` parameters in routes still see it.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        content_type = request.headers.get("content-type", "")
        if content_type.split(";", 1)[0].strip().lower() not in FORM_CONTENT_TYPES:
            scope.setdefault("state", {})["form"] = FormData()
            await self.app(scope, receive, send)
            return

        body = await request.body()
        # `form()` reads from the cached body, not from `receive`.
        form = await request.form()
        scope.setdefault("state", {})["form"] = form
        try:
            await self.app(scope, _replay(body, receive), send)
        finally:
            await form.close()


class MethodOverrideStage:
    """
    Reads: `scope["state"]["form"]`, then the query string.
    Writes: `scope["method"]` for POSTs carrying an allowed `_method` value.
    """

    def __init__(self, app: ASGIApp, *, field: str = OVERRIDE_FIELD) -> None:
        self.app = app
        self.field = field

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            override = self._requested_method(scope)
            if override in OVERRIDABLE_METHODS:
                scope["method"] = override
        await self.app(scope, receive, send)

    def _requested_method(self, scope: Scope) -> str:
        form = scope.get("state", {}).get("form") or FormData()
        value = form.get(self.field)
        if not isinstance(value, str):
            value = QueryParams(scope.get("query_string", b"")).get(self.field, "")
        return value.strip().upper()


# --- Module Notes -----------------------------------------------------------
# Uploaded files in multipart bodies are closed once the response has been sent.
