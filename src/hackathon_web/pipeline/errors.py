"""
hackathon_web.pipeline.errors

Error normalizer.

Responsibilities:
- Render every failure as the generic error page with its normalized status/message.
- Catch anything a pipeline stage or the routing layer lets escape.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from hackathon_web.errors import normalize_exception
from hackathon_web.observability.logging import get_logger

log = get_logger(__name__)

ERROR_TEMPLATE = "error.html"


def render_error(request: Request, exc: BaseException) -> Response:
    err = normalize_exception(exc)
    if err.is_server_error:
        log.error("error.normalized", status_code=err.status_code, exc_info=exc)
    else:
        log.info("error.normalized", status_code=err.status_code, message=err.message)
    templates = request.app.state.context.templates
    return templates.TemplateResponse(
        request,
        ERROR_TEMPLATE,
        {"err": err},
        status_code=err.status_code,
    )


async def error_page_handler(request: Request, exc: Exception) -> Response:
    # Registered on the app for exceptions handled inside the router (404s, AppError, ...).
    return render_error(request, exc)


class ErrorNormalizerStage:
    """
    Error boundary around its inner app. Installed twice: around the stateful stages
    (session, auth, flash) and directly around the router.
    A failure raised after the response head went out cannot be rendered and is re-raised.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except Exception as exc:
            if response_started:
                raise
            response = render_error(Request(scope, receive), exc)
            await response(scope, receive, send)


# --- Module Notes -----------------------------------------------------------
# Both paths share `render_error`, so the status line of a failure is decided only by
# `errors.normalize_exception`.
