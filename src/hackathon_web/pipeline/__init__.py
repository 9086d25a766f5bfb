"""
hackathon_web.pipeline

The request pipeline: a statically ordered list of ASGI stages.

Order (outermost first) and contract of each stage:

1. RequestContextMiddleware  binds request id/method/path for logging.
2. ErrorNormalizerStage      failures of any stage below -> rendered error page.
3. BodyDecodingStage         form body -> `request.state.form`.
4. MethodOverrideStage       POST + `_method` -> effective verb.
5. SessionStage              cookie -> `request.session`; persisted before the response head.
6. AuthenticationStage       session -> `request.user`.
7. FlashStage                session + user -> `request.state.render_context`.
8. ErrorNormalizerStage      failures escaping the router, rendered while the session
                             stage can still persist the session and set its cookie.

Static files, application routes and the not-found fallback sit below, in the router.
"""

from __future__ import annotations

from starlette.middleware import Middleware

from hackathon_web.context import AppContext
from hackathon_web.observability.middleware import RequestContextMiddleware
from hackathon_web.pipeline.auth import AuthenticationStage
from hackathon_web.pipeline.body import BodyDecodingStage, MethodOverrideStage
from hackathon_web.pipeline.errors import ErrorNormalizerStage
from hackathon_web.pipeline.flash import FlashStage
from hackathon_web.pipeline.session import SessionStage


def build_pipeline(context: AppContext) -> list[Middleware]:
    return [
        Middleware(RequestContextMiddleware),
        Middleware(ErrorNormalizerStage),
        Middleware(BodyDecodingStage),
        Middleware(MethodOverrideStage),
        Middleware(SessionStage, context=context),
        Middleware(AuthenticationStage, context=context),
        Middleware(FlashStage),
        Middleware(ErrorNormalizerStage),
    ]
