"""
hackathon_web.api.app

FastAPI app factory.

Responsibilities:
- Build the application context and the request pipeline around the router.
- Register static files, routers and error-page handlers.
- Initialize and dispose shared infrastructure (DB engine, session table).
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hackathon_web.api.routers.fallback import router as fallback_router
from hackathon_web.api.routers.health import router as health_router
from hackathon_web.api.routers.pages import router as pages_router
from hackathon_web.api.routers.users import router as users_router
from hackathon_web.context import AppContext
from hackathon_web.db.init_db import init_db
from hackathon_web.errors import AppError
from hackathon_web.observability.logging import configure_logging, get_logger
from hackathon_web.pipeline import build_pipeline
from hackathon_web.pipeline.errors import error_page_handler
from hackathon_web.settings import Settings
from hackathon_web.templating import STATIC_DIR

log = get_logger(__name__)


async def _purge_sessions_periodically(context: AppContext) -> None:
    # Expired rows are otherwise only dropped when their own id is looked up again.
    interval = context.settings.session_purge_interval_seconds
    while True:
        await asyncio.sleep(interval)
        try:
            purged = await context.purge_expired_sessions()
        except SQLAlchemyError:
            log.exception("sessions.purge_failed")
            continue
        if purged:
            log.info("sessions.purged", count=purged)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    context = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        await init_db(context.engine)
        purged = await context.purge_expired_sessions()
        log.info("sessions.purged", count=purged)
        purger = asyncio.create_task(_purge_sessions_periodically(context))
        try:
            yield
        finally:
            purger.cancel()
            with suppress(asyncio.CancelledError):
                await purger
            await context.engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Hackathon",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        middleware=build_pipeline(context),
        lifespan=lifespan,
    )
    app.state.context = context

    for exc_type in (AppError, StarletteHTTPException, RequestValidationError):
        app.add_exception_handler(exc_type, error_page_handler)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(health_router, tags=["health"])
    app.include_router(pages_router)
    app.include_router(users_router)
    # Must stay last: it matches every path.
    app.include_router(fallback_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Pipeline order is declared once in `hackathon_web.pipeline.build_pipeline`.
