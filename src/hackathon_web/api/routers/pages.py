"""
hackathon_web.api.routers.pages

Content pages.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from hackathon_web.api.deps import app_context
from hackathon_web.context import AppContext

router = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def home(request: Request, context: AppContext = Depends(app_context)) -> HTMLResponse:
    return context.templates.TemplateResponse(request, "home.html")


# --- Module Notes -----------------------------------------------------------
# Page routes accept HEAD explicitly; otherwise HEAD would fall through to the
# not-found fallback.
