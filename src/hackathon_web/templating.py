"""
hackathon_web.templating

Jinja2 view layer.

Responsibilities:
- Locate the package's templates.
- Merge the per-request render context (current user, flash messages) into every render.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates
from starlette.requests import Request

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATE_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

RENDER_CONTEXT_KEY = "render_context"


def empty_render_context() -> dict[str, Any]:
    return {"current_user": None, "success_messages": [], "error_messages": []}


def render_context(request: Request) -> dict[str, Any]:
    # Populated by the flash stage; absent if the failure happened before it ran.
    return dict(getattr(request.state, RENDER_CONTEXT_KEY, None) or empty_render_context())


def create_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=str(TEMPLATE_DIR), context_processors=[render_context])
