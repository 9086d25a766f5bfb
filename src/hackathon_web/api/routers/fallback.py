"""
hackathon_web.api.routers.fallback

Not-found fallback: registered last, matches any path and method.
"""

from __future__ import annotations

from fastapi import APIRouter

from hackathon_web.errors import NotFoundError

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def not_found(path: str) -> None:
    raise NotFoundError()
