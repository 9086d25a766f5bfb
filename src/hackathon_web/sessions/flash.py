"""
hackathon_web.sessions.flash

Single-delivery flash messages stored in the session.

Responsibilities:
- enqueue: append a `(category, text)` message to the session's queue.
- drain: return and remove every queued message of one category.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Literal

from starlette.requests import Request

FLASH_KEY = "flash"
CATEGORIES: tuple[str, ...] = ("success", "error")

Category = Literal["success", "error"]


def _check_category(category: str) -> None:
    if category not in CATEGORIES:
        raise ValueError(f"Unknown flash category: {category!r}")


def enqueue(session: MutableMapping[str, Any], category: Category, text: str) -> None:
    _check_category(category)
    queue: dict[str, list[str]] = session.setdefault(FLASH_KEY, {})
    queue.setdefault(category, []).append(text)


def drain(session: MutableMapping[str, Any], category: Category) -> list[str]:
    _check_category(category)
    queue: dict[str, list[str]] | None = session.get(FLASH_KEY)
    if not queue:
        return []
    messages = queue.pop(category, [])
    if not queue:
        del session[FLASH_KEY]
    return list(messages)


def flash(request: Request, category: Category, text: str) -> None:
    enqueue(request.session, category, text)


# --- Module Notes -----------------------------------------------------------
# The flash stage (`pipeline.flash`) drains both categories once per request; messages
# queued by a handler therefore show up on the next page the client loads.
