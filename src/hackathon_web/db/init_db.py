"""
hackathon_web.db.init_db

DB initialization helpers.

Responsibilities:
- Create tables on startup.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from hackathon_web.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from hackathon_web.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
