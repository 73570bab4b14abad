"""
compose_store.db.init_db

Schema bootstrap (dev/test convenience).

Responsibilities:
- Create the composes/clones tables for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from compose_store.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from compose_store.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Deployed databases get their schema from
    the surrounding service's migrations, not from here.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
