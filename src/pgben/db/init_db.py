"""
pgben.db.init_db

DB initialization helpers (dev/test convenience and seed CLI bootstrap).

Responsibilities:
- Create tables for local development, tests and first-time seeding.
- Drop tables when the seed CLI is asked to reset a local database.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from pgben.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from pgben.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    # Use a transactional DDL block when supported by the backend.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# --- Module Notes -----------------------------------------------------------
# `drop_db` is only reachable from `pgben-seed run --reset` outside prod.
