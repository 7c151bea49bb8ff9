"""
pgben.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Encapsulate app.state access patterns (engine/sessionmaker, permission cache, action executor).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pgben.services.action_executor import ActionExecutor
from pgben.services.permission_cache import PermissionCache
from pgben.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app factory pins its Settings on app.state so tests can inject their own.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `pgben.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def permission_cache_dep(request: Request) -> PermissionCache:
    return request.app.state.permission_cache  # type: ignore[attr-defined]


def action_executor_dep(request: Request) -> ActionExecutor:
    return request.app.state.action_executor  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Shared clients (Redis, httpx) live for the app lifetime; sessions live per request.
