"""
pgben.services.permission_cache

Shared cache for permission check results (Redis, optional).

Responsibilities:
- Build the cache key for one permission check.
- Get/set boolean results with a TTL; drop every entry of a user on grant changes.
- Degrade to "no cache" when Redis is not configured or unavailable.
"""

from __future__ import annotations

import uuid

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from pgben.observability.logging import get_logger
from pgben.settings import Settings

log = get_logger(__name__)


def cache_key(
    usuario_id: uuid.UUID, nome: str, escopo: str, escopo_id: uuid.UUID | None
) -> str:
    return f"permission:{usuario_id}:{nome}:{escopo}:{escopo_id or 'global'}"


class PermissionCache:
    def __init__(self, client: aioredis.Redis | None, *, ttl_seconds: int = 300) -> None:
        self._client = client
        self._ttl = ttl_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> PermissionCache:
        if not settings.redis_url:
            return cls(None, ttl_seconds=settings.permission_cache_ttl_seconds)
        client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=3,
            socket_timeout=3,
            retry_on_timeout=True,
        )
        return cls(client, ttl_seconds=settings.permission_cache_ttl_seconds)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def get(self, key: str) -> bool | None:
        if self._client is None:
            return None
        try:
            raw = await self._client.get(key)
        except RedisError as exc:
            log.warning("permission_cache_get_failed", key=key, error=str(exc))
            return None
        if raw is None:
            return None
        return raw == "1"

    async def set(self, key: str, value: bool) -> None:
        if self._client is None:
            return
        try:
            await self._client.set(key, "1" if value else "0", ex=self._ttl)
        except RedisError as exc:
            log.warning("permission_cache_set_failed", key=key, error=str(exc))

    async def invalidate_user(self, usuario_id: uuid.UUID) -> int:
        if self._client is None:
            return 0
        removed = 0
        try:
            async for key in self._client.scan_iter(match=f"permission:{usuario_id}:*"):
                removed += await self._client.delete(key)
        except RedisError as exc:
            log.warning("permission_cache_invalidate_failed", usuario_id=str(usuario_id), error=str(exc))
        return removed

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()


# --- Module Notes -----------------------------------------------------------
# A stale "true" can live up to the TTL if invalidation fails; grants call invalidate_user.
