"""
pgben.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Enforce role membership and catalog permissions via reusable dependency factories.
"""

from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from pgben.api.deps import db_session, permission_cache_dep, settings_dep
from pgben.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from pgben.auth.models import Principal
from pgben.db.models import TipoEscopo
from pgben.services.permission_cache import PermissionCache
from pgben.services.permission_service import PermissionService
from pgben.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal:
    # Authn: require a bearer token.
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(roles_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token roles")

    unidade_raw = payload.get("unidade_id")
    try:
        unidade_id = uuid.UUID(str(unidade_raw)) if unidade_raw else None
    except ValueError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token unidade_id") from e

    roles: frozenset[str] = frozenset(str(r).upper() for r in roles_raw)
    return Principal(subject=subject, roles=roles, unidade_id=unidade_id)


def require_roles(*required: str):
    required_set = frozenset(r.upper() for r in required)

    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        # Admins bypass role checks; otherwise any one of the listed roles is enough.
        if principal.is_admin:
            return principal
        if required_set.isdisjoint(principal.roles):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient role")
        return principal

    return _dep


def require_permission(nome: str, *, scope: TipoEscopo = TipoEscopo.global_):
    async def _dep(
        principal: Principal = Depends(get_principal),
        session: AsyncSession = Depends(db_session),
        cache: PermissionCache = Depends(permission_cache_dep),
    ) -> Principal:
        if principal.is_admin:
            return principal
        # Scoped checks run against the caller's own unit / own user id.
        scope_id = None
        if scope == TipoEscopo.unidade:
            scope_id = principal.unidade_id
        elif scope == TipoEscopo.proprio:
            scope_id = principal.usuario_id
        service = PermissionService(session=session, cache=cache)
        allowed = await service.has_permission(
            principal.usuario_id, nome, scope_type=scope, scope_id=scope_id
        )
        if not allowed:
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=f"Missing permission: {nome}")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Role names in tokens are upper-cased so "admin" and "ADMIN" are equivalent.
