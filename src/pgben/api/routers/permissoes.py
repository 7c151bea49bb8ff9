"""
pgben.api.routers.permissoes

Permission catalog and user grant endpoints (`/v1/permissoes`).

Responsibilities:
- Browse the seeded catalog and check the caller's own permissions.
- Grant/revoke direct user permissions (requires `usuario.permissao.gerenciar` or ADMIN).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from pgben.api.deps import db_session, permission_cache_dep
from pgben.auth.deps import get_principal, require_permission
from pgben.auth.models import Principal
from pgben.db.models import TipoEscopo
from pgben.services.permission_cache import PermissionCache
from pgben.services.permission_service import PermissionService

router = APIRouter(prefix="/v1/permissoes", tags=["permissoes"])

GERENCIAR = "usuario.permissao.gerenciar"


class _EscopoBody(BaseModel):
    @field_validator("escopo", mode="before", check_fields=False)
    @classmethod
    def parse_escopo(cls, value: Any) -> Any:
        # Accepts lower-case values and the legacy "USUARIO" alias.
        return TipoEscopo.parse(value) if isinstance(value, str) else value


class GrantRequest(_EscopoBody):
    nome: str = Field(min_length=1, max_length=150)
    escopo: TipoEscopo = TipoEscopo.global_
    escopo_id: uuid.UUID | None = None
    valida_ate: datetime | None = None


class RevokeRequest(_EscopoBody):
    nome: str = Field(min_length=1, max_length=150)
    escopo: TipoEscopo = TipoEscopo.global_
    escopo_id: uuid.UUID | None = None


def _service(session: AsyncSession, cache: PermissionCache) -> PermissionService:
    return PermissionService(session=session, cache=cache)


@router.get("", dependencies=[Depends(get_principal)])
async def listar_permissoes(
    modulo: str | None = None,
    session: AsyncSession = Depends(db_session),
    cache: PermissionCache = Depends(permission_cache_dep),
) -> list[dict[str, Any]]:
    return [
        {
            "id": str(p.id),
            "nome": p.nome,
            "descricao": p.descricao,
            "modulo": p.modulo,
            "acao": p.acao,
            "composta": p.composta,
            "escopo_padrao": p.escopo.tipo_escopo_padrao.value if p.escopo else None,
        }
        for p in await _service(session, cache).list_permissions(modulo=modulo)
    ]


@router.get("/verificar")
async def verificar(
    nome: str,
    escopo: str = "GLOBAL",
    escopo_id: uuid.UUID | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    cache: PermissionCache = Depends(permission_cache_dep),
) -> dict[str, Any]:
    try:
        tipo = TipoEscopo.parse(escopo)
    except ValueError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Escopo inválido") from e
    permitido = await _service(session, cache).has_permission(
        principal.usuario_id, nome, scope_type=tipo, scope_id=escopo_id
    )
    return {"nome": nome, "escopo": tipo.value, "escopo_id": escopo_id, "permitido": permitido}


@router.get("/usuarios/{usuario_id}", dependencies=[Depends(require_permission(GERENCIAR))])
async def permissoes_do_usuario(
    usuario_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
    cache: PermissionCache = Depends(permission_cache_dep),
) -> list[dict[str, Any]]:
    return [
        {
            "nome": p.nome,
            "origem": p.origem,
            "escopo": p.tipo_escopo.value,
            "escopo_id": str(p.escopo_id) if p.escopo_id else None,
            "valida_ate": p.valida_ate.isoformat() if p.valida_ate else None,
        }
        for p in await _service(session, cache).get_user_permissions(usuario_id)
    ]


@router.post("/usuarios/{usuario_id}/conceder")
async def conceder(
    usuario_id: uuid.UUID,
    body: GrantRequest,
    principal: Principal = Depends(require_permission(GERENCIAR)),
    session: AsyncSession = Depends(db_session),
    cache: PermissionCache = Depends(permission_cache_dep),
) -> dict[str, Any]:
    ok = await _service(session, cache).grant_permission(
        usuario_id,
        body.nome,
        scope_type=body.escopo,
        scope_id=body.escopo_id,
        valida_ate=body.valida_ate,
        concedido_por=principal.subject,
    )
    if not ok:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST, detail="Permissão inválida ou escopo incompleto"
        )
    return {"usuario_id": str(usuario_id), "nome": body.nome, "concedida": True}


@router.post("/usuarios/{usuario_id}/revogar")
async def revogar(
    usuario_id: uuid.UUID,
    body: RevokeRequest,
    principal: Principal = Depends(require_permission(GERENCIAR)),
    session: AsyncSession = Depends(db_session),
    cache: PermissionCache = Depends(permission_cache_dep),
) -> dict[str, Any]:
    ok = await _service(session, cache).revoke_permission(
        usuario_id,
        body.nome,
        scope_type=body.escopo,
        scope_id=body.escopo_id,
        revogado_por=principal.subject,
    )
    if not ok:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Concessão não encontrada")
    return {"usuario_id": str(usuario_id), "nome": body.nome, "concedida": False}


# --- Module Notes -----------------------------------------------------------
# `verificar` always answers for the caller; checking other users goes through `/usuarios/{id}`.
