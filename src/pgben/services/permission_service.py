"""
pgben.services.permission_service

Permission checks and direct grants over the seeded catalog.

Responsibilities:
- Answer "may this user do X in scope Y" from direct grants, role grants and wildcards.
- Grant, extend, reactivate and revoke direct user permissions.
- List the effective permissions of a user and browse the catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.base import utcnow
from pgben.db.models import Permissao, TipoEscopo, UsuarioPermissao
from pgben.db.repositories.audit import AuditRepo
from pgben.db.repositories.permissions import PermissaoRepo, UsuarioPermissaoRepo
from pgben.db.repositories.roles import RoleRepo
from pgben.db.repositories.usuarios import UsuarioRepo
from pgben.observability.logging import get_logger
from pgben.services.permission_cache import PermissionCache, cache_key

log = get_logger(__name__)


def candidate_names(nome: str) -> list[str]:
    """
    Names that satisfy `nome`, most specific first:
    the name itself, then `*.*`, `mod.*`, `mod.res.*` and `*.last`.
    """

    parts = nome.split(".")
    names = [nome, "*.*"]
    if len(parts) >= 2:
        names.append(f"{parts[0]}.*")
    if len(parts) >= 3:
        names.append(f"{parts[0]}.{parts[1]}.*")
    if len(parts) >= 2:
        names.append(f"*.{parts[-1]}")
    return list(dict.fromkeys(names))


def grant_covers(
    grant: UsuarioPermissao, scope_type: TipoEscopo, scope_id: uuid.UUID | None
) -> bool:
    # A GLOBAL grant satisfies any scope; otherwise type must match and a bound id must be equal.
    if grant.tipo_escopo == TipoEscopo.global_:
        return True
    if grant.tipo_escopo != scope_type:
        return False
    return grant.escopo_id is None or grant.escopo_id == scope_id


@dataclass(frozen=True)
class EffectivePermission:
    nome: str
    origem: str  # "direta" | "role"
    tipo_escopo: TipoEscopo
    escopo_id: uuid.UUID | None = None
    valida_ate: datetime | None = None


class PermissionService:
    def __init__(self, *, session: AsyncSession, cache: PermissionCache | None = None) -> None:
        self._session = session
        self._cache = cache or PermissionCache(None)

        self._permissoes = PermissaoRepo(session)
        self._grants = UsuarioPermissaoRepo(session)
        self._roles = RoleRepo(session)
        self._usuarios = UsuarioRepo(session)
        self._audit = AuditRepo(session)

    async def has_permission(
        self,
        usuario_id: uuid.UUID | None,
        nome: str,
        *,
        scope_type: TipoEscopo = TipoEscopo.global_,
        scope_id: uuid.UUID | None = None,
        now: datetime | None = None,
    ) -> bool:
        if usuario_id is None or not nome or not nome.strip():
            return False
        if scope_type == TipoEscopo.unidade and scope_id is None:
            return False

        if "," in nome:
            for part in (p.strip() for p in nome.split(",")):
                if part and await self.has_permission(
                    usuario_id, part, scope_type=scope_type, scope_id=scope_id, now=now
                ):
                    return True
            return False

        nome = nome.strip()
        key = cache_key(usuario_id, nome, scope_type.value, scope_id)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        try:
            allowed = await self._check(usuario_id, nome, scope_type, scope_id, now or utcnow())
        except SQLAlchemyError:
            log.exception("permission_check_failed", usuario_id=str(usuario_id), nome=nome)
            return False

        await self._cache.set(key, allowed)
        return allowed

    async def _check(
        self,
        usuario_id: uuid.UUID,
        nome: str,
        scope_type: TipoEscopo,
        scope_id: uuid.UUID | None,
        now: datetime,
    ) -> bool:
        if await self._permissoes.get_by_nome(nome) is None:
            return False

        direct = {
            g.permissao.nome
            for g in await self._grants.list_active_for_user(usuario_id, now=now)
            if g.permissao.ativo and grant_covers(g, scope_type, scope_id)
        }
        via_role = {p.nome for p in await self._role_permissions(usuario_id)}

        for candidate in candidate_names(nome):
            if candidate in direct or candidate in via_role:
                return True
        return False

    async def _role_permissions(self, usuario_id: uuid.UUID) -> list[Permissao]:
        usuario = await self._usuarios.get(usuario_id)
        if usuario is None or not usuario.ativo or usuario.role_id is None:
            return []
        return await self._roles.permissions_for_role(usuario.role_id)

    async def grant_permission(
        self,
        usuario_id: uuid.UUID | None,
        nome: str,
        *,
        scope_type: TipoEscopo = TipoEscopo.global_,
        scope_id: uuid.UUID | None = None,
        valida_ate: datetime | None = None,
        concedido_por: str | None = None,
    ) -> bool:
        if usuario_id is None or not nome:
            return False
        if scope_type == TipoEscopo.unidade and scope_id is None:
            return False

        permissao = await self._permissoes.get_by_nome(nome)
        if permissao is None:
            log.warning("permission_grant_unknown", nome=nome)
            return False

        grant = await self._grants.find(
            usuario_id=usuario_id,
            permissao_id=permissao.id,
            tipo_escopo=scope_type,
            escopo_id=scope_id,
        )
        if grant is None:
            await self._grants.create(
                usuario_id=usuario_id,
                permissao_id=permissao.id,
                tipo_escopo=scope_type,
                escopo_id=scope_id,
                valida_ate=valida_ate,
                criado_por=concedido_por,
            )
            event = "PERMISSION_GRANTED"
        elif grant.concedida:
            # No expiry is the latest possible expiry.
            if grant.valida_ate is not None and (valida_ate is None or valida_ate > grant.valida_ate):
                grant.valida_ate = valida_ate
                grant.atualizado_por = concedido_por
            event = "PERMISSION_GRANT_EXTENDED"
        else:
            grant.concedida = True
            grant.valida_ate = valida_ate
            grant.atualizado_por = concedido_por
            event = "PERMISSION_GRANT_REACTIVATED"

        await self._audit.add(
            entity_type="usuario",
            entity_id=usuario_id,
            actor=concedido_por or "system",
            event_type=event,
            details={
                "permissao": nome,
                "escopo": scope_type.value,
                "escopo_id": str(scope_id) if scope_id else None,
                "valida_ate": valida_ate.isoformat() if valida_ate else None,
            },
        )
        await self._session.commit()
        await self._cache.invalidate_user(usuario_id)
        log.info("permission_granted", usuario_id=str(usuario_id), nome=nome, audit_event=event)
        return True

    async def revoke_permission(
        self,
        usuario_id: uuid.UUID | None,
        nome: str,
        *,
        scope_type: TipoEscopo = TipoEscopo.global_,
        scope_id: uuid.UUID | None = None,
        revogado_por: str | None = None,
    ) -> bool:
        if usuario_id is None or not nome:
            return False

        permissao = await self._permissoes.get_by_nome(nome)
        if permissao is None:
            return False
        grant = await self._grants.find(
            usuario_id=usuario_id,
            permissao_id=permissao.id,
            tipo_escopo=scope_type,
            escopo_id=scope_id,
        )
        if grant is None:
            return False
        if not grant.concedida:
            return True

        grant.concedida = False
        grant.atualizado_por = revogado_por
        await self._audit.add(
            entity_type="usuario",
            entity_id=usuario_id,
            actor=revogado_por or "system",
            event_type="PERMISSION_REVOKED",
            details={"permissao": nome, "escopo": scope_type.value},
        )
        await self._session.commit()
        await self._cache.invalidate_user(usuario_id)
        log.info("permission_revoked", usuario_id=str(usuario_id), nome=nome)
        return True

    async def get_user_permissions(
        self, usuario_id: uuid.UUID, *, now: datetime | None = None
    ) -> list[EffectivePermission]:
        out = [
            EffectivePermission(
                nome=g.permissao.nome,
                origem="direta",
                tipo_escopo=g.tipo_escopo,
                escopo_id=g.escopo_id,
                valida_ate=g.valida_ate,
            )
            for g in await self._grants.list_active_for_user(usuario_id, now=now or utcnow())
            if g.permissao.ativo
        ]
        out.extend(
            EffectivePermission(nome=p.nome, origem="role", tipo_escopo=TipoEscopo.global_)
            for p in await self._role_permissions(usuario_id)
        )
        return sorted(out, key=lambda p: (p.nome, p.origem))

    async def list_permissions(self, *, modulo: str | None = None) -> list[Permissao]:
        return await self._permissoes.list(modulo=modulo, ativo=True)

    async def get_scope(self, nome: str) -> TipoEscopo | None:
        permissao = await self._permissoes.get_by_nome(nome)
        if permissao is None:
            return None
        escopo = await self._permissoes.get_escopo(permissao.id)
        return escopo.tipo_escopo_padrao if escopo else None


# --- Module Notes -----------------------------------------------------------
# Role grants carry no scope and count as GLOBAL. Cache entries are keyed per exact check.
