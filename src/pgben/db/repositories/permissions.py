"""
pgben.db.repositories.permissions

Repositories for the permission catalog and direct user grants.

Responsibilities:
- Look up and create `Permissao` rows and their default `EscopoPermissao`.
- Read/write `UsuarioPermissao` grants (direct, scoped, optionally time-boxed).
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import EscopoPermissao, Permissao, TipoEscopo, UsuarioPermissao


def split_nome(nome: str) -> tuple[str, str]:
    # "pagamento.lote.criar" -> ("pagamento", "lote.criar"); "*.*" -> ("*", "*")
    modulo, _, acao = nome.partition(".")
    return modulo, acao or "*"


class PermissaoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, permissao_id: uuid.UUID) -> Permissao | None:
        return await self._session.get(Permissao, permissao_id)

    async def get_by_nome(self, nome: str) -> Permissao | None:
        stmt = select(Permissao).where(Permissao.nome == nome)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_many_by_nomes(self, nomes: Iterable[str]) -> dict[str, Permissao]:
        wanted = list(dict.fromkeys(nomes))
        if not wanted:
            return {}
        stmt = select(Permissao).where(Permissao.nome.in_(wanted))
        return {p.nome: p for p in (await self._session.execute(stmt)).scalars().all()}

    async def list(self, *, modulo: str | None = None, ativo: bool | None = None) -> list[Permissao]:
        stmt = select(Permissao).order_by(Permissao.modulo, Permissao.nome)
        if modulo is not None:
            stmt = stmt.where(Permissao.modulo == modulo)
        if ativo is not None:
            stmt = stmt.where(Permissao.ativo == ativo)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, *, nome: str, descricao: str) -> Permissao:
        modulo, acao = split_nome(nome)
        perm = Permissao(nome=nome, descricao=descricao, modulo=modulo, acao=acao, ativo=True)
        self._session.add(perm)
        await self._session.flush()
        return perm

    async def get_escopo(self, permissao_id: uuid.UUID) -> EscopoPermissao | None:
        stmt = select(EscopoPermissao).where(EscopoPermissao.permissao_id == permissao_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def add_escopo(self, *, permissao_id: uuid.UUID, tipo: TipoEscopo) -> EscopoPermissao:
        escopo = EscopoPermissao(
            permissao_id=permissao_id, tipo_escopo_padrao=tipo, descricao=tipo.descricao
        )
        self._session.add(escopo)
        await self._session.flush()
        return escopo


class UsuarioPermissaoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find(
        self,
        *,
        usuario_id: uuid.UUID,
        permissao_id: uuid.UUID,
        tipo_escopo: TipoEscopo,
        escopo_id: uuid.UUID | None,
    ) -> UsuarioPermissao | None:
        stmt = select(UsuarioPermissao).where(
            UsuarioPermissao.usuario_id == usuario_id,
            UsuarioPermissao.permissao_id == permissao_id,
            UsuarioPermissao.tipo_escopo == tipo_escopo,
        )
        if escopo_id is None:
            stmt = stmt.where(UsuarioPermissao.escopo_id.is_(None))
        else:
            stmt = stmt.where(UsuarioPermissao.escopo_id == escopo_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_for_permission(
        self, *, usuario_id: uuid.UUID, permissao_id: uuid.UUID
    ) -> list[UsuarioPermissao]:
        stmt = select(UsuarioPermissao).where(
            UsuarioPermissao.usuario_id == usuario_id,
            UsuarioPermissao.permissao_id == permissao_id,
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_active_for_user(
        self, usuario_id: uuid.UUID, *, now: datetime
    ) -> list[UsuarioPermissao]:
        stmt = select(UsuarioPermissao).where(
            UsuarioPermissao.usuario_id == usuario_id,
            UsuarioPermissao.concedida.is_(True),
            (UsuarioPermissao.valida_ate.is_(None)) | (UsuarioPermissao.valida_ate > now),
        )
        return list((await self._session.execute(stmt)).scalars().unique().all())

    async def create(
        self,
        *,
        usuario_id: uuid.UUID,
        permissao_id: uuid.UUID,
        tipo_escopo: TipoEscopo,
        escopo_id: uuid.UUID | None,
        valida_ate: datetime | None,
        criado_por: str | None,
    ) -> UsuarioPermissao:
        grant = UsuarioPermissao(
            usuario_id=usuario_id,
            permissao_id=permissao_id,
            tipo_escopo=tipo_escopo,
            escopo_id=escopo_id,
            concedida=True,
            valida_ate=valida_ate,
            criado_por=criado_por,
        )
        self._session.add(grant)
        await self._session.flush()
        return grant


# --- Module Notes -----------------------------------------------------------
# `split_nome` is the single place deriving `modulo`/`acao` from a permission name.
