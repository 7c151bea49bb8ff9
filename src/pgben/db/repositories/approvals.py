"""
pgben.db.repositories.approvals

Repositories for approval configuration and approval requests.

Responsibilities:
- Read/write `AcaoAprovacao` with its configuration and approvers.
- Query `SolicitacaoAprovacao` by status, requester, action and approver.
- Append `HistoricoAprovacao` entries.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import (
    AcaoAprovacao,
    AcaoHistorico,
    Aprovador,
    HistoricoAprovacao,
    SolicitacaoAprovacao,
    SolicitacaoAprovador,
    StatusSolicitacao,
)


class AcaoAprovacaoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_codigo(self, codigo: str) -> AcaoAprovacao | None:
        stmt = select(AcaoAprovacao).where(AcaoAprovacao.codigo == codigo)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(
        self, *, modulo: str | None = None, ativo: bool | None = None
    ) -> list[AcaoAprovacao]:
        stmt = select(AcaoAprovacao).order_by(AcaoAprovacao.modulo, AcaoAprovacao.codigo)
        if modulo is not None:
            stmt = stmt.where(AcaoAprovacao.modulo == modulo)
        if ativo is not None:
            stmt = stmt.where(AcaoAprovacao.ativo == ativo)
        return list((await self._session.execute(stmt)).scalars().all())

    async def add(self, acao: AcaoAprovacao) -> AcaoAprovacao:
        self._session.add(acao)
        await self._session.flush()
        return acao

    async def delete(self, acao: AcaoAprovacao) -> None:
        await self._session.delete(acao)
        await self._session.flush()

    async def get_aprovador(self, aprovador_id: uuid.UUID) -> Aprovador | None:
        return await self._session.get(Aprovador, aprovador_id)


class SolicitacaoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, solicitacao_id: uuid.UUID) -> SolicitacaoAprovacao | None:
        return await self._session.get(SolicitacaoAprovacao, solicitacao_id)

    async def get_by_codigo(self, codigo: str) -> SolicitacaoAprovacao | None:
        stmt = select(SolicitacaoAprovacao).where(SolicitacaoAprovacao.codigo == codigo)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def add(self, solicitacao: SolicitacaoAprovacao) -> SolicitacaoAprovacao:
        self._session.add(solicitacao)
        await self._session.flush()
        return solicitacao

    async def list_pending_by_requester(
        self, solicitante_id: uuid.UUID, *, acao_aprovacao_id: uuid.UUID | None = None
    ) -> list[SolicitacaoAprovacao]:
        stmt = select(SolicitacaoAprovacao).where(
            SolicitacaoAprovacao.solicitante_id == solicitante_id,
            SolicitacaoAprovacao.status == StatusSolicitacao.pendente,
        )
        if acao_aprovacao_id is not None:
            stmt = stmt.where(SolicitacaoAprovacao.acao_aprovacao_id == acao_aprovacao_id)
        return list((await self._session.execute(stmt)).scalars().unique().all())

    async def list(
        self,
        *,
        status: StatusSolicitacao | None = None,
        acao_aprovacao_id: uuid.UUID | None = None,
        solicitante_id: uuid.UUID | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[SolicitacaoAprovacao], int]:
        filters = []
        if status is not None:
            filters.append(SolicitacaoAprovacao.status == status)
        if acao_aprovacao_id is not None:
            filters.append(SolicitacaoAprovacao.acao_aprovacao_id == acao_aprovacao_id)
        if solicitante_id is not None:
            filters.append(SolicitacaoAprovacao.solicitante_id == solicitante_id)

        total_stmt = select(func.count(SolicitacaoAprovacao.id)).where(*filters)
        total = (await self._session.execute(total_stmt)).scalar_one()

        stmt = (
            select(SolicitacaoAprovacao)
            .where(*filters)
            .order_by(desc(SolicitacaoAprovacao.created_at))
            .limit(limit)
            .offset(offset)
        )
        items = list((await self._session.execute(stmt)).scalars().unique().all())
        return items, int(total)

    async def list_pending(self) -> list[SolicitacaoAprovacao]:
        stmt = (
            select(SolicitacaoAprovacao)
            .where(SolicitacaoAprovacao.status == StatusSolicitacao.pendente)
            .order_by(SolicitacaoAprovacao.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().unique().all())

    async def list_pending_for_approver(
        self, *, usuario_id: uuid.UUID, perfis: Iterable[str]
    ) -> list[SolicitacaoAprovacao]:
        # Undecided request-approver rows addressed to the user or one of their profiles.
        matches = [SolicitacaoAprovador.usuario_id == usuario_id]
        perfis = list(perfis)
        if perfis:
            matches.append(SolicitacaoAprovador.perfil.in_(perfis))
        sub = select(SolicitacaoAprovador.solicitacao_id).where(
            SolicitacaoAprovador.decisao.is_(None),
            SolicitacaoAprovador.delegado_para.is_(None),
            or_(*matches),
        )
        stmt = (
            select(SolicitacaoAprovacao)
            .where(
                SolicitacaoAprovacao.status == StatusSolicitacao.pendente,
                SolicitacaoAprovacao.id.in_(sub),
            )
            .order_by(SolicitacaoAprovacao.prazo)
        )
        return list((await self._session.execute(stmt)).scalars().unique().all())

    async def count_by_status(self) -> dict[str, int]:
        stmt = select(SolicitacaoAprovacao.status, func.count(SolicitacaoAprovacao.id)).group_by(
            SolicitacaoAprovacao.status
        )
        return {str(status): int(n) for status, n in (await self._session.execute(stmt)).all()}

    async def count_by_acao(self) -> dict[str, int]:
        stmt = (
            select(AcaoAprovacao.codigo, func.count(SolicitacaoAprovacao.id))
            .join(AcaoAprovacao, AcaoAprovacao.id == SolicitacaoAprovacao.acao_aprovacao_id)
            .group_by(AcaoAprovacao.codigo)
        )
        return {codigo: int(n) for codigo, n in (await self._session.execute(stmt)).all()}

    async def count_for_acao(
        self, acao_aprovacao_id: uuid.UUID, *, status: StatusSolicitacao | None = None
    ) -> int:
        stmt = select(func.count(SolicitacaoAprovacao.id)).where(
            SolicitacaoAprovacao.acao_aprovacao_id == acao_aprovacao_id
        )
        if status is not None:
            stmt = stmt.where(SolicitacaoAprovacao.status == status)
        return int((await self._session.execute(stmt)).scalar_one())

    async def count_for_aprovador(self, aprovador_id: uuid.UUID) -> int:
        stmt = select(func.count(SolicitacaoAprovador.id)).where(
            SolicitacaoAprovador.aprovador_id == aprovador_id
        )
        return int((await self._session.execute(stmt)).scalar_one())


class HistoricoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        solicitacao_id: uuid.UUID,
        acao: AcaoHistorico,
        usuario_id: uuid.UUID | None,
        justificativa: str | None = None,
        dados: dict[str, Any] | None = None,
        created_at: datetime | None = None,
    ) -> HistoricoAprovacao:
        entry = HistoricoAprovacao(
            solicitacao_id=solicitacao_id,
            acao=acao,
            usuario_id=usuario_id,
            justificativa=justificativa,
            dados=dados or {},
        )
        if created_at is not None:
            entry.created_at = created_at
        self._session.add(entry)
        await self._session.flush()
        return entry

    async def list_for(self, solicitacao_id: uuid.UUID) -> list[HistoricoAprovacao]:
        stmt = (
            select(HistoricoAprovacao)
            .where(HistoricoAprovacao.solicitacao_id == solicitacao_id)
            .order_by(HistoricoAprovacao.created_at, HistoricoAprovacao.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# Requests load their action (joined) and approver rows (selectin) eagerly.
