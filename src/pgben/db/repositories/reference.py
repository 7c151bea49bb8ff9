from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import TipoBeneficio, Unidade


class UnidadeRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_sigla(self, sigla: str) -> Unidade | None:
        stmt = select(Unidade).where(Unidade.sigla == sigla)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self) -> list[Unidade]:
        stmt = select(Unidade).order_by(Unidade.nome)
        return list((await self._session.execute(stmt)).scalars().all())

    async def add(self, unidade: Unidade) -> Unidade:
        self._session.add(unidade)
        await self._session.flush()
        return unidade


class TipoBeneficioRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_codigo(self, codigo: str) -> TipoBeneficio | None:
        stmt = select(TipoBeneficio).where(TipoBeneficio.codigo == codigo)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self, *, ativo: bool | None = None) -> list[TipoBeneficio]:
        stmt = select(TipoBeneficio).order_by(TipoBeneficio.nome)
        if ativo is not None:
            stmt = stmt.where(TipoBeneficio.ativo == ativo)
        return list((await self._session.execute(stmt)).scalars().all())

    async def add(self, tipo: TipoBeneficio) -> TipoBeneficio:
        self._session.add(tipo)
        await self._session.flush()
        return tipo
