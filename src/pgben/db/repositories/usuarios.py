from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import Role, Usuario


class UsuarioRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, usuario_id: uuid.UUID) -> Usuario | None:
        return await self._session.get(Usuario, usuario_id)

    async def get_by_email(self, email: str) -> Usuario | None:
        stmt = select(Usuario).where(Usuario.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(
        self,
        *,
        nome: str,
        email: str,
        role_id: uuid.UUID | None = None,
        unidade_id: uuid.UUID | None = None,
    ) -> Usuario:
        usuario = Usuario(nome=nome, email=email, role_id=role_id, unidade_id=unidade_id)
        self._session.add(usuario)
        await self._session.flush()
        return usuario

    async def list_active_by_roles(self, role_names: Iterable[str]) -> list[Usuario]:
        names = list(role_names)
        if not names:
            return []
        stmt = (
            select(Usuario)
            .join(Role, Role.id == Usuario.role_id)
            .where(Role.nome.in_(names), Usuario.ativo.is_(True))
            .order_by(Usuario.nome)
        )
        return list((await self._session.execute(stmt)).scalars().unique().all())

    async def names_by_id(self, ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, str]:
        wanted = list(set(ids))
        if not wanted:
            return {}
        stmt = select(Usuario.id, Usuario.nome).where(Usuario.id.in_(wanted))
        return {row.id: row.nome for row in (await self._session.execute(stmt)).all()}
