from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import Permissao, Role, RolePermissao


class RoleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, role_id: uuid.UUID) -> Role | None:
        return await self._session.get(Role, role_id)

    async def get_by_nome(self, nome: str) -> Role | None:
        stmt = select(Role).where(Role.nome == nome)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self) -> list[Role]:
        stmt = select(Role).order_by(Role.nome)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, *, nome: str, descricao: str) -> Role:
        role = Role(nome=nome, descricao=descricao, ativo=True)
        self._session.add(role)
        await self._session.flush()
        return role

    async def has_grant(self, *, role_id: uuid.UUID, permissao_id: uuid.UUID) -> bool:
        stmt = select(RolePermissao.id).where(
            RolePermissao.role_id == role_id, RolePermissao.permissao_id == permissao_id
        )
        return (await self._session.execute(stmt)).first() is not None

    async def grant(
        self, *, role_id: uuid.UUID, permissao_id: uuid.UUID, criado_por: str | None = None
    ) -> RolePermissao:
        link = RolePermissao(role_id=role_id, permissao_id=permissao_id, criado_por=criado_por)
        self._session.add(link)
        await self._session.flush()
        return link

    async def permissions_for_role(self, role_id: uuid.UUID) -> list[Permissao]:
        # Inactive roles or permissions grant nothing.
        stmt = (
            select(Permissao)
            .join(RolePermissao, RolePermissao.permissao_id == Permissao.id)
            .join(Role, Role.id == RolePermissao.role_id)
            .where(
                RolePermissao.role_id == role_id,
                Role.ativo.is_(True),
                Permissao.ativo.is_(True),
            )
        )
        return list((await self._session.execute(stmt)).scalars().all())
