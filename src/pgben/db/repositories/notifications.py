from __future__ import annotations

import uuid

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import Notificacao, NotificationTemplate


class NotificationTemplateRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_codigo(self, codigo: str) -> NotificationTemplate | None:
        stmt = select(NotificationTemplate).where(NotificationTemplate.codigo == codigo)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(
        self, *, categoria: str | None = None, ativo: bool | None = None
    ) -> list[NotificationTemplate]:
        stmt = select(NotificationTemplate).order_by(NotificationTemplate.codigo)
        if categoria is not None:
            stmt = stmt.where(NotificationTemplate.categoria == categoria)
        if ativo is not None:
            stmt = stmt.where(NotificationTemplate.ativo == ativo)
        return list((await self._session.execute(stmt)).scalars().all())

    async def add(self, template: NotificationTemplate) -> NotificationTemplate:
        self._session.add(template)
        await self._session.flush()
        return template


class NotificacaoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, notificacao_id: uuid.UUID) -> Notificacao | None:
        return await self._session.get(Notificacao, notificacao_id)

    async def add_many(self, items: list[Notificacao]) -> list[Notificacao]:
        self._session.add_all(items)
        await self._session.flush()
        return items

    async def list_for_user(
        self,
        destinatario_id: uuid.UUID,
        *,
        apenas_nao_lidas: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notificacao]:
        stmt = (
            select(Notificacao)
            .where(Notificacao.destinatario_id == destinatario_id)
            .order_by(desc(Notificacao.created_at))
            .limit(limit)
            .offset(offset)
        )
        if apenas_nao_lidas:
            stmt = stmt.where(Notificacao.lida.is_(False))
        return list((await self._session.execute(stmt)).scalars().all())
