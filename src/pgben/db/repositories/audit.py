"""
pgben.db.repositories.audit

Repository for `AuditEvent` entities.

Responsibilities:
- Append audit events (seed/system/user actions).
- Query the audit trail of one entity.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import AuditEvent


class AuditRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        entity_type: str,
        entity_id: uuid.UUID | None,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> AuditEvent:
        # Audit events are append-only (no update/delete) in normal operation.
        ev = AuditEvent(
            entity_type=entity_type,
            entity_id=entity_id,
            actor=actor,
            event_type=event_type,
            details=details,
        )
        self._session.add(ev)
        await self._session.flush()
        return ev

    async def list_for_entity(
        self, entity_type: str, entity_id: uuid.UUID, *, limit: int = 200
    ) -> list[AuditEvent]:
        # Newest first.
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.entity_type == entity_type, AuditEvent.entity_id == entity_id)
            .order_by(desc(AuditEvent.created_at))
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def exists(self, *, entity_type: str, entity_id: uuid.UUID, event_type: str) -> bool:
        stmt = select(AuditEvent.id).where(
            AuditEvent.entity_type == entity_type,
            AuditEvent.entity_id == entity_id,
            AuditEvent.event_type == event_type,
        )
        return (await self._session.execute(stmt.limit(1))).first() is not None


# --- Module Notes -----------------------------------------------------------
# `exists` backs once-only events such as the escalation ceiling notice.
