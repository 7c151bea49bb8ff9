"""
pgben.seeds.notification_templates

Notification template seeds, one per template family.

Responsibilities:
- Insert approval and system templates when missing.
- Keep request (solicitacao) templates in sync with the catalog (upsert).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import NotificationTemplate
from pgben.db.repositories.notifications import NotificationTemplateRepo
from pgben.seeds.base import Seed, SeedResult
from pgben.seeds.catalog.templates import TemplateSpec
from pgben.seeds.catalog.templates import aprovacao, sistema, solicitacao


class TemplateSeed(Seed):
    order = 60

    def __init__(
        self, name: str, templates: tuple[TemplateSpec, ...], *, update_existing: bool = False
    ) -> None:
        self.name = name
        self.templates = templates
        self.update_existing = update_existing
        self.description = f"{len(templates)} templates de notificação"

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        repo = NotificationTemplateRepo(session)
        result = SeedResult()
        for spec in self.templates:
            row = spec.as_row()
            template = await repo.get_by_codigo(spec.codigo)
            if template is None:
                await repo.add(NotificationTemplate(**row))
                result.created += 1
            elif update_existing:
                for key, value in row.items():
                    setattr(template, key, value)
                result.updated += 1
            else:
                result.skipped += 1
        await session.flush()
        return result


def template_seeds() -> list[Seed]:
    return [
        TemplateSeed("templates.aprovacao", aprovacao.TEMPLATES),
        TemplateSeed("templates.sistema", sistema.TEMPLATES),
        TemplateSeed("templates.solicitacao", solicitacao.TEMPLATES, update_existing=True),
    ]
