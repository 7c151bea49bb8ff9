"""
pgben.seeds.permissions

Permission catalog seeds.

Responsibilities:
- Create the composite roots (`*.*` and one `module.*` per module).
- Create each module's granular permissions with their default scope.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from pgben.observability.logging import get_logger
from pgben.seeds.base import Seed, SeedResult, ensure_permission
from pgben.seeds.catalog.permissions import MODULE_CATALOGS, ROOT_PERMISSIONS, ModuleCatalog

log = get_logger(__name__)


class RootPermissionsSeed(Seed):
    name = "permissoes.raiz"
    order = 20
    description = "Permissões compostas *.* e modulo.*"

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        result = SeedResult()
        for spec in ROOT_PERMISSIONS:
            await ensure_permission(
                session, spec, result=result, update_existing=update_existing, with_scope=False
            )
        return result


class ModulePermissionSeed(Seed):
    order = 30

    def __init__(self, catalog: ModuleCatalog) -> None:
        self.catalog = catalog
        self.name = f"permissoes.{catalog.modulo}"
        self.description = f"Permissões granulares do módulo {catalog.modulo}"

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        result = SeedResult()
        # The module root may be missing when this seed runs alone (`--only`).
        await ensure_permission(
            session,
            self.catalog.raiz,
            result=result,
            update_existing=update_existing,
            with_scope=False,
        )
        for spec in self.catalog.permissoes:
            await ensure_permission(
                session, spec, result=result, update_existing=update_existing, with_scope=True
            )
        log.info(
            "module_permissions_seeded",
            modulo=self.catalog.modulo,
            total=len(self.catalog.permissoes),
        )
        return result


def permission_seeds() -> list[Seed]:
    return [RootPermissionsSeed(), *(ModulePermissionSeed(c) for c in MODULE_CATALOGS)]
