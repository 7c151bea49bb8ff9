"""
pgben.seeds.base

Seed contract and bookkeeping types.

Responsibilities:
- Define the `Seed` interface the runner executes.
- Count what each seed did (`SeedResult`) and how it ended (`SeedReport`).
- Provide the shared "insert permission if absent" step used by catalog seeds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import Permissao
from pgben.db.repositories.permissions import PermissaoRepo
from pgben.observability.logging import get_logger
from pgben.seeds.catalog import PermissionSpec

log = get_logger(__name__)


@dataclass
class SeedResult:
    created: int = 0
    updated: int = 0
    skipped: int = 0
    # Non-fatal failures (e.g. a scope row that could not be inserted).
    failed: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class SeedReport:
    name: str
    order: int
    ok: bool
    result: SeedResult = field(default_factory=SeedResult)
    duration_ms: float = 0.0
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "order": self.order,
            "ok": self.ok,
            "duration_ms": self.duration_ms,
            "error": self.error,
            **self.result.as_dict(),
        }


class Seed(ABC):
    """
    One ordered unit of reference data.

    `update_existing` is the seed's default; the runner may force it either way.
    Seeds flush through repositories and never commit.
    """

    name: str
    order: int
    description: str = ""
    update_existing: bool = False

    @abstractmethod
    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} order={self.order}>"


async def ensure_permission(
    session: AsyncSession,
    spec: PermissionSpec,
    *,
    result: SeedResult,
    update_existing: bool,
    with_scope: bool,
) -> Permissao:
    """
    Insert `spec` if absent. Scope rows are written only for permissions created here.
    """

    repo = PermissaoRepo(session)
    existing = await repo.get_by_nome(spec.nome)
    if existing is not None:
        if update_existing and existing.descricao != spec.descricao:
            existing.descricao = spec.descricao
            await session.flush()
            result.updated += 1
            log.info("permission_updated", permissao=spec.nome)
        else:
            result.skipped += 1
        return existing

    perm = await repo.create(nome=spec.nome, descricao=spec.descricao)
    result.created += 1
    log.debug("permission_created", permissao=spec.nome, modulo=perm.modulo)

    if with_scope:
        try:
            async with session.begin_nested():
                await repo.add_escopo(permissao_id=perm.id, tipo=spec.tipo_escopo)
        except SQLAlchemyError as exc:
            # The permission row stays; only the savepoint is rolled back.
            result.failed += 1
            log.warning(
                "permission_scope_insert_failed",
                permissao=spec.nome,
                escopo=spec.escopo,
                error=str(exc),
            )
    return perm


# --- Module Notes -----------------------------------------------------------
# Seeds never delete rows; disabling is done through `ativo` flags.
