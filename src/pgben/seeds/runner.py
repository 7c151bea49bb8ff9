"""
pgben.seeds.runner

Ordered execution of reference-data seeds.

Responsibilities:
- Hold the default seed registry in execution order.
- Run each seed in its own session/transaction (commit on success, rollback on failure).
- Report per-seed counts and stop at the first failure unless told to continue.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pgben.db.session import session_scope
from pgben.errors import SeedError
from pgben.observability.logging import get_logger
from pgben.seeds.aprovacao import SistemaAprovacaoSeed
from pgben.seeds.base import Seed, SeedReport
from pgben.seeds.notification_templates import template_seeds
from pgben.seeds.permissions import permission_seeds
from pgben.seeds.reference import RolesSeed, TiposBeneficioSeed, UnidadesSeed

log = get_logger(__name__)


def default_seeds() -> list[Seed]:
    return [
        UnidadesSeed(),
        *permission_seeds(),
        RolesSeed(),
        TiposBeneficioSeed(),
        *template_seeds(),
        SistemaAprovacaoSeed(),
    ]


class SeedRunner:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        seeds: Iterable[Seed] | None = None,
    ) -> None:
        self._session_factory = session_factory
        # sorted() is stable: equal orders keep registration order.
        self._seeds = sorted(default_seeds() if seeds is None else seeds, key=lambda s: s.order)
        names = [s.name for s in self._seeds]
        if len(names) != len(set(names)):
            raise SeedError("Nomes de seed duplicados", details={"seeds": names})

    @property
    def seeds(self) -> list[Seed]:
        return list(self._seeds)

    def select(self, only: Sequence[str] | None) -> list[Seed]:
        if not only:
            return self.seeds
        known = {s.name for s in self._seeds}
        unknown = sorted(set(only) - known)
        if unknown:
            raise SeedError("Seed desconhecido", details={"unknown": unknown})
        wanted = set(only)
        return [s for s in self._seeds if s.name in wanted]

    async def run(
        self,
        *,
        only: Sequence[str] | None = None,
        update_existing: bool | None = None,
        continue_on_error: bool = False,
    ) -> list[SeedReport]:
        reports: list[SeedReport] = []
        for seed in self.select(only):
            report = await self._run_one(
                seed, update_existing=update_existing, raise_on_error=not continue_on_error
            )
            reports.append(report)
        return reports

    async def _run_one(
        self, seed: Seed, *, update_existing: bool | None, raise_on_error: bool
    ) -> SeedReport:
        flag = seed.update_existing if update_existing is None else update_existing
        structlog.contextvars.bind_contextvars(seed=seed.name)
        started = time.perf_counter()
        log.info("seed_started", order=seed.order, update_existing=flag)
        try:
            async with session_scope(self._session_factory) as session:
                result = await seed.run(session, update_existing=flag)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            log.exception("seed_failed", duration_ms=duration_ms)
            structlog.contextvars.unbind_contextvars("seed")
            if raise_on_error:
                raise SeedError(
                    f"Seed '{seed.name}' falhou: {exc}", details={"seed": seed.name}
                ) from exc
            return SeedReport(
                name=seed.name, order=seed.order, ok=False, duration_ms=duration_ms, error=str(exc)
            )

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log.info("seed_finished", duration_ms=duration_ms, **result.as_dict())
        structlog.contextvars.unbind_contextvars("seed")
        return SeedReport(
            name=seed.name, order=seed.order, ok=True, result=result, duration_ms=duration_ms
        )


# --- Module Notes -----------------------------------------------------------
# Order: units 10, roots 20, module catalogs 30, roles 40, benefits 50, templates 60, approvals 70.
