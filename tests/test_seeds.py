"""
tests.test_seeds

Seed runner behavior against a real (SQLite) database.

Responsibilities:
- Ordering, selection and failure handling of the runner.
- Idempotence: a second run creates nothing.
- Spot checks of what the seeds persist.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pgben.db.models import (
    AcaoAprovacao,
    EstrategiaAprovacao,
    NotificationTemplate,
    Permissao,
    RolePermissao,
    TipoEscopo,
    Unidade,
)
from pgben.db.repositories.approvals import AcaoAprovacaoRepo
from pgben.db.repositories.permissions import PermissaoRepo
from pgben.db.repositories.reference import TipoBeneficioRepo
from pgben.db.repositories.roles import RoleRepo
from pgben.errors import SeedError
from pgben.seeds.base import Seed, SeedResult
from pgben.seeds.catalog.aprovacao import ACOES
from pgben.seeds.catalog.permissions import MODULE_CATALOGS, ROOT_PERMISSIONS
from pgben.seeds.runner import SeedRunner, default_seeds


async def _count(session: AsyncSession, model: type) -> int:
    return int((await session.execute(select(func.count()).select_from(model))).scalar_one())


class _BrokenSeed(Seed):
    name = "quebrado"
    order = 15

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        raise RuntimeError("boom")


class _RecordingSeed(Seed):
    def __init__(self, name: str, order: int, calls: list[str]) -> None:
        self.name = name
        self.order = order
        self._calls = calls

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        self._calls.append(self.name)
        return SeedResult(created=1)


def test_default_seeds_are_ordered_and_unique() -> None:
    runner = SeedRunner(None, default_seeds())  # type: ignore[arg-type]
    orders = [s.order for s in runner.seeds]
    assert orders == sorted(orders)
    assert runner.seeds[0].name == "unidades"
    assert runner.seeds[-1].name == "aprovacao"
    names = [s.name for s in runner.seeds]
    assert len(names) == len(set(names))


def test_duplicate_seed_names_are_rejected() -> None:
    calls: list[str] = []
    with pytest.raises(SeedError):
        SeedRunner(None, [_RecordingSeed("a", 1, calls), _RecordingSeed("a", 2, calls)])  # type: ignore[arg-type]


def test_select_unknown_seed_raises() -> None:
    runner = SeedRunner(None)  # type: ignore[arg-type]
    with pytest.raises(SeedError) as exc:
        runner.select(["unidades", "nao-existe"])
    assert exc.value.details["unknown"] == ["nao-existe"]


@pytest.mark.asyncio
async def test_runner_executes_in_order(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    calls: list[str] = []
    seeds = [
        _RecordingSeed("c", 30, calls),
        _RecordingSeed("a", 10, calls),
        _RecordingSeed("b", 10, calls),
    ]
    reports = await SeedRunner(sessionmaker, seeds).run()
    # Equal orders keep registration order.
    assert calls == ["a", "b", "c"]
    assert all(r.ok for r in reports)


@pytest.mark.asyncio
async def test_full_run_populates_reference_data(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> None:
    reports = await SeedRunner(sessionmaker).run()
    assert all(r.ok for r in reports)

    async with sessionmaker() as session:
        granular = sum(len(c.permissoes) for c in MODULE_CATALOGS)
        assert await _count(session, Permissao) == granular + len(ROOT_PERMISSIONS)
        assert await _count(session, Unidade) == 4
        assert await _count(session, AcaoAprovacao) == len(ACOES)
        assert await _count(session, NotificationTemplate) >= 15

        perms = PermissaoRepo(session)
        listar = await perms.get_by_nome("cidadao.listar")
        assert listar is not None
        assert listar.modulo == "cidadao"
        escopo = await perms.get_escopo(listar.id)
        assert escopo is not None and escopo.tipo_escopo_padrao == TipoEscopo.unidade

        # Legacy USUARIO scope is stored as PROPRIO.
        perfil = await perms.get_by_nome("usuario.perfil.visualizar")
        assert perfil is not None
        escopo = await perms.get_escopo(perfil.id)
        assert escopo is not None and escopo.tipo_escopo_padrao == TipoEscopo.proprio

        # Composite roots carry no scope row.
        raiz = await perms.get_by_nome("*.*")
        assert raiz is not None
        assert await perms.get_escopo(raiz.id) is None

        roles = RoleRepo(session)
        admin = await roles.get_by_nome("ADMIN")
        assert admin is not None
        assert [p.nome for p in await roles.permissions_for_role(admin.id)] == ["*.*"]

        acao = await AcaoAprovacaoRepo(session).get_by_codigo("cancelar_beneficio")
        assert acao is not None and acao.configuracao is not None
        assert acao.configuracao.estrategia == EstrategiaAprovacao.unanime
        assert acao.configuracao.min_aprovacoes == 2
        assert [a.perfil for a in acao.aprovadores] == [
            "ADMIN",
            "GESTOR",
            "COORDENADOR",
            "TECNICO_SEMTAS",
        ]

        padrao = await AcaoAprovacaoRepo(session).get_by_codigo("inativar_usuario")
        assert padrao is not None and padrao.configuracao is not None
        assert padrao.configuracao.estrategia == EstrategiaAprovacao.simples

        natalidade = await TipoBeneficioRepo(session).get_by_codigo("BENEFICIO_NATALIDADE")
        assert natalidade is not None
        assert natalidade.schema_estrutura["metadados"]["categoria"] == "beneficio_eventual"


@pytest.mark.asyncio
async def test_second_run_creates_nothing(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    await SeedRunner(sessionmaker).run()
    async with sessionmaker() as session:
        grants_before = await _count(session, RolePermissao)

    reports = await SeedRunner(sessionmaker).run()
    assert all(r.ok for r in reports)
    assert sum(r.result.created for r in reports) == 0

    async with sessionmaker() as session:
        assert await _count(session, RolePermissao) == grants_before


@pytest.mark.asyncio
async def test_only_runs_selected_seeds(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    reports = await SeedRunner(sessionmaker).run(only=["permissoes.cidadao"])
    assert [r.name for r in reports] == ["permissoes.cidadao"]

    async with sessionmaker() as session:
        perms = PermissaoRepo(session)
        # The module root is created alongside the module's permissions.
        assert await perms.get_by_nome("cidadao.*") is not None
        assert await perms.get_by_nome("cidadao.listar") is not None
        assert await perms.get_by_nome("*.*") is None
        assert await _count(session, Unidade) == 0


@pytest.mark.asyncio
async def test_roles_seed_alone_reports_missing_permissions(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> None:
    (report,) = await SeedRunner(sessionmaker).run(only=["roles"])
    assert report.ok
    assert report.result.failed > 0


@pytest.mark.asyncio
async def test_failure_stops_the_run(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    calls: list[str] = []
    seeds = [_RecordingSeed("antes", 10, calls), _BrokenSeed(), _RecordingSeed("depois", 20, calls)]
    with pytest.raises(SeedError) as exc:
        await SeedRunner(sessionmaker, seeds).run()
    assert exc.value.details == {"seed": "quebrado"}
    assert calls == ["antes"]


@pytest.mark.asyncio
async def test_continue_on_error_reports_failure(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> None:
    calls: list[str] = []
    seeds = [_RecordingSeed("antes", 10, calls), _BrokenSeed(), _RecordingSeed("depois", 20, calls)]
    reports = await SeedRunner(sessionmaker, seeds).run(continue_on_error=True)
    assert [r.ok for r in reports] == [True, False, True]
    assert reports[1].error == "boom"
    assert calls == ["antes", "depois"]


# --- Module Notes -----------------------------------------------------------
# Catalog-only checks that need no database live in `test_catalog.py`.
