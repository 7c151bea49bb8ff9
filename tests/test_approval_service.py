"""
tests.test_approval_service

Approval workflow end to end at the service layer (seeded actions, real SQLite).

Responsibilities:
- Request creation: approvers, deadlines, duplicates, value limits, notifications.
- Decisions: strategies, self-approval, expiry, execution success/failure.
- Cancellation, listing/statistics and action/approver management.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import AsyncIterator
from datetime import timedelta
from decimal import Decimal
from typing import Any

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pgben.db.base import utcnow
from pgben.db.models import (
    AcaoHistorico,
    EstrategiaAprovacao,
    SolicitacaoAprovacao,
    StatusSolicitacao,
    TipoAprovador,
)
from pgben.errors import (
    ActionExecutionError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from pgben.services.action_executor import ActionExecutor
from pgben.services.approval_service import ApprovalService, ConfiguracaoAcaoInput, gerar_codigo
from pgben.services.escalation_service import EscalationService
from pgben.services.notification_service import NotificationService
from pgben.settings import Settings

S = StatusSolicitacao


@pytest_asyncio.fixture
async def executor(settings: Settings) -> AsyncIterator[ActionExecutor]:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))
    async with httpx.AsyncClient(transport=transport, base_url=settings.action_base_url) as http:
        yield ActionExecutor(settings=settings, http=http)


@pytest.fixture
def svc(session: AsyncSession, settings: Settings, executor: ActionExecutor) -> ApprovalService:
    return ApprovalService(session=session, settings=settings, executor=executor)


@pytest_asyncio.fixture
async def pessoas(make_usuario, as_principal) -> dict[str, Any]:
    tecnico = await make_usuario("Tania Tecnica", role="TECNICO_UNIDADE", unidade="CRAS-GUA")
    gestor = await make_usuario("Gustavo Gestor", role="GESTOR")
    coordenador = await make_usuario("Clara Coordenadora", role="COORDENADOR")
    admin = await make_usuario("Alice Admin", role="ADMIN")
    return {
        "tecnico": as_principal(tecnico, "TECNICO_UNIDADE"),
        "gestor": as_principal(gestor, "GESTOR"),
        "coordenador": as_principal(coordenador, "COORDENADOR"),
        "admin": as_principal(admin, "ADMIN"),
    }


async def _criar(
    svc: ApprovalService,
    solicitante,
    tipo_acao: str = "inativar_usuario",
    dados_acao: dict[str, Any] | None = None,
    **kwargs: Any,
) -> SolicitacaoAprovacao:
    return await svc.criar_solicitacao(
        tipo_acao=tipo_acao,
        solicitante=solicitante,
        justificativa="Servidor desligado do quadro",
        dados_acao=dados_acao,
        **kwargs,
    )


def test_gerar_codigo_format() -> None:
    codigo = gerar_codigo()
    assert re.fullmatch(r"SOL-[0-9A-Z]+-[0-9A-Z]{6}", codigo)
    assert gerar_codigo() != codigo


@pytest.mark.asyncio
async def test_requer_aprovacao(svc: ApprovalService) -> None:
    assert await svc.requer_aprovacao("inativar_usuario")
    assert not await svc.requer_aprovacao("acao_inexistente")
    with pytest.raises(NotFoundError):
        await svc.obter_configuracao("acao_inexistente")


@pytest.mark.asyncio
async def test_criar_solicitacao(
    svc: ApprovalService, session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    now = utcnow()
    s = await _criar(svc, pessoas["tecnico"], now=now)

    assert s.status == S.pendente
    assert s.solicitante_id == pessoas["tecnico"].usuario_id
    assert s.prazo == now + timedelta(hours=24)
    assert [a.perfil for a in s.aprovadores] == ["ADMIN", "GESTOR", "COORDENADOR", "TECNICO_SEMTAS"]
    assert all(a.decisao is None for a in s.aprovadores)
    assert [h.acao for h in await svc.historico(s.id)] == [AcaoHistorico.criar]

    notificacoes = NotificationService(session=session, settings=settings)
    (n,) = await notificacoes.list_for_user(pessoas["gestor"].usuario_id)
    assert n.template_codigo == "nova-solicitacao-aprovacao"
    assert s.codigo in (n.corpo_html or "")
    assert await notificacoes.list_for_user(pessoas["tecnico"].usuario_id) == []


@pytest.mark.asyncio
async def test_criar_requires_justification(svc: ApprovalService, pessoas: dict[str, Any]) -> None:
    with pytest.raises(BadRequestError):
        await svc.criar_solicitacao(
            tipo_acao="inativar_usuario", solicitante=pessoas["tecnico"], justificativa="   "
        )


@pytest.mark.asyncio
async def test_duplicate_pending_requests_are_rejected(
    svc: ApprovalService, pessoas: dict[str, Any]
) -> None:
    tecnico = pessoas["tecnico"]
    await _criar(svc, tecnico)
    with pytest.raises(BadRequestError) as exc:
        await _criar(svc, tecnico)
    assert "solicitacao_existente" in exc.value.details

    # With an entity id, duplicates are detected across actions.
    await _criar(svc, tecnico, "suspender_beneficio", {"params": {"id": "ben-1"}})
    with pytest.raises(BadRequestError):
        await _criar(svc, tecnico, "bloquear_beneficio", {"params": {"id": "ben-1"}})
    await _criar(svc, tecnico, "bloquear_beneficio", {"params": {"id": "ben-2"}})


@pytest.mark.asyncio
async def test_value_limits_filter_approvers(svc: ApprovalService, pessoas: dict[str, Any]) -> None:
    s = await _criar(svc, pessoas["tecnico"], dados_acao={"valor": "20000"})
    assert [a.perfil for a in s.aprovadores] == ["ADMIN", "GESTOR"]

    with pytest.raises(NotFoundError):
        await svc.processar_aprovacao(s.id, aprovador=pessoas["coordenador"], aprovado=True)


@pytest.mark.asyncio
async def test_approval_executes_registered_handler(
    svc: ApprovalService,
    executor: ActionExecutor,
    session: AsyncSession,
    settings: Settings,
    pessoas: dict[str, Any],
) -> None:
    chamadas: list[str] = []

    @executor.register("inativar_usuario")
    async def _inativar(solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        chamadas.append(solicitacao.codigo)
        return {"inativado": True}

    s = await _criar(svc, pessoas["tecnico"])
    s = await svc.processar_aprovacao(
        s.id, aprovador=pessoas["gestor"], aprovado=True, justificativa="De acordo"
    )

    assert chamadas == [s.codigo]
    assert s.status == S.executada
    assert s.resultado_execucao == {"inativado": True}
    assert s.processado_em is not None and s.executado_em is not None
    historico = await svc.historico(s.id)
    assert historico[0].acao == AcaoHistorico.criar
    # Decision and execution share a timestamp.
    assert {h.acao for h in historico[1:]} == {AcaoHistorico.aprovar, AcaoHistorico.executar}

    (n,) = await NotificationService(session=session, settings=settings).list_for_user(
        pessoas["tecnico"].usuario_id
    )
    assert n.template_codigo == "solicitacao-aprovacao-processada"


@pytest.mark.asyncio
async def test_approval_without_executor_stays_approved(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    s = await _criar(svc, pessoas["tecnico"])
    s = await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)
    assert s.status == S.aprovada


@pytest.mark.asyncio
async def test_execution_failure_is_persisted(
    svc: ApprovalService,
    executor: ActionExecutor,
    seeded: async_sessionmaker[AsyncSession],
    settings: Settings,
    pessoas: dict[str, Any],
) -> None:
    @executor.register("inativar_usuario")
    async def _falha(solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        raise RuntimeError("serviço de usuários indisponível")

    s = await _criar(svc, pessoas["tecnico"])
    with pytest.raises(ActionExecutionError):
        await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)

    async with seeded() as other:
        persisted = await ApprovalService(session=other, settings=settings).obter_solicitacao(s.id)
        assert persisted.status == S.erro_execucao
        assert "indisponível" in (persisted.erro_execucao or "")
        historico = await ApprovalService(session=other, settings=settings).historico(s.id)
        assert AcaoHistorico.erro_execucao in {h.acao for h in historico}


@pytest.mark.asyncio
async def test_replay_without_request_data_fails(
    svc: ApprovalService, pessoas: dict[str, Any]
) -> None:
    s = await _criar(svc, pessoas["tecnico"])
    with pytest.raises(ActionExecutionError) as exc:
        await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)
    assert exc.value.details["faltando"] == ["url", "method"]
    assert s.status == S.erro_execucao


@pytest.mark.asyncio
async def test_replay_success(svc: ApprovalService, pessoas: dict[str, Any]) -> None:
    s = await _criar(
        svc,
        pessoas["tecnico"],
        dados_acao={"url": "/v1/usuarios/42/inativar", "method": "patch", "body": {"motivo": "x"}},
    )
    s = await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)
    assert s.status == S.executada
    assert s.resultado_execucao == {"status_code": 200, "data": {"ok": True}}


@pytest.mark.asyncio
async def test_rejection(svc: ApprovalService, executor: ActionExecutor, pessoas: dict[str, Any]) -> None:
    chamadas: list[str] = []

    @executor.register("inativar_usuario")
    async def _inativar(solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        chamadas.append(solicitacao.codigo)
        return {}

    s = await _criar(svc, pessoas["tecnico"])
    s = await svc.processar_aprovacao(
        s.id, aprovador=pessoas["coordenador"], aprovado=False, justificativa="Sem respaldo"
    )
    assert s.status == S.rejeitada
    assert chamadas == []

    with pytest.raises(BadRequestError):
        await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)


@pytest.mark.asyncio
async def test_requester_cannot_approve_own_request(
    svc: ApprovalService, make_usuario, as_principal
) -> None:
    gestor = as_principal(await make_usuario("Gestor Solicitante", role="GESTOR"), "GESTOR")
    s = await _criar(svc, gestor)
    with pytest.raises(ForbiddenError):
        await svc.processar_aprovacao(s.id, aprovador=gestor, aprovado=True)


@pytest.mark.asyncio
async def test_self_approval_when_allowed(
    session: AsyncSession, settings: Settings, make_usuario, as_principal
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    gestor = as_principal(await make_usuario("Gestor Solicitante", role="GESTOR"), "GESTOR")
    # bloquear_beneficio allows self-approval (QUALQUER_UM).
    s = await _criar(svc, gestor, "bloquear_beneficio", {"params": {"id": "ben-9"}})
    s = await svc.processar_aprovacao(s.id, aprovador=gestor, aprovado=True)
    assert s.status == S.aprovada


@pytest.mark.asyncio
async def test_unanimous_requires_every_approver(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    s = await _criar(svc, pessoas["tecnico"], "cancelar_beneficio", {"params": {"id": "ben-3"}})

    s = await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)
    assert s.status == S.pendente
    with pytest.raises(BadRequestError):
        await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)

    # Unanimous actions never allow the requester to approve.
    with pytest.raises(ForbiddenError):
        await svc.processar_aprovacao(s.id, aprovador=pessoas["tecnico"], aprovado=True)


@pytest.mark.asyncio
async def test_expired_request(svc: ApprovalService, pessoas: dict[str, Any]) -> None:
    t0 = utcnow() - timedelta(hours=30)
    # suspender_solicitacao has escalation disabled.
    s = await _criar(svc, pessoas["tecnico"], "suspender_solicitacao", now=t0)

    with pytest.raises(BadRequestError) as exc:
        await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)
    assert exc.value.message == "Solicitação expirada"

    s = await svc.obter_solicitacao(s.id)
    assert s.status == S.expirada
    assert (await svc.historico(s.id))[-1].acao == AcaoHistorico.expirar


@pytest.mark.asyncio
async def test_deadline_waits_for_pending_escalation(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    t0 = utcnow() - timedelta(hours=30)
    # 24h deadline, escalation every 48h: past the deadline, escalation still to come.
    s = await _criar(svc, pessoas["tecnico"], "suspender_beneficio", now=t0)

    report = await EscalationService(session=session, settings=settings).processar()
    assert report.expiradas == [] and report.escaladas == []
    assert s.status == S.pendente

    s = await svc.processar_aprovacao(s.id, aprovador=pessoas["gestor"], aprovado=True)
    assert s.status == S.pendente
    assert (await svc.historico(s.id))[-1].acao == AcaoHistorico.aprovar

    # With no escalation level left the same deadline expires the request.
    teto = ApprovalService(
        session=session, settings=settings.model_copy(update={"escalacao_nivel_maximo": 0})
    )
    with pytest.raises(BadRequestError):
        await teto.processar_aprovacao(s.id, aprovador=pessoas["coordenador"], aprovado=True)
    assert s.status == S.expirada


@pytest.mark.asyncio
async def test_cancel(svc: ApprovalService, pessoas: dict[str, Any]) -> None:
    s = await _criar(svc, pessoas["tecnico"])
    with pytest.raises(ForbiddenError):
        await svc.cancelar(s.id, usuario=pessoas["gestor"])

    s = await svc.cancelar(s.id, usuario=pessoas["tecnico"], justificativa="Aberta por engano")
    assert s.status == S.cancelada
    with pytest.raises(BadRequestError):
        await svc.cancelar(s.id, usuario=pessoas["tecnico"])
    with pytest.raises(NotFoundError):
        await svc.cancelar(uuid.uuid4(), usuario=pessoas["tecnico"])


@pytest.mark.asyncio
async def test_pending_list_listing_and_statistics(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    a = await _criar(svc, pessoas["tecnico"], "suspender_beneficio", {"params": {"id": "b-1"}})
    b = await _criar(svc, pessoas["tecnico"], "liberar_beneficio", {"params": {"id": "b-2"}})

    assert {s.id for s in await svc.listar_pendentes_para(pessoas["gestor"])} == {a.id, b.id}
    assert await svc.listar_pendentes_para(pessoas["tecnico"]) == []

    await svc.processar_aprovacao(b.id, aprovador=pessoas["gestor"], aprovado=False)
    assert {s.id for s in await svc.listar_pendentes_para(pessoas["gestor"])} == {a.id}

    pagina = await svc.listar_solicitacoes(status=S.pendente)
    assert pagina.total == 1 and pagina.items[0].id == a.id
    pagina = await svc.listar_solicitacoes(tipo_acao="liberar_beneficio")
    assert [s.id for s in pagina.items] == [b.id]
    assert (await svc.listar_solicitacoes(tipo_acao="nao_existe")).total == 0
    pagina = await svc.listar_solicitacoes(page=2, limit=1)
    assert pagina.total == 2 and len(pagina.items) == 1

    stats = await svc.estatisticas()
    assert stats["total"] == 2
    assert stats["por_status"]["PENDENTE"] == 1
    assert stats["por_status"]["REJEITADA"] == 1
    assert stats["por_acao"] == {"suspender_beneficio": 1, "liberar_beneficio": 1}
    assert stats["taxa_aprovacao"] == 0.0


@pytest.mark.asyncio
async def test_manage_actions_and_approvers(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    acao = await svc.configurar_acao(
        "exportar_dados",
        ConfiguracaoAcaoInput(
            nome="Exportar dados", modulo="relatorio", estrategia=EstrategiaAprovacao.maioria
        ),
        ator="admin",
    )
    assert acao.configuracao is not None
    assert acao.configuracao.estrategia == EstrategiaAprovacao.maioria
    assert await svc.requer_aprovacao("exportar_dados")

    with pytest.raises(BadRequestError):
        await _criar(svc, pessoas["tecnico"], "exportar_dados")

    gestor = await svc.adicionar_aprovador(
        "exportar_dados", tipo=TipoAprovador.perfil, perfil="gestor", ator="admin"
    )
    assert gestor.perfil == "GESTOR"
    with pytest.raises(ConflictError):
        await svc.adicionar_aprovador(
            "exportar_dados", tipo=TipoAprovador.perfil, perfil="GESTOR", ator="admin"
        )
    with pytest.raises(BadRequestError):
        await svc.adicionar_aprovador("exportar_dados", tipo=TipoAprovador.usuario, ator="admin")
    avulso = await svc.adicionar_aprovador(
        "exportar_dados",
        tipo=TipoAprovador.usuario,
        usuario_id=pessoas["coordenador"].usuario_id,
        ordem=2,
        limite_valor=Decimal("1000"),
        ator="admin",
    )

    assert await svc.remover_aprovador("exportar_dados", avulso.id, ator="admin") == "removido"
    with pytest.raises(NotFoundError):
        await svc.remover_aprovador("exportar_dados", avulso.id, ator="admin")

    s = await _criar(svc, pessoas["tecnico"], "exportar_dados")
    assert await svc.remover_aprovador("exportar_dados", gestor.id, ator="admin") == "desativado"

    # A deactivated approver comes back on the same row.
    readicionado = await svc.adicionar_aprovador(
        "exportar_dados", tipo=TipoAprovador.perfil, perfil="gestor", ordem=3, ator="admin"
    )
    assert readicionado.id == gestor.id
    assert readicionado.ativo and readicionado.ordem == 3
    with pytest.raises(ConflictError):
        await svc.adicionar_aprovador(
            "exportar_dados", tipo=TipoAprovador.perfil, perfil="GESTOR", ator="admin"
        )

    with pytest.raises(BadRequestError):
        await svc.remover_acao("exportar_dados", ator="admin")
    await svc.cancelar(s.id, usuario=pessoas["tecnico"])
    assert await svc.remover_acao("exportar_dados", ator="admin") == "desativada"
    assert not await svc.requer_aprovacao("exportar_dados")

    await svc.configurar_acao(
        "acao_temporaria", ConfiguracaoAcaoInput(nome="Temporária", modulo="teste"), ator="admin"
    )
    assert await svc.remover_acao("acao_temporaria", ator="admin") == "removida"
    with pytest.raises(NotFoundError):
        await svc.remover_acao("acao_temporaria", ator="admin")


@pytest.mark.asyncio
async def test_delegation(
    session: AsyncSession,
    settings: Settings,
    pessoas: dict[str, Any],
    make_usuario,
    as_principal,
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    dora = await make_usuario("Dora Delegada")
    delegada = as_principal(dora)
    gestor = pessoas["gestor"]
    s = await _criar(svc, pessoas["tecnico"])

    with pytest.raises(BadRequestError):
        await svc.delegar(s.id, aprovador=gestor, delegado_id=gestor.usuario_id, justificativa="x")
    with pytest.raises(BadRequestError):
        await svc.delegar(
            s.id, aprovador=gestor, delegado_id=pessoas["tecnico"].usuario_id, justificativa="x"
        )
    with pytest.raises(NotFoundError):
        await svc.delegar(s.id, aprovador=gestor, delegado_id=uuid.uuid4(), justificativa="x")

    s = await svc.delegar(s.id, aprovador=gestor, delegado_id=dora.id, justificativa="Férias")
    (original,) = [a for a in s.aprovadores if a.perfil == "GESTOR"]
    (nova,) = [a for a in s.aprovadores if a.usuario_id == dora.id]
    assert original.delegado_para == dora.id
    assert nova.delegado_por == gestor.usuario_id
    assert (nova.ordem, nova.limite_valor) == (original.ordem, original.limite_valor)

    ultimo = (await svc.historico(s.id))[-1]
    assert ultimo.acao == AcaoHistorico.delegar
    assert ultimo.dados["para"] == str(dora.id)

    notificacoes = NotificationService(session=session, settings=settings)
    recebidas = [n.template_codigo for n in await notificacoes.list_for_user(dora.id)]
    assert recebidas == ["delegacao-aprovacao-criada"]

    # The seat moved: the delegator no longer decides, the delegate does.
    assert await svc.listar_pendentes_para(gestor) == []
    assert [p.id for p in await svc.listar_pendentes_para(delegada)] == [s.id]
    with pytest.raises(NotFoundError):
        await svc.processar_aprovacao(s.id, aprovador=gestor, aprovado=True)
    with pytest.raises(ConflictError):
        await svc.delegar(
            s.id, aprovador=pessoas["coordenador"], delegado_id=dora.id, justificativa="x"
        )

    s = await svc.processar_aprovacao(s.id, aprovador=delegada, aprovado=True)
    assert s.status == S.aprovada


@pytest.mark.asyncio
async def test_delegation_requires_permission(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any], make_usuario
) -> None:
    svc = ApprovalService(session=session, settings=settings)
    dora = await make_usuario("Dora Delegada")
    acao = await svc.obter_configuracao("inativar_usuario")
    for aprovador in acao.aprovadores:
        if aprovador.perfil == "ADMIN":
            aprovador.pode_delegar = False
    await session.commit()

    s = await _criar(svc, pessoas["tecnico"])
    with pytest.raises(ForbiddenError):
        await svc.delegar(s.id, aprovador=pessoas["admin"], delegado_id=dora.id, justificativa="x")
    with pytest.raises(BadRequestError):
        await svc.delegar(s.id, aprovador=pessoas["gestor"], delegado_id=dora.id, justificativa=" ")


# --- Module Notes -----------------------------------------------------------
# Handlers registered on the executor replace the HTTP replay for their action code.
