"""
tests.test_escalation

Escalation sweep over pending requests with explicit clocks.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.base import utcnow
from pgben.db.models import (
    AcaoHistorico,
    SolicitacaoAprovacao,
    SolicitacaoAprovador,
    StatusSolicitacao,
)
from pgben.db.repositories.audit import AuditRepo
from pgben.services.approval_service import ApprovalService
from pgben.services.escalation_service import MAX_LEVEL_EVENT, EscalationService, perfil_no_nivel
from pgben.services.notification_service import NotificationService
from pgben.settings import Settings


@pytest_asyncio.fixture
async def pessoas(make_usuario, as_principal) -> dict[str, Any]:
    tecnico = await make_usuario("Tania Tecnica", role="TECNICO_UNIDADE", unidade="CRAS-PN")
    gestor = await make_usuario("Gustavo Gestor", role="GESTOR")
    return {"tecnico": as_principal(tecnico, "TECNICO_UNIDADE"), "gestor": gestor}


async def _criar(
    session: AsyncSession, settings: Settings, solicitante, tipo_acao: str, now
) -> SolicitacaoAprovacao:
    return await ApprovalService(session=session, settings=settings).criar_solicitacao(
        tipo_acao=tipo_acao,
        solicitante=solicitante,
        justificativa="Prazo de teste",
        now=now,
    )


async def _templates_recebidos(session: AsyncSession, settings: Settings, usuario_id) -> list[str]:
    svc = NotificationService(session=session, settings=settings)
    return [n.template_codigo for n in await svc.list_for_user(usuario_id)]


def test_perfil_no_nivel() -> None:
    s = SolicitacaoAprovacao(
        aprovadores=[
            SolicitacaoAprovador(perfil="ADMIN", ordem=1),
            SolicitacaoAprovador(perfil="GESTOR", ordem=2),
            SolicitacaoAprovador(perfil=None, ordem=3),
        ]
    )
    assert perfil_no_nivel(s, 0) == "ADMIN"
    assert perfil_no_nivel(s, 1) == "GESTOR"
    assert perfil_no_nivel(s, 2) == "USUARIO"
    assert perfil_no_nivel(s, 9) == "USUARIO"
    assert perfil_no_nivel(SolicitacaoAprovacao(aprovadores=[]), 0) == ""


@pytest.mark.asyncio
async def test_escalates_after_interval(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    t0 = utcnow()
    s = await _criar(session, settings, pessoas["tecnico"], "inativar_usuario", t0)
    svc = EscalationService(session=session, settings=settings)

    assert (await svc.processar(now=t0 + timedelta(hours=23))).escaladas == []

    report = await svc.processar(now=t0 + timedelta(hours=25))
    assert report.escaladas == [s.codigo]
    assert report.as_dict()["escaladas"] == 1
    assert s.status == StatusSolicitacao.pendente
    assert s.nivel_escalacao == 1
    assert s.escalado_em == t0 + timedelta(hours=25)
    assert s.prazo == t0 + timedelta(hours=49)

    historico = await ApprovalService(session=session, settings=settings).historico(s.id)
    escalada = historico[-1]
    assert escalada.acao == AcaoHistorico.escalar
    assert escalada.dados["de"] == "ADMIN" and escalada.dados["para"] == "GESTOR"

    recebidos = await _templates_recebidos(session, settings, pessoas["gestor"].id)
    assert "escalacao-automatica-aprovacao" in recebidos


@pytest.mark.asyncio
async def test_max_level_is_recorded_once_then_expires(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    settings = settings.model_copy(update={"escalacao_nivel_maximo": 1})
    t0 = utcnow()
    s = await _criar(session, settings, pessoas["tecnico"], "inativar_usuario", t0)
    svc = EscalationService(session=session, settings=settings)

    await svc.processar(now=t0 + timedelta(hours=25))
    assert s.nivel_escalacao == 1

    # Interval elapsed again at the ceiling, deadline not yet passed.
    report = await svc.processar(now=t0 + timedelta(hours=49))
    assert report.nivel_maximo == [s.codigo]
    assert report.expiradas == []
    assert s.status == StatusSolicitacao.pendente

    report = await svc.processar(now=t0 + timedelta(hours=50))
    assert report.nivel_maximo == []
    assert report.expiradas == [s.codigo]
    assert s.status == StatusSolicitacao.expirada

    auditoria = await AuditRepo(session).list_for_entity("solicitacao_aprovacao", s.id)
    assert [e.event_type for e in auditoria].count(MAX_LEVEL_EVENT) == 1


@pytest.mark.asyncio
async def test_expires_without_escalation(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    t0 = utcnow()
    # suspender_solicitacao has escalation disabled.
    s = await _criar(session, settings, pessoas["tecnico"], "suspender_solicitacao", t0)
    svc = EscalationService(session=session, settings=settings)

    report = await svc.processar(now=t0 + timedelta(hours=30))
    assert report.escaladas == []
    assert report.expiradas == [s.codigo]
    assert s.status == StatusSolicitacao.expirada
    assert s.processado_em == t0 + timedelta(hours=30)

    historico = await ApprovalService(session=session, settings=settings).historico(s.id)
    assert historico[-1].acao == AcaoHistorico.expirar

    # Expired requests leave the sweep.
    report = await svc.processar(now=t0 + timedelta(hours=31))
    assert report.as_dict()["expiradas"] == 0


@pytest.mark.asyncio
async def test_deadline_alert_is_sent_once(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    t0 = utcnow()
    s = await _criar(session, settings, pessoas["tecnico"], "suspender_solicitacao", t0)
    svc = EscalationService(session=session, settings=settings)

    assert (await svc.processar(now=t0 + timedelta(hours=10))).alertas == []

    report = await svc.processar(now=t0 + timedelta(hours=20))
    assert report.alertas == [s.codigo]
    assert s.alerta_prazo_enviado

    assert (await svc.processar(now=t0 + timedelta(hours=22))).alertas == []

    recebidos = await _templates_recebidos(session, settings, pessoas["gestor"].id)
    assert recebidos.count("prazo-aprovacao-vencendo") == 1


@pytest.mark.asyncio
async def test_escalation_resets_alert(
    session: AsyncSession, settings: Settings, pessoas: dict[str, Any]
) -> None:
    t0 = utcnow()
    s = await _criar(session, settings, pessoas["tecnico"], "inativar_usuario", t0)
    svc = EscalationService(session=session, settings=settings)

    assert (await svc.processar(now=t0 + timedelta(hours=20))).alertas == [s.codigo]
    await svc.processar(now=t0 + timedelta(hours=25))
    assert s.nivel_escalacao == 1
    assert not s.alerta_prazo_enviado

    # New deadline is t0 + 49h; the next window opens 6h before it.
    assert (await svc.processar(now=t0 + timedelta(hours=44))).alertas == [s.codigo]


# --- Module Notes -----------------------------------------------------------
# Sweeps take `now` explicitly; nothing here sleeps or depends on wall-clock timing.
