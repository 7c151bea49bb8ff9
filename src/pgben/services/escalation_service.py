"""
pgben.services.escalation_service

Periodic sweep over pending approval requests.

Responsibilities:
- Expire requests past their deadline when escalation is off (or exhausted).
- Escalate requests whose escalation interval elapsed, up to the configured ceiling.
- Send one "deadline approaching" alert per deadline window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import cast

from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.base import utcnow
from pgben.db.models import AcaoHistorico, SolicitacaoAprovacao
from pgben.db.repositories.approvals import HistoricoRepo, SolicitacaoRepo
from pgben.db.repositories.audit import AuditRepo
from pgben.observability.logging import get_logger
from pgben.services.approval_service import (
    ENTITY,
    ApprovalService,
    formatar_data,
    formatar_horas,
    prazo_esgotado,
    prioridade_da_acao,
)
from pgben.settings import Settings

log = get_logger(__name__)

MAX_LEVEL_EVENT = "APPROVAL_ESCALATION_MAX_LEVEL"


@dataclass
class EscalationReport:
    expiradas: list[str] = field(default_factory=list)
    escaladas: list[str] = field(default_factory=list)
    alertas: list[str] = field(default_factory=list)
    nivel_maximo: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, object]:
        return {
            "expiradas": len(self.expiradas),
            "escaladas": len(self.escaladas),
            "alertas": len(self.alertas),
            "nivel_maximo": len(self.nivel_maximo),
            "codigos": {
                "expiradas": self.expiradas,
                "escaladas": self.escaladas,
                "alertas": self.alertas,
                "nivel_maximo": self.nivel_maximo,
            },
        }


def perfil_no_nivel(solicitacao: SolicitacaoAprovacao, nivel: int) -> str:
    # Escalation walks the approver profiles in `ordem`; the last one absorbs deeper levels.
    perfis = list(dict.fromkeys(linha.perfil or "USUARIO" for linha in solicitacao.aprovadores))
    if not perfis:
        return ""
    return perfis[min(nivel, len(perfis) - 1)]


class EscalationService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._solicitacoes = SolicitacaoRepo(session)
        self._historico = HistoricoRepo(session)
        self._audit = AuditRepo(session)
        self._aprovacao = ApprovalService(session=session, settings=settings)

    async def processar(self, now: datetime | None = None) -> EscalationReport:
        now = now or utcnow()
        report = EscalationReport()
        alerta = timedelta(hours=self._settings.prazo_alerta_horas)
        nivel_maximo = self._settings.escalacao_nivel_maximo

        for solicitacao in await self._solicitacoes.list_pending():
            config = solicitacao.acao.configuracao

            if config is not None and config.escalacao_ativa:
                intervalo = timedelta(hours=config.tempo_escalacao_horas)
                referencia = solicitacao.escalado_em or solicitacao.created_at
                if now - referencia >= intervalo:
                    if solicitacao.nivel_escalacao < nivel_maximo:
                        await self._escalar(solicitacao, intervalo=intervalo, now=now)
                        report.escaladas.append(solicitacao.codigo)
                        continue
                    if await self._registrar_nivel_maximo(solicitacao):
                        report.nivel_maximo.append(solicitacao.codigo)

            if prazo_esgotado(solicitacao, now, nivel_maximo):
                await self._aprovacao.marcar_expirada(solicitacao, now=now)
                report.expiradas.append(solicitacao.codigo)
                continue

            if (
                not solicitacao.alerta_prazo_enviado
                and solicitacao.prazo is not None
                and now < solicitacao.prazo <= now + alerta
            ):
                await self._alertar_prazo(solicitacao, now=now)
                report.alertas.append(solicitacao.codigo)

        await self._session.commit()
        log.info(
            "escalation_sweep_finished",
            expiradas=len(report.expiradas),
            escaladas=len(report.escaladas),
            alertas=len(report.alertas),
            nivel_maximo=len(report.nivel_maximo),
        )
        return report

    async def _escalar(
        self, solicitacao: SolicitacaoAprovacao, *, intervalo: timedelta, now: datetime
    ) -> None:
        anterior = perfil_no_nivel(solicitacao, solicitacao.nivel_escalacao)
        prazo_original = solicitacao.prazo
        solicitacao.nivel_escalacao += 1
        solicitacao.escalado_em = now
        solicitacao.prazo = max(prazo_original or now, now) + intervalo
        solicitacao.alerta_prazo_enviado = False
        novo = perfil_no_nivel(solicitacao, solicitacao.nivel_escalacao)

        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.escalar,
            usuario_id=None,
            dados={
                "nivel": solicitacao.nivel_escalacao,
                "de": anterior,
                "para": novo,
                "novo_prazo": solicitacao.prazo.isoformat(),
            },
            created_at=now,
        )
        log.info(
            "approval_request_escalated",
            codigo=solicitacao.codigo,
            nivel=solicitacao.nivel_escalacao,
        )

        base = {
            "acao_nome": solicitacao.acao.nome,
            "codigo_solicitacao": solicitacao.codigo,
            "solicitante_nome": await self._aprovacao.nome_do_usuario(solicitacao.solicitante_id),
            "aprovador_anterior": anterior,
            "novo_aprovador": novo,
            "data_escalacao": formatar_data(now),
            "data_solicitacao": formatar_data(solicitacao.created_at),
            "prazo_original": formatar_data(prazo_original),
            "novo_prazo": formatar_data(solicitacao.prazo),
            "tempo_restante_novo": formatar_horas(solicitacao.prazo - now),
            "link_aprovacao": self._aprovacao.link_aprovacao(solicitacao),
        }
        for usuario in await self._aprovacao.destinatarios(solicitacao):
            await self._aprovacao.notificar(
                "escalacao-automatica-aprovacao",
                usuario.id,
                {**base, "destinatario_nome": usuario.nome},
            )

    async def _registrar_nivel_maximo(self, solicitacao: SolicitacaoAprovacao) -> bool:
        if await self._audit.exists(
            entity_type=ENTITY, entity_id=solicitacao.id, event_type=MAX_LEVEL_EVENT
        ):
            return False
        await self._audit.add(
            entity_type=ENTITY,
            entity_id=solicitacao.id,
            actor="system",
            event_type=MAX_LEVEL_EVENT,
            details={
                "codigo": solicitacao.codigo,
                "nivel": solicitacao.nivel_escalacao,
                "nivel_maximo": self._settings.escalacao_nivel_maximo,
            },
        )
        log.warning("approval_escalation_max_level", codigo=solicitacao.codigo)
        return True

    async def _alertar_prazo(self, solicitacao: SolicitacaoAprovacao, *, now: datetime) -> None:
        prazo = cast(datetime, solicitacao.prazo)
        config = solicitacao.acao.configuracao
        escalacao = bool(config and config.escalacao_ativa)
        solicitacao.alerta_prazo_enviado = True

        base = {
            "horas_restantes": max(0, int((prazo - now).total_seconds() // 3600)),
            "acao_nome": solicitacao.acao.nome,
            "solicitante_nome": await self._aprovacao.nome_do_usuario(solicitacao.solicitante_id),
            "codigo_solicitacao": solicitacao.codigo,
            "prazo_limite": formatar_data(prazo),
            "data_solicitacao": formatar_data(solicitacao.created_at),
            "prioridade": prioridade_da_acao(solicitacao.acao),
            "escalacao_automatica": escalacao,
            "proximo_aprovador": perfil_no_nivel(solicitacao, solicitacao.nivel_escalacao + 1)
            if escalacao
            else None,
            "link_aprovacao": self._aprovacao.link_aprovacao(solicitacao),
            "link_delegar": f"{self._aprovacao.link_aprovacao(solicitacao)}/delegar",
        }
        for usuario in await self._aprovacao.destinatarios(solicitacao):
            await self._aprovacao.notificar(
                "prazo-aprovacao-vencendo", usuario.id, {**base, "aprovador_nome": usuario.nome}
            )
        log.info("approval_deadline_alert", codigo=solicitacao.codigo)


# --- Module Notes -----------------------------------------------------------
# Run through `POST /v1/aprovacao/escalacao/processar` or any scheduler calling `processar`.
