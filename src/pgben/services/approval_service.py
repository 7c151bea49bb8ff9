"""
pgben.services.approval_service

Approval workflow for critical actions (transaction + persistence owner).

Responsibilities:
- Decide whether an action requires approval and expose its configuration.
- Create approval requests, record approver decisions and compute the request status.
- Execute approved actions through the `ActionExecutor` and persist the outcome.
- Cancel requests, read history/statistics, and manage actions and approvers.
- Notify approvers and requesters (failures are logged, never fatal).
"""

from __future__ import annotations

import secrets
import string
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.auth.models import Principal
from pgben.db.base import utcnow
from pgben.db.models import (
    AcaoAprovacao,
    AcaoHistorico,
    Aprovador,
    ConfiguracaoAprovacao,
    EstrategiaAprovacao,
    HistoricoAprovacao,
    SolicitacaoAprovacao,
    SolicitacaoAprovador,
    StatusSolicitacao,
    TipoAprovador,
    Usuario,
)
from pgben.db.repositories.approvals import AcaoAprovacaoRepo, HistoricoRepo, SolicitacaoRepo
from pgben.db.repositories.audit import AuditRepo
from pgben.db.repositories.usuarios import UsuarioRepo
from pgben.errors import (
    ActionExecutionError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PgbenError,
)
from pgben.observability.logging import get_logger
from pgben.services.action_executor import ActionExecutor
from pgben.services.approval_strategies import calcular_status, permite_autoaprovacao
from pgben.services.notification_service import NotificationService
from pgben.settings import Settings

log = get_logger(__name__)

ENTITY = "solicitacao_aprovacao"
_BASE36 = string.digits + string.ascii_uppercase
_DECIDIDOS = (StatusSolicitacao.aprovada, StatusSolicitacao.executada, StatusSolicitacao.erro_execucao)


def _base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = _BASE36[r] + out
        if n == 0:
            return out


def gerar_codigo(now: datetime | None = None) -> str:
    ts = int((now or utcnow()).timestamp() * 1000)
    sufixo = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"SOL-{_base36(ts)}-{sufixo}"


def formatar_data(value: datetime | None) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else ""


def formatar_horas(delta: timedelta) -> str:
    horas = max(0, int(delta.total_seconds() // 3600))
    return f"{horas} horas"


def prioridade_da_acao(acao: AcaoAprovacao) -> str:
    if acao.nivel_criticidade >= 4:
        return "critica"
    if acao.nivel_criticidade >= 3:
        return "alta"
    return "normal"


def valor_da_acao(dados_acao: Mapping[str, Any]) -> Decimal | None:
    raw = dados_acao.get("valor")
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return Decimal(str(raw))
    except InvalidOperation:
        return None


def chave_duplicidade(dados_acao: Mapping[str, Any]) -> str | None:
    params = dados_acao.get("params")
    if isinstance(params, dict) and params.get("id") is not None:
        return str(params["id"])
    return None


def dentro_do_limite(limite: Decimal | None, valor: Decimal | None) -> bool:
    return limite is None or valor is None or limite >= valor


def prazo_esgotado(solicitacao: SolicitacaoAprovacao, now: datetime, nivel_maximo: int) -> bool:
    """
    Past the deadline with no escalation left to run.

    While escalation is active and below `nivel_maximo` the deadline only triggers
    escalation; the escalation sweep and approver decisions both follow this rule.
    """

    if solicitacao.prazo is None or solicitacao.prazo >= now:
        return False
    config = solicitacao.acao.configuracao
    if config is None or not config.escalacao_ativa:
        return True
    return solicitacao.nivel_escalacao >= nivel_maximo


@dataclass(frozen=True)
class Pagina:
    items: list[SolicitacaoAprovacao]
    total: int
    page: int
    limit: int


@dataclass(frozen=True)
class ConfiguracaoAcaoInput:
    nome: str
    modulo: str
    tipo: str | None = None
    descricao: str = ""
    entidade_alvo: str | None = None
    nivel_criticidade: int = 1
    tags: list[str] = field(default_factory=list)
    estrategia: EstrategiaAprovacao = EstrategiaAprovacao.simples
    min_aprovacoes: int = 1
    tempo_limite_horas: int = 24
    permite_auto_aprovacao: bool = False
    escalacao_ativa: bool = True
    tempo_escalacao_horas: int = 24
    condicoes: dict[str, Any] = field(default_factory=dict)


class ApprovalService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        executor: ActionExecutor | None = None,
    ) -> None:
        self._session = session
        self._settings = settings
        self._executor = executor

        self._acoes = AcaoAprovacaoRepo(session)
        self._solicitacoes = SolicitacaoRepo(session)
        self._historico = HistoricoRepo(session)
        self._audit = AuditRepo(session)
        self._usuarios = UsuarioRepo(session)
        self._notifications = NotificationService(session=session, settings=settings)

    # --- configuration lookups ------------------------------------------------

    async def requer_aprovacao(self, tipo_acao: str) -> bool:
        acao = await self._acoes.get_by_codigo(tipo_acao)
        return bool(
            acao is not None
            and acao.ativo
            and acao.configuracao is not None
            and acao.configuracao.ativo
        )

    async def obter_configuracao(self, tipo_acao: str) -> AcaoAprovacao:
        acao = await self._acoes.get_by_codigo(tipo_acao)
        if acao is None or not acao.ativo or acao.configuracao is None or not acao.configuracao.ativo:
            raise NotFoundError(
                "Configuração de aprovação não encontrada", details={"tipo_acao": tipo_acao}
            )
        return acao

    async def listar_acoes(self, *, modulo: str | None = None) -> list[AcaoAprovacao]:
        return await self._acoes.list(modulo=modulo)

    # --- request lifecycle ----------------------------------------------------

    async def criar_solicitacao(
        self,
        *,
        tipo_acao: str,
        solicitante: Principal,
        justificativa: str,
        dados_acao: Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> SolicitacaoAprovacao:
        now = now or utcnow()
        solicitante_id = solicitante.usuario_id
        if solicitante_id is None:
            raise BadRequestError("Solicitante inválido", details={"subject": solicitante.subject})
        justificativa = (justificativa or "").strip()
        if not justificativa:
            raise BadRequestError("Justificativa é obrigatória")
        dados = dict(dados_acao or {})

        acao = await self.obter_configuracao(tipo_acao)
        config = cast(ConfiguracaoAprovacao, acao.configuracao)

        await self._rejeitar_duplicada(solicitante_id, acao, dados)

        valor = valor_da_acao(dados)
        aprovadores = [
            SolicitacaoAprovador(
                aprovador_id=a.id,
                perfil=a.perfil if a.tipo == TipoAprovador.perfil else None,
                usuario_id=a.usuario_id if a.tipo == TipoAprovador.usuario else None,
                ordem=a.ordem,
                limite_valor=a.limite_valor,
                obrigatorio=a.obrigatorio,
            )
            for a in acao.aprovadores
            if a.ativo and dentro_do_limite(a.limite_valor, valor)
        ]
        if not aprovadores:
            raise BadRequestError(
                "Nenhum aprovador configurado",
                details={"tipo_acao": tipo_acao, "valor": str(valor) if valor is not None else None},
            )

        solicitacao = SolicitacaoAprovacao(
            codigo=gerar_codigo(now),
            acao=acao,
            acao_aprovacao_id=acao.id,
            solicitante_id=solicitante_id,
            status=StatusSolicitacao.pendente,
            justificativa=justificativa,
            dados_acao=dados,
            prazo=now + timedelta(hours=config.tempo_limite_horas),
            nivel_escalacao=0,
            alerta_prazo_enviado=False,
            aprovadores=aprovadores,
            created_at=now,
            updated_at=now,
        )
        await self._solicitacoes.add(solicitacao)
        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.criar,
            usuario_id=solicitante_id,
            justificativa=justificativa,
            dados={"tipo_acao": tipo_acao, "aprovadores": len(aprovadores)},
            created_at=now,
        )
        await self._audit.add(
            entity_type=ENTITY,
            entity_id=solicitacao.id,
            actor=solicitante.subject,
            event_type="APPROVAL_REQUEST_CREATED",
            details={"codigo": solicitacao.codigo, "tipo_acao": tipo_acao},
        )
        await self._notificar_aprovadores_nova(solicitacao, now=now)
        await self._session.commit()

        log.info(
            "approval_request_created",
            codigo=solicitacao.codigo,
            tipo_acao=tipo_acao,
            estrategia=config.estrategia.value,
            aprovadores=len(aprovadores),
        )
        return solicitacao

    async def _rejeitar_duplicada(
        self, solicitante_id: uuid.UUID, acao: AcaoAprovacao, dados: Mapping[str, Any]
    ) -> None:
        chave = chave_duplicidade(dados)
        for pendente in await self._solicitacoes.list_pending_by_requester(solicitante_id):
            if chave is not None:
                duplicada = chave_duplicidade(pendente.dados_acao or {}) == chave
            else:
                duplicada = pendente.acao_aprovacao_id == acao.id
            if duplicada:
                raise BadRequestError(
                    "Já existe uma solicitação pendente para esta ação",
                    details={"solicitacao_existente": pendente.codigo},
                )

    async def processar_aprovacao(
        self,
        solicitacao_id: uuid.UUID,
        *,
        aprovador: Principal,
        aprovado: bool,
        justificativa: str | None = None,
        now: datetime | None = None,
    ) -> SolicitacaoAprovacao:
        now = now or utcnow()
        solicitacao = await self._solicitacao_aberta(solicitacao_id, ator=aprovador, now=now)

        usuario_id = aprovador.usuario_id
        if usuario_id is None:
            raise ForbiddenError("Aprovador inválido", details={"subject": aprovador.subject})

        config = solicitacao.acao.configuracao
        estrategia = config.estrategia if config else EstrategiaAprovacao.simples
        min_aprovacoes = config.min_aprovacoes if config else 1
        auto = permite_autoaprovacao(estrategia, config.permite_auto_aprovacao if config else False)
        if usuario_id == solicitacao.solicitante_id and not auto:
            raise ForbiddenError("O solicitante não pode aprovar a própria solicitação")

        linha = self._linha_do_aprovador(solicitacao, aprovador)

        linha.decisao = aprovado
        linha.justificativa = justificativa
        linha.decidido_por = usuario_id
        linha.decidido_em = now
        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.aprovar if aprovado else AcaoHistorico.rejeitar,
            usuario_id=usuario_id,
            justificativa=justificativa,
            dados={"perfil": linha.perfil, "ordem": linha.ordem},
            created_at=now,
        )

        novo_status = calcular_status(estrategia, min_aprovacoes, solicitacao.aprovadores_vigentes)
        if novo_status != StatusSolicitacao.pendente:
            solicitacao.status = novo_status
            solicitacao.processado_em = now
        await self._audit.add(
            entity_type=ENTITY,
            entity_id=solicitacao.id,
            actor=aprovador.subject,
            event_type="APPROVAL_DECISION_RECORDED",
            details={"aprovado": aprovado, "status": solicitacao.status.value},
        )
        if novo_status != StatusSolicitacao.pendente:
            await self._notificar_solicitante(solicitacao, aprovador_id=usuario_id, now=now)
        await self._session.commit()

        log.info(
            "approval_decision_recorded",
            codigo=solicitacao.codigo,
            aprovado=aprovado,
            status=solicitacao.status.value,
        )

        if novo_status == StatusSolicitacao.aprovada:
            await self._executar(solicitacao, now=now)
        return solicitacao

    async def _solicitacao_aberta(
        self, solicitacao_id: uuid.UUID, *, ator: Principal, now: datetime
    ) -> SolicitacaoAprovacao:
        solicitacao = await self.obter_solicitacao(solicitacao_id)
        if solicitacao.status != StatusSolicitacao.pendente:
            raise BadRequestError(
                "Solicitação não está pendente",
                details={"status": solicitacao.status.value},
            )
        if prazo_esgotado(solicitacao, now, self._settings.escalacao_nivel_maximo):
            await self.marcar_expirada(solicitacao, now=now, usuario_id=ator.usuario_id)
            await self._session.commit()
            raise BadRequestError(
                "Solicitação expirada",
                details={"prazo": solicitacao.prazo.isoformat() if solicitacao.prazo else None},
            )
        return solicitacao

    def _linha_do_aprovador(
        self, solicitacao: SolicitacaoAprovacao, aprovador: Principal
    ) -> SolicitacaoAprovador:
        usuario_id = aprovador.usuario_id
        valor = valor_da_acao(solicitacao.dados_acao or {})
        candidatas = [
            linha
            for linha in solicitacao.aprovadores_vigentes
            if (
                (linha.usuario_id is not None and linha.usuario_id == usuario_id)
                or (linha.perfil is not None and linha.perfil in aprovador.roles)
            )
            and dentro_do_limite(linha.limite_valor, valor)
        ]
        if not candidatas:
            raise NotFoundError(
                "Usuário não é aprovador desta solicitação",
                details={"solicitacao": solicitacao.codigo},
            )
        if any(linha.decidido_por == usuario_id for linha in solicitacao.aprovadores):
            raise BadRequestError(
                "Aprovador já registrou decisão para esta solicitação",
                details={"solicitacao": solicitacao.codigo},
            )
        pendentes = [linha for linha in candidatas if linha.decisao is None]
        if not pendentes:
            raise BadRequestError(
                "Decisão já registrada para este aprovador",
                details={"solicitacao": solicitacao.codigo},
            )
        return pendentes[0]

    async def _executar(self, solicitacao: SolicitacaoAprovacao, *, now: datetime) -> None:
        if self._executor is None:
            log.warning("approval_executor_missing", codigo=solicitacao.codigo)
            return
        try:
            resultado = await self._executor.execute(solicitacao)
        except (ActionExecutionError, BadRequestError) as exc:
            solicitacao.status = StatusSolicitacao.erro_execucao
            solicitacao.erro_execucao = str(exc)
            await self._historico.add(
                solicitacao_id=solicitacao.id,
                acao=AcaoHistorico.erro_execucao,
                usuario_id=None,
                justificativa=str(exc),
                dados=dict(exc.details),
                created_at=now,
            )
            await self._audit.add(
                entity_type=ENTITY,
                entity_id=solicitacao.id,
                actor="system",
                event_type="APPROVAL_EXECUTION_FAILED",
                details={"erro": str(exc)},
            )
            await self._session.commit()
            log.warning("approval_execution_failed", codigo=solicitacao.codigo, error=str(exc))
            if isinstance(exc, ActionExecutionError):
                raise
            raise ActionExecutionError(exc.message, details=exc.details) from exc

        solicitacao.status = StatusSolicitacao.executada
        solicitacao.executado_em = now
        solicitacao.resultado_execucao = resultado
        solicitacao.erro_execucao = None
        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.executar,
            usuario_id=None,
            created_at=now,
        )
        await self._audit.add(
            entity_type=ENTITY,
            entity_id=solicitacao.id,
            actor="system",
            event_type="APPROVAL_ACTION_EXECUTED",
            details={"tipo_acao": solicitacao.acao.codigo},
        )
        await self._session.commit()
        log.info("approval_action_executed", codigo=solicitacao.codigo)

    async def marcar_expirada(
        self,
        solicitacao: SolicitacaoAprovacao,
        *,
        now: datetime,
        usuario_id: uuid.UUID | None = None,
    ) -> None:
        solicitacao.status = StatusSolicitacao.expirada
        solicitacao.processado_em = now
        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.expirar,
            usuario_id=usuario_id,
            dados={"prazo": formatar_data(solicitacao.prazo)},
            created_at=now,
        )
        log.info("approval_request_expired", codigo=solicitacao.codigo)

    async def cancelar(
        self,
        solicitacao_id: uuid.UUID,
        *,
        usuario: Principal,
        justificativa: str | None = None,
        now: datetime | None = None,
    ) -> SolicitacaoAprovacao:
        now = now or utcnow()
        solicitacao = await self.obter_solicitacao(solicitacao_id)
        if usuario.usuario_id != solicitacao.solicitante_id:
            raise ForbiddenError("Apenas o solicitante pode cancelar a solicitação")
        if solicitacao.status != StatusSolicitacao.pendente:
            raise BadRequestError(
                "Apenas solicitações pendentes podem ser canceladas",
                details={"status": solicitacao.status.value},
            )

        solicitacao.status = StatusSolicitacao.cancelada
        solicitacao.processado_em = now
        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.cancelar,
            usuario_id=usuario.usuario_id,
            justificativa=justificativa,
            created_at=now,
        )
        await self._audit.add(
            entity_type=ENTITY,
            entity_id=solicitacao.id,
            actor=usuario.subject,
            event_type="APPROVAL_REQUEST_CANCELLED",
            details={"justificativa": justificativa},
        )
        await self._session.commit()
        log.info("approval_request_cancelled", codigo=solicitacao.codigo)
        return solicitacao

    async def delegar(
        self,
        solicitacao_id: uuid.UUID,
        *,
        aprovador: Principal,
        delegado_id: uuid.UUID,
        justificativa: str,
        now: datetime | None = None,
    ) -> SolicitacaoAprovacao:
        """
        Hand the caller's undecided approver seat over to another user.

        The delegate gets a new user row with the same order, value limit and
        mandatory flag; the original row is kept for history and stops counting.
        """

        now = now or utcnow()
        justificativa = (justificativa or "").strip()
        if not justificativa:
            raise BadRequestError("Justificativa é obrigatória")
        solicitacao = await self._solicitacao_aberta(solicitacao_id, ator=aprovador, now=now)

        usuario_id = aprovador.usuario_id
        if usuario_id is None:
            raise ForbiddenError("Aprovador inválido", details={"subject": aprovador.subject})
        if delegado_id == usuario_id:
            raise BadRequestError("Não é possível delegar para si mesmo")
        if delegado_id == solicitacao.solicitante_id:
            raise BadRequestError("O solicitante não pode receber a delegação")

        linha = self._linha_do_aprovador(solicitacao, aprovador)
        configurado = next(
            (a for a in solicitacao.acao.aprovadores if a.id == linha.aprovador_id), None
        )
        if configurado is not None and not configurado.pode_delegar:
            raise ForbiddenError(
                "Usuário não tem permissão para delegar esta solicitação",
                details={"solicitacao": solicitacao.codigo},
            )

        delegado = await self._usuarios.get(delegado_id)
        if delegado is None or not delegado.ativo:
            raise NotFoundError(
                "Aprovador destino não encontrado ou inativo",
                details={"delegado_id": str(delegado_id)},
            )
        if any(
            a.usuario_id == delegado_id and a.decisao is None
            for a in solicitacao.aprovadores_vigentes
        ):
            raise ConflictError(
                "Usuário já é aprovador desta solicitação",
                details={"delegado_id": str(delegado_id)},
            )

        linha.delegado_para = delegado_id
        solicitacao.aprovadores.append(
            SolicitacaoAprovador(
                aprovador_id=linha.aprovador_id,
                perfil=None,
                usuario_id=delegado_id,
                ordem=linha.ordem,
                limite_valor=linha.limite_valor,
                obrigatorio=linha.obrigatorio,
                delegado_por=usuario_id,
            )
        )
        await self._historico.add(
            solicitacao_id=solicitacao.id,
            acao=AcaoHistorico.delegar,
            usuario_id=usuario_id,
            justificativa=justificativa,
            dados={"de": str(usuario_id), "para": str(delegado_id), "perfil": linha.perfil},
            created_at=now,
        )
        await self._audit.add(
            entity_type=ENTITY,
            entity_id=solicitacao.id,
            actor=aprovador.subject,
            event_type="APPROVAL_REQUEST_DELEGATED",
            details={"delegado_id": str(delegado_id), "perfil": linha.perfil},
        )
        await self._notificar_delegacao(
            solicitacao, delegante_id=usuario_id, delegado=delegado, motivo=justificativa, now=now
        )
        await self._session.commit()

        log.info(
            "approval_request_delegated",
            codigo=solicitacao.codigo,
            delegante_id=str(usuario_id),
            delegado_id=str(delegado_id),
        )
        return solicitacao

    # --- reads ----------------------------------------------------------------

    async def obter_solicitacao(self, solicitacao_id: uuid.UUID) -> SolicitacaoAprovacao:
        solicitacao = await self._solicitacoes.get(solicitacao_id)
        if solicitacao is None:
            raise NotFoundError("Solicitação não encontrada", details={"id": str(solicitacao_id)})
        return solicitacao

    async def listar_solicitacoes(
        self,
        *,
        status: StatusSolicitacao | None = None,
        tipo_acao: str | None = None,
        solicitante_id: uuid.UUID | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> Pagina:
        page = max(1, page)
        limit = max(1, min(limit, 100))
        acao_id = None
        if tipo_acao is not None:
            acao = await self._acoes.get_by_codigo(tipo_acao)
            if acao is None:
                return Pagina(items=[], total=0, page=page, limit=limit)
            acao_id = acao.id
        items, total = await self._solicitacoes.list(
            status=status,
            acao_aprovacao_id=acao_id,
            solicitante_id=solicitante_id,
            limit=limit,
            offset=(page - 1) * limit,
        )
        return Pagina(items=items, total=total, page=page, limit=limit)

    async def listar_pendentes_para(self, aprovador: Principal) -> list[SolicitacaoAprovacao]:
        usuario_id = aprovador.usuario_id
        if usuario_id is None:
            return []
        pendentes = await self._solicitacoes.list_pending_for_approver(
            usuario_id=usuario_id, perfis=aprovador.roles
        )
        out = []
        for s in pendentes:
            config = s.acao.configuracao
            if s.solicitante_id == usuario_id and not (
                config and permite_autoaprovacao(config.estrategia, config.permite_auto_aprovacao)
            ):
                continue
            if any(linha.decidido_por == usuario_id for linha in s.aprovadores):
                continue
            out.append(s)
        return out

    async def historico(self, solicitacao_id: uuid.UUID) -> list[HistoricoAprovacao]:
        await self.obter_solicitacao(solicitacao_id)
        return await self._historico.list_for(solicitacao_id)

    async def estatisticas(self) -> dict[str, Any]:
        por_status = {s.value: 0 for s in StatusSolicitacao}
        por_status.update(await self._solicitacoes.count_by_status())
        aprovadas = sum(por_status[s.value] for s in _DECIDIDOS)
        decididas = aprovadas + por_status[StatusSolicitacao.rejeitada.value]
        return {
            "total": sum(por_status.values()),
            "por_status": por_status,
            "por_acao": await self._solicitacoes.count_by_acao(),
            "taxa_aprovacao": round(aprovadas * 100 / decididas, 2) if decididas else 0.0,
        }

    # --- configuration management --------------------------------------------

    async def configurar_acao(
        self, codigo: str, dados: ConfiguracaoAcaoInput, *, ator: str
    ) -> AcaoAprovacao:
        if dados.min_aprovacoes < 1 or dados.tempo_limite_horas < 1:
            raise BadRequestError("min_aprovacoes e tempo_limite_horas devem ser positivos")

        acao_values = {
            "tipo": dados.tipo or codigo,
            "nome": dados.nome,
            "descricao": dados.descricao,
            "modulo": dados.modulo,
            "entidade_alvo": dados.entidade_alvo,
            "nivel_criticidade": dados.nivel_criticidade,
            "tags": list(dados.tags),
            "ativo": True,
        }
        config_values = {
            "nome": f"Configuração para {dados.nome}",
            "estrategia": dados.estrategia,
            "min_aprovacoes": dados.min_aprovacoes,
            "tempo_limite_horas": dados.tempo_limite_horas,
            "permite_auto_aprovacao": dados.permite_auto_aprovacao,
            "escalacao_ativa": dados.escalacao_ativa,
            "tempo_escalacao_horas": dados.tempo_escalacao_horas,
            "condicoes": dict(dados.condicoes),
            "ativo": True,
        }

        acao = await self._acoes.get_by_codigo(codigo)
        if acao is None:
            acao = AcaoAprovacao(
                codigo=codigo,
                configuracao=ConfiguracaoAprovacao(**config_values),
                aprovadores=[],
                **acao_values,
            )
            await self._acoes.add(acao)
            event = "APPROVAL_ACTION_CREATED"
        else:
            for key, value in acao_values.items():
                setattr(acao, key, value)
            if acao.configuracao is None:
                acao.configuracao = ConfiguracaoAprovacao(**config_values)
            else:
                for key, value in config_values.items():
                    setattr(acao.configuracao, key, value)
            event = "APPROVAL_ACTION_UPDATED"

        await self._session.flush()
        await self._audit.add(
            entity_type="acao_aprovacao",
            entity_id=acao.id,
            actor=ator,
            event_type=event,
            details={"codigo": codigo, "estrategia": dados.estrategia.value},
        )
        await self._session.commit()
        log.info("approval_action_configured", codigo=codigo, audit_event=event)
        return acao

    async def remover_acao(self, codigo: str, *, ator: str) -> str:
        """
        Delete an action with no requests; deactivate one that has history.
        Returns "removida" or "desativada".
        """

        acao = await self._acoes.get_by_codigo(codigo)
        if acao is None:
            raise NotFoundError("Ação não encontrada", details={"codigo": codigo})
        pendentes = await self._solicitacoes.count_for_acao(
            acao.id, status=StatusSolicitacao.pendente
        )
        if pendentes:
            raise BadRequestError(
                "Ação possui solicitações pendentes",
                details={"codigo": codigo, "pendentes": pendentes},
            )

        if await self._solicitacoes.count_for_acao(acao.id):
            acao.ativo = False
            if acao.configuracao is not None:
                acao.configuracao.ativo = False
            resultado = "desativada"
        else:
            await self._acoes.delete(acao)
            resultado = "removida"

        await self._audit.add(
            entity_type="acao_aprovacao",
            entity_id=acao.id,
            actor=ator,
            event_type="APPROVAL_ACTION_REMOVED",
            details={"codigo": codigo, "resultado": resultado},
        )
        await self._session.commit()
        log.info("approval_action_removed", codigo=codigo, resultado=resultado)
        return resultado

    async def adicionar_aprovador(
        self,
        codigo: str,
        *,
        tipo: TipoAprovador,
        perfil: str | None = None,
        usuario_id: uuid.UUID | None = None,
        ordem: int = 1,
        limite_valor: Decimal | None = None,
        obrigatorio: bool = False,
        ator: str,
    ) -> Aprovador:
        acao = await self._acoes.get_by_codigo(codigo)
        if acao is None:
            raise NotFoundError("Ação não encontrada", details={"codigo": codigo})
        if tipo == TipoAprovador.perfil and not perfil:
            raise BadRequestError("Aprovador por perfil exige 'perfil'")
        if tipo == TipoAprovador.usuario and usuario_id is None:
            raise BadRequestError("Aprovador por usuário exige 'usuario_id'")
        if tipo == TipoAprovador.perfil:
            perfil, usuario_id = perfil.upper(), None
        else:
            perfil = None

        existente = next(
            (a for a in acao.aprovadores if a.perfil == perfil and a.usuario_id == usuario_id),
            None,
        )
        if existente is not None and existente.ativo:
            raise ConflictError(
                "Aprovador já configurado para esta ação",
                details={"codigo": codigo, "aprovador_id": str(existente.id)},
            )
        if existente is not None:
            # Deactivated by remover_aprovador; the row is unique per (acao, perfil, usuario).
            existente.ativo = True
            existente.ordem = ordem
            existente.limite_valor = limite_valor
            existente.obrigatorio = obrigatorio
            await self._audit.add(
                entity_type="acao_aprovacao",
                entity_id=acao.id,
                actor=ator,
                event_type="APPROVAL_APPROVER_REACTIVATED",
                details={"aprovador_id": str(existente.id)},
            )
            await self._session.commit()
            log.info("approval_approver_reactivated", codigo=codigo, aprovador_id=str(existente.id))
            return existente

        aprovador = Aprovador(
            acao_aprovacao_id=acao.id,
            tipo=tipo,
            perfil=perfil,
            usuario_id=usuario_id,
            ordem=ordem,
            limite_valor=limite_valor,
            ativo=True,
            obrigatorio=obrigatorio,
            pode_delegar=True,
            pode_escalar=True,
        )
        acao.aprovadores.append(aprovador)
        await self._session.flush()
        await self._audit.add(
            entity_type="acao_aprovacao",
            entity_id=acao.id,
            actor=ator,
            event_type="APPROVAL_APPROVER_ADDED",
            details={"perfil": perfil, "usuario_id": str(usuario_id) if usuario_id else None},
        )
        await self._session.commit()
        return aprovador

    async def remover_aprovador(self, codigo: str, aprovador_id: uuid.UUID, *, ator: str) -> str:
        acao = await self._acoes.get_by_codigo(codigo)
        if acao is None:
            raise NotFoundError("Ação não encontrada", details={"codigo": codigo})
        aprovador = next((a for a in acao.aprovadores if a.id == aprovador_id), None)
        if aprovador is None:
            raise NotFoundError("Aprovador não encontrado", details={"aprovador_id": str(aprovador_id)})

        # Request rows keep a reference to the approver; those approvers are only deactivated.
        if await self._solicitacoes.count_for_aprovador(aprovador.id):
            aprovador.ativo = False
            resultado = "desativado"
        else:
            acao.aprovadores.remove(aprovador)
            resultado = "removido"
        await self._session.flush()
        await self._audit.add(
            entity_type="acao_aprovacao",
            entity_id=acao.id,
            actor=ator,
            event_type="APPROVAL_APPROVER_REMOVED",
            details={"aprovador_id": str(aprovador_id), "resultado": resultado},
        )
        await self._session.commit()
        return resultado

    # --- notifications --------------------------------------------------------

    def link_aprovacao(self, solicitacao: SolicitacaoAprovacao) -> str:
        return f"{self._settings.frontend_url.rstrip('/')}/aprovacao/{solicitacao.id}"

    async def destinatarios(self, solicitacao: SolicitacaoAprovacao) -> list[Usuario]:
        """Active users behind the undecided approver rows, excluding the requester."""

        abertas = [linha for linha in solicitacao.aprovadores_vigentes if linha.decisao is None]
        usuarios = await self._usuarios.list_active_by_roles(
            {linha.perfil for linha in abertas if linha.perfil}
        )
        conhecidos = {u.id for u in usuarios}
        for linha in abertas:
            if linha.usuario_id is None or linha.usuario_id in conhecidos:
                continue
            usuario = await self._usuarios.get(linha.usuario_id)
            if usuario is not None and usuario.ativo:
                usuarios.append(usuario)
                conhecidos.add(usuario.id)
        return [u for u in usuarios if u.id != solicitacao.solicitante_id]

    async def nome_do_usuario(self, usuario_id: uuid.UUID | None) -> str:
        if usuario_id is None:
            return "Sistema"
        nomes = await self._usuarios.names_by_id([usuario_id])
        return nomes.get(usuario_id, str(usuario_id))

    async def notificar(
        self, codigo: str, destinatario_id: uuid.UUID, variaveis: Mapping[str, Any]
    ) -> None:
        # Savepoint: a failed notification rolls back only its own rows.
        try:
            async with self._session.begin_nested():
                await self._notifications.notify(codigo, [destinatario_id], variaveis)
        except (PgbenError, SQLAlchemyError) as exc:
            log.warning(
                "approval_notification_failed",
                template=codigo,
                destinatario_id=str(destinatario_id),
                error=str(exc),
            )

    async def _notificar_aprovadores_nova(
        self, solicitacao: SolicitacaoAprovacao, *, now: datetime
    ) -> None:
        acao = solicitacao.acao
        valor = valor_da_acao(solicitacao.dados_acao or {})
        base = {
            "acao_nome": acao.nome,
            "solicitante_nome": await self.nome_do_usuario(solicitacao.solicitante_id),
            "data_solicitacao": formatar_data(now),
            "prazo_limite": formatar_data(solicitacao.prazo),
            "valor_envolvido": f"{valor:.2f}" if valor is not None else None,
            "codigo_solicitacao": solicitacao.codigo,
            "justificativa": solicitacao.justificativa,
            "link_aprovacao": self.link_aprovacao(solicitacao),
            "tempo_restante": formatar_horas(solicitacao.prazo - now) if solicitacao.prazo else "",
            "prioridade": prioridade_da_acao(acao),
        }
        for usuario in await self.destinatarios(solicitacao):
            await self.notificar(
                "nova-solicitacao-aprovacao", usuario.id, {**base, "aprovador_nome": usuario.nome}
            )

    async def _notificar_delegacao(
        self,
        solicitacao: SolicitacaoAprovacao,
        *,
        delegante_id: uuid.UUID,
        delegado: Usuario,
        motivo: str,
        now: datetime,
    ) -> None:
        base = {
            "delegante_nome": await self.nome_do_usuario(delegante_id),
            "delegado_nome": delegado.nome,
            "acao_nome": solicitacao.acao.nome,
            "data_criacao": formatar_data(now),
            "data_expiracao": formatar_data(solicitacao.prazo),
            "status_delegacao": "ATIVA",
            "motivo": motivo,
            "link_delegacao": self.link_aprovacao(solicitacao),
        }
        destinatarios = {delegado.id: delegado.nome}
        destinatarios.setdefault(
            solicitacao.solicitante_id, await self.nome_do_usuario(solicitacao.solicitante_id)
        )
        for destinatario_id, nome in destinatarios.items():
            await self.notificar(
                "delegacao-aprovacao-criada", destinatario_id, {**base, "destinatario_nome": nome}
            )

    async def _notificar_solicitante(
        self, solicitacao: SolicitacaoAprovacao, *, aprovador_id: uuid.UUID, now: datetime
    ) -> None:
        aprovada = solicitacao.status == StatusSolicitacao.aprovada
        observacoes = "; ".join(
            linha.justificativa
            for linha in solicitacao.aprovadores
            if linha.decisao is not None and linha.justificativa
        )
        frontend = self._settings.frontend_url.rstrip("/")
        await self.notificar(
            "solicitacao-aprovacao-processada",
            solicitacao.solicitante_id,
            {
                "aprovada": aprovada,
                "solicitante_nome": await self.nome_do_usuario(solicitacao.solicitante_id),
                "acao_nome": solicitacao.acao.nome,
                "codigo_solicitacao": solicitacao.codigo,
                "aprovador_nome": await self.nome_do_usuario(aprovador_id),
                "data_processamento": formatar_data(now),
                "observacoes": observacoes or None,
                "link_solicitacao": self.link_aprovacao(solicitacao),
                "link_nova_solicitacao": f"{frontend}/aprovacao/nova",
            },
        )


# --- Module Notes -----------------------------------------------------------
# Decisions commit before execution so an execution failure never loses the approval itself.
