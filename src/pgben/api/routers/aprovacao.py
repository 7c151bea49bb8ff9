"""
pgben.api.routers.aprovacao

Approval workflow endpoints (`/v1/aprovacao`).

Responsibilities:
- Create, list, read, decide, delegate and cancel approval requests.
- Manage approval actions, their configuration and approvers (ADMIN).
- Trigger the escalation sweep (ADMIN).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from pgben.api.deps import action_executor_dep, db_session, settings_dep
from pgben.auth.deps import get_principal, require_roles
from pgben.auth.models import Principal
from pgben.db.models import (
    AcaoAprovacao,
    EstrategiaAprovacao,
    SolicitacaoAprovacao,
    StatusSolicitacao,
    TipoAprovador,
)
from pgben.services.action_executor import ActionExecutor
from pgben.services.approval_service import ApprovalService, ConfiguracaoAcaoInput
from pgben.services.escalation_service import EscalationService
from pgben.settings import Settings

router = APIRouter(prefix="/v1/aprovacao", tags=["aprovacao"])


class CriarSolicitacaoRequest(BaseModel):
    tipo_acao: str = Field(min_length=1, max_length=100)
    justificativa: str = Field(min_length=1)
    dados_acao: dict[str, Any] = Field(default_factory=dict)


class ProcessarRequest(BaseModel):
    aprovado: bool
    justificativa: str | None = None


class CancelarRequest(BaseModel):
    justificativa: str | None = None


class DelegarRequest(BaseModel):
    delegado_id: uuid.UUID
    justificativa: str = Field(min_length=1)


class AprovadorSolicitacaoOut(BaseModel):
    perfil: str | None
    usuario_id: uuid.UUID | None
    ordem: int
    obrigatorio: bool
    decisao: bool | None
    justificativa: str | None
    decidido_por: uuid.UUID | None
    decidido_em: datetime | None
    delegado_para: uuid.UUID | None = None
    delegado_por: uuid.UUID | None = None

class SolicitacaoOut(BaseModel):
    id: uuid.UUID
    codigo: str
    tipo_acao: str
    acao_nome: str
    solicitante_id: uuid.UUID
    status: str
    justificativa: str
    dados_acao: dict[str, Any]
    prazo: datetime | None
    nivel_escalacao: int
    processado_em: datetime | None
    executado_em: datetime | None
    resultado_execucao: dict[str, Any] | None
    erro_execucao: str | None
    created_at: datetime
    aprovadores: list[AprovadorSolicitacaoOut]


class PaginaOut(BaseModel):
    items: list[SolicitacaoOut]
    total: int
    page: int
    limit: int


class AprovadorIn(BaseModel):
    tipo: TipoAprovador = TipoAprovador.perfil
    perfil: str | None = Field(default=None, max_length=64)
    usuario_id: uuid.UUID | None = None
    ordem: int = Field(default=1, ge=1)
    limite_valor: Decimal | None = Field(default=None, ge=0)
    obrigatorio: bool = False


class AprovadorOut(BaseModel):
    id: uuid.UUID
    tipo: str
    perfil: str | None
    usuario_id: uuid.UUID | None
    ordem: int
    limite_valor: Decimal | None
    ativo: bool
    obrigatorio: bool


class ConfigurarAcaoRequest(BaseModel):
    nome: str = Field(min_length=1, max_length=150)
    modulo: str = Field(min_length=1, max_length=64)
    tipo: str | None = Field(default=None, max_length=100)
    descricao: str = ""
    entidade_alvo: str | None = None
    nivel_criticidade: int = Field(default=1, ge=1, le=5)
    tags: list[str] = Field(default_factory=list)
    estrategia: EstrategiaAprovacao = EstrategiaAprovacao.simples
    min_aprovacoes: int = Field(default=1, ge=1)
    tempo_limite_horas: int = Field(default=24, ge=1)
    permite_auto_aprovacao: bool = False
    escalacao_ativa: bool = True
    tempo_escalacao_horas: int = Field(default=24, ge=1)
    condicoes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("estrategia", mode="before")
    @classmethod
    def parse_estrategia(cls, value: Any) -> Any:
        # Older clients send lower-case strategy names.
        return EstrategiaAprovacao.parse(value) if isinstance(value, str) else value


class AcaoOut(BaseModel):
    id: uuid.UUID
    codigo: str
    tipo: str
    nome: str
    descricao: str
    modulo: str
    nivel_criticidade: int
    ativo: bool
    estrategia: str | None
    min_aprovacoes: int | None
    tempo_limite_horas: int | None
    escalacao_ativa: bool | None
    aprovadores: list[AprovadorOut]


def _solicitacao_out(s: SolicitacaoAprovacao) -> SolicitacaoOut:
    return SolicitacaoOut(
        id=s.id,
        codigo=s.codigo,
        tipo_acao=s.acao.codigo,
        acao_nome=s.acao.nome,
        solicitante_id=s.solicitante_id,
        status=s.status.value,
        justificativa=s.justificativa,
        dados_acao=s.dados_acao or {},
        prazo=s.prazo,
        nivel_escalacao=s.nivel_escalacao,
        processado_em=s.processado_em,
        executado_em=s.executado_em,
        resultado_execucao=s.resultado_execucao,
        erro_execucao=s.erro_execucao,
        created_at=s.created_at,
        aprovadores=[
            AprovadorSolicitacaoOut(
                perfil=a.perfil,
                usuario_id=a.usuario_id,
                ordem=a.ordem,
                obrigatorio=a.obrigatorio,
                decisao=a.decisao,
                justificativa=a.justificativa,
                decidido_por=a.decidido_por,
                decidido_em=a.decidido_em,
                delegado_para=a.delegado_para,
                delegado_por=a.delegado_por,
            )
            for a in s.aprovadores
        ],
    )


def _acao_out(acao: AcaoAprovacao) -> AcaoOut:
    config = acao.configuracao
    return AcaoOut(
        id=acao.id,
        codigo=acao.codigo,
        tipo=acao.tipo,
        nome=acao.nome,
        descricao=acao.descricao,
        modulo=acao.modulo,
        nivel_criticidade=acao.nivel_criticidade,
        ativo=acao.ativo,
        estrategia=config.estrategia.value if config else None,
        min_aprovacoes=config.min_aprovacoes if config else None,
        tempo_limite_horas=config.tempo_limite_horas if config else None,
        escalacao_ativa=config.escalacao_ativa if config else None,
        aprovadores=[
            AprovadorOut(
                id=a.id,
                tipo=a.tipo.value,
                perfil=a.perfil,
                usuario_id=a.usuario_id,
                ordem=a.ordem,
                limite_valor=a.limite_valor,
                ativo=a.ativo,
                obrigatorio=a.obrigatorio,
            )
            for a in acao.aprovadores
        ],
    )


def _pode_ver(s: SolicitacaoAprovacao, principal: Principal) -> bool:
    if principal.is_admin or s.solicitante_id == principal.usuario_id:
        return True
    return any(
        (a.usuario_id is not None and a.usuario_id == principal.usuario_id)
        or (a.perfil is not None and a.perfil in principal.roles)
        for a in s.aprovadores
    )


def _service(
    session: AsyncSession, settings: Settings, executor: ActionExecutor | None = None
) -> ApprovalService:
    return ApprovalService(session=session, settings=settings, executor=executor)


@router.post("", response_model=SolicitacaoOut, status_code=HTTP_201_CREATED)
async def criar_solicitacao(
    body: CriarSolicitacaoRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> SolicitacaoOut:
    s = await _service(session, settings).criar_solicitacao(
        tipo_acao=body.tipo_acao,
        solicitante=principal,
        justificativa=body.justificativa,
        dados_acao=body.dados_acao,
    )
    return _solicitacao_out(s)


@router.get(
    "",
    response_model=PaginaOut,
    dependencies=[Depends(require_roles("ADMIN", "GESTOR", "COORDENADOR", "AUDITOR"))],
)
async def listar_solicitacoes(
    status: StatusSolicitacao | None = None,
    tipo_acao: str | None = None,
    solicitante: uuid.UUID | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> PaginaOut:
    pagina = await _service(session, settings).listar_solicitacoes(
        status=status, tipo_acao=tipo_acao, solicitante_id=solicitante, page=page, limit=limit
    )
    return PaginaOut(
        items=[_solicitacao_out(s) for s in pagina.items],
        total=pagina.total,
        page=pagina.page,
        limit=pagina.limit,
    )


@router.get("/pendentes", response_model=list[SolicitacaoOut])
async def listar_pendentes(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[SolicitacaoOut]:
    pendentes = await _service(session, settings).listar_pendentes_para(principal)
    return [_solicitacao_out(s) for s in pendentes]


@router.get(
    "/estatisticas",
    dependencies=[Depends(require_roles("ADMIN", "GESTOR", "AUDITOR"))],
)
async def estatisticas(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    return await _service(session, settings).estatisticas()


@router.get("/acoes", response_model=list[AcaoOut], dependencies=[Depends(get_principal)])
async def listar_acoes(
    modulo: str | None = None,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[AcaoOut]:
    return [_acao_out(a) for a in await _service(session, settings).listar_acoes(modulo=modulo)]


@router.put(
    "/acoes/{codigo}",
    response_model=AcaoOut,
    dependencies=[Depends(require_roles("ADMIN"))],
)
async def configurar_acao(
    codigo: str,
    body: ConfigurarAcaoRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AcaoOut:
    acao = await _service(session, settings).configurar_acao(
        codigo, ConfiguracaoAcaoInput(**body.model_dump()), ator=principal.subject
    )
    return _acao_out(acao)


@router.delete("/acoes/{codigo}", dependencies=[Depends(require_roles("ADMIN"))])
async def remover_acao(
    codigo: str,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    resultado = await _service(session, settings).remover_acao(codigo, ator=principal.subject)
    return {"codigo": codigo, "resultado": resultado}


@router.post(
    "/acoes/{codigo}/aprovadores",
    response_model=AprovadorOut,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_roles("ADMIN"))],
)
async def adicionar_aprovador(
    codigo: str,
    body: AprovadorIn,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AprovadorOut:
    a = await _service(session, settings).adicionar_aprovador(
        codigo,
        tipo=body.tipo,
        perfil=body.perfil,
        usuario_id=body.usuario_id,
        ordem=body.ordem,
        limite_valor=body.limite_valor,
        obrigatorio=body.obrigatorio,
        ator=principal.subject,
    )
    return AprovadorOut(
        id=a.id,
        tipo=a.tipo.value,
        perfil=a.perfil,
        usuario_id=a.usuario_id,
        ordem=a.ordem,
        limite_valor=a.limite_valor,
        ativo=a.ativo,
        obrigatorio=a.obrigatorio,
    )


@router.delete(
    "/acoes/{codigo}/aprovadores/{aprovador_id}",
    dependencies=[Depends(require_roles("ADMIN"))],
)
async def remover_aprovador(
    codigo: str,
    aprovador_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    resultado = await _service(session, settings).remover_aprovador(
        codigo, aprovador_id, ator=principal.subject
    )
    return {"aprovador_id": str(aprovador_id), "resultado": resultado}


@router.post("/escalacao/processar", dependencies=[Depends(require_roles("ADMIN"))])
async def processar_escalacao(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    report = await EscalationService(session=session, settings=settings).processar()
    return report.as_dict()


@router.get("/{solicitacao_id}", response_model=SolicitacaoOut)
async def obter_solicitacao(
    solicitacao_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> SolicitacaoOut:
    s = await _service(session, settings).obter_solicitacao(solicitacao_id)
    if not _pode_ver(s, principal):
        # Hide existence from unrelated users.
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Solicitação não encontrada")
    return _solicitacao_out(s)


@router.get("/{solicitacao_id}/historico")
async def historico(
    solicitacao_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[dict[str, Any]]:
    svc = _service(session, settings)
    s = await svc.obter_solicitacao(solicitacao_id)
    if not _pode_ver(s, principal):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Solicitação não encontrada")
    return [
        {
            "id": str(h.id),
            "acao": h.acao.value,
            "usuario_id": str(h.usuario_id) if h.usuario_id else None,
            "justificativa": h.justificativa,
            "dados": h.dados,
            "created_at": h.created_at.isoformat(),
        }
        for h in await svc.historico(solicitacao_id)
    ]


@router.post("/{solicitacao_id}/processar", response_model=SolicitacaoOut)
async def processar_aprovacao(
    solicitacao_id: uuid.UUID,
    body: ProcessarRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    executor: ActionExecutor = Depends(action_executor_dep),
) -> SolicitacaoOut:
    s = await _service(session, settings, executor).processar_aprovacao(
        solicitacao_id,
        aprovador=principal,
        aprovado=body.aprovado,
        justificativa=body.justificativa,
    )
    return _solicitacao_out(s)


@router.post("/{solicitacao_id}/delegar", response_model=SolicitacaoOut)
async def delegar(
    solicitacao_id: uuid.UUID,
    body: DelegarRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> SolicitacaoOut:
    s = await _service(session, settings).delegar(
        solicitacao_id,
        aprovador=principal,
        delegado_id=body.delegado_id,
        justificativa=body.justificativa,
    )
    return _solicitacao_out(s)


@router.patch("/{solicitacao_id}/cancelar", response_model=SolicitacaoOut)
async def cancelar(
    solicitacao_id: uuid.UUID,
    body: CancelarRequest | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> SolicitacaoOut:
    s = await _service(session, settings).cancelar(
        solicitacao_id,
        usuario=principal,
        justificativa=body.justificativa if body else None,
    )
    return _solicitacao_out(s)


# --- Module Notes -----------------------------------------------------------
# Static paths are declared before `/{solicitacao_id}` so they are matched first.
