"""
pgben.api.routers.notificacoes

Notification endpoints (`/v1/notificacoes`).

Responsibilities:
- List the caller's notifications and mark them as read.
- Browse active templates and preview a rendering with sample variables.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from pgben.api.deps import db_session, settings_dep
from pgben.auth.deps import get_principal
from pgben.auth.models import Principal
from pgben.db.models import Notificacao, NotificationTemplate
from pgben.services.notification_service import NotificationService
from pgben.settings import Settings

router = APIRouter(prefix="/v1/notificacoes", tags=["notificacoes"])


class NotificacaoOut(BaseModel):
    id: uuid.UUID
    template_codigo: str
    canal: str
    assunto: str
    corpo: str
    lida: bool
    lida_em: datetime | None
    created_at: datetime


class TemplateOut(BaseModel):
    codigo: str
    nome: str
    tipo: str
    categoria: str
    prioridade: str
    canais_disponiveis: list[str]
    variaveis_requeridas: list[str]


class TemplateDetalheOut(TemplateOut):
    descricao: str
    assunto: str
    corpo: str
    corpo_html: str | None


class PreviewRequest(BaseModel):
    variaveis: dict[str, Any] = Field(default_factory=dict)


def _notificacao_out(n: Notificacao) -> NotificacaoOut:
    return NotificacaoOut(
        id=n.id,
        template_codigo=n.template_codigo,
        canal=n.canal,
        assunto=n.assunto,
        corpo=n.corpo,
        lida=n.lida,
        lida_em=n.lida_em,
        created_at=n.created_at,
    )


def _template_fields(t: NotificationTemplate) -> dict[str, Any]:
    return {
        "codigo": t.codigo,
        "nome": t.nome,
        "tipo": t.tipo,
        "categoria": t.categoria,
        "prioridade": t.prioridade,
        "canais_disponiveis": list(t.canais_disponiveis or []),
        "variaveis_requeridas": list(t.variaveis_requeridas or []),
    }


def _usuario_id(principal: Principal) -> uuid.UUID:
    if principal.usuario_id is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Token sem usuário")
    return principal.usuario_id


@router.get("", response_model=list[NotificacaoOut])
async def listar(
    nao_lidas: bool = False,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[NotificacaoOut]:
    svc = NotificationService(session=session, settings=settings)
    items = await svc.list_for_user(
        _usuario_id(principal), apenas_nao_lidas=nao_lidas, limit=limit, offset=offset
    )
    return [_notificacao_out(n) for n in items]


@router.patch("/{notificacao_id}/lida", response_model=NotificacaoOut)
async def marcar_lida(
    notificacao_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> NotificacaoOut:
    svc = NotificationService(session=session, settings=settings)
    n = await svc.mark_read(notificacao_id, usuario_id=_usuario_id(principal))
    return _notificacao_out(n)


@router.get("/templates", response_model=list[TemplateOut], dependencies=[Depends(get_principal)])
async def listar_templates(
    categoria: str | None = None,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[TemplateOut]:
    svc = NotificationService(session=session, settings=settings)
    return [TemplateOut(**_template_fields(t)) for t in await svc.list_active_templates(categoria=categoria)]


@router.get(
    "/templates/{codigo}",
    response_model=TemplateDetalheOut,
    dependencies=[Depends(get_principal)],
)
async def obter_template(
    codigo: str,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> TemplateDetalheOut:
    t = await NotificationService(session=session, settings=settings).get_template(codigo)
    return TemplateDetalheOut(
        **_template_fields(t),
        descricao=t.descricao,
        assunto=t.assunto,
        corpo=t.corpo,
        corpo_html=t.corpo_html,
    )


@router.post("/templates/{codigo}/preview", dependencies=[Depends(get_principal)])
async def preview(
    codigo: str,
    body: PreviewRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    rendered = await NotificationService(session=session, settings=settings).render(
        codigo, body.variaveis
    )
    return {
        "codigo": rendered.codigo,
        "assunto": rendered.assunto,
        "corpo": rendered.corpo,
        "corpo_html": rendered.corpo_html,
        "canais": list(rendered.canais),
        "prioridade": rendered.prioridade,
    }


# --- Module Notes -----------------------------------------------------------
# Preview renders without recording anything; missing variables come back as a 400.
