"""
pgben.services.notification_service

Rendering of seeded notification templates and per-user notification records.

Responsibilities:
- Validate required variables and render subject/body/HTML with Jinja2.
- Record one `Notificacao` per recipient and channel (delivery itself is only logged).
- Read and acknowledge a user's notifications; browse active templates.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.base import utcnow
from pgben.db.models import Notificacao, NotificationTemplate
from pgben.db.repositories.notifications import NotificacaoRepo, NotificationTemplateRepo
from pgben.errors import BadRequestError, NotFoundError
from pgben.observability.logging import get_logger
from pgben.settings import Settings

log = get_logger(__name__)


def _blank_none(value: Any) -> Any:
    return "" if value is None else value


_TEXT_ENV = Environment(undefined=StrictUndefined, autoescape=False, finalize=_blank_none)
_HTML_ENV = Environment(undefined=StrictUndefined, autoescape=True, finalize=_blank_none)


@dataclass(frozen=True)
class RenderedNotification:
    codigo: str
    assunto: str
    corpo: str
    corpo_html: str | None
    canais: tuple[str, ...]
    prioridade: str


def missing_variables(template: NotificationTemplate, variaveis: Mapping[str, Any]) -> list[str]:
    # Presence is what counts: an empty or None value is still "supplied".
    return [v for v in template.variaveis_requeridas or [] if v not in variaveis]


class NotificationService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._templates = NotificationTemplateRepo(session)
        self._notificacoes = NotificacaoRepo(session)

    async def get_template(self, codigo: str) -> NotificationTemplate:
        template = await self._templates.get_by_codigo(codigo)
        if template is None:
            raise NotFoundError("Template não encontrado", details={"codigo": codigo})
        return template

    async def list_active_templates(self, *, categoria: str | None = None) -> list[NotificationTemplate]:
        return await self._templates.list(categoria=categoria, ativo=True)

    def _context(self, variaveis: Mapping[str, Any]) -> dict[str, Any]:
        ctx = dict(variaveis)
        ctx.setdefault("data_envio", utcnow().strftime("%d/%m/%Y %H:%M"))
        ctx.setdefault("email_suporte", self._settings.email_suporte)
        return ctx

    async def validate_template(self, codigo: str, variaveis: Mapping[str, Any]) -> list[str]:
        """Return the required variables missing from `variaveis` (after defaults)."""

        template = await self.get_template(codigo)
        return missing_variables(template, self._context(variaveis))

    async def render(self, codigo: str, variaveis: Mapping[str, Any]) -> RenderedNotification:
        template = await self.get_template(codigo)
        if not template.ativo:
            raise BadRequestError("Template inativo", details={"codigo": codigo})

        ctx = self._context(variaveis)
        missing = missing_variables(template, ctx)
        if missing:
            raise BadRequestError(
                f"Variáveis obrigatórias ausentes: {', '.join(missing)}",
                details={"codigo": codigo, "faltando": missing},
            )

        try:
            assunto = _TEXT_ENV.from_string(template.assunto).render(ctx)
            corpo = _TEXT_ENV.from_string(template.corpo).render(ctx)
            corpo_html = (
                _HTML_ENV.from_string(template.corpo_html).render(ctx)
                if template.corpo_html
                else None
            )
        except TemplateError as exc:
            raise BadRequestError(
                "Erro ao renderizar template", details={"codigo": codigo, "erro": str(exc)}
            ) from exc

        return RenderedNotification(
            codigo=template.codigo,
            assunto=assunto.strip(),
            corpo=corpo.strip(),
            corpo_html=corpo_html,
            canais=tuple(template.canais_disponiveis or ()),
            prioridade=template.prioridade,
        )

    @staticmethod
    def _pick_channel(rendered: RenderedNotification, canal: str | None) -> str:
        if canal is not None:
            if canal not in rendered.canais:
                raise BadRequestError(
                    "Canal não disponível para o template",
                    details={"codigo": rendered.codigo, "canal": canal, "canais": list(rendered.canais)},
                )
            return canal
        if "in_app" in rendered.canais or not rendered.canais:
            return "in_app"
        return rendered.canais[0]

    async def notify(
        self,
        codigo: str,
        destinatarios: Iterable[uuid.UUID],
        variaveis: Mapping[str, Any],
        *,
        canal: str | None = None,
    ) -> list[Notificacao]:
        """
        Render once and record one notification per distinct recipient.
        Flushes only; the caller owns the commit.
        """

        rendered = await self.render(codigo, variaveis)
        chosen = self._pick_channel(rendered, canal)
        dados = {k: v for k, v in variaveis.items() if isinstance(v, str | int | float | bool)}

        items = [
            Notificacao(
                destinatario_id=destinatario_id,
                template_codigo=rendered.codigo,
                canal=chosen,
                assunto=rendered.assunto,
                corpo=rendered.corpo,
                corpo_html=rendered.corpo_html,
                dados=dados,
                lida=False,
            )
            for destinatario_id in dict.fromkeys(destinatarios)
        ]
        if not items:
            return []
        await self._notificacoes.add_many(items)
        log.info(
            "notification_recorded",
            template=rendered.codigo,
            canal=chosen,
            destinatarios=len(items),
            prioridade=rendered.prioridade,
        )
        return items

    async def list_for_user(
        self,
        usuario_id: uuid.UUID,
        *,
        apenas_nao_lidas: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notificacao]:
        return await self._notificacoes.list_for_user(
            usuario_id, apenas_nao_lidas=apenas_nao_lidas, limit=limit, offset=offset
        )

    async def mark_read(self, notificacao_id: uuid.UUID, *, usuario_id: uuid.UUID) -> Notificacao:
        notificacao = await self._notificacoes.get(notificacao_id)
        # Another user's notification is reported as missing.
        if notificacao is None or notificacao.destinatario_id != usuario_id:
            raise NotFoundError("Notificação não encontrada", details={"id": str(notificacao_id)})
        if not notificacao.lida:
            notificacao.lida = True
            notificacao.lida_em = utcnow()
            await self._session.commit()
        return notificacao


# --- Module Notes -----------------------------------------------------------
# Only scalar variables are stored in `Notificacao.dados`.
