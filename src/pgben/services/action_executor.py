"""
pgben.services.action_executor

Execution boundary for approved actions.

Responsibilities:
- Dispatch an approved request to an in-process handler registered for its action code.
- Otherwise replay the original HTTP request stored in `dados_acao` with a service JWT.
- Normalize downstream failures into `ActionExecutionError`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import httpx

from pgben.auth.jwt import JwtConfig, issue_token
from pgben.db.models import SolicitacaoAprovacao
from pgben.errors import ActionExecutionError, BadRequestError
from pgben.observability.logging import get_logger
from pgben.settings import Settings

log = get_logger(__name__)

ActionHandler = Callable[[SolicitacaoAprovacao], Awaitable[dict[str, Any]]]

METADATA_KEYS = frozenset(
    {
        "_aprovacao_metadata",
        "justificativa_aprovacao",
        "codigo_aprovacao",
        "solicitacao_aprovacao_id",
    }
)

_REPLAY_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


def strip_metadata(value: Any) -> Any:
    """Drop approval bookkeeping keys at any depth of a JSON-like body."""

    if isinstance(value, dict):
        return {k: strip_metadata(v) for k, v in value.items() if k not in METADATA_KEYS}
    if isinstance(value, list):
        return [strip_metadata(v) for v in value]
    return value


@dataclass(frozen=True, slots=True)
class ServiceIdentity:
    # Identity used for replayed calls; the approval itself is the authorization.
    subject: str = "pgben-aprovacao"
    roles: tuple[str, ...] = ("ADMIN",)


class ActionExecutor:
    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient,
        identity: ServiceIdentity | None = None,
    ) -> None:
        self._settings = settings
        self._http = http
        self._identity = identity or ServiceIdentity()
        self._handlers: dict[str, ActionHandler] = {}

    def register(self, codigo: str) -> Callable[[ActionHandler], ActionHandler]:
        def decorator(fn: ActionHandler) -> ActionHandler:
            self._handlers[codigo] = fn
            return fn

        return decorator

    def has_handler(self, codigo: str) -> bool:
        return codigo in self._handlers

    def _authz(self) -> dict[str, str]:
        token = issue_token(
            cfg=JwtConfig.from_settings(self._settings),
            subject=self._identity.subject,
            roles=list(self._identity.roles),
            ttl=timedelta(minutes=5),
        )
        return {"Authorization": f"Bearer {token}"}

    async def execute(self, solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        codigo = solicitacao.acao.codigo
        handler = self._handlers.get(codigo)
        if handler is not None:
            log.info("approval_action_handler", acao=codigo, solicitacao=solicitacao.codigo)
            try:
                return await handler(solicitacao)
            except (ActionExecutionError, BadRequestError):
                raise
            except Exception as exc:
                raise ActionExecutionError(
                    f"Falha ao executar ação {codigo}: {exc}", details={"acao": codigo}
                ) from exc
        return await self._replay(solicitacao)

    async def _replay(self, solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        dados = solicitacao.dados_acao or {}
        url = dados.get("url")
        method = str(dados.get("method") or "").upper()
        if not url or not method:
            faltando = [k for k in ("url", "method") if not dados.get(k)]
            raise BadRequestError(
                "Dados insuficientes para executar a ação",
                details={"acao": solicitacao.acao.codigo, "faltando": faltando},
            )
        if method not in _REPLAY_METHODS:
            raise BadRequestError("Método HTTP não suportado", details={"method": method})

        headers = {str(k): str(v) for k, v in (dados.get("headers") or {}).items()}
        headers.update(self._authz())
        headers["x-aprovacao-codigo"] = solicitacao.codigo
        body = strip_metadata(dados.get("body")) if dados.get("body") is not None else None

        # Relative URLs resolve against the client's base_url (PGBEN_ACTION_BASE_URL).
        try:
            r = await self._http.request(
                method,
                url,
                params=dados.get("params") or None,
                json=body if method != "GET" else None,
                headers=headers,
                timeout=self._settings.action_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            log.warning("approval_action_transport_error", url=url, error=str(exc))
            raise ActionExecutionError(
                f"Erro de comunicação ao executar ação: {exc}", details={"url": url}
            ) from exc

        if not r.is_success:
            raise ActionExecutionError(
                f"Ação retornou status {r.status_code}",
                details={"url": url, "status_code": r.status_code, "resposta": r.text[:500]},
            )

        log.info("approval_action_replayed", url=url, method=method, status_code=r.status_code)
        try:
            payload: Any = r.json()
        except ValueError:
            payload = r.text
        return {"status_code": r.status_code, "data": payload}


# --- Module Notes -----------------------------------------------------------
# `params` are sent as query parameters; `dados_acao.params.id` also keys duplicate detection.
