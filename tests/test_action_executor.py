from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from pgben.auth.jwt import JwtConfig, decode_and_validate
from pgben.db.models import AcaoAprovacao, SolicitacaoAprovacao
from pgben.errors import ActionExecutionError, BadRequestError
from pgben.services.action_executor import ActionExecutor, ServiceIdentity, strip_metadata
from pgben.settings import Settings


def _solicitacao(
    dados_acao: dict[str, Any], codigo_acao: str = "inativar_usuario"
) -> SolicitacaoAprovacao:
    return SolicitacaoAprovacao(
        codigo="SOL-TESTE-ABC123",
        dados_acao=dados_acao,
        acao=AcaoAprovacao(codigo=codigo_acao, nome="Inativar Usuário", modulo="usuario"),
    )


def _executor(settings: Settings, handler) -> ActionExecutor:
    transport = httpx.MockTransport(handler)
    http = httpx.AsyncClient(transport=transport, base_url=settings.action_base_url)
    return ActionExecutor(settings=settings, http=http)


def test_strip_metadata_is_recursive() -> None:
    body = {
        "motivo": "desligamento",
        "_aprovacao_metadata": {"x": 1},
        "codigo_aprovacao": "SOL-1",
        "itens": [{"id": 1, "justificativa_aprovacao": "ok"}],
        "nested": {"solicitacao_aprovacao_id": "abc", "keep": True},
    }
    assert strip_metadata(body) == {
        "motivo": "desligamento",
        "itens": [{"id": 1}],
        "nested": {"keep": True},
    }
    assert strip_metadata("texto") == "texto"


@pytest.mark.asyncio
async def test_replay_sends_clean_body_and_service_token(settings: Settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 42, "ativo": False})

    executor = _executor(settings, handler)
    result = await executor.execute(
        _solicitacao(
            {
                "url": "/v1/usuarios/42/inativar",
                "method": "patch",
                "params": {"id": "42"},
                "headers": {"x-request-id": "req-1"},
                "body": {"motivo": "desligamento", "_aprovacao_metadata": {"a": 1}},
            }
        )
    )

    assert result == {"status_code": 200, "data": {"id": 42, "ativo": False}}
    (request,) = seen
    assert request.method == "PATCH"
    assert request.url == "http://acoes.test/v1/usuarios/42/inativar?id=42"
    assert json.loads(request.content) == {"motivo": "desligamento"}
    assert request.headers["x-aprovacao-codigo"] == "SOL-TESTE-ABC123"
    assert request.headers["x-request-id"] == "req-1"

    scheme, token = request.headers["authorization"].split(" ", 1)
    assert scheme == "Bearer"
    claims = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=token)
    assert claims["sub"] == ServiceIdentity().subject
    assert claims["roles"] == ["ADMIN"]


@pytest.mark.asyncio
async def test_replay_get_has_no_body(settings: Settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    executor = _executor(settings, handler)
    result = await executor.execute(
        _solicitacao({"url": "/v1/relatorios", "method": "GET", "body": {"ignored": True}})
    )
    assert result == {"status_code": 200, "data": "ok"}
    assert seen[0].content == b""


@pytest.mark.asyncio
async def test_replay_requires_url_and_method(settings: Settings) -> None:
    executor = _executor(settings, lambda r: httpx.Response(200))
    with pytest.raises(BadRequestError) as exc:
        await executor.execute(_solicitacao({"method": "POST"}))
    assert exc.value.details["faltando"] == ["url"]

    with pytest.raises(BadRequestError):
        await executor.execute(_solicitacao({"url": "/x", "method": "TRACE"}))


@pytest.mark.asyncio
async def test_replay_downstream_error(settings: Settings) -> None:
    executor = _executor(settings, lambda r: httpx.Response(422, json={"detail": "inválido"}))
    with pytest.raises(ActionExecutionError) as exc:
        await executor.execute(_solicitacao({"url": "/v1/x", "method": "POST", "body": {}}))
    assert exc.value.details["status_code"] == 422


@pytest.mark.asyncio
async def test_replay_transport_error(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    executor = _executor(settings, handler)
    with pytest.raises(ActionExecutionError):
        await executor.execute(_solicitacao({"url": "/v1/x", "method": "DELETE"}))


@pytest.mark.asyncio
async def test_registered_handler_takes_precedence(settings: Settings) -> None:
    def transport(request: httpx.Request) -> httpx.Response:
        raise AssertionError("replay must not run")

    executor = _executor(settings, transport)

    @executor.register("inativar_usuario")
    async def _inativar(solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        return {"codigo": solicitacao.codigo}

    @executor.register("bloquear_beneficio")
    async def _falha(solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        raise KeyError("beneficio")

    assert executor.has_handler("inativar_usuario")
    assert not executor.has_handler("reativar_usuario")
    assert await executor.execute(_solicitacao({})) == {"codigo": "SOL-TESTE-ABC123"}

    with pytest.raises(ActionExecutionError) as exc:
        await executor.execute(_solicitacao({}, codigo_acao="bloquear_beneficio"))
    assert exc.value.details == {"acao": "bloquear_beneficio"}
