"""
tests.test_api

HTTP-level flows against a seeded app: approvals, notifications and permissions.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from pgben.api.app import create_app
from pgben.db.models import SolicitacaoAprovacao
from pgben.db.repositories.roles import RoleRepo
from pgben.db.repositories.usuarios import UsuarioRepo
from pgben.settings import Settings


@pytest_asyncio.fixture
async def app(tmp_path: Path) -> AsyncIterator[FastAPI]:
    app = create_app(
        settings=Settings(
            env="test",
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
            seed_on_startup=True,
            log_json=False,
            action_base_url="http://acoes.test",
        )
    )
    await app.router.startup()
    try:
        yield app
    finally:
        await app.router.shutdown()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _auth(
    client: httpx.AsyncClient, *roles: str, subject: str | None = None
) -> dict[str, str]:
    r = await client.post(
        "/v1/dev/token", json={"subject": subject or str(uuid.uuid4()), "roles": list(roles)}
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


async def _usuario(app: FastAPI, nome: str, role: str | None = None) -> uuid.UUID:
    async with app.state.sessionmaker() as session:
        role_id = None
        if role is not None:
            found = await RoleRepo(session).get_by_nome(role)
            assert found is not None
            role_id = found.id
        usuario = await UsuarioRepo(session).create(
            nome=nome, email=f"{uuid.uuid4().hex[:8]}@semtas.test", role_id=role_id
        )
        await session.commit()
        return usuario.id


@pytest.mark.asyncio
async def test_approval_flow(app: FastAPI, client: httpx.AsyncClient) -> None:
    executados: list[str] = []

    @app.state.action_executor.register("inativar_usuario")
    async def _inativar(solicitacao: SolicitacaoAprovacao) -> dict[str, Any]:
        executados.append(solicitacao.codigo)
        return {"inativado": True}

    tecnico = await _auth(client, "TECNICO_UNIDADE")
    gestor = await _auth(client, "GESTOR")
    estranho = await _auth(client, "TECNICO_UNIDADE")

    r = await client.post(
        "/v1/aprovacao",
        json={
            "tipo_acao": "inativar_usuario",
            "justificativa": "Servidor desligado",
            "dados_acao": {"params": {"id": "u-7"}},
        },
        headers=tecnico,
    )
    assert r.status_code == 201, r.text
    criada = r.json()
    assert criada["status"] == "PENDENTE"
    assert criada["tipo_acao"] == "inativar_usuario"
    assert [a["perfil"] for a in criada["aprovadores"]] == [
        "ADMIN",
        "GESTOR",
        "COORDENADOR",
        "TECNICO_SEMTAS",
    ]
    sid = criada["id"]

    assert (await client.get(f"/v1/aprovacao/{sid}", headers=gestor)).status_code == 200
    assert (await client.get(f"/v1/aprovacao/{sid}", headers=estranho)).status_code == 404

    r = await client.get("/v1/aprovacao/pendentes", headers=gestor)
    assert [s["id"] for s in r.json()] == [sid]

    r = await client.post(
        f"/v1/aprovacao/{sid}/processar",
        json={"aprovado": True, "justificativa": "De acordo"},
        headers=gestor,
    )
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "EXECUTADA"
    assert r.json()["resultado_execucao"] == {"inativado": True}
    assert executados == [criada["codigo"]]

    r = await client.get(f"/v1/aprovacao/{sid}/historico", headers=tecnico)
    assert {h["acao"] for h in r.json()} == {"CRIAR", "APROVAR", "EXECUTAR"}

    r = await client.post(f"/v1/aprovacao/{sid}/processar", json={"aprovado": True}, headers=gestor)
    assert r.status_code == 400
    assert r.json()["status"] == "EXECUTADA"

    r = await client.get("/v1/notificacoes", headers=tecnico)
    (notificacao,) = r.json()
    assert notificacao["template_codigo"] == "solicitacao-aprovacao-processada"
    r = await client.patch(f"/v1/notificacoes/{notificacao['id']}/lida", headers=tecnico)
    assert r.status_code == 200 and r.json()["lida"] is True
    assert (await client.get("/v1/notificacoes?nao_lidas=true", headers=tecnico)).json() == []


@pytest.mark.asyncio
async def test_listing_and_role_checks(client: httpx.AsyncClient) -> None:
    tecnico = await _auth(client, "TECNICO_UNIDADE")
    auditor = await _auth(client, "AUDITOR")

    r = await client.post(
        "/v1/aprovacao",
        json={"tipo_acao": "reativar_usuario", "justificativa": "Retorno de férias"},
        headers=tecnico,
    )
    assert r.status_code == 201

    assert (await client.get("/v1/aprovacao", headers=tecnico)).status_code == 403
    r = await client.get("/v1/aprovacao?status=PENDENTE", headers=auditor)
    assert r.status_code == 200 and r.json()["total"] == 1

    r = await client.get("/v1/aprovacao/estatisticas", headers=auditor)
    assert r.json()["por_status"]["PENDENTE"] == 1

    r = await client.get("/v1/aprovacao/acoes?modulo=usuario", headers=tecnico)
    assert "inativar_usuario" in {a["codigo"] for a in r.json()}


@pytest.mark.asyncio
async def test_domain_errors_are_mapped(client: httpx.AsyncClient) -> None:
    tecnico = await _auth(client, "TECNICO_UNIDADE")

    r = await client.post(
        "/v1/aprovacao",
        json={"tipo_acao": "acao_inexistente", "justificativa": "x"},
        headers=tecnico,
    )
    assert r.status_code == 404
    assert r.json() == {
        "tipo_acao": "acao_inexistente",
        "detail": "Configuração de aprovação não encontrada",
    }

    body = {"tipo_acao": "reativar_usuario", "justificativa": "x"}
    assert (await client.post("/v1/aprovacao", json=body, headers=tecnico)).status_code == 201
    r = await client.post("/v1/aprovacao", json=body, headers=tecnico)
    assert r.status_code == 400
    assert "solicitacao_existente" in r.json()


@pytest.mark.asyncio
async def test_admin_manages_actions(client: httpx.AsyncClient) -> None:
    admin = await _auth(client, "ADMIN")
    gestor = await _auth(client, "GESTOR")
    body = {"nome": "Exportar Dados", "modulo": "relatorio", "estrategia": "maioria"}

    url = "/v1/aprovacao/acoes/exportar_dados"
    assert (await client.put(url, json=body, headers=gestor)).status_code == 403
    r = await client.put(url, json=body, headers=admin)
    assert r.status_code == 200, r.text
    assert r.json()["estrategia"] == "MAIORIA"

    r = await client.post(
        "/v1/aprovacao/acoes/exportar_dados/aprovadores", json={"perfil": "gestor"}, headers=admin
    )
    assert r.status_code == 201
    aprovador = r.json()
    assert aprovador["perfil"] == "GESTOR"

    r = await client.post(
        "/v1/aprovacao/acoes/exportar_dados/aprovadores", json={"perfil": "GESTOR"}, headers=admin
    )
    assert r.status_code == 409

    r = await client.delete(
        f"/v1/aprovacao/acoes/exportar_dados/aprovadores/{aprovador['id']}", headers=admin
    )
    assert r.json()["resultado"] == "removido"

    r = await client.delete("/v1/aprovacao/acoes/exportar_dados", headers=admin)
    assert r.json() == {"codigo": "exportar_dados", "resultado": "removida"}

    r = await client.post("/v1/aprovacao/escalacao/processar", headers=admin)
    assert r.status_code == 200 and r.json()["escaladas"] == 0


@pytest.mark.asyncio
async def test_delegation_route(app: FastAPI, client: httpx.AsyncClient) -> None:
    tecnico = await _auth(client, "TECNICO_UNIDADE")
    gestor = await _auth(client, "GESTOR")
    dora_id = await _usuario(app, "Dora Delegada")
    dora = await _auth(client, subject=str(dora_id))

    r = await client.post(
        "/v1/aprovacao",
        json={"tipo_acao": "reativar_usuario", "justificativa": "Retorno de licença"},
        headers=tecnico,
    )
    sid = r.json()["id"]

    url = f"/v1/aprovacao/{sid}/delegar"
    r = await client.post(url, json={"delegado_id": str(dora_id)}, headers=gestor)
    assert r.status_code == 422
    r = await client.post(
        url, json={"delegado_id": str(dora_id), "justificativa": "Férias"}, headers=gestor
    )
    assert r.status_code == 200, r.text
    (delegada,) = [a for a in r.json()["aprovadores"] if a["usuario_id"] == str(dora_id)]
    assert delegada["delegado_por"] is not None

    r = await client.get("/v1/aprovacao/pendentes", headers=dora)
    assert [s["id"] for s in r.json()] == [sid]
    assert (await client.get("/v1/aprovacao/pendentes", headers=gestor)).json() == []

    r = await client.post(
        url, json={"delegado_id": str(dora_id), "justificativa": "De novo"}, headers=gestor
    )
    assert r.status_code == 404

    r = await client.get(f"/v1/aprovacao/{sid}/historico", headers=dora)
    assert "DELEGAR" in {h["acao"] for h in r.json()}


@pytest.mark.asyncio
async def test_templates(client: httpx.AsyncClient) -> None:
    headers = await _auth(client, "TECNICO_UNIDADE")

    r = await client.get("/v1/notificacoes/templates?categoria=aprovacao", headers=headers)
    assert len(r.json()) == 5

    r = await client.get("/v1/notificacoes/templates/bem-vindo-sistema", headers=headers)
    assert r.json()["canais_disponiveis"] == ["email"]

    r = await client.post(
        "/v1/notificacoes/templates/bem-vindo-sistema/preview",
        json={"variaveis": {"nome_usuario": "Maria"}},
        headers=headers,
    )
    assert r.status_code == 400
    assert "senha_temporaria" in r.json()["faltando"]

    r = await client.get("/v1/notificacoes/templates/nao-existe", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_permission_routes(app: FastAPI, client: httpx.AsyncClient) -> None:
    usuario_id = await _usuario(app, "Paula Sem Perfil")
    gestor_id = await _usuario(app, "Gil Gestor", role="GESTOR")
    usuario = await _auth(client, subject=str(usuario_id))
    gestor = await _auth(client, "GESTOR", subject=str(gestor_id))
    admin = await _auth(client, "ADMIN")

    r = await client.get("/v1/permissoes/verificar?nome=documento.listar", headers=usuario)
    assert r.json()["permitido"] is False

    grant = {"nome": "documento.listar"}
    r = await client.post(f"/v1/permissoes/usuarios/{usuario_id}/conceder", json=grant, headers=gestor)
    assert r.status_code == 403
    r = await client.post(f"/v1/permissoes/usuarios/{usuario_id}/conceder", json=grant, headers=admin)
    assert r.status_code == 200 and r.json()["concedida"] is True

    r = await client.get("/v1/permissoes/verificar?nome=documento.listar", headers=usuario)
    assert r.json()["permitido"] is True

    r = await client.get(f"/v1/permissoes/usuarios/{usuario_id}", headers=admin)
    assert {(p["nome"], p["origem"]) for p in r.json()} == {("documento.listar", "direta")}

    r = await client.post(
        f"/v1/permissoes/usuarios/{usuario_id}/conceder",
        json={"nome": "cidadao.listar", "escopo": "unidade"},
        headers=admin,
    )
    assert r.status_code == 400

    r = await client.post(f"/v1/permissoes/usuarios/{usuario_id}/revogar", json=grant, headers=admin)
    assert r.json()["concedida"] is False
    r = await client.get("/v1/permissoes/verificar?nome=documento.listar", headers=usuario)
    assert r.json()["permitido"] is False

    r = await client.get("/v1/permissoes?modulo=documento", headers=usuario)
    assert "documento.*" in {p["nome"] for p in r.json()}
    r = await client.get("/v1/permissoes/verificar?nome=x&escopo=PLANETA", headers=usuario)
    assert r.status_code == 400


# --- Module Notes -----------------------------------------------------------
# Tokens come from the dev endpoint; subjects are random UUIDs unless a user row is needed.
