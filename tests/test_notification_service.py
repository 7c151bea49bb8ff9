"""
tests.test_notification_service

Template rendering, required-variable validation and per-user notification records.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pgben.errors import BadRequestError, NotFoundError
from pgben.services.notification_service import NotificationService
from pgben.settings import Settings


def _bem_vindo(**overrides: object) -> dict[str, object]:
    variaveis: dict[str, object] = {
        "nome_usuario": "Maria",
        "email": "maria@semtas.test",
        "senha_temporaria": "Tmp#2024",
        "link_primeiro_acesso": "http://frontend.test/primeiro-acesso",
        "link_documentacao": "http://frontend.test/docs",
        "data_criacao": "01/02/2024",
    }
    variaveis.update(overrides)
    return variaveis


@pytest.mark.asyncio
async def test_every_seeded_template_renders(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    for template in await svc.list_active_templates():
        variaveis = {nome: "x" for nome in template.variaveis_requeridas}
        rendered = await svc.render(template.codigo, variaveis)
        assert rendered.assunto, template.codigo
        assert rendered.corpo, template.codigo


@pytest.mark.asyncio
async def test_render_fills_defaults_and_escapes_html(
    session: AsyncSession, settings: Settings
) -> None:
    svc = NotificationService(session=session, settings=settings)
    rendered = await svc.render("bem-vindo-sistema", _bem_vindo(nome_usuario="<b>Maria</b>"))

    assert "Bem-vindo <b>Maria</b>!" in rendered.corpo
    assert rendered.corpo_html is not None
    assert "&lt;b&gt;Maria&lt;/b&gt;" in rendered.corpo_html
    # Support e-mail comes from settings when not supplied.
    assert settings.email_suporte in rendered.corpo_html
    assert rendered.canais == ("email",)
    assert rendered.prioridade == "alta"


@pytest.mark.asyncio
async def test_missing_variables_are_reported(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    variaveis = _bem_vindo()
    del variaveis["senha_temporaria"]

    assert await svc.validate_template("bem-vindo-sistema", variaveis) == ["senha_temporaria"]
    with pytest.raises(BadRequestError) as exc:
        await svc.render("bem-vindo-sistema", variaveis)
    assert exc.value.details["faltando"] == ["senha_temporaria"]


@pytest.mark.asyncio
async def test_none_values_render_blank(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    rendered = await svc.render(
        "solicitacao-aprovada",
        {
            "nome_cidadao": "João",
            "numero_protocolo": "SOL-2024-0001",
            "tipo_beneficio": "Aluguel Social",
            "data_aprovacao": "10/02/2024",
            "nome_tecnico": "Ana",
            "observacoes": None,
            "link_solicitacao": "http://frontend.test/solicitacoes/1",
        },
    )
    assert rendered.assunto == "Solicitação SOL-2024-0001 - Aprovada"
    assert rendered.corpo.endswith("Observações:")
    assert "None" not in rendered.corpo


@pytest.mark.asyncio
async def test_unknown_template(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    with pytest.raises(NotFoundError):
        await svc.render("nao-existe", {})


@pytest.mark.asyncio
async def test_inactive_template_is_rejected(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    template = await svc.get_template("bem-vindo-sistema")
    template.ativo = False
    await session.commit()

    with pytest.raises(BadRequestError):
        await svc.render("bem-vindo-sistema", _bem_vindo())
    assert "bem-vindo-sistema" not in {t.codigo for t in await svc.list_active_templates()}


@pytest.mark.asyncio
async def test_list_templates_by_category(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    codigos = {t.codigo for t in await svc.list_active_templates(categoria="aprovacao")}
    assert codigos == {
        "nova-solicitacao-aprovacao",
        "solicitacao-aprovacao-processada",
        "prazo-aprovacao-vencendo",
        "delegacao-aprovacao-criada",
        "escalacao-automatica-aprovacao",
    }


@pytest.mark.asyncio
async def test_notify_records_one_row_per_recipient(
    session: AsyncSession, settings: Settings
) -> None:
    svc = NotificationService(session=session, settings=settings)
    a, b = uuid.uuid4(), uuid.uuid4()

    items = await svc.notify("bem-vindo-sistema", [a, b, a], _bem_vindo())
    await session.commit()

    assert [n.destinatario_id for n in items] == [a, b]
    assert {n.canal for n in items} == {"email"}
    assert items[0].dados["nome_usuario"] == "Maria"

    with pytest.raises(BadRequestError):
        await svc.notify("bem-vindo-sistema", [a], _bem_vindo(), canal="sms")


@pytest.mark.asyncio
async def test_list_and_mark_read(session: AsyncSession, settings: Settings) -> None:
    svc = NotificationService(session=session, settings=settings)
    dono, outro = uuid.uuid4(), uuid.uuid4()
    (n,) = await svc.notify("bem-vindo-sistema", [dono], _bem_vindo())
    await session.commit()

    assert [x.id for x in await svc.list_for_user(dono, apenas_nao_lidas=True)] == [n.id]

    with pytest.raises(NotFoundError):
        await svc.mark_read(n.id, usuario_id=outro)

    lida = await svc.mark_read(n.id, usuario_id=dono)
    assert lida.lida and lida.lida_em is not None
    assert await svc.list_for_user(dono, apenas_nao_lidas=True) == []
    assert len(await svc.list_for_user(dono)) == 1
