from __future__ import annotations

from pgben.seeds.catalog.templates import TemplateSpec, html_frame

_BASE = ("nome_cidadao", "numero_protocolo", "tipo_beneficio")


def _detalhes(*linhas: tuple[str, str]) -> str:
    itens = "\n".join(
        f"        <li><strong>{rotulo}:</strong> {{{{ {var} }}}}</li>" for rotulo, var in linhas
    )
    return f"      <ul>\n{itens}\n      </ul>"


def _corpo_html(titulo: str, mensagem: str, detalhes: str, extra: str, cor: str) -> str:
    return html_frame(
        titulo,
        "\n".join(
            (
                "      <p>Olá <strong>{{ nome_cidadao }}</strong>,</p>",
                f"      <p>{mensagem}</p>",
                detalhes,
                extra,
                '      <p><a href="{{ link_solicitacao }}">Ver Detalhes da Solicitação</a></p>',
            )
        ),
        cor=cor,
    )


APROVADA = TemplateSpec(
    codigo="solicitacao-aprovada",
    nome="Solicitação Aprovada",
    tipo="solicitacao",
    descricao="Template para notificar quando uma solicitação é aprovada",
    assunto="Solicitação {{ numero_protocolo }} - Aprovada",
    corpo=(
        "Sua solicitação {{ numero_protocolo }} para {{ tipo_beneficio }} foi aprovada. "
        "Observações: {{ observacoes }}"
    ),
    corpo_html=_corpo_html(
        "✅ Solicitação Aprovada!",
        "Temos uma ótima notícia! Sua solicitação foi <strong>aprovada</strong>.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data de Aprovação", "data_aprovacao"),
            ("👤 Aprovado por", "nome_tecnico"),
        ),
        "      {% if observacoes %}<p><strong>📝 Observações:</strong> {{ observacoes }}</p>{% endif %}",
        "#28a745",
    ),
    variaveis_requeridas=_BASE
    + ("data_aprovacao", "nome_tecnico", "observacoes", "link_solicitacao", "data_envio"),
    categoria="solicitacao",
    prioridade="alta",
)

INDEFERIDA = TemplateSpec(
    codigo="solicitacao-indeferida",
    nome="Solicitação Indeferida",
    tipo="solicitacao",
    descricao="Template para notificar quando uma solicitação é indeferida",
    assunto="Solicitação {{ numero_protocolo }} - Indeferida",
    corpo=(
        "Sua solicitação {{ numero_protocolo }} para {{ tipo_beneficio }} foi indeferida. "
        "Motivo: {{ motivo_rejeicao }}"
    ),
    corpo_html=_corpo_html(
        "❌ Solicitação Indeferida",
        "Informamos que sua solicitação foi <strong>indeferida</strong>.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data", "data_rejeicao"),
            ("👤 Analisado por", "nome_tecnico"),
        ),
        "      <p><strong>Motivo:</strong> {{ motivo_rejeicao }}</p>",
        "#dc3545",
    ),
    variaveis_requeridas=_BASE
    + ("data_rejeicao", "nome_tecnico", "motivo_rejeicao", "link_solicitacao"),
    categoria="solicitacao",
    prioridade="alta",
)

CANCELADA = TemplateSpec(
    codigo="solicitacao-cancelada",
    nome="Solicitação Cancelada",
    tipo="solicitacao",
    descricao="Template para notificar quando uma solicitação é cancelada",
    assunto="Solicitação {{ numero_protocolo }} - Cancelada",
    corpo=(
        "Sua solicitação {{ numero_protocolo }} para {{ tipo_beneficio }} foi cancelada. "
        "Motivo: {{ motivo_cancelamento }}"
    ),
    corpo_html=_corpo_html(
        "🚫 Solicitação Cancelada",
        "Sua solicitação foi <strong>cancelada</strong>.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data", "data_cancelamento"),
        ),
        "      <p><strong>Motivo:</strong> {{ motivo_cancelamento }}</p>",
        "#6c757d",
    ),
    variaveis_requeridas=_BASE
    + ("data_cancelamento", "motivo_cancelamento", "link_solicitacao"),
    categoria="solicitacao",
    prioridade="normal",
)

SUSPENSA = TemplateSpec(
    codigo="solicitacao-suspensa",
    nome="Solicitação Suspensa",
    tipo="solicitacao",
    descricao="Template para notificar quando uma solicitação é suspensa",
    assunto="Solicitação {{ numero_protocolo }} - Suspensa",
    corpo=(
        "Sua solicitação {{ numero_protocolo }} para {{ tipo_beneficio }} foi suspensa. "
        "Motivo: {{ motivo_suspensao }}"
    ),
    corpo_html=_corpo_html(
        "⏸️ Solicitação Suspensa",
        "Sua solicitação foi <strong>suspensa</strong> temporariamente.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data", "data_suspensao"),
        ),
        "      <p><strong>Motivo:</strong> {{ motivo_suspensao }}</p>",
        "#ffc107",
    ),
    variaveis_requeridas=_BASE + ("data_suspensao", "motivo_suspensao", "link_solicitacao"),
    categoria="solicitacao",
    prioridade="alta",
)

BLOQUEADA = TemplateSpec(
    codigo="solicitacao-bloqueada",
    nome="Solicitação Bloqueada",
    tipo="solicitacao",
    descricao="Template para notificar quando uma solicitação é bloqueada",
    assunto="Solicitação {{ numero_protocolo }} - Bloqueada",
    corpo=(
        "Sua solicitação {{ numero_protocolo }} para {{ tipo_beneficio }} foi bloqueada. "
        "Motivo: {{ motivo_bloqueio }}"
    ),
    corpo_html=_corpo_html(
        "🔒 Solicitação Bloqueada",
        "Sua solicitação foi <strong>bloqueada</strong>.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data", "data_bloqueio"),
        ),
        "      <p><strong>Motivo:</strong> {{ motivo_bloqueio }}</p>",
        "#343a40",
    ),
    variaveis_requeridas=_BASE + ("data_bloqueio", "motivo_bloqueio", "link_solicitacao"),
    categoria="solicitacao",
    prioridade="alta",
)

PENDENCIA = TemplateSpec(
    codigo="solicitacao-pendencia",
    nome="Pendência em Solicitação",
    tipo="solicitacao",
    descricao="Template para notificar quando uma pendência é criada em uma solicitação",
    assunto="Pendência na Solicitação {{ numero_protocolo }}",
    corpo=(
        "Foi identificada uma pendência na solicitação {{ numero_protocolo }} para "
        "{{ tipo_beneficio }}. Descrição: {{ descricao_pendencia }}"
    ),
    corpo_html=_corpo_html(
        "⚠️ Pendência Identificada",
        "Foi identificada uma pendência na sua solicitação.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data", "data_pendencia"),
            ("👤 Técnico", "nome_tecnico"),
        ),
        "      <p><strong>Descrição:</strong> {{ descricao_pendencia }}</p>\n"
        "      {% if observacoes %}<p><strong>Observações:</strong> {{ observacoes }}</p>{% endif %}",
        "#fd7e14",
    ),
    variaveis_requeridas=_BASE
    + ("data_pendencia", "nome_tecnico", "descricao_pendencia", "observacoes", "link_solicitacao"),
    categoria="solicitacao",
    prioridade="alta",
)

PENDENCIA_RESOLVIDA = TemplateSpec(
    codigo="solicitacao-pendencia-resolvida",
    nome="Pendência Resolvida",
    tipo="solicitacao",
    descricao="Template para notificar quando uma pendência é resolvida",
    assunto="Pendência Resolvida - Solicitação {{ numero_protocolo }}",
    corpo=(
        "A pendência da solicitação {{ numero_protocolo }} para {{ tipo_beneficio }} foi "
        "resolvida. Observações: {{ observacoes_resolucao }}"
    ),
    corpo_html=_corpo_html(
        "✅ Pendência Resolvida",
        "A pendência da sua solicitação foi <strong>resolvida</strong>.",
        _detalhes(
            ("📋 Protocolo", "numero_protocolo"),
            ("🎯 Benefício", "tipo_beneficio"),
            ("📅 Data", "data_resolucao"),
            ("👤 Técnico", "nome_tecnico"),
        ),
        "      <p><strong>Observações:</strong> {{ observacoes_resolucao }}</p>",
        "#28a745",
    ),
    variaveis_requeridas=_BASE
    + ("data_resolucao", "nome_tecnico", "observacoes_resolucao", "link_solicitacao"),
    categoria="solicitacao",
    prioridade="normal",
)

TEMPLATES: tuple[TemplateSpec, ...] = (
    APROVADA,
    INDEFERIDA,
    CANCELADA,
    SUSPENSA,
    BLOQUEADA,
    PENDENCIA,
    PENDENCIA_RESOLVIDA,
)
