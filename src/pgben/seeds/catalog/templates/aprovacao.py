from __future__ import annotations

from pgben.seeds.catalog.templates import TemplateSpec, html_frame

NOVA_SOLICITACAO = TemplateSpec(
    codigo="nova-solicitacao-aprovacao",
    nome="Nova Solicitação de Aprovação",
    tipo="aprovacao",
    descricao="Template para notificar aprovadores sobre nova solicitação pendente",
    assunto="🔔 Nova Solicitação de Aprovação - {{ acao_nome }}",
    corpo=(
        "Nova solicitação de aprovação: {{ acao_nome }} por {{ solicitante_nome }}. "
        "Prazo: {{ prazo_limite }}. Acesse o sistema para processar."
    ),
    corpo_html=html_frame(
        "Nova Solicitação de Aprovação",
        """\
      <p>Olá <strong>{{ aprovador_nome }}</strong>,</p>
      {% if prioridade == "critica" %}
      <p style="color: #dc3545;"><strong>⚠️ AÇÃO CRÍTICA - APROVAÇÃO URGENTE</strong></p>
      {% endif %}
      <p>Você tem uma nova solicitação de aprovação pendente que requer sua análise.</p>
      <ul>
        <li><strong>Tipo de ação:</strong> {{ acao_nome }}</li>
        <li><strong>Solicitante:</strong> {{ solicitante_nome }}</li>
        <li><strong>Data da solicitação:</strong> {{ data_solicitacao }}</li>
        <li><strong>Prazo limite:</strong> {{ prazo_limite }}</li>
        {% if valor_envolvido %}<li><strong>Valor envolvido:</strong> R$ {{ valor_envolvido }}</li>{% endif %}
        <li><strong>Código da solicitação:</strong> {{ codigo_solicitacao }}</li>
      </ul>
      {% if justificativa %}
      <h4>📝 Justificativa</h4>
      <p>{{ justificativa }}</p>
      {% endif %}
      <p><a href="{{ link_aprovacao }}">🔍 Processar Aprovação</a></p>
      <p><strong>⏰ Tempo restante:</strong> {{ tempo_restante }}<br>
         <strong>📊 Prioridade:</strong> {{ prioridade }}</p>""",
    ),
    variaveis_requeridas=(
        "aprovador_nome",
        "acao_nome",
        "solicitante_nome",
        "data_solicitacao",
        "prazo_limite",
        "valor_envolvido",
        "codigo_solicitacao",
        "justificativa",
        "link_aprovacao",
        "tempo_restante",
        "prioridade",
        "email_suporte",
        "data_envio",
    ),
    categoria="aprovacao",
    prioridade="alta",
)

SOLICITACAO_PROCESSADA = TemplateSpec(
    codigo="solicitacao-aprovacao-processada",
    nome="Solicitação de Aprovação Processada",
    tipo="aprovacao",
    descricao="Template para notificar solicitante sobre resultado da aprovação",
    assunto=(
        "{% if aprovada %}✅ Solicitação Aprovada{% else %}❌ Solicitação Rejeitada{% endif %}"
        " - {{ acao_nome }}"
    ),
    corpo=(
        "Sua solicitação {{ codigo_solicitacao }} foi "
        "{% if aprovada %}aprovada{% else %}rejeitada{% endif %}."
        "{% if observacoes %} Observações: {{ observacoes }}{% endif %}"
    ),
    corpo_html=html_frame(
        "Solicitação de Aprovação Processada",
        """\
      <p>Olá <strong>{{ solicitante_nome }}</strong>,</p>
      <p>Sua solicitação <strong>{{ codigo_solicitacao }}</strong> para
         <strong>{{ acao_nome }}</strong> foi
         {% if aprovada %}<strong style="color: #28a745;">aprovada</strong>
         {% else %}<strong style="color: #dc3545;">rejeitada</strong>{% endif %}
         por {{ aprovador_nome }} em {{ data_processamento }}.</p>
      {% if observacoes %}
      <h4>📝 Observações</h4>
      <p>{{ observacoes }}</p>
      {% endif %}
      <p><a href="{{ link_solicitacao }}">Ver solicitação</a></p>
      {% if not aprovada %}
      <p><a href="{{ link_nova_solicitacao }}">Criar nova solicitação</a></p>
      {% endif %}""",
    ),
    variaveis_requeridas=(
        "aprovada",
        "solicitante_nome",
        "acao_nome",
        "codigo_solicitacao",
        "aprovador_nome",
        "data_processamento",
        "observacoes",
        "link_solicitacao",
        "link_nova_solicitacao",
        "email_suporte",
        "data_envio",
    ),
    categoria="aprovacao",
    prioridade="alta",
)

PRAZO_VENCENDO = TemplateSpec(
    codigo="prazo-aprovacao-vencendo",
    nome="Prazo de Aprovação Vencendo",
    tipo="aprovacao",
    descricao="Template para alertar sobre prazo de aprovação próximo do vencimento",
    assunto="⚠️ URGENTE: Prazo de Aprovação Vencendo - {{ acao_nome }}",
    corpo=(
        "ATENÇÃO: Solicitação {{ codigo_solicitacao }} vence em {{ horas_restantes }} horas. "
        "Ação urgente necessária."
    ),
    corpo_html=html_frame(
        "Prazo de Aprovação Vencendo",
        """\
      <p>Olá <strong>{{ aprovador_nome }}</strong>,</p>
      <p style="color: #dc3545;"><strong>A solicitação {{ codigo_solicitacao }} vence em
         {{ horas_restantes }} horas.</strong></p>
      <ul>
        <li><strong>Ação:</strong> {{ acao_nome }}</li>
        <li><strong>Solicitante:</strong> {{ solicitante_nome }}</li>
        <li><strong>Data da solicitação:</strong> {{ data_solicitacao }}</li>
        <li><strong>Prazo limite:</strong> {{ prazo_limite }}</li>
        <li><strong>Prioridade:</strong> {{ prioridade }}</li>
      </ul>
      {% if escalacao_automatica %}
      <p>Sem decisão até o prazo, a solicitação será escalada para
         <strong>{{ proximo_aprovador }}</strong>.</p>
      {% endif %}
      <p><a href="{{ link_aprovacao }}">Processar agora</a> |
         <a href="{{ link_delegar }}">Delegar aprovação</a></p>""",
        cor="#dc3545",
    ),
    variaveis_requeridas=(
        "aprovador_nome",
        "horas_restantes",
        "acao_nome",
        "solicitante_nome",
        "codigo_solicitacao",
        "prazo_limite",
        "data_solicitacao",
        "prioridade",
        "escalacao_automatica",
        "proximo_aprovador",
        "link_aprovacao",
        "link_delegar",
        "email_suporte",
        "data_envio",
    ),
    canais_disponiveis=("email", "in_app", "sms"),
    categoria="aprovacao",
    prioridade="critica",
)

DELEGACAO_CRIADA = TemplateSpec(
    codigo="delegacao-aprovacao-criada",
    nome="Delegação de Aprovação Criada",
    tipo="aprovacao",
    descricao="Template para notificar sobre criação de delegação de aprovação",
    assunto="👥 Delegação de Aprovação Criada - {{ acao_nome }}",
    corpo=(
        "Delegação criada: {{ delegante_nome }} delegou aprovação de {{ acao_nome }} "
        "para {{ delegado_nome }}. Válida até {{ data_expiracao }}."
    ),
    corpo_html=html_frame(
        "Delegação de Aprovação Criada",
        """\
      <p>Olá <strong>{{ destinatario_nome }}</strong>,</p>
      <p><strong>{{ delegante_nome }}</strong> delegou a aprovação de
         <strong>{{ acao_nome }}</strong> para <strong>{{ delegado_nome }}</strong>.</p>
      <ul>
        <li><strong>Criada em:</strong> {{ data_criacao }}</li>
        <li><strong>Válida até:</strong> {{ data_expiracao }}</li>
        <li><strong>Status:</strong> {{ status_delegacao }}</li>
      </ul>
      {% if motivo %}<p><strong>Motivo:</strong> {{ motivo }}</p>{% endif %}
      <p><a href="{{ link_delegacao }}">Ver delegação</a></p>""",
    ),
    variaveis_requeridas=(
        "destinatario_nome",
        "delegante_nome",
        "delegado_nome",
        "acao_nome",
        "data_criacao",
        "data_expiracao",
        "status_delegacao",
        "motivo",
        "link_delegacao",
        "email_suporte",
        "data_envio",
    ),
    categoria="aprovacao",
    prioridade="normal",
)

ESCALACAO_AUTOMATICA = TemplateSpec(
    codigo="escalacao-automatica-aprovacao",
    nome="Escalação Automática de Aprovação",
    tipo="aprovacao",
    descricao="Template para notificar sobre escalação automática por prazo vencido",
    assunto="🔺 Escalação Automática - {{ acao_nome }}",
    corpo=(
        "Escalação automática: Solicitação {{ codigo_solicitacao }} foi escalada para "
        "{{ novo_aprovador }} devido ao vencimento do prazo."
    ),
    corpo_html=html_frame(
        "Escalação Automática de Aprovação",
        """\
      <p>Olá <strong>{{ destinatario_nome }}</strong>,</p>
      <p>A solicitação <strong>{{ codigo_solicitacao }}</strong> ({{ acao_nome }}) de
         {{ solicitante_nome }} foi escalada automaticamente em {{ data_escalacao }}.</p>
      <ul>
        <li><strong>Aprovador anterior:</strong> {{ aprovador_anterior }}</li>
        <li><strong>Novo aprovador:</strong> {{ novo_aprovador }}</li>
        <li><strong>Data da solicitação:</strong> {{ data_solicitacao }}</li>
        <li><strong>Prazo original:</strong> {{ prazo_original }}</li>
        <li><strong>Novo prazo:</strong> {{ novo_prazo }} ({{ tempo_restante_novo }})</li>
      </ul>
      <p><a href="{{ link_aprovacao }}">Processar aprovação</a></p>""",
        cor="#fd7e14",
    ),
    variaveis_requeridas=(
        "destinatario_nome",
        "acao_nome",
        "codigo_solicitacao",
        "solicitante_nome",
        "aprovador_anterior",
        "novo_aprovador",
        "data_escalacao",
        "data_solicitacao",
        "prazo_original",
        "novo_prazo",
        "tempo_restante_novo",
        "link_aprovacao",
        "email_suporte",
        "data_envio",
    ),
    categoria="aprovacao",
    prioridade="alta",
)

TEMPLATES: tuple[TemplateSpec, ...] = (
    NOVA_SOLICITACAO,
    SOLICITACAO_PROCESSADA,
    PRAZO_VENCENDO,
    DELEGACAO_CRIADA,
    ESCALACAO_AUTOMATICA,
)
