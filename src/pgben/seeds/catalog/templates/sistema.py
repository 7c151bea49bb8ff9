from __future__ import annotations

from pgben.seeds.catalog.templates import TemplateSpec, html_frame

BEM_VINDO = TemplateSpec(
    codigo="bem-vindo-sistema",
    nome="Boas-vindas ao Sistema",
    tipo="sistema",
    descricao="Template de boas-vindas para novos usuários do sistema",
    assunto="🎉 Bem-vindo ao PGBen - Sua conta foi criada com sucesso!",
    corpo=(
        "Bem-vindo {{ nome_usuario }}! Sua conta no PGBen foi criada. "
        "Acesse com: {{ email }} e senha temporária: {{ senha_temporaria }}"
    ),
    corpo_html=html_frame(
        "Bem-vindo ao PGBen",
        """\
      <p>Olá <strong>{{ nome_usuario }}</strong>,</p>
      <p>Sua conta no PGBen foi criada em {{ data_criacao }}.</p>
      <ul>
        <li><strong>E-mail:</strong> {{ email }}</li>
        <li><strong>Senha temporária:</strong> {{ senha_temporaria }}</li>
      </ul>
      <p>Por segurança, altere a senha no primeiro acesso.</p>
      <p><a href="{{ link_primeiro_acesso }}">Fazer primeiro acesso</a> |
         <a href="{{ link_documentacao }}">Documentação</a></p>""",
        cor="#28a745",
    ),
    variaveis_requeridas=(
        "nome_usuario",
        "email",
        "senha_temporaria",
        "link_primeiro_acesso",
        "link_documentacao",
        "email_suporte",
        "data_criacao",
    ),
    canais_disponiveis=("email",),
    categoria="sistema",
    prioridade="alta",
)

ALTERACAO_PERFIL = TemplateSpec(
    codigo="alteracao-perfil-confirmacao",
    nome="Confirmação de Alteração de Perfil",
    tipo="sistema",
    descricao="Template para confirmar alterações no perfil do usuário",
    assunto="✅ Perfil Atualizado - {{ tipo_alteracao }}",
    corpo=(
        "Seu perfil foi atualizado: {{ tipo_alteracao }}. "
        "Se não foi você, entre em contato conosco imediatamente."
    ),
    corpo_html=html_frame(
        "Perfil Atualizado",
        """\
      <p>Olá <strong>{{ nome_usuario }}</strong>,</p>
      <p>Seu perfil foi atualizado em {{ data_alteracao }}: <strong>{{ tipo_alteracao }}</strong>.</p>
      <p>{{ alteracoes }}</p>
      <ul>
        <li><strong>IP de origem:</strong> {{ ip_origem }}</li>
        <li><strong>Navegador:</strong> {{ user_agent }}</li>
        <li><strong>Localização:</strong> {{ localizacao }}</li>
      </ul>
      <p><a href="{{ link_perfil }}">Ver meu perfil</a> |
         <a href="{{ link_reportar_problema }}">Não fui eu</a></p>""",
    ),
    variaveis_requeridas=(
        "nome_usuario",
        "tipo_alteracao",
        "data_alteracao",
        "alteracoes",
        "link_perfil",
        "link_reportar_problema",
        "ip_origem",
        "user_agent",
        "localizacao",
        "email_suporte",
        "data_envio",
    ),
    categoria="sistema",
    prioridade="normal",
)

MANUTENCAO_PROGRAMADA = TemplateSpec(
    codigo="manutencao-sistema-programada",
    nome="Manutenção Programada do Sistema",
    tipo="sistema",
    descricao="Template para notificar sobre manutenção programada do sistema",
    assunto="🔧 Manutenção Programada - {{ data_inicio }}",
    corpo=(
        "Manutenção programada: {{ data_inicio }} às {{ hora_inicio }} até {{ data_fim }} "
        "às {{ hora_fim }}. Serviços afetados: {{ servicos_afetados }}"
    ),
    corpo_html=html_frame(
        "Manutenção Programada",
        """\
      <p>Olá <strong>{{ nome_usuario }}</strong>,</p>
      <p>Haverá manutenção ({{ tipo_manutencao }}) de {{ data_inicio }} às {{ hora_inicio }}
         até {{ data_fim }} às {{ hora_fim }}. Duração estimada: {{ duracao_estimada }}.</p>
      <p><strong>Serviços afetados:</strong> {{ servicos_afetados }}</p>
      {% if backup_recomendado %}
      <p>Recomendamos salvar seu trabalho antes do início da manutenção.</p>
      {% endif %}
      {% if melhorias %}<p><strong>Melhorias:</strong> {{ melhorias }}</p>{% endif %}
      <p><a href="{{ link_status_sistema }}">Status do sistema</a></p>""",
        cor="#6c757d",
    ),
    variaveis_requeridas=(
        "nome_usuario",
        "data_inicio",
        "hora_inicio",
        "data_fim",
        "hora_fim",
        "duracao_estimada",
        "tipo_manutencao",
        "servicos_afetados",
        "backup_recomendado",
        "melhorias",
        "link_status_sistema",
        "email_suporte",
        "data_envio",
    ),
    categoria="sistema",
    prioridade="normal",
)

TEMPLATES: tuple[TemplateSpec, ...] = (BEM_VINDO, ALTERACAO_PERFIL, MANUTENCAO_PROGRAMADA)
