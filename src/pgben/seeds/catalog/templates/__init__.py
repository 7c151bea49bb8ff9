"""
pgben.seeds.catalog.templates

Notification templates (Jinja2 syntax) grouped by category.

Responsibilities:
- Define `TemplateSpec`, the seedable shape of a notification template.
- Provide the shared HTML frame used by the e-mail bodies.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateSpec:
    codigo: str
    nome: str
    tipo: str
    descricao: str
    assunto: str
    corpo: str
    corpo_html: str
    variaveis_requeridas: tuple[str, ...]
    canais_disponiveis: tuple[str, ...] = ("email", "in_app")
    categoria: str = ""
    prioridade: str = "normal"
    ativo: bool = True

    def as_row(self) -> dict[str, object]:
        return {
            "codigo": self.codigo,
            "nome": self.nome,
            "tipo": self.tipo,
            "descricao": self.descricao,
            "assunto": self.assunto,
            "corpo": self.corpo,
            "corpo_html": self.corpo_html,
            "canais_disponiveis": list(self.canais_disponiveis),
            "variaveis_requeridas": list(self.variaveis_requeridas),
            "categoria": self.categoria or self.tipo,
            "prioridade": self.prioridade,
            "ativo": self.ativo,
        }


def html_frame(titulo: str, conteudo: str, *, cor: str = "#0056b3") -> str:
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head>
  <meta charset="UTF-8">
  <title>{titulo}</title>
</head>
<body style="font-family: 'Segoe UI', Tahoma, sans-serif; background-color: #f8f9fa; margin: 0;">
  <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff;">
    <div style="background-color: {cor}; color: #ffffff; padding: 24px; text-align: center;">
      <h1 style="margin: 0; font-size: 22px;">{titulo}</h1>
    </div>
    <div style="padding: 24px; color: #333333;">
{conteudo}
    </div>
    <div style="background: #f8f9fa; padding: 16px; text-align: center; font-size: 12px; color: #6c757d;">
      <p><strong>PGBen - SEMTAS Natal</strong></p>
      <p>Este é um e-mail automático. Para suporte: {{{{ email_suporte }}}}</p>
      <p>Data de envio: {{{{ data_envio }}}}</p>
    </div>
  </div>
</body>
</html>
"""


# --- Module Notes -----------------------------------------------------------
# `html_frame` is an f-string: doubled braces produce literal Jinja delimiters.
