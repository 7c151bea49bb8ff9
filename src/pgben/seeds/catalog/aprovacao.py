"""
pgben.seeds.catalog.aprovacao

Critical actions that require approval, their approval configuration and the
profile-based approvers attached to every configured action.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, NamedTuple

from pgben.db.models import EstrategiaAprovacao


class AcaoSpec(NamedTuple):
    codigo: str
    tipo: str
    nome: str
    descricao: str
    modulo: str
    entidade_alvo: str
    controlador: str
    metodo: str
    nivel_criticidade: int
    tags: tuple[str, ...]


class ConfiguracaoSpec(NamedTuple):
    estrategia: EstrategiaAprovacao
    min_aprovacoes: int = 1
    tempo_limite_horas: int = 24
    permite_auto_aprovacao: bool = False
    escalacao_ativa: bool = True
    tempo_escalacao_horas: int = 24
    condicoes: dict[str, Any] | None = None


class AprovadorSpec(NamedTuple):
    perfil: str
    ordem: int
    limite_valor: Decimal | None


ACOES: tuple[AcaoSpec, ...] = (
    # solicitacao
    AcaoSpec(
        "cancelar_solicitacao", "cancelamento_solicitacao", "Cancelar Solicitação",
        "Cancelamento de solicitação de benefício em andamento",
        "solicitacao", "Solicitacao", "SolicitacaoController", "cancelar", 3,
        ("solicitacao", "cancelamento", "critica"),
    ),
    AcaoSpec(
        "suspender_solicitacao", "suspensao_beneficio", "Suspender Solicitação",
        "Suspensão temporária de solicitação de benefício",
        "solicitacao", "Solicitacao", "SolicitacaoController", "suspender", 2,
        ("solicitacao", "suspensao", "temporaria"),
    ),
    AcaoSpec(
        "reativar_solicitacao", "reativacao_beneficio", "Reativar Solicitação",
        "Reativação de solicitação suspensa ou cancelada",
        "solicitacao", "Solicitacao", "SolicitacaoController", "reativar", 2,
        ("solicitacao", "reativacao"),
    ),
    # beneficio
    AcaoSpec(
        "suspender_beneficio", "suspensao_beneficio", "Suspender Benefício",
        "Suspensão de benefício ativo",
        "beneficio", "Beneficio", "BeneficioController", "suspender", 4,
        ("beneficio", "suspensao", "critica"),
    ),
    AcaoSpec(
        "bloquear_beneficio", "bloqueio_usuario", "Bloquear Benefício",
        "Bloqueio temporário de benefício por irregularidade",
        "beneficio", "Beneficio", "BeneficioController", "bloquear", 4,
        ("beneficio", "bloqueio", "irregularidade"),
    ),
    AcaoSpec(
        "desbloquear_beneficio", "desbloqueio_usuario", "Desbloquear Benefício",
        "Desbloqueio de benefício previamente bloqueado",
        "beneficio", "Beneficio", "BeneficioController", "desbloquear", 3,
        ("beneficio", "desbloqueio"),
    ),
    AcaoSpec(
        "liberar_beneficio", "alteracao_status_pagamento", "Liberar Benefício",
        "Liberação de benefício para pagamento",
        "beneficio", "Beneficio", "BeneficioController", "liberar", 3,
        ("beneficio", "liberacao", "pagamento"),
    ),
    AcaoSpec(
        "cancelar_beneficio", "cancelamento_solicitacao", "Cancelar Benefício",
        "Cancelamento definitivo de benefício",
        "beneficio", "Beneficio", "BeneficioController", "cancelar", 5,
        ("beneficio", "cancelamento", "definitivo"),
    ),
    # cidadao
    AcaoSpec(
        "inativar_cidadao", "exclusao_beneficiario", "Inativar Cidadão",
        "Inativação de cadastro de cidadão",
        "cidadao", "Cidadao", "CidadaoController", "inativar", 3,
        ("cidadao", "inativacao"),
    ),
    AcaoSpec(
        "reativar_cidadao", "reativacao_beneficio", "Reativar Cidadão",
        "Reativação de cadastro de cidadão inativo",
        "cidadao", "Cidadao", "CidadaoController", "reativar", 2,
        ("cidadao", "reativacao"),
    ),
    AcaoSpec(
        "excluir_cidadao", "exclusao_beneficiario", "Excluir Cidadão",
        "Exclusão definitiva de cadastro de cidadão (LGPD)",
        "cidadao", "Cidadao", "CidadaoController", "excluir", 5,
        ("cidadao", "exclusao", "lgpd", "definitivo"),
    ),
    # usuario
    AcaoSpec(
        "inativar_usuario", "bloqueio_usuario", "Inativar Usuário",
        "Inativação de usuário do sistema",
        "usuario", "Usuario", "UsuarioController", "inativar", 3,
        ("usuario", "inativacao", "acesso"),
    ),
    AcaoSpec(
        "reativar_usuario", "desbloqueio_usuario", "Reativar Usuário",
        "Reativação de usuário inativo",
        "usuario", "Usuario", "UsuarioController", "reativar", 2,
        ("usuario", "reativacao", "acesso"),
    ),
    AcaoSpec(
        "alterar_permissoes", "alteracao_permissao", "Alterar Permissões",
        "Alteração de permissões críticas de usuário",
        "usuario", "Usuario", "UsuarioController", "alterarPermissoes", 4,
        ("usuario", "permissoes", "seguranca"),
    ),
    # documento
    AcaoSpec(
        "excluir_documento", "exclusao_documento", "Excluir Documento",
        "Exclusão definitiva de documento",
        "documento", "Documento", "DocumentoController", "excluir", 3,
        ("documento", "exclusao"),
    ),
    AcaoSpec(
        "substituir_documento", "exclusao_documento", "Substituir Documento",
        "Substituição de documento oficial",
        "documento", "Documento", "DocumentoController", "substituir", 2,
        ("documento", "substituicao"),
    ),
    # configuracao
    AcaoSpec(
        "alterar_configuracao_critica", "configuracao_sistema", "Alterar Configuração Crítica",
        "Alteração de configurações críticas do sistema",
        "configuracao", "Configuracao", "ConfiguracaoController", "alterarCritica", 5,
        ("configuracao", "sistema", "critica"),
    ),
)

CONFIGURACOES: dict[str, ConfiguracaoSpec] = {
    # High criticality
    "cancelar_beneficio": ConfiguracaoSpec(
        EstrategiaAprovacao.parse("unanime"), 2, 48, False, True, 24
    ),
    "excluir_cidadao": ConfiguracaoSpec(
        EstrategiaAprovacao.parse("unanime"), 2, 72, False, True, 48
    ),
    "alterar_configuracao_critica": ConfiguracaoSpec(
        EstrategiaAprovacao.parse("unanime"), 3, 24, False, True, 12
    ),
    # Normal criticality
    "suspender_beneficio": ConfiguracaoSpec(
        EstrategiaAprovacao.parse("maioria"), 2, 24, False, True, 48
    ),
    "bloquear_beneficio": ConfiguracaoSpec(
        EstrategiaAprovacao.parse("qualquer_um"),
        1,
        12,
        True,
        True,
        24,
        {"roles_permitidas": ["ADMIN", "GESTOR"], "valor_maximo": 5000},
    ),
    # Lower criticality
    "suspender_solicitacao": ConfiguracaoSpec(
        EstrategiaAprovacao.parse("qualquer_um"),
        1,
        24,
        True,
        False,
        48,
        {"roles_permitidas": ["ADMIN", "GESTOR", "TECNICO_SEMTAS"]},
    ),
}

CONFIGURACAO_PADRAO = ConfiguracaoSpec(EstrategiaAprovacao.simples)

APROVADORES_POR_PERFIL: tuple[AprovadorSpec, ...] = (
    AprovadorSpec("ADMIN", 1, None),
    AprovadorSpec("GESTOR", 2, Decimal("50000")),
    AprovadorSpec("COORDENADOR", 3, Decimal("10000")),
    AprovadorSpec("TECNICO_SEMTAS", 4, Decimal("5000")),
)


def configuracao_para(codigo: str) -> ConfiguracaoSpec:
    return CONFIGURACOES.get(codigo, CONFIGURACAO_PADRAO)
