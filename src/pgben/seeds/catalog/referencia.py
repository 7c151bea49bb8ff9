"""
pgben.seeds.catalog.referencia

Organizational units, roles with their grants, and benefit types.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, NamedTuple

from pgben.db.models import Periodicidade, TipoUnidade


class UnidadeSpec(NamedTuple):
    nome: str
    sigla: str
    tipo: TipoUnidade
    endereco: dict[str, str]
    telefone: str


class RoleSpec(NamedTuple):
    nome: str
    descricao: str
    permissoes: tuple[str, ...]


class TipoBeneficioSpec(NamedTuple):
    codigo: str
    nome: str
    descricao: str
    base_legal: str
    periodicidade: Periodicidade
    periodo_maximo: int
    permite_renovacao: bool
    permite_prorrogacao: bool
    valor: Decimal | None
    entidade_dados: str
    campos: tuple[dict[str, Any], ...]

    @property
    def schema_estrutura(self) -> dict[str, Any]:
        return {
            "campos": list(self.campos),
            "metadados": {
                "versao": "1.0.0",
                "descricao": f"Schema para {self.nome}",
                "categoria": "beneficio_eventual",
                "tags": [self.codigo],
            },
        }


def _endereco(logradouro: str, numero: str, bairro: str) -> dict[str, str]:
    return {
        "logradouro": logradouro,
        "numero": numero,
        "bairro": bairro,
        "cidade": "Natal",
        "uf": "RN",
        "cep": "59000-000",
    }


UNIDADES: tuple[UnidadeSpec, ...] = (
    UnidadeSpec(
        "CRAS Guarapes", "CRAS-GUA", TipoUnidade.cras,
        _endereco("Rua Principal", "123", "Guarapes"), "84999999999",
    ),
    UnidadeSpec(
        "CRAS Ponta Negra", "CRAS-PN", TipoUnidade.cras,
        _endereco("Rua da Praia", "456", "Ponta Negra"), "84999999998",
    ),
    UnidadeSpec(
        "CREAS Oeste", "CREAS-O", TipoUnidade.creas,
        _endereco("Avenida Central", "789", "Centro"), "84999999997",
    ),
    UnidadeSpec(
        "SEMTAS Sede", "SEMTAS", TipoUnidade.semtas,
        _endereco("Avenida Principal", "1000", "Centro"), "84999999996",
    ),
)

_GESTOR_MODULOS = (
    "cidadao", "beneficio", "solicitacao", "documento", "auditoria", "unidade",
    "relatorio", "notificacao", "metrica", "integrador", "judicial", "ocorrencia",
    "pagamento", "recurso", "relatorios-unificado",
)

ROLES: tuple[RoleSpec, ...] = (
    RoleSpec("SUPER_ADMIN", "Super administrador do sistema", ("*.*",)),
    RoleSpec("ADMIN", "Administrador do sistema", ("*.*",)),
    RoleSpec(
        "GESTOR",
        "Gestor da SEMTAS",
        tuple(f"{modulo}.*" for modulo in _GESTOR_MODULOS),
    ),
    RoleSpec(
        "COORDENADOR",
        "Coordenador de unidade",
        ("solicitacao.*", "beneficio.*", "cidadao.*", "documento.*", "relatorio.*"),
    ),
    RoleSpec(
        "TECNICO_SEMTAS",
        "Técnico da SEMTAS",
        (
            "cidadao.listar", "cidadao.visualizar", "cidadao.criar", "cidadao.editar",
            "cidadao.buscar_cpf", "cidadao.buscar_nis",
            "beneficio.listar", "beneficio.visualizar", "beneficio.conceder",
            "beneficio.suspender", "beneficio.reativar", "beneficio.renovar",
            "solicitacao.listar", "solicitacao.visualizar", "solicitacao.criar",
            "solicitacao.editar", "solicitacao.status.visualizar",
            "solicitacao.status.atualizar", "solicitacao.observacao.adicionar",
            "solicitacao.aprovacao.criar", "solicitacao.aprovacao.processar",
            "solicitacao.aprovacao.listar",
            "documento.listar", "documento.visualizar", "documento.upload",
            "documento.download", "documento.verificar",
            "pagamento.listar", "pagamento.visualizar",
            "relatorio.listar", "relatorio.gerar",
            "notificacao.listar",
        ),
    ),
    RoleSpec(
        "TECNICO_UNIDADE",
        "Técnico de unidade (CRAS/CREAS)",
        (
            "cidadao.listar", "cidadao.visualizar", "cidadao.criar", "cidadao.editar",
            "cidadao.buscar_cpf", "cidadao.buscar_nis",
            "beneficio.listar", "beneficio.visualizar",
            "solicitacao.listar", "solicitacao.visualizar", "solicitacao.criar",
            "solicitacao.editar", "solicitacao.status.visualizar",
            "solicitacao.observacao.adicionar", "solicitacao.aprovacao.criar",
            "documento.listar", "documento.visualizar", "documento.upload",
            "documento.download",
            "notificacao.listar",
        ),
    ),
    RoleSpec(
        "AUDITOR",
        "Auditor com acesso de leitura",
        (
            "auditoria.listar", "auditoria.visualizar", "auditoria.exportar",
            "cidadao.listar", "cidadao.visualizar",
            "beneficio.listar", "beneficio.visualizar",
            "solicitacao.listar", "solicitacao.visualizar", "solicitacao.status.visualizar",
            "pagamento.listar", "pagamento.visualizar",
            "relatorio.listar", "relatorio.gerar", "relatorio.exportar",
            "notificacao.listar",
        ),
    ),
)


def _campo(
    nome: str,
    tipo: str,
    label: str,
    *,
    obrigatorio: bool = False,
    opcoes: tuple[str, ...] | None = None,
) -> dict[str, Any]:
    campo: dict[str, Any] = {"nome": nome, "tipo": tipo, "obrigatorio": obrigatorio, "label": label}
    if opcoes is not None:
        campo["opcoes"] = list(opcoes)
    return campo


TIPOS_BENEFICIO: tuple[TipoBeneficioSpec, ...] = (
    TipoBeneficioSpec(
        codigo="BENEFICIO_NATALIDADE",
        nome="Auxílio Natalidade",
        descricao="Kit enxoval para recém-nascidos",
        base_legal="Arts. 9º-16 da Lei Municipal 7.205/2021",
        periodicidade=Periodicidade.unico,
        periodo_maximo=1,
        permite_renovacao=False,
        permite_prorrogacao=False,
        valor=None,
        entidade_dados="DadosNatalidade",
        campos=(
            _campo("realiza_pre_natal", "boolean", "Realiza pré-natal"),
            _campo("atendida_psf_ubs", "boolean", "Atendida pelo PSF/UBS"),
            _campo("gravidez_risco", "boolean", "Gravidez de risco"),
            _campo("data_provavel_parto", "date", "Data provável do parto"),
            _campo("gemeos_trigemeos", "boolean", "Gêmeos/Trigêmeos"),
            _campo("ja_tem_filhos", "boolean", "Já tem filhos"),
            _campo("quantidade_filhos", "number", "Quantidade de filhos"),
            _campo("telefone_cadastrado_cpf", "string", "Telefone cadastrado no CPF"),
            _campo("chave_pix", "string", "Chave PIX"),
        ),
    ),
    TipoBeneficioSpec(
        codigo="ALUGUEL_SOCIAL",
        nome="Aluguel Social",
        descricao="Auxílio para pagamento de aluguel por período temporário",
        base_legal="Arts. 32-34 da Lei Municipal 7.205/2021",
        periodicidade=Periodicidade.mensal,
        periodo_maximo=6,
        permite_renovacao=True,
        permite_prorrogacao=True,
        valor=Decimal("1000.00"),
        entidade_dados="DadosAluguelSocial",
        campos=(
            _campo(
                "publico_prioritario", "enum", "Público prioritário",
                obrigatorio=True,
                opcoes=(
                    "MULHERES_VITIMAS_VIOLENCIA", "ATINGIDOS_CALAMIDADE", "SITUACAO_RISCO",
                    "CRIANCAS_ADOLESCENTES", "GESTANTES_NUTRIZES", "IDOSOS", "PCD",
                ),
            ),
            _campo(
                "especificacoes", "array", "Especificações",
                opcoes=("EXPLORACAO_SEXUAL", "VITIMA_VIOLENCIA", "SITUACAO_RUA", "DROGADICAO"),
            ),
            _campo("situacao_moradia_atual", "string", "Situação da moradia atual", obrigatorio=True),
            _campo("possui_imovel_interditado", "boolean", "Possui imóvel interditado"),
            _campo(
                "caso_judicializado_maria_penha", "boolean", "Caso judicializado Lei Maria da Penha"
            ),
            _campo("observacoes_adicionais", "string", "Observações adicionais"),
        ),
    ),
    TipoBeneficioSpec(
        codigo="CESTA_BASICA",
        nome="Cesta Básica",
        descricao="Concessão de cestas básicas para famílias em vulnerabilidade",
        base_legal="Lei Municipal 7.205/2021",
        periodicidade=Periodicidade.mensal,
        periodo_maximo=6,
        permite_renovacao=True,
        permite_prorrogacao=False,
        valor=None,
        entidade_dados="DadosCestaBasica",
        campos=(
            _campo(
                "quantidade_cestas_solicitadas", "number", "Quantidade de cestas solicitadas",
                obrigatorio=True,
            ),
            _campo(
                "periodo_concessao", "enum", "Período de concessão",
                obrigatorio=True,
                opcoes=("UNICO", "MENSAL", "BIMESTRAL", "TRIMESTRAL", "SEMESTRAL"),
            ),
            _campo(
                "origem_atendimento", "enum", "Origem do atendimento",
                obrigatorio=True,
                opcoes=(
                    "CRAS", "CREAS", "BUSCA_ATIVA", "ENCAMINHAMENTO_EXTERNO",
                    "UNIDADE_BASICA", "DEMANDA_ESPONTANEA",
                ),
            ),
            _campo("numero_pessoas_familia", "number", "Número de pessoas na família"),
            _campo("justificativa_quantidade", "string", "Justificativa da quantidade"),
            _campo("observacoes_especiais", "string", "Observações especiais"),
            _campo("tecnico_responsavel", "string", "Técnico responsável"),
            _campo("unidade_solicitante", "string", "Unidade solicitante"),
        ),
    ),
    TipoBeneficioSpec(
        codigo="BENEFICIO_FUNERAL",
        nome="Benefício Funeral",
        descricao="Auxílio para despesas funerárias de famílias em vulnerabilidade",
        base_legal="Lei Municipal 7.205/2021",
        periodicidade=Periodicidade.unico,
        periodo_maximo=1,
        permite_renovacao=False,
        permite_prorrogacao=False,
        valor=None,
        entidade_dados="DadosFuneral",
        campos=(
            _campo("nome_completo_falecido", "string", "Nome completo do falecido", obrigatorio=True),
            _campo("data_obito", "date", "Data do óbito", obrigatorio=True),
            _campo("local_obito", "string", "Local do óbito", obrigatorio=True),
            _campo("data_autorizacao", "date", "Data da autorização"),
            _campo(
                "grau_parentesco_requerente", "enum", "Grau de parentesco do requerente",
                obrigatorio=True,
                opcoes=("CONJUGE", "FILHO", "PAI", "MAE", "IRMAO", "AVO", "NETO", "OUTRO"),
            ),
            _campo(
                "tipo_urna_necessaria", "enum", "Tipo de urna necessária",
                obrigatorio=True,
                opcoes=("PADRAO", "INFANTIL", "ESPECIAL", "OBESO"),
            ),
            _campo("observacoes_especiais", "string", "Observações especiais"),
            _campo("numero_certidao_obito", "string", "Número da certidão de óbito"),
            _campo("cartorio_emissor", "string", "Cartório emissor"),
        ),
    ),
)


# --- Module Notes -----------------------------------------------------------
# Role grants reference permission names; the role seed runs after every catalog seed.
