"""
pgben.db.models

Persistence schema for reference data, permissions, notifications and approvals.

Responsibilities:
- Define ORM models for the seeded reference data:
  - Permissao / EscopoPermissao / Role / RolePermissao: permission catalog and grants
  - Unidade / TipoBeneficio: organizational units and benefit types
  - NotificationTemplate: parameterized notification content
  - AcaoAprovacao / ConfiguracaoAprovacao / Aprovador: approval configuration
- Define ORM models for runtime state:
  - Usuario / UsuarioPermissao: users and their direct grants
  - Notificacao: rendered notifications per recipient
  - SolicitacaoAprovacao / SolicitacaoAprovador / HistoricoAprovacao: approval requests
  - AuditEvent: append-only audit trail
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pgben.db.base import Base, TimestampMixin, utcnow


def _enum(cls: type[enum.Enum]) -> Enum:
    # Persist enum values (e.g. "UNIDADE"), not member names.
    return Enum(
        cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=32,
    )


class TipoEscopo(enum.StrEnum):
    # Scope a permission applies to; ordered by criticality (see `nivel_criticidade`).
    global_ = "GLOBAL"
    unidade = "UNIDADE"
    proprio = "PROPRIO"

    @classmethod
    def parse(cls, raw: str) -> TipoEscopo:
        value = raw.strip().upper()
        # Older catalogs call the self scope "USUARIO".
        if value == "USUARIO":
            return cls.proprio
        return cls(value)

    @property
    def descricao(self) -> str:
        return _ESCOPO_DESCRICAO[self]

    @property
    def nivel_criticidade(self) -> int:
        return _ESCOPO_CRITICIDADE[self]


_ESCOPO_DESCRICAO = {
    TipoEscopo.global_: "Acesso global ao sistema",
    TipoEscopo.unidade: "Acesso restrito à unidade do usuário",
    TipoEscopo.proprio: "Acesso apenas aos próprios dados",
}

_ESCOPO_CRITICIDADE = {
    TipoEscopo.proprio: 1,
    TipoEscopo.unidade: 2,
    TipoEscopo.global_: 3,
}


class TipoUnidade(enum.StrEnum):
    cras = "CRAS"
    creas = "CREAS"
    semtas = "SEMTAS"
    outro = "OUTRO"


class Periodicidade(enum.StrEnum):
    unico = "UNICO"
    mensal = "MENSAL"
    bimestral = "BIMESTRAL"
    trimestral = "TRIMESTRAL"
    semestral = "SEMESTRAL"
    anual = "ANUAL"


class StatusSolicitacao(enum.StrEnum):
    # Enum values are stored in DB and returned by the API; treat as stable contract.
    pendente = "PENDENTE"
    aprovada = "APROVADA"
    rejeitada = "REJEITADA"
    cancelada = "CANCELADA"
    executada = "EXECUTADA"
    erro_execucao = "ERRO_EXECUCAO"
    expirada = "EXPIRADA"


class EstrategiaAprovacao(enum.StrEnum):
    simples = "SIMPLES"
    maioria = "MAIORIA"
    unanime = "UNANIME"
    qualquer_um = "QUALQUER_UM"
    escalonamento_setor = "ESCALONAMENTO_SETOR"
    autoaprovacao_perfil = "AUTOAPROVACAO_PERFIL"

    @classmethod
    def parse(cls, raw: str) -> EstrategiaAprovacao:
        # Accepts the lower-case names used by older configuration payloads.
        return cls(raw.strip().upper())


class TipoAprovador(enum.StrEnum):
    perfil = "PERFIL"
    usuario = "USUARIO"


class AcaoHistorico(enum.StrEnum):
    criar = "CRIAR"
    aprovar = "APROVAR"
    rejeitar = "REJEITAR"
    cancelar = "CANCELAR"
    executar = "EXECUTAR"
    erro_execucao = "ERRO_EXECUCAO"
    escalar = "ESCALAR"
    expirar = "EXPIRAR"
    delegar = "DELEGAR"


def _uuid_pk() -> Mapped[uuid.UUID]:
    return mapped_column(SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


# --- Permission catalog ------------------------------------------------------


class Permissao(TimestampMixin, Base):
    __tablename__ = "permissao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    nome: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    descricao: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    modulo: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    acao: Mapped[str] = mapped_column(String(100), nullable=False)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    escopo: Mapped[EscopoPermissao | None] = relationship(
        back_populates="permissao", cascade="all, delete-orphan", uselist=False, lazy="selectin"
    )

    @property
    def composta(self) -> bool:
        return "*" in self.nome


class EscopoPermissao(TimestampMixin, Base):
    __tablename__ = "escopo_permissao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    permissao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("permissao.id"), nullable=False, unique=True
    )
    tipo_escopo_padrao: Mapped[TipoEscopo] = mapped_column(
        _enum(TipoEscopo), nullable=False, default=TipoEscopo.proprio
    )
    descricao: Mapped[str | None] = mapped_column(String(255), nullable=True)

    permissao: Mapped[Permissao] = relationship(back_populates="escopo")


class Role(TimestampMixin, Base):
    __tablename__ = "role"

    id: Mapped[uuid.UUID] = _uuid_pk()
    nome: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    descricao: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class RolePermissao(Base):
    __tablename__ = "role_permissao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    role_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("role.id"), nullable=False, index=True
    )
    permissao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("permissao.id"), nullable=False
    )
    criado_por: Mapped[str | None] = mapped_column(String(256), nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    permissao: Mapped[Permissao] = relationship(lazy="joined")

    __table_args__ = (UniqueConstraint("role_id", "permissao_id"),)


# --- Organization ------------------------------------------------------------


class Unidade(TimestampMixin, Base):
    __tablename__ = "unidade"

    id: Mapped[uuid.UUID] = _uuid_pk()
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    sigla: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    tipo: Mapped[TipoUnidade] = mapped_column(_enum(TipoUnidade), nullable=False)
    endereco: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    telefone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Usuario(TimestampMixin, Base):
    __tablename__ = "usuario"

    id: Mapped[uuid.UUID] = _uuid_pk()
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("role.id"), nullable=True, index=True
    )
    unidade_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("unidade.id"), nullable=True
    )
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    role: Mapped[Role | None] = relationship(lazy="joined")


class UsuarioPermissao(TimestampMixin, Base):
    __tablename__ = "usuario_permissao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    usuario_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("usuario.id"), nullable=False, index=True
    )
    permissao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("permissao.id"), nullable=False
    )
    tipo_escopo: Mapped[TipoEscopo] = mapped_column(
        _enum(TipoEscopo), nullable=False, default=TipoEscopo.global_
    )
    escopo_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)
    concedida: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    valida_ate: Mapped[datetime | None] = mapped_column(nullable=True)
    criado_por: Mapped[str | None] = mapped_column(String(256), nullable=True)
    atualizado_por: Mapped[str | None] = mapped_column(String(256), nullable=True)

    permissao: Mapped[Permissao] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("usuario_id", "permissao_id", "tipo_escopo", "escopo_id"),
    )


# --- Benefits ----------------------------------------------------------------


class TipoBeneficio(TimestampMixin, Base):
    __tablename__ = "tipo_beneficio"

    id: Mapped[uuid.UUID] = _uuid_pk()
    codigo: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    descricao: Mapped[str] = mapped_column(Text, nullable=False, default="")
    base_legal: Mapped[str | None] = mapped_column(String(255), nullable=True)
    periodicidade: Mapped[Periodicidade] = mapped_column(_enum(Periodicidade), nullable=False)
    periodo_maximo: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    permite_renovacao: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    permite_prorrogacao: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    valor: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    entidade_dados: Mapped[str | None] = mapped_column(String(64), nullable=True)
    schema_estrutura: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


# --- Notifications -----------------------------------------------------------


class NotificationTemplate(TimestampMixin, Base):
    __tablename__ = "notification_template"

    id: Mapped[uuid.UUID] = _uuid_pk()
    codigo: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    tipo: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    descricao: Mapped[str] = mapped_column(Text, nullable=False, default="")
    assunto: Mapped[str] = mapped_column(String(255), nullable=False)
    corpo: Mapped[str] = mapped_column(Text, nullable=False)
    corpo_html: Mapped[str | None] = mapped_column(Text, nullable=True)
    canais_disponiveis: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    variaveis_requeridas: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    categoria: Mapped[str] = mapped_column(String(32), nullable=False)
    prioridade: Mapped[str] = mapped_column(String(16), nullable=False, default="normal")
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Notificacao(Base):
    __tablename__ = "notificacao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    destinatario_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False)
    template_codigo: Mapped[str] = mapped_column(String(100), nullable=False)
    canal: Mapped[str] = mapped_column(String(16), nullable=False)
    assunto: Mapped[str] = mapped_column(String(255), nullable=False)
    corpo: Mapped[str] = mapped_column(Text, nullable=False)
    corpo_html: Mapped[str | None] = mapped_column(Text, nullable=True)
    dados: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    lida: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lida_em: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    __table_args__ = (Index("ix_notificacao_destinatario_created", "destinatario_id", "created_at"),)


# --- Approval configuration --------------------------------------------------


class AcaoAprovacao(TimestampMixin, Base):
    __tablename__ = "acao_aprovacao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    # `codigo` is the action type requests refer to (e.g. "cancelar_beneficio").
    codigo: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    tipo: Mapped[str] = mapped_column(String(100), nullable=False)
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    descricao: Mapped[str] = mapped_column(Text, nullable=False, default="")
    modulo: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    entidade_alvo: Mapped[str | None] = mapped_column(String(64), nullable=True)
    controlador: Mapped[str | None] = mapped_column(String(100), nullable=True)
    metodo: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nivel_criticidade: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    configuracao: Mapped[ConfiguracaoAprovacao | None] = relationship(
        back_populates="acao", cascade="all, delete-orphan", uselist=False, lazy="selectin"
    )
    aprovadores: Mapped[list[Aprovador]] = relationship(
        back_populates="acao",
        cascade="all, delete-orphan",
        order_by="Aprovador.ordem",
        lazy="selectin",
    )


class ConfiguracaoAprovacao(TimestampMixin, Base):
    __tablename__ = "configuracao_aprovacao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    acao_aprovacao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("acao_aprovacao.id"), nullable=False, unique=True
    )
    nome: Mapped[str] = mapped_column(String(200), nullable=False)
    estrategia: Mapped[EstrategiaAprovacao] = mapped_column(
        _enum(EstrategiaAprovacao), nullable=False, default=EstrategiaAprovacao.simples
    )
    min_aprovacoes: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    tempo_limite_horas: Mapped[int] = mapped_column(Integer, nullable=False, default=24)
    permite_auto_aprovacao: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    escalacao_ativa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    tempo_escalacao_horas: Mapped[int] = mapped_column(Integer, nullable=False, default=24)
    condicoes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    acao: Mapped[AcaoAprovacao] = relationship(back_populates="configuracao")


class Aprovador(TimestampMixin, Base):
    __tablename__ = "aprovador"

    id: Mapped[uuid.UUID] = _uuid_pk()
    acao_aprovacao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("acao_aprovacao.id"), nullable=False, index=True
    )
    tipo: Mapped[TipoAprovador] = mapped_column(_enum(TipoAprovador), nullable=False)
    perfil: Mapped[str | None] = mapped_column(String(64), nullable=True)
    usuario_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)
    ordem: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    limite_valor: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    obrigatorio: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pode_delegar: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    pode_escalar: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    acao: Mapped[AcaoAprovacao] = relationship(back_populates="aprovadores")

    __table_args__ = (UniqueConstraint("acao_aprovacao_id", "perfil", "usuario_id"),)


# --- Approval requests -------------------------------------------------------


class SolicitacaoAprovacao(TimestampMixin, Base):
    __tablename__ = "solicitacao_aprovacao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    codigo: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)
    acao_aprovacao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("acao_aprovacao.id"), nullable=False, index=True
    )
    solicitante_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), nullable=False, index=True
    )
    status: Mapped[StatusSolicitacao] = mapped_column(
        _enum(StatusSolicitacao), nullable=False, index=True
    )
    justificativa: Mapped[str] = mapped_column(Text, nullable=False)
    dados_acao: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    prazo: Mapped[datetime | None] = mapped_column(nullable=True)
    nivel_escalacao: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    escalado_em: Mapped[datetime | None] = mapped_column(nullable=True)
    alerta_prazo_enviado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    processado_em: Mapped[datetime | None] = mapped_column(nullable=True)
    executado_em: Mapped[datetime | None] = mapped_column(nullable=True)
    resultado_execucao: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    erro_execucao: Mapped[str | None] = mapped_column(Text, nullable=True)

    acao: Mapped[AcaoAprovacao] = relationship(lazy="joined")
    aprovadores: Mapped[list[SolicitacaoAprovador]] = relationship(
        back_populates="solicitacao",
        cascade="all, delete-orphan",
        order_by="SolicitacaoAprovador.ordem",
        lazy="selectin",
    )

    __table_args__ = (Index("ix_solicitacao_status_created", "status", "created_at"),)

    @property
    def aprovadores_vigentes(self) -> list[SolicitacaoAprovador]:
        # Rows handed over to a delegate no longer decide.
        return [a for a in self.aprovadores if a.delegado_para is None]


class SolicitacaoAprovador(Base):
    __tablename__ = "solicitacao_aprovador"

    id: Mapped[uuid.UUID] = _uuid_pk()
    solicitacao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("solicitacao_aprovacao.id"), nullable=False, index=True
    )
    aprovador_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("aprovador.id"), nullable=True
    )
    perfil: Mapped[str | None] = mapped_column(String(64), nullable=True)
    usuario_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)
    ordem: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    limite_valor: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    obrigatorio: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # None = not decided yet; True = approved; False = rejected.
    decisao: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    justificativa: Mapped[str | None] = mapped_column(Text, nullable=True)
    decidido_por: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)
    decidido_em: Mapped[datetime | None] = mapped_column(nullable=True)
    delegado_para: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)
    delegado_por: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)

    solicitacao: Mapped[SolicitacaoAprovacao] = relationship(back_populates="aprovadores")


class HistoricoAprovacao(Base):
    __tablename__ = "historico_aprovacao"

    id: Mapped[uuid.UUID] = _uuid_pk()
    solicitacao_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("solicitacao_aprovacao.id"), nullable=False
    )
    acao: Mapped[AcaoHistorico] = mapped_column(_enum(AcaoHistorico), nullable=False)
    usuario_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)
    justificativa: Mapped[str | None] = mapped_column(Text, nullable=True)
    dados: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    __table_args__ = (Index("ix_historico_solicitacao_created", "solicitacao_id", "created_at"),)


# --- Audit -------------------------------------------------------------------


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id: Mapped[uuid.UUID] = _uuid_pk()
    entity_type: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)

    actor: Mapped[str] = mapped_column(String(256), nullable=False)  # user id / seed / system
    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, index=True)

    __table_args__ = (Index("ix_audit_entity_created", "entity_type", "entity_id", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# Seeds only insert or update rows in the reference tables; they never delete.
# JSON columns (dados_acao, condicoes, schema_estrutura) keep payload variations flexible.
