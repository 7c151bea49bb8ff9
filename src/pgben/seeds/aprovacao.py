"""
pgben.seeds.aprovacao

Approval system seed.

Responsibilities:
- Insert the critical actions that require approval.
- Attach one configuration per action (explicit table or the SIMPLES default).
- Attach the profile-based approvers to every configured action.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import AcaoAprovacao, Aprovador, ConfiguracaoAprovacao, TipoAprovador
from pgben.db.repositories.approvals import AcaoAprovacaoRepo
from pgben.observability.logging import get_logger
from pgben.seeds.base import Seed, SeedResult
from pgben.seeds.catalog.aprovacao import (
    ACOES,
    APROVADORES_POR_PERFIL,
    AcaoSpec,
    ConfiguracaoSpec,
    configuracao_para,
)

log = get_logger(__name__)


def _acao_values(spec: AcaoSpec) -> dict[str, object]:
    return {
        "tipo": spec.tipo,
        "nome": spec.nome,
        "descricao": spec.descricao,
        "modulo": spec.modulo,
        "entidade_alvo": spec.entidade_alvo,
        "controlador": spec.controlador,
        "metodo": spec.metodo,
        "nivel_criticidade": spec.nivel_criticidade,
        "tags": list(spec.tags),
    }


def _config_values(acao_nome: str, spec: ConfiguracaoSpec) -> dict[str, object]:
    return {
        "nome": f"Configuração para {acao_nome}",
        "estrategia": spec.estrategia,
        "min_aprovacoes": spec.min_aprovacoes,
        "tempo_limite_horas": spec.tempo_limite_horas,
        "permite_auto_aprovacao": spec.permite_auto_aprovacao,
        "escalacao_ativa": spec.escalacao_ativa,
        "tempo_escalacao_horas": spec.tempo_escalacao_horas,
        "condicoes": dict(spec.condicoes or {}),
    }


class SistemaAprovacaoSeed(Seed):
    name = "aprovacao"
    order = 70
    description = "Ações críticas, configurações e aprovadores"

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        repo = AcaoAprovacaoRepo(session)
        result = SeedResult()

        for spec in ACOES:
            acao = await repo.get_by_codigo(spec.codigo)
            if acao is None:
                # Empty collections up front: no lazy load is needed when appending below.
                acao = AcaoAprovacao(
                    codigo=spec.codigo,
                    ativo=True,
                    configuracao=None,
                    aprovadores=[],
                    **_acao_values(spec),
                )
                await repo.add(acao)
                result.created += 1
                log.info("approval_action_created", acao=spec.codigo)
            elif update_existing:
                for key, value in _acao_values(spec).items():
                    setattr(acao, key, value)
                result.updated += 1
            else:
                result.skipped += 1

            config_spec = configuracao_para(spec.codigo)
            if acao.configuracao is None:
                acao.configuracao = ConfiguracaoAprovacao(
                    ativo=True, **_config_values(spec.nome, config_spec)
                )
                result.created += 1
            elif update_existing:
                for key, value in _config_values(spec.nome, config_spec).items():
                    setattr(acao.configuracao, key, value)
                result.updated += 1
            else:
                result.skipped += 1

            perfis = {a.perfil for a in acao.aprovadores if a.tipo == TipoAprovador.perfil}
            for aprovador in APROVADORES_POR_PERFIL:
                if aprovador.perfil in perfis:
                    result.skipped += 1
                    continue
                acao.aprovadores.append(
                    Aprovador(
                        tipo=TipoAprovador.perfil,
                        perfil=aprovador.perfil,
                        ordem=aprovador.ordem,
                        limite_valor=aprovador.limite_valor,
                        ativo=True,
                        obrigatorio=False,
                        pode_delegar=True,
                        pode_escalar=True,
                    )
                )
                result.created += 1

            await session.flush()
        return result
