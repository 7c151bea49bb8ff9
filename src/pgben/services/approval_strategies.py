"""
pgben.services.approval_strategies

Pure status computation for approval requests.

Responsibilities:
- Translate a strategy + configuration into the number of approvals needed.
- Turn the individual approver decisions of one request into a request status.
"""

from __future__ import annotations

from collections.abc import Sequence

from pgben.db.models import EstrategiaAprovacao, SolicitacaoAprovador, StatusSolicitacao


def aprovacoes_necessarias(
    estrategia: EstrategiaAprovacao, min_aprovacoes: int, total_aprovadores: int
) -> int:
    if total_aprovadores <= 0:
        return 0
    if estrategia == EstrategiaAprovacao.qualquer_um:
        needed = 1
    elif estrategia == EstrategiaAprovacao.unanime:
        needed = total_aprovadores
    elif estrategia == EstrategiaAprovacao.maioria:
        needed = max(total_aprovadores // 2 + 1, min_aprovacoes)
    else:
        # SIMPLES, ESCALONAMENTO_SETOR, AUTOAPROVACAO_PERFIL
        needed = min_aprovacoes
    return max(1, min(needed, total_aprovadores))


def permite_autoaprovacao(estrategia: EstrategiaAprovacao, permite_auto_aprovacao: bool) -> bool:
    return permite_auto_aprovacao or estrategia == EstrategiaAprovacao.autoaprovacao_perfil


def calcular_status(
    estrategia: EstrategiaAprovacao,
    min_aprovacoes: int,
    aprovadores: Sequence[SolicitacaoAprovador],
) -> StatusSolicitacao:
    total = len(aprovadores)
    if total == 0:
        return StatusSolicitacao.pendente

    aprovados = sum(1 for a in aprovadores if a.decisao is True)
    rejeitados = sum(1 for a in aprovadores if a.decisao is False)
    pendentes = total - aprovados - rejeitados
    needed = aprovacoes_necessarias(estrategia, min_aprovacoes, total)

    obrigatorios = [a for a in aprovadores if a.obrigatorio]
    if any(a.decisao is False for a in obrigatorios):
        return StatusSolicitacao.rejeitada
    obrigatorios_ok = all(a.decisao is True for a in obrigatorios)

    if estrategia == EstrategiaAprovacao.maioria:
        if aprovados >= needed and obrigatorios_ok:
            return StatusSolicitacao.aprovada
        if aprovados + pendentes < needed:
            return StatusSolicitacao.rejeitada
        return StatusSolicitacao.pendente

    if rejeitados > 0:
        return StatusSolicitacao.rejeitada
    if aprovados >= needed and obrigatorios_ok:
        return StatusSolicitacao.aprovada
    return StatusSolicitacao.pendente


# --- Module Notes -----------------------------------------------------------
# A rejection by a mandatory approver rejects the request under every strategy.
