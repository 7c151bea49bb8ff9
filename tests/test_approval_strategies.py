from __future__ import annotations

import pytest

from pgben.db.models import EstrategiaAprovacao, SolicitacaoAprovador, StatusSolicitacao
from pgben.services.approval_strategies import (
    aprovacoes_necessarias,
    calcular_status,
    permite_autoaprovacao,
)

E = EstrategiaAprovacao
S = StatusSolicitacao


def _linhas(*decisoes: bool | None, obrigatorio: int | None = None) -> list[SolicitacaoAprovador]:
    return [
        SolicitacaoAprovador(perfil=f"P{i}", ordem=i, decisao=d, obrigatorio=(i == obrigatorio))
        for i, d in enumerate(decisoes)
    ]


@pytest.mark.parametrize(
    ("estrategia", "minimo", "total", "expected"),
    [
        (E.qualquer_um, 3, 4, 1),
        (E.unanime, 1, 4, 4),
        (E.maioria, 1, 4, 3),
        (E.maioria, 4, 5, 4),
        (E.simples, 2, 4, 2),
        (E.simples, 9, 3, 3),
        (E.escalonamento_setor, 0, 3, 1),
        (E.unanime, 1, 0, 0),
    ],
)
def test_aprovacoes_necessarias(
    estrategia: EstrategiaAprovacao, minimo: int, total: int, expected: int
) -> None:
    assert aprovacoes_necessarias(estrategia, minimo, total) == expected


def test_autoaprovacao() -> None:
    assert permite_autoaprovacao(E.simples, True)
    assert permite_autoaprovacao(E.autoaprovacao_perfil, False)
    assert not permite_autoaprovacao(E.unanime, False)


def test_no_approvers_stays_pending() -> None:
    assert calcular_status(E.simples, 1, []) == S.pendente


def test_simples_first_approval_wins() -> None:
    assert calcular_status(E.simples, 1, _linhas(True, None, None)) == S.aprovada
    assert calcular_status(E.simples, 2, _linhas(True, None, None)) == S.pendente


def test_any_rejection_rejects_outside_majority() -> None:
    assert calcular_status(E.simples, 2, _linhas(True, False, None)) == S.rejeitada
    assert calcular_status(E.unanime, 1, _linhas(True, True, False)) == S.rejeitada


def test_unanime_needs_everyone() -> None:
    assert calcular_status(E.unanime, 1, _linhas(True, True, None)) == S.pendente
    assert calcular_status(E.unanime, 1, _linhas(True, True, True)) == S.aprovada


def test_maioria() -> None:
    # 4 approvers: 3 approvals needed.
    assert calcular_status(E.maioria, 1, _linhas(True, False, None, None)) == S.pendente
    assert calcular_status(E.maioria, 1, _linhas(True, True, False, True)) == S.aprovada
    assert calcular_status(E.maioria, 1, _linhas(True, False, False, None)) == S.rejeitada


def test_mandatory_approver() -> None:
    # The mandatory approver must approve even when the count is reached.
    assert calcular_status(E.qualquer_um, 1, _linhas(True, None, obrigatorio=1)) == S.pendente
    assert calcular_status(E.qualquer_um, 1, _linhas(True, True, obrigatorio=1)) == S.aprovada
    assert calcular_status(E.maioria, 1, _linhas(True, True, False, obrigatorio=2)) == S.rejeitada
