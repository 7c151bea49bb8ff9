"""
pgben.seeds.catalog

Static reference data loaded by the seeds.

Responsibilities:
- Define the record shapes shared by the catalog modules.
- Keep data separate from the seed logic that persists it.
"""

from __future__ import annotations

from typing import NamedTuple

from pgben.db.models import TipoEscopo


class PermissionSpec(NamedTuple):
    nome: str
    descricao: str
    escopo: str = "PROPRIO"

    @property
    def tipo_escopo(self) -> TipoEscopo:
        return TipoEscopo.parse(self.escopo)

    @property
    def modulo(self) -> str:
        return self.nome.partition(".")[0]


# --- Module Notes -----------------------------------------------------------
# `escopo` stays a raw string so catalogs can use the legacy "USUARIO" spelling.
