"""
pgben.seeds.catalog.permissions

Permission catalog: module roots plus the granular permissions of each module.

Responsibilities:
- List the composite roots (`*.*` and `module.*`) with their descriptions.
- Expose one `ModuleCatalog` per module in the order the seeds load them.
"""

from __future__ import annotations

from dataclasses import dataclass

from pgben.seeds.catalog import PermissionSpec
from pgben.seeds.catalog.permissions import (
    core,
    integrador,
    judicial,
    ocorrencia,
    pagamento,
    recurso,
    relatorios_unificado,
)

GLOBAL_ROOT = PermissionSpec("*.*", "Todas as permissões do sistema")

_ROOT_DESCRICOES: dict[str, str] = {
    "usuario": "Todas as permissões do módulo de usuários",
    "cidadao": "Todas as permissões do módulo de cidadãos",
    "beneficio": "Todas as permissões do módulo de benefícios",
    "solicitacao": "Todas as permissões do módulo de solicitações",
    "documento": "Todas as permissões do módulo de documentos",
    "auditoria": "Todas as permissões do módulo de auditoria",
    "unidade": "Todas as permissões do módulo de unidades",
    "relatorio": "Todas as permissões do módulo de relatórios",
    "configuracao": "Todas as permissões do módulo de configurações",
    "notificacao": "Todas as permissões do módulo de notificações",
    "metrica": "Todas as permissões do módulo de métricas",
    "integrador": "Todas as permissões do módulo de integrador",
    "judicial": "Todas as permissões do módulo judicial",
    "ocorrencia": "Todas as permissões do módulo de ocorrências",
    "pagamento": "Todas as permissões do módulo de pagamentos",
    "recurso": "Todas as permissões do módulo de recursos",
    "relatorios-unificado": "Todas as permissões do módulo de relatórios unificado",
}


@dataclass(frozen=True)
class ModuleCatalog:
    modulo: str
    permissoes: tuple[PermissionSpec, ...]

    @property
    def raiz(self) -> PermissionSpec:
        # Roots carry no scope row of their own.
        return PermissionSpec(f"{self.modulo}.*", _ROOT_DESCRICOES[self.modulo])


ROOT_PERMISSIONS: tuple[PermissionSpec, ...] = (GLOBAL_ROOT,) + tuple(
    PermissionSpec(f"{modulo}.*", descricao) for modulo, descricao in _ROOT_DESCRICOES.items()
)

MODULE_CATALOGS: tuple[ModuleCatalog, ...] = (
    ModuleCatalog("usuario", core.USUARIO),
    ModuleCatalog("cidadao", core.CIDADAO),
    ModuleCatalog("beneficio", core.BENEFICIO),
    ModuleCatalog("solicitacao", core.SOLICITACAO),
    ModuleCatalog("documento", core.DOCUMENTO),
    ModuleCatalog("auditoria", core.AUDITORIA),
    ModuleCatalog("unidade", core.UNIDADE),
    ModuleCatalog("relatorio", core.RELATORIO),
    ModuleCatalog("configuracao", core.CONFIGURACAO),
    ModuleCatalog("notificacao", core.NOTIFICACAO),
    ModuleCatalog("metrica", core.METRICA),
    ModuleCatalog(integrador.MODULO, integrador.PERMISSOES),
    ModuleCatalog(judicial.MODULO, judicial.PERMISSOES),
    ModuleCatalog(ocorrencia.MODULO, ocorrencia.PERMISSOES),
    ModuleCatalog(pagamento.MODULO, pagamento.PERMISSOES),
    ModuleCatalog(recurso.MODULO, recurso.PERMISSOES),
    ModuleCatalog(relatorios_unificado.MODULO, relatorios_unificado.PERMISSOES),
)


def catalog_for(modulo: str) -> ModuleCatalog:
    for catalog in MODULE_CATALOGS:
        if catalog.modulo == modulo:
            return catalog
    raise KeyError(modulo)


# --- Module Notes -----------------------------------------------------------
# Every granular name starts with its catalog's `modulo`; tests assert it.
