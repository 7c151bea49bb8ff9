"""
pgben.seeds.reference

Reference data seeds: organizational units, roles with grants, benefit types.

Responsibilities:
- Insert units keyed by `sigla`.
- Insert roles and their permission grants (grants are insert-if-absent).
- Upsert benefit types keyed by `codigo`, including their field schema.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from pgben.db.models import TipoBeneficio, Unidade
from pgben.db.repositories.permissions import PermissaoRepo
from pgben.db.repositories.reference import TipoBeneficioRepo, UnidadeRepo
from pgben.db.repositories.roles import RoleRepo
from pgben.observability.logging import get_logger
from pgben.seeds.base import Seed, SeedResult
from pgben.seeds.catalog.referencia import ROLES, TIPOS_BENEFICIO, UNIDADES

log = get_logger(__name__)

SEED_ACTOR = "seed"


class UnidadesSeed(Seed):
    name = "unidades"
    order = 10
    description = "Unidades CRAS/CREAS/SEMTAS"

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        repo = UnidadeRepo(session)
        result = SeedResult()
        for spec in UNIDADES:
            unidade = await repo.get_by_sigla(spec.sigla)
            if unidade is None:
                await repo.add(
                    Unidade(
                        nome=spec.nome,
                        sigla=spec.sigla,
                        tipo=spec.tipo,
                        endereco=dict(spec.endereco),
                        telefone=spec.telefone,
                        ativo=True,
                    )
                )
                result.created += 1
            elif update_existing:
                unidade.nome = spec.nome
                unidade.tipo = spec.tipo
                unidade.endereco = dict(spec.endereco)
                unidade.telefone = spec.telefone
                result.updated += 1
            else:
                result.skipped += 1
        await session.flush()
        return result


class RolesSeed(Seed):
    name = "roles"
    order = 40
    description = "Perfis de acesso e suas permissões"

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        roles = RoleRepo(session)
        perms = PermissaoRepo(session)
        result = SeedResult()

        for spec in ROLES:
            role = await roles.get_by_nome(spec.nome)
            if role is None:
                role = await roles.create(nome=spec.nome, descricao=spec.descricao)
                result.created += 1
            elif update_existing and role.descricao != spec.descricao:
                role.descricao = spec.descricao
                result.updated += 1
            else:
                result.skipped += 1

            found = await perms.get_many_by_nomes(spec.permissoes)
            missing = [nome for nome in spec.permissoes if nome not in found]
            if missing:
                # Catalog seeds were skipped or filtered out with --only.
                result.failed += len(missing)
                log.warning("role_permissions_missing", role=spec.nome, permissoes=missing)

            granted = 0
            for nome in spec.permissoes:
                perm = found.get(nome)
                if perm is None:
                    continue
                if await roles.has_grant(role_id=role.id, permissao_id=perm.id):
                    continue
                await roles.grant(role_id=role.id, permissao_id=perm.id, criado_por=SEED_ACTOR)
                granted += 1
            result.created += granted
            log.info("role_seeded", role=spec.nome, grants_created=granted)

        await session.flush()
        return result


class TiposBeneficioSeed(Seed):
    name = "tipos_beneficio"
    order = 50
    description = "Tipos de benefício e estrutura de dados"
    update_existing = True

    async def run(self, session: AsyncSession, *, update_existing: bool) -> SeedResult:
        repo = TipoBeneficioRepo(session)
        result = SeedResult()
        for spec in TIPOS_BENEFICIO:
            values = {
                "nome": spec.nome,
                "descricao": spec.descricao,
                "base_legal": spec.base_legal,
                "periodicidade": spec.periodicidade,
                "periodo_maximo": spec.periodo_maximo,
                "permite_renovacao": spec.permite_renovacao,
                "permite_prorrogacao": spec.permite_prorrogacao,
                "valor": spec.valor,
                "entidade_dados": spec.entidade_dados,
                "schema_estrutura": spec.schema_estrutura,
            }
            tipo = await repo.get_by_codigo(spec.codigo)
            if tipo is None:
                await repo.add(TipoBeneficio(codigo=spec.codigo, ativo=True, **values))
                result.created += 1
            elif update_existing:
                for key, value in values.items():
                    setattr(tipo, key, value)
                result.updated += 1
            else:
                result.skipped += 1
        await session.flush()
        return result


# --- Module Notes -----------------------------------------------------------
# Role grant counts are folded into `created`; missing permission names into `failed`.
