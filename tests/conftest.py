"""
tests.conftest

Shared fixtures: an isolated SQLite database per test, seeded reference data and users.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pgben.auth.models import Principal
from pgben.db.init_db import init_db
from pgben.db.models import Usuario
from pgben.db.repositories.reference import UnidadeRepo
from pgben.db.repositories.roles import RoleRepo
from pgben.db.repositories.usuarios import UsuarioRepo
from pgben.db.session import create_engine, create_sessionmaker
from pgben.seeds.runner import SeedRunner
from pgben.settings import Settings

MakeUsuario = Callable[..., Awaitable[Usuario]]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'pgben.db'}",
        log_json=False,
        frontend_url="http://frontend.test",
        action_base_url="http://acoes.test",
    )


@pytest_asyncio.fixture
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(engine)


@pytest_asyncio.fixture
async def seeded(sessionmaker: async_sessionmaker[AsyncSession]) -> async_sessionmaker[AsyncSession]:
    await SeedRunner(sessionmaker).run()
    return sessionmaker


@pytest_asyncio.fixture
async def session(seeded: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with seeded() as s:
        yield s


@pytest.fixture
def make_usuario(session: AsyncSession) -> MakeUsuario:
    async def _make(nome: str, *, role: str | None = None, unidade: str | None = None) -> Usuario:
        role_id = None
        if role is not None:
            found = await RoleRepo(session).get_by_nome(role)
            assert found is not None, role
            role_id = found.id
        unidade_id = None
        if unidade is not None:
            u = await UnidadeRepo(session).get_by_sigla(unidade)
            assert u is not None, unidade
            unidade_id = u.id
        usuario = await UsuarioRepo(session).create(
            nome=nome,
            email=f"{nome.lower().replace(' ', '.')}.{uuid.uuid4().hex[:6]}@semtas.test",
            role_id=role_id,
            unidade_id=unidade_id,
        )
        await session.commit()
        return usuario

    return _make


def principal_for(usuario: Usuario, *roles: str) -> Principal:
    return Principal(
        subject=str(usuario.id),
        roles=frozenset(r.upper() for r in roles),
        unidade_id=usuario.unidade_id,
    )


@pytest.fixture
def as_principal() -> Callable[..., Principal]:
    return principal_for


# --- Module Notes -----------------------------------------------------------
# Every test gets its own database file under tmp_path; nothing is shared between tests.
