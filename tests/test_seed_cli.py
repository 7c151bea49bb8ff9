from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from pgben.seeds.__main__ import cli
from pgben.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_list_prints_seeds_in_order() -> None:
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[0].startswith("[ 10] unidades")
    assert "aprovacao" in lines[-1]


def test_run_only_selected_seed(tmp_path: Path) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--only", "unidades", "--database-url", url, "--pretty"])
    assert result.exit_code == 0, result.output
    assert "unidades" in result.output
    assert "criados=4" in result.output

    result = runner.invoke(cli, ["run", "--only", "unidades", "--database-url", url, "--pretty"])
    assert result.exit_code == 0, result.output
    assert "criados=0" in result.output


def test_run_unknown_seed_fails(tmp_path: Path) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    result = CliRunner().invoke(cli, ["run", "--only", "nao_existe", "--database-url", url])
    assert result.exit_code == 1
    assert "Seed desconhecido" in result.output


def test_reset_is_refused_in_prod(tmp_path: Path) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    result = CliRunner().invoke(
        cli, ["run", "--reset", "--database-url", url], env={"PGBEN_ENV": "prod"}
    )
    assert result.exit_code == 2
    assert "--reset" in result.output
