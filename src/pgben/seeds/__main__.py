"""
pgben.seeds.__main__

Command-line entrypoint for the seed runner (`pgben-seed` / `python -m pgben.seeds`).

Responsibilities:
- Parse CLI options with click.
- Create tables if needed, then run the selected seeds in order.
- Print one summary line per seed and exit non-zero on failure.
"""

from __future__ import annotations

import asyncio

import click

from pgben.db.init_db import drop_db, init_db
from pgben.db.session import create_engine, create_sessionmaker
from pgben.errors import SeedError
from pgben.observability.logging import configure_logging
from pgben.seeds.base import SeedReport
from pgben.seeds.runner import SeedRunner, default_seeds
from pgben.settings import Settings, get_settings


async def _run_seeds(
    settings: Settings,
    *,
    only: tuple[str, ...],
    update_existing: bool | None,
    continue_on_error: bool,
    reset: bool,
) -> list[SeedReport]:
    engine = create_engine(settings)
    try:
        if reset:
            await drop_db(engine)
        await init_db(engine)
        runner = SeedRunner(create_sessionmaker(engine))
        return await runner.run(
            only=only or None,
            update_existing=update_existing,
            continue_on_error=continue_on_error,
        )
    finally:
        await engine.dispose()


def _echo_report(report: SeedReport) -> None:
    status = "ok" if report.ok else "FALHOU"
    r = report.result
    line = (
        f"[{report.order:>3}] {report.name:<32} {status:<6} "
        f"criados={r.created} atualizados={r.updated} ignorados={r.skipped} "
        f"falhas={r.failed} ({report.duration_ms} ms)"
    )
    click.echo(line, err=not report.ok)
    if report.error:
        click.echo(f"       {report.error}", err=True)


@click.group()
def cli() -> None:
    """Seeds de dados de referência do PGBen."""


@cli.command("run")
@click.option("--only", "only", multiple=True, help="Executa apenas o seed informado (repetível).")
@click.option(
    "--update/--no-update",
    "update_existing",
    default=None,
    help="Força atualização (ou apenas inserção) ignorando o padrão de cada seed.",
)
@click.option("--continue-on-error", is_flag=True, help="Não interrompe no primeiro seed com erro.")
@click.option("--pretty", is_flag=True, help="Logs legíveis em vez de JSON.")
@click.option("--reset", is_flag=True, help="Apaga e recria as tabelas antes (fora de prod).")
@click.option("--database-url", default=None, help="Sobrescreve PGBEN_DATABASE_URL.")
def run_command(
    only: tuple[str, ...],
    update_existing: bool | None,
    continue_on_error: bool,
    pretty: bool,
    reset: bool,
    database_url: str | None,
) -> None:
    """Executa os seeds em ordem."""

    settings = get_settings()
    if database_url:
        settings = settings.model_copy(update={"database_url": database_url})
    if reset and settings.env == "prod":
        raise click.UsageError("--reset não é permitido com PGBEN_ENV=prod")

    configure_logging(
        service_name="pgben-seed",
        level=settings.log_level,
        json_logs=settings.log_json and not pretty,
    )

    try:
        reports = asyncio.run(
            _run_seeds(
                settings,
                only=only,
                update_existing=update_existing,
                continue_on_error=continue_on_error,
                reset=reset,
            )
        )
    except SeedError as exc:
        raise click.ClickException(str(exc)) from exc

    for report in reports:
        _echo_report(report)
    if not all(r.ok for r in reports):
        raise SystemExit(1)


@cli.command("list")
def list_command() -> None:
    """Lista os seeds registrados na ordem de execução."""

    for seed in sorted(default_seeds(), key=lambda s: s.order):
        mode = "upsert" if seed.update_existing else "insert"
        click.echo(f"[{seed.order:>3}] {seed.name:<32} {mode:<6} {seed.description}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# `list` never touches the database.
