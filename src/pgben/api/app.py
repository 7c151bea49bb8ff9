"""
pgben.api.app

FastAPI app factory for the PGBen backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory, Redis, httpx).
- Map domain exceptions to JSON responses in one place.
- Optionally run the reference-data seeds on startup.
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pgben.api.routers.aprovacao import router as aprovacao_router
from pgben.api.routers.dev_auth import router as dev_auth_router
from pgben.api.routers.health import router as health_router
from pgben.api.routers.notificacoes import router as notificacoes_router
from pgben.api.routers.permissoes import router as permissoes_router
from pgben.db.init_db import init_db
from pgben.db.session import create_engine, create_sessionmaker
from pgben.errors import PgbenError
from pgben.observability.logging import configure_logging, get_logger
from pgben.observability.middleware import RequestContextMiddleware
from pgben.seeds.runner import SeedRunner
from pgben.services.action_executor import ActionExecutor
from pgben.services.permission_cache import PermissionCache
from pgben.settings import Settings

log = get_logger(__name__)


async def _pgben_error_handler(request: Request, exc: PgbenError) -> JSONResponse:
    log.info(
        "domain_error",
        error_type=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.details, "detail": exc.message},
    )


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, json_logs=settings.log_json
    )

    app = FastAPI(
        title="PGBen - Gestão de Benefícios Eventuais",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(PgbenError, _pgben_error_handler)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(aprovacao_router)
    app.include_router(permissoes_router)
    app.include_router(notificacoes_router)

    @app.on_event("startup")
    async def _startup() -> None:
        log.info("startup", env=settings.env)
        # Routers obtain sessions and shared clients via dependencies (see `pgben.api.deps`).
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.permission_cache = PermissionCache.from_settings(settings)
        app.state.http = httpx.AsyncClient(
            base_url=settings.action_base_url, timeout=settings.action_timeout_seconds
        )
        app.state.action_executor = ActionExecutor(settings=settings, http=app.state.http)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        if settings.seed_on_startup:
            reports = await SeedRunner(app.state.sessionmaker).run()
            log.info("startup_seeds_finished", seeds=len(reports))

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        http = getattr(app.state, "http", None)
        if http is not None:
            await http.aclose()
        cache = getattr(app.state, "permission_cache", None)
        if cache is not None:
            await cache.close()
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()
        log.info("shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# In-process action handlers are registered on `app.state.action_executor`.
