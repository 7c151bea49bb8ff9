"""
pgben.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API, seeds and services.
- Hide secrets from repr/logging (e.g., JWT secret, Redis URL).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    One settings object shared by the API process and the seed CLI.
    Every field can be overridden with a `PGBEN_`-prefixed environment variable.
    """

    model_config = SettingsConfigDict(env_prefix="PGBEN_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "pgben-api"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "pgben"
    jwt_audience: str = "pgben-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./pgben.db"
    seed_on_startup: bool = False

    # Permission check cache (disabled when no Redis URL is configured)
    redis_url: str | None = Field(default=None, repr=False)
    permission_cache_ttl_seconds: int = 300

    # Replay of approved actions
    action_base_url: str = "http://localhost:8080"
    action_timeout_seconds: float = 30.0

    # Approval deadlines and escalation
    escalacao_nivel_maximo: int = 3
    prazo_alerta_horas: int = 6

    # Values injected into notification templates
    email_suporte: str = "suporte@semtas.natal.rn.gov.br"
    frontend_url: str = "http://localhost:3000"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests build `Settings(env="test", database_url=...)` directly instead of patching env vars.
