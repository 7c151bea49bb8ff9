"""
pgben.api.__main__

Entrypoint for running the FastAPI application via `python -m pgben.api` / `pgben-api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from pgben.api.app import create_app
from pgben.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Production runs `alembic upgrade head` and `pgben-seed run` before starting the API.
