"""
pgben.errors

Domain exceptions shared by seeds, services and the API layer.

Responsibilities:
- Give each failure class a stable HTTP status for the API exception handler.
- Carry structured details that are safe to return to clients and to log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)


@dataclass(eq=False)
class PgbenError(Exception):
    """
    Base class for expected failures.
    The API layer renders `message` as `detail` and merges `details` into the body.
    """

    status_code: ClassVar[int] = HTTP_500_INTERNAL_SERVER_ERROR

    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class NotFoundError(PgbenError):
    status_code = HTTP_404_NOT_FOUND


class BadRequestError(PgbenError):
    status_code = HTTP_400_BAD_REQUEST


class ForbiddenError(PgbenError):
    status_code = HTTP_403_FORBIDDEN


class ConflictError(PgbenError):
    status_code = HTTP_409_CONFLICT


class ActionExecutionError(PgbenError):
    # The approved action was attempted and failed downstream.
    status_code = HTTP_502_BAD_GATEWAY


class SeedError(PgbenError):
    pass


# --- Module Notes -----------------------------------------------------------
# Not frozen: contextlib assigns `__traceback__` on exceptions unwinding through
# generator-based dependencies. eq=False keeps instances hashable.
