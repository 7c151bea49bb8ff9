"""
pgben.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

ADMIN_ROLES = frozenset({"ADMIN", "SUPER_ADMIN"})


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    `subject` is the user id for people; service tokens use a non-UUID subject.
    """

    subject: str
    roles: frozenset[str]
    unidade_id: uuid.UUID | None = None

    @property
    def usuario_id(self) -> uuid.UUID | None:
        try:
            return uuid.UUID(self.subject)
        except ValueError:
            return None

    @property
    def is_admin(self) -> bool:
        return not ADMIN_ROLES.isdisjoint(self.roles)


# --- Module Notes -----------------------------------------------------------
# Services receive a Principal to match approvers by user id or by profile (role name).
