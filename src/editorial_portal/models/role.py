"""Role vocabulary used by the policy layer."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Canonical role names as issued by the auth backend."""

    REPORTER = "Reportero"
    EDITOR = "Editor"
    LEGAL_REVIEWER = "Revisor Legal"
    CHIEF_EDITOR = "Jefe de Redacción"
    ADMINISTRATOR = "Administrador"


APPROVER_ROLES: frozenset[Role] = frozenset({Role.EDITOR, Role.LEGAL_REVIEWER, Role.CHIEF_EDITOR})


def is_approver_role(role_name: str | None) -> bool:
    return role_name in APPROVER_ROLES
