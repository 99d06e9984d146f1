"""Dashboard personalization for the primary role."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from editorial_portal.models.role import APPROVER_ROLES, Role

if TYPE_CHECKING:
    from editorial_portal.auth.session import SessionManager

DEFAULT_DESCRIPTION = "Usuario del sistema"

ROLE_DESCRIPTIONS: dict[str, str] = {
    Role.REPORTER: "Puede crear y enviar artículos para revisión",
    Role.EDITOR: "Puede revisar y aprobar artículos desde perspectiva editorial",
    Role.LEGAL_REVIEWER: "Puede revisar y aprobar artículos desde perspectiva legal",
    Role.CHIEF_EDITOR: "Puede dar la aprobación final a los artículos",
    Role.ADMINISTRATOR: "Puede gestionar usuarios y configuración del sistema",
}

_APPROVER_PERMISSIONS = [
    "Ver artículos pendientes de aprobación",
    "Aprobar o rechazar artículos",
    "Ver historial de aprobaciones",
    "Agregar comentarios a artículos",
]

ROLE_PERMISSIONS: dict[str, list[str]] = {
    Role.REPORTER: [
        "Crear nuevos artículos",
        "Editar artículos propios",
        "Enviar artículos a revisión",
        "Ver estado de sus artículos",
    ],
    Role.EDITOR: _APPROVER_PERMISSIONS,
    Role.LEGAL_REVIEWER: _APPROVER_PERMISSIONS,
    Role.CHIEF_EDITOR: _APPROVER_PERMISSIONS,
    Role.ADMINISTRATOR: [
        "Gestionar usuarios del sistema",
        "Crear nuevos usuarios",
        "Activar/desactivar usuarios",
        "Configurar roles y permisos",
        "Ver todos los artículos del sistema",
    ],
}


class DashboardView(BaseModel):
    username: str | None
    user_id: int | None
    role: str | None
    description: str
    permissions: list[str]
    can_write_articles: bool
    can_review: bool
    can_administer: bool


def build_dashboard(session: SessionManager) -> DashboardView:
    identity = session.current_identity()
    role = session.primary_role()
    return DashboardView(
        username=identity.subject if identity else None,
        user_id=identity.user_id if identity else None,
        role=role,
        description=ROLE_DESCRIPTIONS.get(role or "", DEFAULT_DESCRIPTION),
        permissions=list(ROLE_PERMISSIONS.get(role or "", [])),
        can_write_articles=session.has_role(Role.REPORTER),
        can_review=session.has_any_role(APPROVER_ROLES),
        can_administer=session.has_role(Role.ADMINISTRATOR),
    )
