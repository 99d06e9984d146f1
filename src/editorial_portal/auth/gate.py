"""Authorization gate for protected portal views."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from editorial_portal.auth.session import SessionManager
from editorial_portal.models.role import APPROVER_ROLES

if TYPE_CHECKING:
    from collections.abc import Collection

LOGIN_PATH = "/login"
ACCESS_DENIED_TITLE = "Acceso Denegado"
ACCESS_DENIED_DETAIL = "No tiene permisos para acceder a esta página."


class AuthDecision(StrEnum):
    PENDING = "pending"
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    DENY = "deny"


def authorize(session: SessionManager, required_roles: Collection[str] | None = None) -> AuthDecision:
    """Decide how a protected view should respond for the current session.

    ``None`` and an empty collection both mean "any authenticated identity".
    """
    if isinstance(required_roles, str):
        required_roles = {required_roles}
    if not session.initialized:
        return AuthDecision.PENDING
    if not session.is_authenticated():
        return AuthDecision.REDIRECT_TO_LOGIN
    if required_roles and not session.has_any_role(required_roles):
        return AuthDecision.DENY
    return AuthDecision.ALLOW


# Required roles per protected view; None means any authenticated user.
PROTECTED_VIEWS: dict[str, frozenset[str] | None] = {
    "dashboard": None,
    "articles": None,
    "approvals": frozenset(APPROVER_ROLES),
}


def access_denied_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "title": ACCESS_DENIED_TITLE,
            "detail": ACCESS_DENIED_DETAIL,
            "actions": ["back"],
        },
    )


class LoginRequired(Exception):  # noqa: N818
    """Raised by a route guard when the session is not authenticated."""


class AccessDenied(Exception):  # noqa: N818
    """Raised by a route guard when no required role is held."""


class SessionPending(Exception):  # noqa: N818
    """Raised by a route guard before the session finished initializing."""


class RoleGuard:
    """FastAPI dependency applying the gate to a route.

    The session is read from ``request.state.session``; the app's exception
    handlers turn the raised outcomes into a login redirect or an
    access-denied response.
    """

    def __init__(self, roles: Collection[str] | None = None) -> None:
        self.roles = frozenset({roles} if isinstance(roles, str) else roles or ())

    def __call__(self, request: Request) -> SessionManager:
        session: SessionManager = request.state.session
        decision = authorize(session, self.roles)
        if decision is AuthDecision.PENDING:
            raise SessionPending
        if decision is AuthDecision.REDIRECT_TO_LOGIN:
            raise LoginRequired
        if decision is AuthDecision.DENY:
            raise AccessDenied
        return session


def require_roles(*roles: str) -> RoleGuard:
    """Build a route guard for the given roles (none means any identity)."""
    return RoleGuard(roles)


def require_view(view: str) -> RoleGuard:
    """Build a route guard from the ``PROTECTED_VIEWS`` declaration."""
    return RoleGuard(PROTECTED_VIEWS[view])


def login_redirect() -> RedirectResponse:
    return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
