"""Per-request wiring of the session and backend clients."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from editorial_portal.auth.credentials import MappingCredentialStore
from editorial_portal.auth.session import SessionManager
from editorial_portal.backend import ApprovalApi, ArticleApi, AuthApi, BackendClient
from editorial_portal.models.identity import Identity
from editorial_portal.workflow.consensus import DecisionSubmitter


@dataclass(frozen=True)
class PortalContext:
    """Everything a route needs for one browser session."""

    session: SessionManager
    articles: ArticleApi
    approvals: ApprovalApi

    @property
    def identity(self) -> Identity | None:
        return self.session.current_identity()


def build_context(request: Request) -> PortalContext:
    """Initialize the session from the signed cookie and wire the clients."""
    settings = request.app.state.settings
    store = MappingCredentialStore(request.session)
    client = BackendClient(request.app.state.http, settings.backend, store)
    session = SessionManager(store, AuthApi(client), require_expiry=settings.session.require_expiry)
    client.on_unauthorized = session.handle_unauthorized
    session.initialize()
    return PortalContext(session=session, articles=ArticleApi(client), approvals=ApprovalApi(client))


def get_portal(request: Request) -> PortalContext:
    return request.state.portal


def get_submitter(request: Request) -> DecisionSubmitter:
    return request.app.state.submitter


def require_identity(portal: PortalContext) -> Identity:
    """Return the identity of a route already guarded by a RoleGuard."""
    identity = portal.identity
    if identity is None:
        msg = "route guard did not run before require_identity"
        raise RuntimeError(msg)
    return identity
