"""Portal web application factory and entry point."""

from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from editorial_portal.auth.gate import (
    AccessDenied,
    LoginRequired,
    SessionPending,
    access_denied_response,
    login_redirect,
)
from editorial_portal.config import Settings, load_settings
from editorial_portal.errors import (
    AuthenticationError,
    FormValidationError,
    LoginFailureKind,
    NotFoundOrForbidden,
    PortalError,
    ServerError,
    SessionExpiredError,
    TransportError,
    ValidationError,
)
from editorial_portal.logging import configure_logging
from editorial_portal.routes import approvals, articles, auth, dashboard, public
from editorial_portal.routes.deps import build_context
from editorial_portal.workflow.consensus import DecisionSubmitter

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from starlette.responses import Response

logger = logging.getLogger(__name__)


def _secret_key(settings: Settings) -> str:
    if settings.session.secret_key:
        return settings.session.secret_key
    if not settings.app.is_development:
        msg = "PORTAL_SECRET_KEY must be set outside development"
        raise RuntimeError(msg)
    logger.warning("PORTAL_SECRET_KEY is not set — sessions will not survive a restart")
    return secrets.token_urlsafe(32)


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _register_error_handlers(app: FastAPI) -> None:
    """Turn every normalized failure into an inline error payload."""

    @app.exception_handler(LoginRequired)
    async def _login_required(request: Request, exc: LoginRequired) -> Response:
        return login_redirect()

    @app.exception_handler(AccessDenied)
    async def _access_denied(request: Request, exc: AccessDenied) -> Response:
        return access_denied_response()

    @app.exception_handler(SessionPending)
    async def _pending(request: Request, exc: SessionPending) -> Response:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Cargando...")

    @app.exception_handler(SessionExpiredError)
    async def _session_expired(request: Request, exc: SessionExpiredError) -> Response:
        request.state.portal.session.logout()
        return login_redirect()

    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError) -> Response:
        if isinstance(exc, FormValidationError):
            fields = exc.fields
        else:
            fields = {exc.field: exc.message} if exc.field else {}
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message, fields=fields)

    @app.exception_handler(AuthenticationError)
    async def _authentication(request: Request, exc: AuthenticationError) -> Response:
        return _error(
            status.HTTP_401_UNAUTHORIZED,
            exc.display_message,
            kind=exc.kind.value,
            account_disabled=exc.kind is LoginFailureKind.INACTIVE_ACCOUNT,
        )

    @app.exception_handler(NotFoundOrForbidden)
    async def _not_found(request: Request, exc: NotFoundOrForbidden) -> Response:
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(TransportError)
    async def _transport(request: Request, exc: TransportError) -> Response:
        return _error(status.HTTP_502_BAD_GATEWAY, exc.message)

    @app.exception_handler(ServerError)
    async def _server(request: Request, exc: ServerError) -> Response:
        code = exc.status_code or status.HTTP_502_BAD_GATEWAY
        return _error(code, exc.message)

    @app.exception_handler(PortalError)
    async def _portal(request: Request, exc: PortalError) -> Response:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


def create_app(settings: Settings | None = None, *, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Build the portal app. ``transport`` lets tests stand in for the backend."""
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.http = httpx.AsyncClient(timeout=settings.backend.timeout, transport=transport)
        logger.info(
            "Portal started — auth=%s article=%s env=%s",
            settings.backend.auth_url,
            settings.backend.article_url,
            settings.app.env,
        )
        try:
            yield
        finally:
            await app.state.http.aclose()
            logger.info("Portal stopped")

    app = FastAPI(title="Editorial Portal", lifespan=lifespan)
    app.state.settings = settings
    app.state.submitter = DecisionSubmitter()

    @app.middleware("http")
    async def attach_portal_context(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request.state.portal = build_context(request)
        request.state.session = request.state.portal.session
        return await call_next(request)

    # Added last so it wraps the context middleware and the session is loaded first.
    app.add_middleware(
        SessionMiddleware,
        secret_key=_secret_key(settings),
        session_cookie=settings.session.cookie_name,
        https_only=not settings.app.is_development,
    )

    _register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(articles.router)
    app.include_router(approvals.router)
    app.include_router(public.router)

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse("/public/articles", status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    return app


def main() -> None:
    """Run the portal with uvicorn."""
    settings = load_settings()
    configure_logging(settings.app.log_level, log_file="portal.log" if settings.app.is_development else None)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)  # noqa: S104


if __name__ == "__main__":
    main()
