"""HTTP transport to the backend services with failure normalization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from editorial_portal.errors import (
    GENERIC_SERVER_MESSAGE,
    NotFoundOrForbidden,
    ServerError,
    SessionExpiredError,
    TransportError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from editorial_portal.auth.credentials import CredentialStore
    from editorial_portal.config import BackendConfig

logger = logging.getLogger(__name__)

_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403
_HTTP_NOT_FOUND = 404
SESSION_EXPIRED_MESSAGE = "Su sesion ha expirado. Inicie sesion nuevamente."
INVALID_RESPONSE_MESSAGE = "Respuesta invalida del servidor"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_details(response: httpx.Response) -> tuple[str, str | None]:
    """Extract (message, code) from an error response body."""
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or GENERIC_SERVER_MESSAGE), None

    if isinstance(payload, dict):
        message = payload.get("message")
        code = payload.get("code") or payload.get("error_code")
        return (
            message if isinstance(message, str) and message else GENERIC_SERVER_MESSAGE,
            code if isinstance(code, str) else None,
        )
    if isinstance(payload, str) and payload:
        return payload, None
    return GENERIC_SERVER_MESSAGE, None


class BackendClient:
    """Thin wrapper over a shared ``httpx.AsyncClient``.

    Authenticated calls carry the stored bearer credential. Every failure is
    raised as a ``PortalError`` subclass so callers only see a message.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: BackendConfig,
        store: CredentialStore,
        *,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self._http = http
        self._config = config
        self._store = store
        self.on_unauthorized = on_unauthorized

    def auth_url(self, path: str) -> str:
        return f"{self._config.auth_url.rstrip('/')}{path}"

    def article_url(self, path: str) -> str:
        return f"{self._config.article_url.rstrip('/')}{path}"

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        authenticated: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        headers: dict[str, str] = {}
        if authenticated:
            token = self._store.get()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._http.request(method, url, json=json, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("Backend unreachable — %s %s: %s", method, url, exc)
            raise TransportError from exc

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                return response.text

        message, code = _error_details(response)
        status_code = response.status_code
        logger.info("Backend error — %s %s status=%d message=%s", method, url, status_code, message)

        if status_code == _HTTP_UNAUTHORIZED and authenticated:
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            raise SessionExpiredError(SESSION_EXPIRED_MESSAGE)
        if status_code in (_HTTP_FORBIDDEN, _HTTP_NOT_FOUND):
            raise NotFoundOrForbidden(message, code=code)
        raise ServerError(message, status_code=status_code, code=code)

    async def get(self, url: str) -> Any:
        return await self.request("GET", url)

    async def post(self, url: str, json: Any = None, *, authenticated: bool = True) -> Any:
        return await self.request("POST", url, json=json, authenticated=authenticated)

    async def put(self, url: str, json: Any = None) -> Any:
        return await self.request("PUT", url, json=json)

    async def delete(self, url: str) -> Any:
        return await self.request("DELETE", url)


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate a response body, reporting a malformed body as a ServerError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("Unexpected %s payload: %s", model.__name__, exc)
        raise ServerError(INVALID_RESPONSE_MESSAGE) from exc


def parse_list(model: type[ModelT], data: Any) -> list[ModelT]:
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("Expected a list of %s, got %s", model.__name__, type(data).__name__)
        raise ServerError(INVALID_RESPONSE_MESSAGE)
    return [parse_model(model, item) for item in data]
