"""Session manager owning the authenticated identity lifecycle."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from editorial_portal.auth.token import DecodeError, identity_from_token
from editorial_portal.errors import AuthenticationError, NotFoundOrForbidden, ServerError, classify_login_failure

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from editorial_portal.auth.credentials import CredentialStore
    from editorial_portal.models.identity import Identity, LoginResult


logger = logging.getLogger(__name__)


class LoginBackend(Protocol):
    """The part of the auth service the session needs."""

    async def login(self, username: str, password: str) -> LoginResult: ...


class SessionManager:
    """Explicit session object built over an injected credential store.

    ``initialize()`` must run before any protected view is evaluated; until
    then ``initialized`` is False and the gate answers PENDING.
    """

    def __init__(
        self,
        store: CredentialStore,
        auth: LoginBackend | None = None,
        *,
        require_expiry: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._auth = auth
        self._require_expiry = require_expiry
        self._clock = clock or (lambda: datetime.now(UTC))
        self._identity: Identity | None = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Restore the identity from any persisted credential."""
        token = self._store.get()
        self._identity = self._accept(token) if token else None
        if token and self._identity is None:
            self._store.clear()
        self._initialized = True

    async def login(self, username: str, password: str) -> Identity:
        """Authenticate against the backend and persist the credential."""
        if self._auth is None:
            msg = "SessionManager has no auth backend configured"
            raise RuntimeError(msg)
        try:
            result = await self._auth.login(username, password)
        except (ServerError, NotFoundOrForbidden) as exc:
            kind = classify_login_failure(exc.message, exc.code)
            logger.info("Login refused — user=%s kind=%s", username, kind.value)
            raise AuthenticationError(exc.message, kind) from exc

        identity = self._accept(result.token)
        if identity is None:
            msg = "El servidor devolvio una credencial invalida"
            raise AuthenticationError(msg)

        self._store.set(result.token)
        self._identity = identity
        self._initialized = True
        logger.info("Login succeeded — user=%s roles=%s", identity.subject, sorted(identity.role_names))
        return identity

    def logout(self) -> None:
        """Clear the credential and all derived state. Safe to call twice."""
        self._store.clear()
        self._identity = None

    def handle_unauthorized(self) -> None:
        """React to a 401 on an authenticated call by forcing logout."""
        if self._identity is not None:
            logger.warning("Credential rejected by backend — user=%s", self._identity.subject)
        self.logout()

    def current_identity(self) -> Identity | None:
        return self._identity

    def is_authenticated(self) -> bool:
        identity = self._identity
        return identity is not None and not identity.is_expired(self._clock())

    def primary_role(self) -> str | None:
        return self._identity.primary_role if self._identity else None

    def has_role(self, name: str) -> bool:
        return self._identity is not None and self._identity.has_role(name)

    def has_any_role(self, names: Iterable[str]) -> bool:
        return self._identity is not None and self._identity.has_any_role(names)

    def _accept(self, token: str) -> Identity | None:
        """Decode and vet a credential; None means treat as logged out."""
        try:
            identity = identity_from_token(token)
        except DecodeError as exc:
            logger.warning("Discarding undecodable credential: %s", exc)
            return None
        if identity.expires_at is None and self._require_expiry:
            logger.warning("Discarding credential without expiry — user=%s", identity.subject)
            return None
        if identity.is_expired(self._clock()):
            logger.info("Discarding expired credential — user=%s", identity.subject)
            return None
        return identity
