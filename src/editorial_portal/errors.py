"""Normalized error types surfaced to portal views.

Every failure crossing a service boundary is turned into a ``PortalError``
carrying a human-readable ``message``; views never inspect transport details.
"""

from __future__ import annotations

from enum import StrEnum

GENERIC_SERVER_MESSAGE = "Error al procesar la solicitud"
CONNECTION_MESSAGE = "No se pudo conectar con el servidor"
BAD_CREDENTIALS_MESSAGE = "Usuario o contraseña incorrectos"
INACTIVE_ACCOUNT_MESSAGE = "Su cuenta ha sido desactivada. Por favor contacte al administrador."

# Structured codes take precedence over message matching.
_INACTIVE_CODES = frozenset({"ACCOUNT_INACTIVE", "USER_INACTIVE"})
_INACTIVE_MARKERS = ("inactive", "desactiv")


class PortalError(Exception):
    """Base class for every error a portal view may render."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Local input failure. Raised before any network call is made."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class FormValidationError(ValidationError):
    """Several fields failed validation; ``fields`` maps field to message."""

    def __init__(self, fields: dict[str, str]) -> None:
        first_field = next(iter(fields), None)
        super().__init__(fields[first_field] if first_field else "Formulario invalido", field=first_field)
        self.fields = fields


class LoginFailureKind(StrEnum):
    INACTIVE_ACCOUNT = "inactive_account"
    BAD_CREDENTIALS = "bad_credentials"


class AuthenticationError(PortalError):
    """Login was refused by the backend."""

    def __init__(self, message: str, kind: LoginFailureKind = LoginFailureKind.BAD_CREDENTIALS) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def display_message(self) -> str:
        if self.kind is LoginFailureKind.INACTIVE_ACCOUNT:
            return INACTIVE_ACCOUNT_MESSAGE
        return BAD_CREDENTIALS_MESSAGE


class SessionExpiredError(PortalError):
    """An authenticated call was rejected because of the credential."""


class NotFoundOrForbidden(PortalError):
    """A specific resource returned no data or was not accessible."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class TransportError(PortalError):
    """No response could be obtained from the backend."""

    def __init__(self, message: str = CONNECTION_MESSAGE) -> None:
        super().__init__(message)


class ServerError(PortalError):
    """The backend answered with an error payload."""

    def __init__(
        self,
        message: str = GENERIC_SERVER_MESSAGE,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def classify_login_failure(message: str | None, code: str | None = None) -> LoginFailureKind:
    """Decide whether a failed login means a deactivated account.

    A structured ``code`` from the backend wins. Otherwise the message is
    searched for the known inactive-account markers; anything else counts as
    bad credentials.
    """
    if code:
        return (
            LoginFailureKind.INACTIVE_ACCOUNT
            if code.upper() in _INACTIVE_CODES
            else LoginFailureKind.BAD_CREDENTIALS
        )
    lowered = (message or "").lower()
    if any(marker in lowered for marker in _INACTIVE_MARKERS):
        return LoginFailureKind.INACTIVE_ACCOUNT
    return LoginFailureKind.BAD_CREDENTIALS
