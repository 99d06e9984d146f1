"""Authentication and authorization: credentials, identity decoding, session and gate."""

from editorial_portal.auth.credentials import CredentialStore, MappingCredentialStore
from editorial_portal.auth.gate import AuthDecision, RoleGuard, authorize, require_roles, require_view
from editorial_portal.auth.session import SessionManager
from editorial_portal.auth.token import DecodeError, decode_token, identity_from_token

__all__ = [
    "AuthDecision",
    "CredentialStore",
    "DecodeError",
    "MappingCredentialStore",
    "RoleGuard",
    "SessionManager",
    "authorize",
    "decode_token",
    "identity_from_token",
    "require_roles",
    "require_view",
]
