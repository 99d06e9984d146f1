"""Credential stores holding the single bearer token for a session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import MutableMapping

TOKEN_KEY = "auth_token"


@runtime_checkable
class CredentialStore(Protocol):
    """Persisted holder of one bearer token."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MappingCredentialStore:
    """Store the token in a mutable mapping such as a signed browser session."""

    def __init__(self, mapping: MutableMapping[str, object], key: str = TOKEN_KEY) -> None:
        self._mapping = mapping
        self._key = key

    def get(self) -> str | None:
        value = self._mapping.get(self._key)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        self._mapping[self._key] = token

    def clear(self) -> None:
        self._mapping.pop(self._key, None)

