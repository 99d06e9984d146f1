"""Auth service endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from editorial_portal.backend.client import parse_model
from editorial_portal.models.identity import LoginResult

if TYPE_CHECKING:
    from editorial_portal.backend.client import BackendClient


class AuthApi:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def login(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for a bearer token."""
        data = await self._client.post(
            self._client.auth_url("/auth/login"),
            {"username": username, "password": password},
            authenticated=False,
        )
        return parse_model(LoginResult, data)
