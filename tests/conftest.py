"""Shared fixtures: credential and wire-payload builders."""

from __future__ import annotations

import base64
import json
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from editorial_portal.auth.credentials import MappingCredentialStore

FUTURE = datetime.now(UTC) + timedelta(hours=1)


def _segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data, ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def build_token(
    sub: str = "alice",
    user_id: int = 7,
    roles: list[Any] | None = None,
    *,
    exp: datetime | None = FUTURE,
    **claims: Any,
) -> str:
    payload: dict[str, Any] = {"sub": sub, "userId": user_id, "roles": roles if roles is not None else ["Reportero"]}
    if exp is not None:
        payload["exp"] = int(exp.timestamp())
    payload.update(claims)
    return f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(payload)}.signature"


def build_article(
    article_id: int = 1,
    status: int = 1,
    author_id: int = 7,
    title: str = "Titulo de prueba",
    **extra: Any,
) -> dict[str, Any]:
    return {
        "idArticle": article_id,
        "title": title,
        "content": "Contenido suficientemente largo para pasar",
        "author": {"idUser": author_id, "username": "alice", "firstName": "Alicia", "lastName": "Núñez"},
        "status": {"idArticleStatus": status, "statusName": None},
        "createdAt": "2024-03-01T10:00:00",
        "updatedAt": "2024-03-02T10:00:00",
        **extra,
    }


@pytest.fixture
def make_token():
    return build_token


@pytest.fixture
def make_article():
    return build_article


@pytest.fixture
def session_store() -> MappingCredentialStore:
    return MappingCredentialStore({})
