"""Tests for the backend client and its failure normalization."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from editorial_portal.auth.credentials import MappingCredentialStore
from editorial_portal.backend import ApprovalApi, ArticleApi, AuthApi, BackendClient
from editorial_portal.backend.client import INVALID_RESPONSE_MESSAGE, SESSION_EXPIRED_MESSAGE
from editorial_portal.config import BackendConfig
from editorial_portal.errors import (
    CONNECTION_MESSAGE,
    GENERIC_SERVER_MESSAGE,
    NotFoundOrForbidden,
    ServerError,
    SessionExpiredError,
    TransportError,
)
from editorial_portal.models.approval import ApprovalRequest, ApprovalStatus
from editorial_portal.models.article import ArticleDraft, ArticleStatus

CONFIG = BackendConfig(auth_url="http://auth.test", article_url="http://articles.test/", timeout=5)


def _client(handler, token: str | None = "tok.en.sig", **kwargs) -> BackendClient:
    store = MappingCredentialStore({"auth_token": token} if token else {})
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BackendClient(http, CONFIG, store, **kwargs)


class TestRequest:
    """Tests for BackendClient.request."""

    async def test_attaches_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"ok": True})

        assert await _client(handler).get("http://articles.test/x") == {"ok": True}
        assert seen["auth"] == "Bearer tok.en.sig"

    async def test_unauthenticated_call_sends_no_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={})

        await _client(handler).post("http://auth.test/auth/login", {}, authenticated=False)
        assert seen["auth"] is None

    async def test_empty_body_returns_none(self):
        assert await _client(lambda _: httpx.Response(204)).delete("http://articles.test/x") is None

    async def test_connection_failure_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            msg = "refused"
            raise httpx.ConnectError(msg, request=request)

        with pytest.raises(TransportError) as exc_info:
            await _client(handler).get("http://articles.test/x")
        assert exc_info.value.message == CONNECTION_MESSAGE

    async def test_401_triggers_logout_callback(self):
        callback = MagicMock()
        client = _client(lambda _: httpx.Response(401, json={"message": "expired"}), on_unauthorized=callback)

        with pytest.raises(SessionExpiredError) as exc_info:
            await client.get("http://articles.test/x")

        callback.assert_called_once_with()
        assert exc_info.value.message == SESSION_EXPIRED_MESSAGE

    async def test_401_on_login_is_server_error(self):
        callback = MagicMock()
        client = _client(
            lambda _: httpx.Response(401, json={"message": "Usuario inactivo", "code": "USER_INACTIVE"}),
            on_unauthorized=callback,
        )

        with pytest.raises(ServerError) as exc_info:
            await client.post("http://auth.test/auth/login", {}, authenticated=False)

        callback.assert_not_called()
        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "USER_INACTIVE"

    async def test_forbidden_keeps_error_code(self):
        client = _client(
            lambda _: httpx.Response(403, json={"message": "Cuenta inactiva", "code": "ACCOUNT_INACTIVE"}),
        )
        with pytest.raises(NotFoundOrForbidden) as exc_info:
            await client.post("http://auth.test/auth/login", {}, authenticated=False)
        assert exc_info.value.code == "ACCOUNT_INACTIVE"

    @pytest.mark.parametrize("status_code", [403, 404])
    async def test_forbidden_and_missing_are_not_found(self, status_code):
        client = _client(lambda _: httpx.Response(status_code, json={"message": "Articulo no encontrado"}))
        with pytest.raises(NotFoundOrForbidden) as exc_info:
            await client.get("http://articles.test/x")
        assert exc_info.value.message == "Articulo no encontrado"

    async def test_server_message_is_surfaced(self):
        client = _client(lambda _: httpx.Response(409, json={"message": "Estado invalido"}))
        with pytest.raises(ServerError) as exc_info:
            await client.put("http://articles.test/x")
        assert exc_info.value.message == "Estado invalido"
        assert exc_info.value.status_code == 409

    async def test_generic_message_when_body_has_none(self):
        client = _client(lambda _: httpx.Response(500, json={"error": "x"}))
        with pytest.raises(ServerError) as exc_info:
            await client.get("http://articles.test/x")
        assert exc_info.value.message == GENERIC_SERVER_MESSAGE

    async def test_plain_text_error_body(self):
        client = _client(lambda _: httpx.Response(500, text="Backend caido"))
        with pytest.raises(ServerError) as exc_info:
            await client.get("http://articles.test/x")
        assert exc_info.value.message == "Backend caido"


class TestApis:
    """Tests for the endpoint wrappers."""

    async def test_login_posts_credentials(self, make_token):
        token = make_token()
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"token": token, "userId": 7, "username": "alice", "roles": []})

        result = await AuthApi(_client(handler, token=None)).login("alice", "pw")

        assert seen["url"] == "http://auth.test/auth/login"
        assert seen["body"] == {"username": "alice", "password": "pw"}
        assert result.token == token

    async def test_article_endpoints(self, make_article):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, request.url.path))
            if request.url.path.endswith("/pending") or request.url.path.endswith("/author/7"):
                return httpx.Response(200, json=[make_article(1, status=3)])
            if request.method == "DELETE":
                return httpx.Response(204)
            if request.url.path == "/api/v1/articles" and request.method == "GET":
                return httpx.Response(200, json=[make_article(2, status=2)])
            return httpx.Response(200, json=make_article(1))

        api = ArticleApi(_client(handler))

        published = await api.list_published()
        assert published[0].status is ArticleStatus.PUBLISHED
        assert published[0].author_name == "Alicia Núñez"
        assert (await api.list_pending())[0].status is ArticleStatus.IN_REVIEW
        await api.list_by_author(7)
        await api.get(1)
        await api.create(ArticleDraft(title="Titulo", content="x" * 20))
        await api.update(1, ArticleDraft(title="Titulo", content="x" * 20))
        await api.send_to_review(1)
        assert await api.delete(1) is None

        assert calls == [
            ("GET", "/api/v1/articles"),
            ("GET", "/api/v1/articles/pending"),
            ("GET", "/api/v1/articles/author/7"),
            ("GET", "/api/v1/articles/1"),
            ("POST", "/api/v1/articles"),
            ("PUT", "/api/v1/articles/1"),
            ("PUT", "/api/v1/articles/1/send-to-review"),
            ("DELETE", "/api/v1/articles/1"),
        ]

    async def test_unknown_status_does_not_break_the_list(self, make_article):
        payload = [make_article(1, status=1), make_article(2, status=5)]
        api = ArticleApi(_client(lambda _: httpx.Response(200, json=payload)))

        articles = await api.list_by_author(7)

        assert [article.id for article in articles] == [1, 2]
        assert articles[1].display_status == "Desconocido"

    async def test_malformed_article_is_server_error(self):
        api = ArticleApi(_client(lambda _: httpx.Response(200, json={"title": "sin id"})))
        with pytest.raises(ServerError) as exc_info:
            await api.get(1)
        assert exc_info.value.message == INVALID_RESPONSE_MESSAGE

    async def test_non_list_is_server_error(self):
        api = ArticleApi(_client(lambda _: httpx.Response(200, json={"items": []})))
        with pytest.raises(ServerError):
            await api.list_published()

    async def test_approval_endpoints(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path, request.content))
            if request.method == "GET":
                return httpx.Response(
                    200,
                    json=[{"approverUsername": "ed", "roleName": "Editor", "status": "APPROVED"}],
                )
            return httpx.Response(200, json={"currentApprovalPercentage": 33.33, "articleStatus": "En Revision"})

        api = ApprovalApi(_client(handler))

        history = await api.history(5)
        outcome = await api.process(ApprovalRequest(article_id=5, status=ApprovalStatus.APPROVED))

        assert history[0].role_name == "Editor"
        assert outcome.current_approval_percentage == pytest.approx(33.33)
        assert seen[0][:2] == ("GET", "/api/v1/approvals/article/5")
        assert seen[1][:2] == ("POST", "/api/v1/approvals")
        assert json.loads(seen[1][2]) == {"articleId": 5, "status": "APPROVED"}
