"""Article service endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from editorial_portal.backend.client import parse_list, parse_model
from editorial_portal.models.article import Article, ArticleDraft

if TYPE_CHECKING:
    from editorial_portal.backend.client import BackendClient

_BASE = "/api/v1/articles"


class ArticleApi:
    """Read and mutate articles. The backend enforces every transition."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def _url(self, suffix: str = "") -> str:
        return self._client.article_url(f"{_BASE}{suffix}")

    async def list_published(self) -> list[Article]:
        return parse_list(Article, await self._client.get(self._url()))

    async def list_by_author(self, author_id: int) -> list[Article]:
        return parse_list(Article, await self._client.get(self._url(f"/author/{author_id}")))

    async def list_pending(self) -> list[Article]:
        """Fetch articles currently in review."""
        return parse_list(Article, await self._client.get(self._url("/pending")))

    async def get(self, article_id: int) -> Article:
        return parse_model(Article, await self._client.get(self._url(f"/{article_id}")))

    async def create(self, draft: ArticleDraft) -> Article:
        return parse_model(Article, await self._client.post(self._url(), draft.model_dump()))

    async def update(self, article_id: int, draft: ArticleDraft) -> Article:
        return parse_model(Article, await self._client.put(self._url(f"/{article_id}"), draft.model_dump()))

    async def delete(self, article_id: int) -> None:
        await self._client.delete(self._url(f"/{article_id}"))

    async def send_to_review(self, article_id: int) -> Article:
        return parse_model(Article, await self._client.put(self._url(f"/{article_id}/send-to-review")))
