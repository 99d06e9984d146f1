"""Public reading screens; no session involved."""

from __future__ import annotations

from typing import TYPE_CHECKING

from editorial_portal.errors import NotFoundOrForbidden
from editorial_portal.workflow.lifecycle import is_public

if TYPE_CHECKING:
    from editorial_portal.backend.articles import ArticleApi
    from editorial_portal.models.article import Article

NOT_PUBLISHED_MESSAGE = "Este articulo no esta disponible publicamente"


async def published_articles(articles: ArticleApi) -> list[Article]:
    return [article for article in await articles.list_published() if is_public(article.status)]


async def published_article(articles: ArticleApi, article_id: int) -> Article:
    article = await articles.get(article_id)
    if not is_public(article.status):
        raise NotFoundOrForbidden(NOT_PUBLISHED_MESSAGE)
    return article
