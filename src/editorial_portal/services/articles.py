"""Reporter article screens: list, detail, create, edit, delete, send to review."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from editorial_portal.errors import FormValidationError, ValidationError
from editorial_portal.models.approval import ApprovalDecision
from editorial_portal.models.article import Article, ArticleDraft
from editorial_portal.workflow.consensus import load_history
from editorial_portal.workflow.lifecycle import ArticleActions, available_actions, is_owner

if TYPE_CHECKING:
    from editorial_portal.backend.approvals import ApprovalApi
    from editorial_portal.backend.articles import ArticleApi
    from editorial_portal.models.identity import Identity

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 20
REQUIRED_MESSAGE = "El campo es requerido"
NOT_EDITABLE_MESSAGE = "El articulo no puede ser editado en su estado actual"
NOT_DELETABLE_MESSAGE = "Solo se pueden eliminar articulos en borrador"
NOT_SUBMITTABLE_MESSAGE = "El articulo no puede ser enviado a revision en su estado actual"


class ArticleView(BaseModel):
    """An article plus the actions its author may take on it right now."""

    article: Article
    status_label: str
    status_class: str
    author_name: str
    actions: ArticleActions


class ArticleDetailView(ArticleView):
    history: list[ApprovalDecision]


def _view(article: Article, identity: Identity | None) -> ArticleView:
    return ArticleView(
        article=article,
        status_label=article.display_status,
        status_class=article.status_class,
        author_name=article.author_name,
        actions=available_actions(identity, article),
    )


def _check_length(value: str, *, min_length: int, max_length: int | None = None) -> str | None:
    value = value.strip()
    if not value:
        return REQUIRED_MESSAGE
    if len(value) < min_length:
        return f"Minimo {min_length} caracteres"
    if max_length is not None and len(value) > max_length:
        return f"Maximo {max_length} caracteres"
    return None


def validate_article_form(title: str | None, content: str | None) -> ArticleDraft:
    """Validate the article form locally; values are trimmed before sending."""
    errors: dict[str, str] = {}
    title_error = _check_length(title or "", min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    if title_error:
        errors["title"] = title_error
    content_error = _check_length(content or "", min_length=CONTENT_MIN_LENGTH)
    if content_error:
        errors["content"] = content_error
    if errors:
        raise FormValidationError(errors)
    return ArticleDraft(title=(title or "").strip(), content=(content or "").strip())


async def list_own_articles(articles: ArticleApi, identity: Identity) -> list[ArticleView]:
    """Fetch the author's articles with the actions offered for each."""
    return [_view(article, identity) for article in await articles.list_by_author(identity.user_id)]


async def article_detail(
    articles: ArticleApi,
    approvals: ApprovalApi,
    identity: Identity | None,
    article_id: int,
) -> ArticleDetailView:
    article = await articles.get(article_id)
    history = await load_history(approvals, article_id)
    return ArticleDetailView(
        article=article,
        status_label=article.display_status,
        status_class=article.status_class,
        author_name=article.author_name,
        actions=available_actions(identity, article),
        history=history,
    )


async def create_article(
    articles: ArticleApi,
    identity: Identity,
    title: str | None,
    content: str | None,
) -> ArticleView:
    draft = validate_article_form(title, content)
    article = await articles.create(draft)
    logger.info("Article created — id=%s author=%s", article.id, identity.user_id)
    return _view(article, identity)


async def _fetch_owned(articles: ArticleApi, identity: Identity, article_id: int) -> Article:
    """Re-fetch the article so predicates see its current status."""
    article = await articles.get(article_id)
    if not is_owner(identity, article):
        msg = "Solo el autor puede modificar este articulo"
        raise ValidationError(msg)
    return article


async def update_article(
    articles: ArticleApi,
    identity: Identity,
    article_id: int,
    title: str | None,
    content: str | None,
) -> ArticleView:
    draft = validate_article_form(title, content)
    current = await _fetch_owned(articles, identity, article_id)
    if not available_actions(identity, current).edit:
        raise ValidationError(NOT_EDITABLE_MESSAGE)
    await articles.update(article_id, draft)
    return _view(await articles.get(article_id), identity)


async def delete_article(articles: ArticleApi, identity: Identity, article_id: int) -> None:
    current = await _fetch_owned(articles, identity, article_id)
    if not available_actions(identity, current).delete:
        raise ValidationError(NOT_DELETABLE_MESSAGE)
    await articles.delete(article_id)
    logger.info("Article deleted — id=%s author=%s", article_id, identity.user_id)


async def send_to_review(articles: ArticleApi, identity: Identity, article_id: int) -> ArticleView:
    current = await _fetch_owned(articles, identity, article_id)
    if not available_actions(identity, current).send_to_review:
        raise ValidationError(NOT_SUBMITTABLE_MESSAGE)
    await articles.send_to_review(article_id)
    logger.info("Article sent to review — id=%s", article_id)
    return _view(await articles.get(article_id), identity)
